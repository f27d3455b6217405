"""
Batch services: capacity edits, deletion and profit-share salary recalculation.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP

from django.db import transaction
from django.db.models import Sum

from accounts.models import User
from core.exceptions import NotFoundError, ValidationError
from courses.models import Batch

logger = logging.getLogger(__name__)

BATCH_EDITABLE_FIELDS = (
    'batch_name', 'start_date', 'end_date', 'max_students', 'status', 'schedule',
    'meeting_link', 'meeting_password', 'chat_group_id', 'instructor_salary',
)


def get_batch(batch_id, *, for_update=False):
    qs = Batch.objects.select_related('course', 'instructor')
    if for_update:
        qs = qs.select_for_update(of=('self',))
    try:
        return qs.get(pk=batch_id)
    except Batch.DoesNotExist:
        raise NotFoundError('Batch not found')


def profit_share_salary(income, expenses, percentage):
    """
    round((income - expenses) * percentage / 100), half-up, never below 0;
    a loss-making batch owes its instructor nothing.
    Integers in, integer out.
    """
    profit = Decimal(int(income) - int(expenses))
    salary = (profit * Decimal(int(percentage)) / Decimal(100)).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    return max(0, int(salary))


def recalculate_instructor_salary(batch_id):
    """
    Recompute batch.instructor_salary for profit_share instructors.
    income = sum of payment totals of the batch's enrollments; expenses = batch expenses.
    Fixed-salary instructors keep the admin-entered salary.
    Returns {'updated': bool, 'salary': int | None}.
    """
    from payments.models import BatchExpense, Payment

    with transaction.atomic():
        batch = get_batch(batch_id, for_update=True)
        instructor = batch.instructor
        if instructor.payment_model != User.PAYMENT_PROFIT_SHARE:
            return {'updated': False, 'salary': batch.instructor_salary}

        income = Payment.objects.filter(enrollment__batch=batch).aggregate(
            total=Sum('total_amount')
        )['total'] or 0
        expenses = BatchExpense.objects.filter(batch=batch).aggregate(
            total=Sum('amount')
        )['total'] or 0

        salary = profit_share_salary(income, expenses, instructor.profit_share_percentage)
        batch.instructor_salary = salary
        batch.save(update_fields=['instructor_salary', 'updated_at'])

    logger.info(
        "[salary] batch_id=%s income=%s expenses=%s pct=%s salary=%s",
        batch.pk, income, expenses, instructor.profit_share_percentage, salary,
    )
    return {'updated': True, 'salary': salary}


@transaction.atomic
def update_batch(batch_id, changes):
    """
    Apply admin edits to a batch.
    max_students may not drop below 1 or below the current enrollment count;
    the batch row is locked so a concurrent enrollment cannot slip in between.
    """
    batch = get_batch(batch_id, for_update=True)

    if 'max_students' in changes:
        max_students = changes['max_students']
        if max_students is None or int(max_students) < 1:
            raise ValidationError('Max students must be at least 1')
        enrolled = batch.enrollments.count()
        if int(max_students) < enrolled:
            raise ValidationError(
                f"Cannot set max students to {max_students}. "
                f"There are already {enrolled} enrolled students."
            )

    end_date = changes.get('end_date', batch.end_date)
    start_date = changes.get('start_date', batch.start_date)
    if end_date and start_date and end_date < start_date:
        raise ValidationError('End date cannot be before start date')

    updated = []
    for field in BATCH_EDITABLE_FIELDS:
        if field in changes:
            setattr(batch, field, changes[field])
            updated.append(field)
    if updated:
        batch.save(update_fields=updated + ['updated_at'])
    return batch


@transaction.atomic
def delete_batch(batch_id):
    """
    Delete a batch that nobody is enrolled in.
    Expenses, instructor payouts, attendance codes and assignments go with it.
    """
    batch = get_batch(batch_id, for_update=True)
    enrolled = batch.enrollments.count()
    if enrolled:
        raise ValidationError(f'Cannot delete batch with {enrolled} enrolled student(s)')
    batch_pk = batch.pk
    batch.delete()
    logger.info("[batch] deleted batch_id=%s", batch_pk)
