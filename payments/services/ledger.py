"""
Payment ledger: read-side summaries and the money-in/money-out writes.

Summaries are reductions over stored rows. Rows are adapted into small
dataclasses (from_payment, summarize_*) so the arithmetic below
never inspects ORM objects directly.

record_installment_payment locks the parent Payment row first, then the
installment, so two concurrent payments on the same plan are serialized and
paid_amount is always recomputed from the installments themselves.
"""
import logging
from dataclasses import dataclass

from django.conf import settings
from django.db import transaction
from django.db.models import Count, Sum
from django.utils import timezone

from core.exceptions import ConflictError, NotFoundError, ValidationError
from courses.models import Batch
from courses.services import recalculate_instructor_salary
from payments.models import BatchExpense, InstructorPayment, Payment, PaymentInstallment
from payments.services.plans import derive_payment_status

logger = logging.getLogger(__name__)

PAYOUT_PAID = 'Paid'
PAYOUT_PARTIAL = 'Partially Paid'
PAYOUT_PENDING = 'Pending'


# --- value objects -----------------------------------------------------------

@dataclass(frozen=True)
class EnrollmentPaymentSummary:
    paid_amount: int
    total_amount: int
    remaining_amount: int
    payment_status: str

    def as_dict(self):
        return {
            'paidAmount': self.paid_amount,
            'totalAmount': self.total_amount,
            'remainingAmount': self.remaining_amount,
            'paymentStatus': self.payment_status,
        }


@dataclass(frozen=True)
class BatchFinanceSummary:
    batch_id: int
    batch_name: str
    course_title: str
    income: int
    expenses: int
    expense_count: int
    instructor_salary: int
    net: int

    def as_dict(self):
        return {
            'batchId': self.batch_id,
            'batchName': self.batch_name,
            'courseTitle': self.course_title,
            'income': self.income,
            'expenses': self.expenses,
            'expenseCount': self.expense_count,
            'instructorSalary': self.instructor_salary,
            'net': self.net,
        }


@dataclass(frozen=True)
class InstructorPayoutSummary:
    batch_id: int
    batch_name: str
    salary: int
    total_paid: int
    remaining: int
    status: str

    def as_dict(self):
        return {
            'batchId': self.batch_id,
            'batchName': self.batch_name,
            'salary': self.salary,
            'totalPaid': self.total_paid,
            'remaining': self.remaining,
            'paymentStatus': self.status,
        }


# --- pure reductions ---------------------------------------------------------

def summarize_payment(stored_status, paid_amount, total_amount):
    """
    Display status for an enrollment payment.
    'paid' only if the stored status says so; a positive paid amount is at
    least 'partial' even when the stored status lags behind.
    """
    paid_amount = int(paid_amount or 0)
    total_amount = int(total_amount or 0)
    if stored_status == Payment.STATUS_PAID:
        status = Payment.STATUS_PAID
    elif stored_status == Payment.STATUS_PARTIAL or paid_amount > 0:
        status = Payment.STATUS_PARTIAL
    else:
        status = Payment.STATUS_UNPAID
    return EnrollmentPaymentSummary(
        paid_amount=paid_amount,
        total_amount=total_amount,
        remaining_amount=max(0, total_amount - paid_amount),
        payment_status=status,
    )


def payout_status(total_paid, salary):
    """'Paid' when total_paid >= salary > 0; 'Partially Paid' when 0 < total_paid < salary."""
    if salary > 0 and total_paid >= salary:
        return PAYOUT_PAID
    if 0 < total_paid < salary:
        return PAYOUT_PARTIAL
    return PAYOUT_PENDING


def summarize_payout(batch_id, batch_name, salary, total_paid):
    salary = int(salary or 0)
    total_paid = int(total_paid or 0)
    return InstructorPayoutSummary(
        batch_id=batch_id,
        batch_name=batch_name,
        salary=salary,
        total_paid=total_paid,
        remaining=max(0, salary - total_paid),
        status=payout_status(total_paid, salary),
    )


def summarize_batch_finance(batch_id, batch_name, course_title, income, expenses, expense_count, instructor_salary):
    income = int(income or 0)
    expenses = int(expenses or 0)
    instructor_salary = int(instructor_salary or 0)
    return BatchFinanceSummary(
        batch_id=batch_id,
        batch_name=batch_name,
        course_title=course_title,
        income=income,
        expenses=expenses,
        expense_count=int(expense_count or 0),
        instructor_salary=instructor_salary,
        net=income - expenses - instructor_salary,
    )


# --- row adapters ------------------------------------------------------------

def from_payment(payment):
    """EnrollmentPaymentSummary for a Payment row (None -> nothing owed yet)."""
    if payment is None:
        return summarize_payment(None, 0, 0)
    return summarize_payment(payment.status, payment.paid_amount, payment.total_amount)


def _income_by_batch(batch_ids):
    rows = (
        PaymentInstallment.objects
        .filter(status=PaymentInstallment.STATUS_PAID, payment__enrollment__batch_id__in=batch_ids)
        .values('payment__enrollment__batch_id')
        .annotate(total=Sum('amount'))
    )
    return {r['payment__enrollment__batch_id']: r['total'] or 0 for r in rows}


def _expenses_by_batch(batch_ids):
    rows = (
        BatchExpense.objects
        .filter(batch_id__in=batch_ids)
        .values('batch_id')
        .annotate(total=Sum('amount'), count=Count('id'))
    )
    return {r['batch_id']: (r['total'] or 0, r['count']) for r in rows}


def _payouts_by_batch(batch_ids):
    rows = (
        InstructorPayment.objects
        .filter(batch_id__in=batch_ids)
        .values('batch_id')
        .annotate(total=Sum('amount'))
    )
    return {r['batch_id']: r['total'] or 0 for r in rows}


# --- read paths --------------------------------------------------------------

def get_batch_finance_summaries(batches=None):
    """One BatchFinanceSummary per batch (all batches when none given)."""
    if batches is None:
        batches = Batch.objects.select_related('course').order_by('-start_date')
    batches = list(batches)
    ids = [b.pk for b in batches]
    income = _income_by_batch(ids)
    expenses = _expenses_by_batch(ids)
    return [
        summarize_batch_finance(
            batch_id=b.pk,
            batch_name=b.batch_name,
            course_title=b.course.title,
            income=income.get(b.pk, 0),
            expenses=expenses.get(b.pk, (0, 0))[0],
            expense_count=expenses.get(b.pk, (0, 0))[1],
            instructor_salary=b.instructor_salary,
        )
        for b in batches
    ]


def get_batch_finance_summary(batch_id):
    batch = Batch.objects.select_related('course').filter(pk=batch_id).first()
    if batch is None:
        raise NotFoundError('Batch not found')
    return get_batch_finance_summaries([batch])[0]


def get_instructor_payout_summaries(batches):
    batches = list(batches)
    paid = _payouts_by_batch([b.pk for b in batches])
    return [
        summarize_payout(b.pk, b.batch_name, b.instructor_salary, paid.get(b.pk, 0))
        for b in batches
    ]


def get_instructor_payout_summary(batch_id):
    batch = Batch.objects.filter(pk=batch_id).first()
    if batch is None:
        raise NotFoundError('Batch not found')
    return get_instructor_payout_summaries([batch])[0]


# --- writes ------------------------------------------------------------------

def recompute_payment(payment):
    """
    paid_amount := sum of paid installments; status derived from it.
    Caller must hold the payment row lock.
    """
    paid = payment.installments.filter(
        status=PaymentInstallment.STATUS_PAID
    ).aggregate(total=Sum('amount'))['total'] or 0
    payment.paid_amount = paid
    payment.status = derive_payment_status(paid, payment.total_amount)
    payment.save(update_fields=['paid_amount', 'status', 'updated_at'])
    return payment


def record_installment_payment(installment_id, paid_date, payment_method, notes=None, payment_id=None):
    """
    Mark an installment paid and recompute its Payment, atomically.
    Raises NotFoundError (installment/payment missing), ConflictError (already paid).
    Returns the refreshed Payment.
    """
    installment_ref = (
        PaymentInstallment.objects
        .filter(pk=installment_id)
        .values('payment_id')
        .first()
    )
    if installment_ref is None:
        raise NotFoundError('Installment not found')
    if payment_id is not None and int(payment_id) != installment_ref['payment_id']:
        raise NotFoundError('Installment does not belong to this payment')

    with transaction.atomic():
        try:
            payment = Payment.objects.select_for_update().get(pk=installment_ref['payment_id'])
        except Payment.DoesNotExist:
            raise NotFoundError('Payment record not found')
        try:
            installment = PaymentInstallment.objects.select_for_update().get(pk=installment_id)
        except PaymentInstallment.DoesNotExist:
            raise NotFoundError('Installment not found')

        if installment.status == PaymentInstallment.STATUS_PAID:
            raise ConflictError('This installment has already been paid')

        installment.status = PaymentInstallment.STATUS_PAID
        installment.paid_date = paid_date
        installment.payment_method = payment_method
        installment.notes = notes or None
        installment.save(update_fields=['status', 'paid_date', 'payment_method', 'notes', 'updated_at'])

        recompute_payment(payment)

    logger.info(
        "[PAYMENT] installment_id=%s payment_id=%s amount=%s paid=%s/%s status=%s",
        installment.pk, payment.pk, installment.amount, payment.paid_amount, payment.total_amount, payment.status,
    )
    return payment


def record_instructor_payout(batch_id, amount, payment_date, payment_method, notes=None, created_by=None):
    """Insert an InstructorPayment for the batch's instructor. Not capped by salary."""
    if amount is None or int(amount) <= 0:
        raise ValidationError('Amount must be greater than 0')
    batch = Batch.objects.select_related('instructor').filter(pk=batch_id).first()
    if batch is None:
        raise NotFoundError('Batch not found')

    payout = InstructorPayment.objects.create(
        batch=batch,
        instructor=batch.instructor,
        amount=int(amount),
        payment_date=payment_date,
        payment_method=payment_method,
        notes=notes or None,
        created_by=created_by,
    )
    summary = get_instructor_payout_summary(batch.pk)
    if summary.total_paid > summary.salary:
        logger.warning(
            "[PAYOUT] batch_id=%s paid %s exceeds salary %s",
            batch.pk, summary.total_paid, summary.salary,
        )
    logger.info("[PAYOUT] batch_id=%s amount=%s total_paid=%s", batch.pk, payout.amount, summary.total_paid)
    return payout


def record_batch_expense(batch_id, title, amount, expense_date, notes=None, created_by=None):
    """Insert a BatchExpense and refresh a profit-share instructor's salary."""
    if amount is None or int(amount) <= 0:
        raise ValidationError('Amount must be greater than 0')
    if not Batch.objects.filter(pk=batch_id).exists():
        raise NotFoundError('Batch not found')

    with transaction.atomic():
        expense = BatchExpense.objects.create(
            batch_id=batch_id,
            title=title,
            amount=int(amount),
            expense_date=expense_date,
            notes=notes or None,
            created_by=created_by,
        )
        recalculate_instructor_salary(batch_id)
    return expense


_EXPENSE_FIELDS = {
    'title': 'title',
    'amount': 'amount',
    'expenseDate': 'expense_date',
    'notes': 'notes',
}


def _get_batch_expense(batch_id, expense_id):
    expense = (
        BatchExpense.objects
        .select_for_update()
        .filter(pk=expense_id, batch_id=batch_id)
        .first()
    )
    if expense is None:
        raise NotFoundError('Expense not found')
    return expense


def update_batch_expense(batch_id, expense_id, changes):
    """
    Edit an expense of the batch and refresh a profit-share instructor's salary.
    changes uses the request keys (title, amount, expenseDate, notes).
    """
    if 'amount' in changes and (changes['amount'] is None or int(changes['amount']) <= 0):
        raise ValidationError('Amount must be greater than 0')

    with transaction.atomic():
        expense = _get_batch_expense(batch_id, expense_id)
        updated = []
        for key, field in _EXPENSE_FIELDS.items():
            if key not in changes:
                continue
            value = changes[key]
            if key == 'amount':
                value = int(value)
            elif key == 'notes':
                value = value or None
            setattr(expense, field, value)
            updated.append(field)
        if updated:
            expense.save(update_fields=updated)
        recalculate_instructor_salary(batch_id)

    logger.info("[EXPENSE] updated batch_id=%s expense_id=%s fields=%s", batch_id, expense.pk, updated)
    return expense


def delete_batch_expense(batch_id, expense_id):
    with transaction.atomic():
        expense = _get_batch_expense(batch_id, expense_id)
        expense.delete()
        recalculate_instructor_salary(batch_id)
    logger.info("[EXPENSE] deleted batch_id=%s expense_id=%s", batch_id, expense_id)


def mark_overdue_installments(today=None):
    """pending installments due before today -> overdue. Returns the number updated."""
    today = today or timezone.localdate()
    updated = PaymentInstallment.objects.filter(
        status=PaymentInstallment.STATUS_PENDING,
        due_date__lt=today,
    ).update(status=PaymentInstallment.STATUS_OVERDUE, updated_at=timezone.now())
    if settings.DEBUG:
        logger.debug("[overdue] today=%s updated=%s", today, updated)
    return updated


def is_overdue(installment, today=None):
    """Unpaid and past its due date, whether or not the overdue sweep has run yet."""
    today = today or timezone.localdate()
    return installment.status != PaymentInstallment.STATUS_PAID and installment.due_date < today
