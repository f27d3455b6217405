"""
Enrollment service: enroll a student into a batch with a payment plan, and
remove an enrollment.

Capacity is checked under a row lock on the batch, so two requests racing for
the last seat are serialized; the (student, batch) unique constraint turns
any remaining duplicate insert into a ConflictError.
"""
import logging

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from accounts.models import User
from core.exceptions import ConflictError, NotFoundError, ValidationError
from courses.services import get_batch, recalculate_instructor_salary
from enrollments.models import Enrollment
from payments.models import Payment, PaymentInstallment
from payments.services.plans import build_payment_plan

logger = logging.getLogger(__name__)


def multi_course_discount(student, course_fee):
    """
    Flat MULTI_COURSE_DISCOUNT (capped at the fee) when the student already
    has another enrollment. Returns (amount, applied).
    """
    if not Enrollment.objects.filter(student=student).exists():
        return 0, False
    discount = int(getattr(settings, 'MULTI_COURSE_DISCOUNT', 10000))
    return min(discount, course_fee), True


def _get_student(student_id):
    try:
        return User.objects.get(pk=student_id, role=User.ROLE_STUDENT)
    except User.DoesNotExist:
        raise NotFoundError('Student not found')


def _save_plan(enrollment, plan, *, multi_course, discount_notes):
    payment = Payment.objects.create(
        enrollment=enrollment,
        base_amount=plan.base_amount,
        discount_amount=plan.discount_amount,
        total_amount=plan.total_amount,
        paid_amount=plan.paid_amount,
        plan_type=plan.plan_type,
        status=plan.status,
        multi_course_discount=multi_course,
        discount_notes=discount_notes,
    )
    PaymentInstallment.objects.bulk_create([
        PaymentInstallment(
            payment=payment,
            number=item.number,
            amount=item.amount,
            due_type=item.due_type,
            due_date=item.due_date,
            status=item.status,
            paid_date=item.paid_date,
            payment_method=item.payment_method,
            notes=item.notes,
        )
        for item in plan.installments
    ])
    return payment


def enroll_student(batch_id, student_id, plan_type=Payment.PLAN_INSTALLMENT_2,
                   initial_payment=None, discount_amount=None, enrollment_date=None):
    """
    Create Enrollment + Payment + installments in one transaction.

    discount_amount=None applies the automatic multi-course discount;
    an explicit value overrides it (and must not exceed the fee).
    Raises NotFoundError, ValidationError (full / already enrolled / bad amounts),
    ConflictError (lost a concurrent race for the same seat or pair).
    """
    student = _get_student(student_id)
    enrollment_date = enrollment_date or timezone.localdate()

    try:
        with transaction.atomic():
            batch = get_batch(batch_id, for_update=True)

            enrolled = batch.enrollments.count()
            if enrolled >= batch.max_students:
                raise ValidationError('Batch is full')
            if batch.enrollments.filter(student=student).exists():
                raise ValidationError('Student is already enrolled in this batch')

            fee = batch.course.fee
            if discount_amount is None:
                discount, multi_course = multi_course_discount(student, fee)
            else:
                discount, multi_course = int(discount_amount), False
            discount_notes = (
                f'{discount:,} MMK multi-course discount applied' if multi_course else None
            )

            plan = build_payment_plan(
                base_amount=fee,
                discount_amount=discount,
                plan_type=plan_type,
                enrollment_date=enrollment_date,
                initial_payment=initial_payment,
            )

            enrollment = Enrollment.objects.create(
                student=student,
                batch=batch,
                enrolled_date=enrollment_date,
                status=Enrollment.STATUS_ACTIVE,
            )
            payment = _save_plan(
                enrollment, plan,
                multi_course=multi_course,
                discount_notes=discount_notes,
            )
            recalculate_instructor_salary(batch.pk)
    except IntegrityError:
        raise ConflictError('Enrollment conflicted with a concurrent request; please retry')

    logger.info(
        "[ENROLL] enrollment_id=%s student_id=%s batch_id=%s plan=%s total=%s paid=%s discount=%s",
        enrollment.pk, student.pk, batch.pk, plan.plan_type, payment.total_amount,
        payment.paid_amount, discount,
    )
    return enrollment


def remove_enrollment(enrollment_id):
    """Delete an enrollment; its Payment and installments cascade."""
    with transaction.atomic():
        try:
            enrollment = Enrollment.objects.select_for_update().get(pk=enrollment_id)
        except Enrollment.DoesNotExist:
            raise NotFoundError('Enrollment not found')
        batch_id = enrollment.batch_id
        enrollment.delete()
        recalculate_instructor_salary(batch_id)

    logger.info("[UNENROLL] enrollment_id=%s batch_id=%s", enrollment_id, batch_id)
    return batch_id
