"""
Installment plan generator.

Given a course fee, a discount and a plan type, build the Payment values and
its installment schedule. Pure: nothing is written here; the enrollment
service persists the plan in the same transaction as the enrollment.

full           -> one installment of the total, due on enrollment.
installment_2  -> ceil(total / 2) due on enrollment, the rest due
                  SECOND_INSTALLMENT_DUE_DAYS (28) days later.
An odd total puts the extra unit on installment 1, so the two amounts
always add up to the total exactly.
"""
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional

from django.conf import settings

from core.exceptions import ValidationError
from payments.models import Payment, PaymentInstallment

PLAN_TYPES = (Payment.PLAN_FULL, Payment.PLAN_INSTALLMENT_2)


@dataclass(frozen=True)
class InitialPayment:
    """Money taken at the enrollment desk; settles installment 1."""
    paid_date: object
    payment_method: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class InstallmentPlan:
    number: int
    amount: int
    due_type: str
    due_date: object
    status: str = PaymentInstallment.STATUS_PENDING
    paid_date: object = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None

    @property
    def is_paid(self):
        return self.status == PaymentInstallment.STATUS_PAID


@dataclass
class PaymentPlan:
    base_amount: int
    discount_amount: int
    total_amount: int
    plan_type: str
    installments: list = field(default_factory=list)

    @property
    def paid_amount(self):
        return sum(i.amount for i in self.installments if i.is_paid)

    @property
    def status(self):
        return derive_payment_status(self.paid_amount, self.total_amount)


def derive_payment_status(paid_amount, total_amount):
    """paid when paid >= total; partial when 0 < paid < total; otherwise unpaid."""
    if paid_amount >= total_amount:
        return Payment.STATUS_PAID
    if paid_amount > 0:
        return Payment.STATUS_PARTIAL
    return Payment.STATUS_UNPAID


def split_in_two(total_amount):
    """(first, second) with first = ceil(total / 2)."""
    first = (total_amount + 1) // 2
    return first, total_amount - first


def _validate_amounts(base_amount, discount_amount):
    if isinstance(base_amount, bool) or not isinstance(base_amount, int):
        raise ValidationError('Course fee must be a whole amount')
    if isinstance(discount_amount, bool) or not isinstance(discount_amount, int):
        raise ValidationError('Discount must be a whole amount')
    if base_amount <= 0:
        raise ValidationError('Course fee must be greater than 0')
    if discount_amount < 0:
        raise ValidationError('Discount cannot be negative')
    if discount_amount > base_amount:
        raise ValidationError(
            f'Discount ({discount_amount}) cannot exceed the course fee ({base_amount})'
        )


def build_payment_plan(base_amount, discount_amount, plan_type, enrollment_date, initial_payment=None):
    """
    Build the payment plan for a new enrollment.
    Raises ValidationError for fee <= 0, negative discount, discount above fee
    or an unknown plan type.
    """
    _validate_amounts(base_amount, discount_amount)
    if plan_type not in PLAN_TYPES:
        raise ValidationError(f'Unknown payment plan: {plan_type}')

    total_amount = base_amount - discount_amount

    if plan_type == Payment.PLAN_FULL:
        installments = [
            InstallmentPlan(
                number=1,
                amount=total_amount,
                due_type=PaymentInstallment.DUE_ENROLLMENT,
                due_date=enrollment_date,
            ),
        ]
    else:
        first, second = split_in_two(total_amount)
        due_days = getattr(settings, 'SECOND_INSTALLMENT_DUE_DAYS', 28)
        installments = [
            InstallmentPlan(
                number=1,
                amount=first,
                due_type=PaymentInstallment.DUE_ENROLLMENT,
                due_date=enrollment_date,
            ),
            InstallmentPlan(
                number=2,
                amount=second,
                due_type=PaymentInstallment.DUE_ENROLLMENT_PLUS_4W,
                due_date=enrollment_date + timedelta(days=due_days),
            ),
        ]

    if initial_payment is not None:
        first_installment = installments[0]
        first_installment.status = PaymentInstallment.STATUS_PAID
        first_installment.paid_date = initial_payment.paid_date or enrollment_date
        first_installment.payment_method = initial_payment.payment_method
        first_installment.notes = initial_payment.notes

    # Nothing to collect on a zero-amount installment
    for installment in installments:
        if installment.amount == 0 and not installment.is_paid:
            installment.status = PaymentInstallment.STATUS_PAID
            installment.paid_date = enrollment_date

    return PaymentPlan(
        base_amount=base_amount,
        discount_amount=discount_amount,
        total_amount=total_amount,
        plan_type=plan_type,
        installments=installments,
    )
