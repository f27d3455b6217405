"""
Payment models: enrollment payment + installment schedule, instructor payouts,
batch expenses. All amounts are whole MMK.
"""
from django.core.validators import MinValueValidator
from django.db import models
from accounts.models import User
from courses.models import Batch
from enrollments.models import Enrollment


class Payment(models.Model):
    """
    Exactly one per Enrollment.
    total_amount = base_amount - discount_amount (check constraint).
    paid_amount / status are recomputed from installments by payments.services.ledger.
    """
    PLAN_FULL = 'full'
    PLAN_INSTALLMENT_2 = 'installment_2'

    PLAN_CHOICES = [
        (PLAN_FULL, 'Full payment'),
        (PLAN_INSTALLMENT_2, '2 installments'),
    ]

    STATUS_UNPAID = 'unpaid'
    STATUS_PARTIAL = 'partial'
    STATUS_PAID = 'paid'

    STATUS_CHOICES = [
        (STATUS_UNPAID, 'Unpaid'),
        (STATUS_PARTIAL, 'Partial'),
        (STATUS_PAID, 'Paid'),
    ]

    enrollment = models.OneToOneField(
        Enrollment,
        on_delete=models.CASCADE,
        related_name='payment',
    )
    base_amount = models.PositiveIntegerField()
    discount_amount = models.PositiveIntegerField(default=0)
    total_amount = models.PositiveIntegerField()
    paid_amount = models.PositiveIntegerField(default=0)
    plan_type = models.CharField(max_length=20, choices=PLAN_CHOICES, default=PLAN_INSTALLMENT_2)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_UNPAID, db_index=True)
    multi_course_discount = models.BooleanField(default=False)
    discount_notes = models.TextField(blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payments'
        verbose_name = 'Payment'
        verbose_name_plural = 'Payments'
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(total_amount=models.F('base_amount') - models.F('discount_amount')),
                name='payment_total_is_base_minus_discount',
            ),
        ]

    def __str__(self):
        return f"Payment #{self.pk} - {self.enrollment} - {self.paid_amount}/{self.total_amount}"


class PaymentInstallment(models.Model):
    """
    One scheduled part of a Payment. number is 1-based and unique per payment.
    pending -> paid (terminal); pending -> overdue (time-based) -> paid.
    """
    STATUS_PENDING = 'pending'
    STATUS_PAID = 'paid'
    STATUS_OVERDUE = 'overdue'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_PAID, 'Paid'),
        (STATUS_OVERDUE, 'Overdue'),
    ]

    DUE_ENROLLMENT = 'enrollment'
    DUE_ENROLLMENT_PLUS_4W = 'enrollment_plus_4w'

    DUE_TYPE_CHOICES = [
        (DUE_ENROLLMENT, 'On enrollment'),
        (DUE_ENROLLMENT_PLUS_4W, '4 weeks after enrollment'),
    ]

    METHOD_CHOICES = [
        ('cash', 'Cash'),
        ('kbzpay', 'KBZPay'),
        ('wavepay', 'WavePay'),
        ('bank', 'Bank Transfer'),
    ]

    payment = models.ForeignKey(
        Payment,
        on_delete=models.CASCADE,
        related_name='installments',
    )
    number = models.PositiveSmallIntegerField()
    amount = models.PositiveIntegerField()
    due_type = models.CharField(max_length=30, choices=DUE_TYPE_CHOICES, default=DUE_ENROLLMENT)
    due_date = models.DateField()
    paid_date = models.DateField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    payment_method = models.CharField(max_length=20, choices=METHOD_CHOICES, blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payment_installments'
        verbose_name = 'Payment Installment'
        verbose_name_plural = 'Payment Installments'
        ordering = ['payment', 'number']
        constraints = [
            models.UniqueConstraint(
                fields=['payment', 'number'],
                name='unique_payment_installment_number',
            ),
        ]

    def __str__(self):
        return f"Installment {self.number} of payment #{self.payment_id} - {self.amount} ({self.status})"

    @property
    def is_paid(self):
        return self.status == self.STATUS_PAID


class InstructorPayment(models.Model):
    """Payout to an instructor for a batch. Not capped by batch.instructor_salary."""
    batch = models.ForeignKey(
        Batch,
        on_delete=models.CASCADE,
        related_name='instructor_payments',
    )
    instructor = models.ForeignKey(
        User,
        on_delete=models.PROTECT,
        related_name='instructor_payments',
        limit_choices_to={'role': 'instructor'},
    )
    amount = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    payment_date = models.DateField()
    payment_method = models.CharField(max_length=20, choices=PaymentInstallment.METHOD_CHOICES, default='bank')
    notes = models.TextField(blank=True, null=True)
    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='recorded_instructor_payments',
        limit_choices_to={'role': 'admin'},
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'instructor_payments'
        verbose_name = 'Instructor Payment'
        verbose_name_plural = 'Instructor Payments'
        ordering = ['-payment_date', '-created_at']
        indexes = [
            models.Index(fields=['batch', 'payment_date'], name='instr_pay_batch_date_idx'),
        ]

    def __str__(self):
        return f"{self.instructor.full_name} - {self.batch.batch_name} - {self.amount}"


class BatchExpense(models.Model):
    """Running cost of a batch (ads, venue, ...). Feeds the finance roll-up and profit-share salary."""
    batch = models.ForeignKey(
        Batch,
        on_delete=models.CASCADE,
        related_name='expenses',
    )
    title = models.CharField(max_length=255)
    amount = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    expense_date = models.DateField()
    notes = models.TextField(blank=True, null=True)
    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='recorded_batch_expenses',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'batch_expenses'
        verbose_name = 'Batch Expense'
        verbose_name_plural = 'Batch Expenses'
        ordering = ['-expense_date', '-created_at']

    def __str__(self):
        return f"{self.batch.batch_name} - {self.title} - {self.amount}"
