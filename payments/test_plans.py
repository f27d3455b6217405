"""
Installment plan generator: schedule shape, rounding and validation.
"""
from datetime import date, timedelta

from django.test import SimpleTestCase

from core.exceptions import ValidationError
from payments.models import Payment, PaymentInstallment
from payments.services.plans import (
    InitialPayment,
    build_payment_plan,
    derive_payment_status,
    split_in_two,
)

ENROLLED = date(2025, 3, 1)


class BuildPaymentPlanTests(SimpleTestCase):

    def test_unpaid_two_installment_plan(self):
        plan = build_payment_plan(150000, 0, Payment.PLAN_INSTALLMENT_2, ENROLLED)
        self.assertEqual([i.amount for i in plan.installments], [75000, 75000])
        self.assertEqual(plan.status, Payment.STATUS_UNPAID)
        self.assertEqual(plan.paid_amount, 0)

    def test_full_plan_with_initial_payment_is_paid(self):
        plan = build_payment_plan(
            base_amount=150000,
            discount_amount=30000,
            plan_type=Payment.PLAN_FULL,
            enrollment_date=ENROLLED,
            initial_payment=InitialPayment(paid_date=ENROLLED, payment_method='kbzpay'),
        )
        self.assertEqual(plan.total_amount, 120000)
        self.assertEqual(len(plan.installments), 1)
        only = plan.installments[0]
        self.assertEqual(only.amount, 120000)
        self.assertEqual(only.due_type, PaymentInstallment.DUE_ENROLLMENT)
        self.assertEqual(only.status, PaymentInstallment.STATUS_PAID)
        self.assertEqual(only.payment_method, 'kbzpay')
        self.assertEqual(plan.paid_amount, 120000)
        self.assertEqual(plan.status, Payment.STATUS_PAID)

    def test_two_installments_odd_total_puts_extra_unit_first(self):
        plan = build_payment_plan(
            base_amount=150001,
            discount_amount=0,
            plan_type=Payment.PLAN_INSTALLMENT_2,
            enrollment_date=ENROLLED,
        )
        self.assertEqual(plan.total_amount, 150001)
        first, second = plan.installments
        self.assertEqual((first.number, first.amount), (1, 75001))
        self.assertEqual((second.number, second.amount), (2, 75000))
        self.assertEqual(first.due_date, ENROLLED)
        self.assertEqual(second.due_type, PaymentInstallment.DUE_ENROLLMENT_PLUS_4W)
        self.assertEqual(second.due_date, ENROLLED + timedelta(days=28))
        self.assertEqual(plan.paid_amount, 0)
        self.assertEqual(plan.status, Payment.STATUS_UNPAID)

    def test_initial_payment_on_two_installments_is_partial(self):
        plan = build_payment_plan(
            base_amount=150000,
            discount_amount=0,
            plan_type=Payment.PLAN_INSTALLMENT_2,
            enrollment_date=ENROLLED,
            initial_payment=InitialPayment(paid_date=None, payment_method='cash', notes='desk'),
        )
        first, second = plan.installments
        self.assertTrue(first.is_paid)
        self.assertEqual(first.paid_date, ENROLLED)
        self.assertEqual(first.notes, 'desk')
        self.assertFalse(second.is_paid)
        self.assertEqual(plan.paid_amount, 75000)
        self.assertEqual(plan.status, Payment.STATUS_PARTIAL)

    def test_installments_always_sum_to_total(self):
        for base in (1, 2, 3, 99999, 100000, 150001, 1234567):
            for plan_type in (Payment.PLAN_FULL, Payment.PLAN_INSTALLMENT_2):
                plan = build_payment_plan(base, 0, plan_type, ENROLLED)
                self.assertEqual(sum(i.amount for i in plan.installments), plan.total_amount)
                numbers = [i.number for i in plan.installments]
                self.assertEqual(numbers, list(range(1, len(numbers) + 1)))

    def test_full_discount_generates_paid_zero_installments(self):
        plan = build_payment_plan(10000, 10000, Payment.PLAN_INSTALLMENT_2, ENROLLED)
        self.assertEqual(plan.total_amount, 0)
        self.assertTrue(all(i.is_paid for i in plan.installments))
        self.assertEqual(plan.status, Payment.STATUS_PAID)

    def test_rejects_discount_above_fee(self):
        with self.assertRaises(ValidationError):
            build_payment_plan(100000, 100001, Payment.PLAN_FULL, ENROLLED)

    def test_rejects_non_positive_fee_and_negative_discount(self):
        with self.assertRaises(ValidationError):
            build_payment_plan(0, 0, Payment.PLAN_FULL, ENROLLED)
        with self.assertRaises(ValidationError):
            build_payment_plan(100000, -1, Payment.PLAN_FULL, ENROLLED)

    def test_rejects_unknown_plan(self):
        with self.assertRaises(ValidationError):
            build_payment_plan(100000, 0, 'installment_3', ENROLLED)


class PaymentStatusTests(SimpleTestCase):

    def test_derive_payment_status(self):
        self.assertEqual(derive_payment_status(0, 100), Payment.STATUS_UNPAID)
        self.assertEqual(derive_payment_status(1, 100), Payment.STATUS_PARTIAL)
        self.assertEqual(derive_payment_status(100, 100), Payment.STATUS_PAID)
        self.assertEqual(derive_payment_status(0, 0), Payment.STATUS_PAID)

    def test_split_in_two(self):
        self.assertEqual(split_in_two(150001), (75001, 75000))
        self.assertEqual(split_in_two(150000), (75000, 75000))
        self.assertEqual(split_in_two(1), (1, 0))
