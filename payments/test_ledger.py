"""
Payment ledger: status derivation, installment recording, batch finance and
instructor payout summaries.
"""
from datetime import date

from django.core.management import call_command
from django.test import SimpleTestCase, TestCase
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from accounts.models import User
from core.exceptions import ConflictError, NotFoundError, ValidationError
from courses.models import Batch, Course
from enrollments.services.enrollment import enroll_student
from payments.models import BatchExpense, Payment, PaymentInstallment
from payments.serializers import PaymentInstallmentSerializer
from payments.services.ledger import (
    PAYOUT_PAID,
    PAYOUT_PARTIAL,
    PAYOUT_PENDING,
    delete_batch_expense,
    get_batch_finance_summary,
    get_instructor_payout_summary,
    is_overdue,
    mark_overdue_installments,
    record_batch_expense,
    record_installment_payment,
    record_instructor_payout,
    summarize_payment,
    summarize_payout,
    update_batch_expense,
)


class SummaryReductionTests(SimpleTestCase):

    def test_summarize_payment_status(self):
        self.assertEqual(summarize_payment('paid', 100, 100).payment_status, 'paid')
        self.assertEqual(summarize_payment('unpaid', 0, 100).payment_status, 'unpaid')
        # stored status lagging behind a positive paid amount
        self.assertEqual(summarize_payment('unpaid', 10, 100).payment_status, 'partial')
        self.assertEqual(summarize_payment('partial', 0, 100).payment_status, 'partial')

    def test_remaining_never_negative(self):
        summary = summarize_payment('paid', 120, 100)
        self.assertEqual(summary.remaining_amount, 0)
        self.assertEqual(summary.as_dict()['remainingAmount'], 0)

    def test_payout_status(self):
        self.assertEqual(summarize_payout(1, 'B', 100000, 0).status, PAYOUT_PENDING)
        self.assertEqual(summarize_payout(1, 'B', 100000, 40000).status, PAYOUT_PARTIAL)
        self.assertEqual(summarize_payout(1, 'B', 100000, 100000).status, PAYOUT_PAID)
        overpaid = summarize_payout(1, 'B', 100000, 130000)
        self.assertEqual(overpaid.status, PAYOUT_PAID)
        self.assertEqual(overpaid.remaining, 0)
        self.assertEqual(summarize_payout(1, 'B', None, 0).status, PAYOUT_PENDING)


class LedgerTests(TestCase):

    def setUp(self):
        self.admin = User.objects.create_user(
            email="admin@test.mm", password="pass123", full_name="Admin", role=User.ROLE_ADMIN,
        )
        self.instructor = User.objects.create_user(
            email="instructor@test.mm", password="pass123", full_name="Instructor", role=User.ROLE_INSTRUCTOR,
        )
        self.student = User.objects.create_user(
            email="student@test.mm", password="pass123", full_name="Student", role=User.ROLE_STUDENT,
        )
        self.course = Course.objects.create(title="Python Basics", slug="python-basics", fee=150000)
        self.batch = Batch.objects.create(
            course=self.course,
            instructor=self.instructor,
            batch_name="PB-01",
            start_date=date(2025, 3, 1),
            instructor_salary=50000,
        )
        self.enrollment = enroll_student(self.batch.pk, self.student.pk, enrollment_date=date(2025, 3, 1))
        self.payment = self.enrollment.payment
        self.first, self.second = self.payment.installments.order_by('number')

    def test_record_payments_updates_status(self):
        payment = record_installment_payment(self.first.pk, date(2025, 3, 1), 'cash')
        self.assertEqual(payment.paid_amount, 75000)
        self.assertEqual(payment.status, Payment.STATUS_PARTIAL)

        payment = record_installment_payment(self.second.pk, date(2025, 3, 29), 'kbzpay', notes='second')
        self.assertEqual(payment.paid_amount, 150000)
        self.assertEqual(payment.status, Payment.STATUS_PAID)

        self.second.refresh_from_db()
        self.assertEqual(self.second.status, PaymentInstallment.STATUS_PAID)
        self.assertEqual(self.second.payment_method, 'kbzpay')
        self.assertEqual(self.second.notes, 'second')

    def test_paying_twice_conflicts_and_keeps_amount(self):
        record_installment_payment(self.first.pk, date(2025, 3, 1), 'cash')
        with self.assertRaises(ConflictError):
            record_installment_payment(self.first.pk, date(2025, 3, 2), 'cash')
        self.payment.refresh_from_db()
        self.assertEqual(self.payment.paid_amount, 75000)

    def test_record_payment_not_found(self):
        with self.assertRaises(NotFoundError):
            record_installment_payment(999999, date(2025, 3, 1), 'cash')
        with self.assertRaises(NotFoundError):
            record_installment_payment(self.first.pk, date(2025, 3, 1), 'cash', payment_id=self.payment.pk + 1)

    def test_overdue_installment_is_still_payable(self):
        updated = mark_overdue_installments(today=date(2025, 4, 30))
        self.assertEqual(updated, 2)
        self.second.refresh_from_db()
        self.assertEqual(self.second.status, PaymentInstallment.STATUS_OVERDUE)

        payment = record_installment_payment(self.second.pk, date(2025, 5, 1), 'bank')
        self.assertEqual(payment.paid_amount, 75000)
        self.assertEqual(payment.status, Payment.STATUS_PARTIAL)

    def test_installment_overdue_flag(self):
        self.assertTrue(is_overdue(self.first, today=date(2025, 3, 2)))
        self.assertFalse(is_overdue(self.second, today=date(2025, 3, 2)))
        self.assertFalse(is_overdue(self.second, today=date(2025, 3, 29)))

        record_installment_payment(self.first.pk, date(2025, 3, 1), 'cash')
        self.first.refresh_from_db()
        self.assertFalse(is_overdue(self.first, today=date(2025, 5, 1)))

        # second installment fell due 2025-03-29
        data = PaymentInstallmentSerializer(self.payment.installments.order_by('number'), many=True).data
        self.assertEqual([row["isOverdue"] for row in data], [False, True])

    def test_mark_overdue_command(self):
        call_command('mark_overdue_installments', '--date', '2025-03-15', verbosity=0)
        self.first.refresh_from_db()
        self.second.refresh_from_db()
        self.assertEqual(self.first.status, PaymentInstallment.STATUS_OVERDUE)
        self.assertEqual(self.second.status, PaymentInstallment.STATUS_PENDING)

    def test_batch_finance_summary(self):
        record_installment_payment(self.first.pk, date(2025, 3, 1), 'cash')
        record_batch_expense(self.batch.pk, "Facebook ads", 20000, date(2025, 3, 5), created_by=self.admin)
        record_batch_expense(self.batch.pk, "Zoom", 5000, date(2025, 3, 6))

        summary = get_batch_finance_summary(self.batch.pk)
        self.assertEqual(summary.income, 75000)
        self.assertEqual(summary.expenses, 25000)
        self.assertEqual(summary.expense_count, 2)
        self.assertEqual(summary.instructor_salary, 50000)
        self.assertEqual(summary.net, 0)

    def test_expense_amount_must_be_positive(self):
        with self.assertRaises(ValidationError):
            record_batch_expense(self.batch.pk, "Nothing", 0, date(2025, 3, 5))
        with self.assertRaises(NotFoundError):
            record_batch_expense(999999, "Ads", 100, date(2025, 3, 5))

    def test_instructor_overpayment_allowed(self):
        record_instructor_payout(self.batch.pk, 30000, date(2025, 3, 10), 'bank')
        summary = get_instructor_payout_summary(self.batch.pk)
        self.assertEqual((summary.total_paid, summary.remaining, summary.status), (30000, 20000, PAYOUT_PARTIAL))

        record_instructor_payout(self.batch.pk, 40000, date(2025, 4, 10), 'bank')
        summary = get_instructor_payout_summary(self.batch.pk)
        self.assertEqual((summary.total_paid, summary.remaining, summary.status), (70000, 0, PAYOUT_PAID))

        with self.assertRaises(ValidationError):
            record_instructor_payout(self.batch.pk, 0, date(2025, 4, 10), 'bank')


class BatchExpenseEditTests(TestCase):

    def setUp(self):
        self.instructor = User.objects.create_user(
            email="instructor@test.mm",
            password="pass123",
            full_name="Instructor",
            role=User.ROLE_INSTRUCTOR,
            payment_model=User.PAYMENT_PROFIT_SHARE,
            profit_share_percentage=40,
        )
        student = User.objects.create_user(
            email="student@test.mm", password="pass123", full_name="Student", role=User.ROLE_STUDENT,
        )
        course = Course.objects.create(title="Python Basics", slug="python-basics", fee=150000)
        self.batch = Batch.objects.create(
            course=course,
            instructor=self.instructor,
            batch_name="PB-01",
            start_date=date(2025, 3, 1),
        )
        enroll_student(self.batch.pk, student.pk)
        self.expense = record_batch_expense(self.batch.pk, "Ads", 50000, date(2025, 3, 5))

    def _salary(self):
        self.batch.refresh_from_db()
        return self.batch.instructor_salary

    def test_update_recalculates_salary(self):
        # (150000 - 50000) * 40%
        self.assertEqual(self._salary(), 40000)

        expense = update_batch_expense(self.batch.pk, self.expense.pk, {'amount': 100000, 'title': 'Venue'})
        self.assertEqual((expense.title, expense.amount), ('Venue', 100000))
        self.assertEqual(self._salary(), 20000)
        self.assertEqual(get_batch_finance_summary(self.batch.pk).expenses, 100000)

    def test_delete_recalculates_salary(self):
        delete_batch_expense(self.batch.pk, self.expense.pk)
        self.assertFalse(BatchExpense.objects.filter(pk=self.expense.pk).exists())
        self.assertEqual(self._salary(), 60000)

    def test_expense_must_belong_to_batch(self):
        other = Batch.objects.create(
            course=self.batch.course,
            instructor=self.instructor,
            batch_name="PB-02",
            start_date=date(2025, 6, 1),
        )
        with self.assertRaises(NotFoundError):
            update_batch_expense(other.pk, self.expense.pk, {'amount': 1000})
        with self.assertRaises(NotFoundError):
            delete_batch_expense(other.pk, self.expense.pk)
        with self.assertRaises(ValidationError):
            update_batch_expense(self.batch.pk, self.expense.pk, {'amount': 0})
        self.expense.refresh_from_db()
        self.assertEqual(self.expense.amount, 50000)

class FinanceAPITests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(
            email="admin@test.mm", password="pass123", full_name="Admin", role=User.ROLE_ADMIN,
        )
        self.instructor = User.objects.create_user(
            email="instructor@test.mm", password="pass123", full_name="Instructor", role=User.ROLE_INSTRUCTOR,
        )
        self.student = User.objects.create_user(
            email="student@test.mm", password="pass123", full_name="Student", role=User.ROLE_STUDENT,
        )
        course = Course.objects.create(title="Python Basics", slug="python-basics", fee=150000)
        self.batch = Batch.objects.create(
            course=course,
            instructor=self.instructor,
            batch_name="PB-01",
            start_date=date(2025, 3, 1),
            instructor_salary=40000,
        )
        self.enrollment = enroll_student(self.batch.pk, self.student.pk)

    def _auth(self, user):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(user)}")

    def test_record_payment_endpoint(self):
        self._auth(self.admin)
        installment = self.enrollment.payment.installments.get(number=1)
        res = self.client.post("/api/admin/payments/record", {
            "installmentId": installment.pk,
            "paidDate": "2025-03-01",
            "paymentMethod": "wavepay",
        }, format="json")
        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(res.data["summary"]["paidAmount"], 75000)
        self.assertEqual(res.data["summary"]["paymentStatus"], "partial")

        again = self.client.post("/api/admin/payments/record", {
            "installmentId": installment.pk,
            "paidDate": "2025-03-01",
            "paymentMethod": "wavepay",
        }, format="json")
        self.assertEqual(again.status_code, 409)
        self.assertEqual(again.data["code"], "conflict")

    def test_enrollment_payment_endpoint(self):
        self._auth(self.admin)
        res = self.client.get(f"/api/admin/enrollments/{self.enrollment.pk}/payment")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["totalAmount"], 150000)
        self.assertEqual(res.data["summary"]["remainingAmount"], 150000)

    def test_finance_overview(self):
        self._auth(self.admin)
        res = self.client.get("/api/admin/finance")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(len(res.data["batches"]), 1)
        row = res.data["batches"][0]
        self.assertEqual(row["batchId"], self.batch.pk)
        self.assertEqual(row["income"], 0)
        self.assertEqual(row["net"], -40000)

    def test_instructor_sees_own_payouts(self):
        self._auth(self.admin)
        res = self.client.post("/api/admin/instructor-payments", {
            "batchId": self.batch.pk, "amount": 40000, "paymentDate": "2025-04-01",
        }, format="json")
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["summary"]["paymentStatus"], PAYOUT_PAID)

        self._auth(self.instructor)
        res = self.client.get("/api/instructor/payments")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["batches"][0]["totalPaid"], 40000)
        self.assertEqual(res.data["totalEarned"], 40000)

    def test_student_payments(self):
        self._auth(self.student)
        res = self.client.get("/api/student/payments")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(len(res.data), 1)
        self.assertEqual(res.data[0]["enrollmentId"], self.enrollment.pk)
        self.assertEqual(res.data[0]["paymentStatus"], "unpaid")
        self.assertEqual(len(res.data[0]["installments"]), 2)

    def test_expense_endpoint_rejects_zero(self):
        self._auth(self.admin)
        res = self.client.post(f"/api/admin/batches/{self.batch.pk}/expenses", {
            "title": "Ads", "amount": 0, "expenseDate": "2025-03-05",
        }, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["code"], "validation_error")

    def test_expense_edit_and_delete_endpoints(self):
        self._auth(self.admin)
        res = self.client.post(f"/api/admin/batches/{self.batch.pk}/expenses", {
            "title": "Ads", "amount": 20000, "expenseDate": "2025-03-05",
        }, format="json")
        self.assertEqual(res.status_code, 201, res.data)
        url = f"/api/admin/batches/{self.batch.pk}/expenses/{res.data['id']}"

        res = self.client.patch(url, {"amount": 25000, "notes": "boosted"}, format="json")
        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(res.data["amount"], 25000)
        self.assertEqual(res.data["notes"], "boosted")
        self.assertEqual(res.data["title"], "Ads")

        res = self.client.patch(url, {"amount": 0}, format="json")
        self.assertEqual(res.status_code, 400)

        res = self.client.delete(url)
        self.assertEqual(res.status_code, 204)
        res = self.client.delete(url)
        self.assertEqual(res.status_code, 404)
