"""
Certificate eligibility: rates, threshold, batch end, write-back and
uploaded-certificate precedence.
"""
from datetime import timedelta
from decimal import Decimal

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase, TestCase, override_settings
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from accounts.models import User
from assignments.models import Assignment, AssignmentSubmission
from attendance.models import AttendanceCode, AttendanceSubmission
from core.exceptions import NotFoundError, ValidationError
from courses.models import Batch, Course
from enrollments.models import Enrollment
from enrollments.services.certificate import (
    evaluate_certificate,
    meets_threshold,
    percentage,
    upload_certificate,
)


class RateTests(SimpleTestCase):

    def test_percentage_rounds_to_two_places(self):
        self.assertEqual(percentage(9, 10), Decimal('90.00'))
        self.assertEqual(percentage(2, 3), Decimal('66.67'))
        self.assertEqual(percentage(0, 0), Decimal('0.00'))

    def test_threshold_uses_exact_ratio(self):
        self.assertTrue(meets_threshold(9, 10, 90))
        self.assertFalse(meets_threshold(8, 9, 90))
        # 899/999 = 89.989..% rounds to 89.99 and must still fail
        self.assertFalse(meets_threshold(899, 999, 90))
        self.assertFalse(meets_threshold(0, 0, 90))


class CertificateEvaluationTests(TestCase):

    def setUp(self):
        self.today = timezone.localdate()
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
            start_date=self.today - timedelta(days=60),
            end_date=self.today - timedelta(days=1),
        )
        self.enrollment = Enrollment.objects.create(student=self.student, batch=self.batch)

    def _build_history(self, codes=10, attended=9, assignments=10, submitted=9):
        now = timezone.now()
        for i in range(codes):
            code = AttendanceCode.objects.create(
                batch=self.batch,
                code=f"C{i:05d}",
                generated_by=self.instructor,
                generated_at=now,
                valid_until=now + timedelta(days=3),
            )
            if i < attended:
                AttendanceSubmission.objects.create(attendance_code=code, student=self.student, batch=self.batch)
        for i in range(assignments):
            assignment = Assignment.objects.create(
                batch=self.batch, instructor=self.instructor, title=f"Task {i}", max_score=10,
            )
            if i < submitted:
                AssignmentSubmission.objects.create(
                    assignment=assignment,
                    student=self.student,
                    content="done",
                    submitted_at=now,
                    score=8,
                    status=AssignmentSubmission.STATUS_GRADED,
                    graded_at=now,
                )

    def test_eligible_after_batch_end(self):
        self._build_history()
        enrollment, metrics = evaluate_certificate(self.enrollment.pk)

        self.assertEqual(metrics.attendance_rate, Decimal('90.00'))
        self.assertEqual(metrics.assignment_rate, Decimal('90.00'))
        self.assertTrue(metrics.batch_ended)
        self.assertTrue(metrics.is_eligible)
        self.assertTrue(enrollment.certificate)
        self.assertEqual(enrollment.certificate_source, Enrollment.SOURCE_GENERATED)
        self.assertIsNotNone(enrollment.certificate_issued_at)

    def test_not_eligible_before_batch_end(self):
        self.batch.end_date = self.today + timedelta(days=7)
        self.batch.save()
        self._build_history()

        enrollment, metrics = evaluate_certificate(self.enrollment.pk)
        self.assertFalse(metrics.batch_ended)
        self.assertFalse(metrics.is_eligible)
        self.assertFalse(enrollment.certificate)

    def test_batch_without_end_date_never_ended(self):
        self.batch.end_date = None
        self.batch.save()
        self._build_history(attended=10, submitted=10)
        _, metrics = evaluate_certificate(self.enrollment.pk)
        self.assertFalse(metrics.is_eligible)

    def test_below_threshold(self):
        self._build_history(attended=8)
        _, metrics = evaluate_certificate(self.enrollment.pk)
        self.assertEqual(metrics.attendance_rate, Decimal('80.00'))
        self.assertFalse(metrics.is_eligible)

    def test_no_codes_or_assignments_is_zero_not_error(self):
        _, metrics = evaluate_certificate(self.enrollment.pk)
        self.assertEqual(metrics.attendance_rate, Decimal('0.00'))
        self.assertEqual(metrics.assignment_rate, Decimal('0.00'))
        self.assertFalse(metrics.is_eligible)

    def test_evaluation_is_idempotent(self):
        self._build_history()
        first, _ = evaluate_certificate(self.enrollment.pk)
        issued_at = first.certificate_issued_at
        second, _ = evaluate_certificate(self.enrollment.pk)
        self.assertTrue(second.certificate)
        self.assertEqual(second.certificate_issued_at, issued_at)

    def test_generated_certificate_revoked_when_no_longer_eligible(self):
        self._build_history()
        evaluate_certificate(self.enrollment.pk)
        AttendanceSubmission.objects.filter(student=self.student).first().delete()
        AttendanceSubmission.objects.filter(student=self.student).first().delete()

        enrollment, metrics = evaluate_certificate(self.enrollment.pk)
        self.assertFalse(metrics.is_eligible)
        self.assertFalse(enrollment.certificate)
        self.assertIsNone(enrollment.certificate_source)

    def test_uploaded_certificate_is_never_demoted(self):
        self.enrollment.certificate = True
        self.enrollment.certificate_source = Enrollment.SOURCE_UPLOADED
        self.enrollment.certificate_url = "/media/certificates/1/cert.pdf"
        self.enrollment.save()

        enrollment, metrics = evaluate_certificate(self.enrollment.pk)
        self.assertFalse(metrics.is_eligible)
        self.assertTrue(enrollment.certificate)
        self.assertEqual(enrollment.certificate_source, Enrollment.SOURCE_UPLOADED)

    def test_missing_enrollment(self):
        with self.assertRaises(NotFoundError):
            evaluate_certificate(999999)


class CertificateUploadTests(TestCase):

    def setUp(self):
        instructor = User.objects.create_user(
            email="instructor@test.mm", password="pass123", full_name="Instructor", role=User.ROLE_INSTRUCTOR,
        )
        self.student = User.objects.create_user(
            email="student@test.mm", password="pass123", full_name="Student", role=User.ROLE_STUDENT,
        )
        self.admin = User.objects.create_user(
            email="admin@test.mm", password="pass123", full_name="Admin", role=User.ROLE_ADMIN,
        )
        course = Course.objects.create(title="Python Basics", slug="python-basics", fee=150000)
        batch = Batch.objects.create(
            course=course,
            instructor=instructor,
            batch_name="PB-01",
            start_date=timezone.localdate(),
        )
        self.enrollment = Enrollment.objects.create(student=self.student, batch=batch)

    def test_upload_marks_enrollment(self):
        pdf = SimpleUploadedFile("cert.pdf", b"%PDF-1.4 test", content_type="application/pdf")
        enrollment = upload_certificate(self.enrollment.pk, pdf)

        self.assertTrue(enrollment.certificate)
        self.assertEqual(enrollment.certificate_source, Enrollment.SOURCE_UPLOADED)
        self.assertIn(f"certificates/{self.enrollment.pk}/", enrollment.certificate_url)
        self.assertIsNotNone(enrollment.certificate_issued_at)

    def test_upload_rejects_other_types(self):
        text = SimpleUploadedFile("cert.txt", b"hello", content_type="text/plain")
        with self.assertRaises(ValidationError):
            upload_certificate(self.enrollment.pk, text)

    @override_settings(CERTIFICATE_MAX_UPLOAD_BYTES=8)
    def test_upload_rejects_large_files(self):
        pdf = SimpleUploadedFile("cert.pdf", b"%PDF-1.4 too large", content_type="application/pdf")
        with self.assertRaises(ValidationError):
            upload_certificate(self.enrollment.pk, pdf)

    def test_upload_endpoint(self):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(self.admin)}")
        png = SimpleUploadedFile("cert.png", b"\x89PNG\r\n\x1a\n", content_type="image/png")
        res = client.post(
            "/api/admin/certificates/upload",
            {"enrollmentId": self.enrollment.pk, "file": png},
            format="multipart",
        )
        self.assertEqual(res.status_code, 200, res.data)
        self.assertTrue(res.data["certificate"])
        self.assertEqual(res.data["certificateSource"], "uploaded")


class CertificateAPITests(TestCase):

    def setUp(self):
        self.client = APIClient()
        instructor = User.objects.create_user(
            email="instructor@test.mm", password="pass123", full_name="Instructor", role=User.ROLE_INSTRUCTOR,
        )
        self.student = User.objects.create_user(
            email="student@test.mm", password="pass123", full_name="Student", role=User.ROLE_STUDENT,
        )
        self.other = User.objects.create_user(
            email="other@test.mm", password="pass123", full_name="Other", role=User.ROLE_STUDENT,
        )
        self.admin = User.objects.create_user(
            email="admin@test.mm", password="pass123", full_name="Admin", role=User.ROLE_ADMIN,
        )
        course = Course.objects.create(title="Python Basics", slug="python-basics", fee=150000)
        batch = Batch.objects.create(
            course=course,
            instructor=instructor,
            batch_name="PB-01",
            start_date=timezone.localdate(),
        )
        self.enrollment = Enrollment.objects.create(student=self.student, batch=batch)

    def _auth(self, user):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(user)}")

    def test_student_sees_own_metrics(self):
        self._auth(self.student)
        res = self.client.get(f"/api/student/certificate/{self.enrollment.pk}")
        self.assertEqual(res.status_code, 200)
        self.assertFalse(res.data["certificate"])
        self.assertEqual(res.data["metrics"]["attendanceRate"], 0.0)
        self.assertFalse(res.data["metrics"]["isEligible"])

    def test_other_student_gets_404(self):
        self._auth(self.other)
        res = self.client.get(f"/api/student/certificate/{self.enrollment.pk}")
        self.assertEqual(res.status_code, 404)

    def test_admin_can_evaluate(self):
        self._auth(self.admin)
        res = self.client.get(f"/api/student/certificate/{self.enrollment.pk}")
        self.assertEqual(res.status_code, 200)
