"""
Attendance code generation, deactivation and student submission.
"""
import re
from datetime import date, timedelta

from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from accounts.models import User
from attendance.models import AttendanceCode, AttendanceSubmission
from attendance.services import deactivate_code, generate_code, submit_code
from core.exceptions import ConflictError, NotFoundError, ValidationError
from courses.models import Batch, Course
from enrollments.models import Enrollment


class AttendanceCodeTests(TestCase):

    def setUp(self):
        self.instructor = User.objects.create_user(
            email="instructor@test.mm", password="pass123", full_name="Instructor", role=User.ROLE_INSTRUCTOR,
        )
        self.other_instructor = User.objects.create_user(
            email="other.instructor@test.mm", password="pass123", full_name="Other", role=User.ROLE_INSTRUCTOR,
        )
        self.student = User.objects.create_user(
            email="student@test.mm", password="pass123", full_name="Student", role=User.ROLE_STUDENT,
        )
        self.outsider = User.objects.create_user(
            email="outsider@test.mm", password="pass123", full_name="Outsider", role=User.ROLE_STUDENT,
        )
        course = Course.objects.create(title="Python Basics", slug="python-basics", fee=150000)
        self.batch = Batch.objects.create(
            course=course,
            instructor=self.instructor,
            batch_name="PB-01",
            start_date=date(2025, 3, 1),
        )
        Enrollment.objects.create(student=self.student, batch=self.batch)

    def test_generated_code_shape_and_validity(self):
        code = generate_code(self.batch.pk, self.instructor)
        self.assertRegex(code.code, re.compile(r'^[A-Z0-9]{6}$'))
        self.assertTrue(code.is_active)
        self.assertEqual(code.valid_until - code.generated_at, timedelta(days=3))

    def test_only_batch_instructor_generates(self):
        with self.assertRaises(NotFoundError):
            generate_code(self.batch.pk, self.other_instructor)

    def test_submit_code(self):
        code = generate_code(self.batch.pk, self.instructor)
        submission = submit_code(self.student, code.code.lower())
        self.assertEqual(submission.batch, self.batch)

        with self.assertRaises(ConflictError):
            submit_code(self.student, code.code)
        self.assertEqual(AttendanceSubmission.objects.count(), 1)

    def test_submit_rejections(self):
        with self.assertRaises(ValidationError):
            submit_code(self.student, "ZZZZZZ")

        code = generate_code(self.batch.pk, self.instructor)
        with self.assertRaises(ValidationError):
            submit_code(self.outsider, code.code)

        deactivate_code(code.pk, self.instructor)
        with self.assertRaises(ValidationError):
            submit_code(self.student, code.code)

    def test_expired_code_rejected(self):
        past = timezone.now() - timedelta(days=5)
        code = AttendanceCode.objects.create(
            batch=self.batch,
            code="OLD123",
            generated_by=self.instructor,
            generated_at=past,
            valid_until=past + timedelta(days=3),
        )
        with self.assertRaises(ValidationError):
            submit_code(self.student, code.code)

    def test_deactivate_foreign_code(self):
        code = generate_code(self.batch.pk, self.instructor)
        with self.assertRaises(NotFoundError):
            deactivate_code(code.pk, self.other_instructor)

    def test_api_flow(self):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(self.instructor)}")
        res = client.post("/api/instructor/attendance-codes", {"batchId": self.batch.pk}, format="json")
        self.assertEqual(res.status_code, 201, res.data)
        code = res.data["code"]

        client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(self.student)}")
        res = client.post("/api/student/attendance", {"code": code}, format="json")
        self.assertEqual(res.status_code, 201, res.data)
        res = client.post("/api/student/attendance", {"code": code}, format="json")
        self.assertEqual(res.status_code, 409)

        client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(self.instructor)}")
        code_id = AttendanceCode.objects.get(code=code).pk
        res = client.post(f"/api/instructor/attendance-codes/{code_id}/deactivate")
        self.assertEqual(res.status_code, 200)
        self.assertFalse(res.data["isActive"])
