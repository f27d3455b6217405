"""
Minimal RBAC tests: role-based access control.
- Student token hitting admin endpoint returns 403
- Instructor token hitting admin or student endpoint returns 403
- Missing token returns 401
"""
from django.test import TestCase
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from accounts.models import User


class RBACTests(TestCase):
    def setUp(self):
        self.client = APIClient()

        self.admin = User.objects.create_user(
            email="admin@test.mm",
            password="pass123",
            full_name="Admin",
            role=User.ROLE_ADMIN,
        )
        self.instructor = User.objects.create_user(
            email="instructor@test.mm",
            password="pass123",
            full_name="Instructor",
            role=User.ROLE_INSTRUCTOR,
        )
        self.student = User.objects.create_user(
            email="student@test.mm",
            password="pass123",
            full_name="Student",
            role=User.ROLE_STUDENT,
        )

    def _auth_header(self, user: User) -> dict:
        token = str(AccessToken.for_user(user))
        return {"HTTP_AUTHORIZATION": f"Bearer {token}"}

    def test_student_hitting_admin_endpoint_returns_403(self):
        self.client.credentials(**self._auth_header(self.student))
        res = self.client.get("/api/admin/finance")
        self.assertEqual(res.status_code, 403)
        self.assertEqual(res.data["code"], "permission_denied")

    def test_instructor_hitting_admin_endpoint_returns_403(self):
        self.client.credentials(**self._auth_header(self.instructor))
        res = self.client.get("/api/admin/finance")
        self.assertEqual(res.status_code, 403)

    def test_instructor_hitting_student_endpoint_returns_403(self):
        self.client.credentials(**self._auth_header(self.instructor))
        res = self.client.get("/api/student/payments")
        self.assertEqual(res.status_code, 403)

    def test_student_hitting_instructor_endpoint_returns_403(self):
        self.client.credentials(**self._auth_header(self.student))
        res = self.client.get("/api/instructor/payments")
        self.assertEqual(res.status_code, 403)

    def test_admin_hitting_admin_endpoint_returns_200(self):
        self.client.credentials(**self._auth_header(self.admin))
        res = self.client.get("/api/admin/finance")
        self.assertEqual(res.status_code, 200)

    def test_missing_token_returns_401(self):
        res = self.client.get("/api/admin/finance")
        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.data["code"], "not_authenticated")

    def test_health_needs_no_token(self):
        res = self.client.get("/api/health/")
        self.assertEqual(res.status_code, 200)
