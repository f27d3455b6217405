"""
Custom permissions for role-based access.
The role comes from the authenticated User (JWT issued by the auth provider).
"""
from rest_framework import permissions


class _HasRole(permissions.BasePermission):
    role = None

    def has_permission(self, request, view):
        return bool(
            request.user and
            request.user.is_authenticated and
            request.user.role == self.role
        )


class IsAdmin(_HasRole):
    """Permission check for admin role"""
    role = 'admin'


class IsInstructor(_HasRole):
    """Permission check for instructor role"""
    role = 'instructor'


class IsStudent(_HasRole):
    """Permission check for student role"""
    role = 'student'


class IsStudentOrAdmin(permissions.BasePermission):
    """Certificate metrics are visible to the enrolled student and to admins."""

    def has_permission(self, request, view):
        return bool(
            request.user and
            request.user.is_authenticated and
            request.user.role in ('student', 'admin')
        )
