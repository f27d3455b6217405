"""
Instructor API URLs
"""
from django.urls import path
from assignments.views.instructor import (
    instructor_assignment_create_view,
    instructor_submission_grade_view,
)
from attendance.views.instructor import (
    instructor_attendance_code_create_view,
    instructor_attendance_code_deactivate_view,
)
from payments.views.instructor import instructor_payments_view

app_name = 'instructor'

urlpatterns = [
    path('payments', instructor_payments_view, name='payments'),
    path('attendance-codes', instructor_attendance_code_create_view, name='attendance-code-create'),
    path('attendance-codes/<int:pk>/deactivate', instructor_attendance_code_deactivate_view, name='attendance-code-deactivate'),
    path('assignments', instructor_assignment_create_view, name='assignment-create'),
    path('submissions/<int:pk>/grade', instructor_submission_grade_view, name='submission-grade'),
]
