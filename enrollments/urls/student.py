"""
Student API URLs
"""
from django.urls import path
from ..views.student import student_certificate_view
from assignments.views.student import student_assignment_submit_view
from attendance.views.student import student_attendance_submit_view
from payments.views.student import student_payments_view

app_name = 'student'

urlpatterns = [
    path('payments', student_payments_view, name='payments'),
    path('certificate/<int:enrollment_id>', student_certificate_view, name='certificate'),
    path('attendance', student_attendance_submit_view, name='attendance'),
    path('assignments/<int:pk>/submit', student_assignment_submit_view, name='assignment-submit'),
]
