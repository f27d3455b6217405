"""
Admin configuration for attendance app
"""
from django.contrib import admin
from .models import AttendanceCode, AttendanceSubmission


@admin.register(AttendanceCode)
class AttendanceCodeAdmin(admin.ModelAdmin):
    """Attendance Code Admin"""
    list_display = ['code', 'batch', 'generated_by', 'generated_at', 'valid_until', 'is_active']
    list_filter = ['is_active', 'batch']
    search_fields = ['code', 'batch__batch_name']
    ordering = ['-generated_at']


@admin.register(AttendanceSubmission)
class AttendanceSubmissionAdmin(admin.ModelAdmin):
    list_display = ['student', 'attendance_code', 'batch', 'submitted_at']
    list_filter = ['batch']
    search_fields = ['student__email', 'student__full_name', 'attendance_code__code']
    readonly_fields = ['submitted_at']
