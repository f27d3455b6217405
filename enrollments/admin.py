"""
Admin configuration for enrollments app
"""
from django.contrib import admin
from .models import Enrollment


@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    """Enrollment Admin"""
    list_display = ['student', 'batch', 'enrolled_date', 'status', 'certificate', 'certificate_source']
    list_filter = ['status', 'certificate', 'certificate_source', 'batch']
    search_fields = ['student__email', 'student__full_name', 'batch__batch_name']
    readonly_fields = ['certificate_issued_at', 'created_at', 'updated_at']
    ordering = ['-enrolled_date']
