"""
Admin configuration for assignments app
"""
from django.contrib import admin
from .models import Assignment, AssignmentSubmission


@admin.register(Assignment)
class AssignmentAdmin(admin.ModelAdmin):
    list_display = ['title', 'batch', 'instructor', 'due_date', 'max_score']
    list_filter = ['batch']
    search_fields = ['title', 'batch__batch_name']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(AssignmentSubmission)
class AssignmentSubmissionAdmin(admin.ModelAdmin):
    """Assignment Submission Admin"""
    list_display = ['student', 'assignment', 'status', 'score', 'submitted_at', 'graded_at']
    list_filter = ['status']
    search_fields = ['student__email', 'student__full_name', 'assignment__title']
