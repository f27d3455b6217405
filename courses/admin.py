"""
Admin configuration for courses app
"""
from django.contrib import admin
from .models import Course, Batch


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    """Course Admin"""
    list_display = ['title', 'slug', 'fee', 'category', 'level', 'is_active']
    list_filter = ['is_active', 'category', 'level']
    search_fields = ['title', 'slug']
    prepopulated_fields = {'slug': ('title',)}


@admin.register(Batch)
class BatchAdmin(admin.ModelAdmin):
    """Batch Admin"""
    list_display = ['batch_name', 'course', 'instructor', 'start_date', 'end_date', 'max_students', 'status', 'instructor_salary']
    list_filter = ['status', 'course']
    search_fields = ['batch_name', 'course__title', 'instructor__full_name']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['-start_date']
