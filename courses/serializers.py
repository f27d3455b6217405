"""
Serializers for courses app
"""
from rest_framework import serializers
from .models import Course, Batch


class CourseSerializer(serializers.ModelSerializer):
    learningOutcomes = serializers.JSONField(source='learning_outcomes', read_only=True)
    isActive = serializers.BooleanField(source='is_active', read_only=True)

    class Meta:
        model = Course
        fields = [
            'id', 'title', 'slug', 'fee', 'duration', 'category', 'level',
            'prerequisites', 'learningOutcomes', 'outline', 'isActive',
        ]
        read_only_fields = fields


class BatchSerializer(serializers.ModelSerializer):
    """Batch serializer. camelCase keys for the frontend."""
    courseId = serializers.IntegerField(source='course.id', read_only=True)
    courseTitle = serializers.CharField(source='course.title', read_only=True)
    instructorId = serializers.IntegerField(source='instructor.id', read_only=True)
    instructorName = serializers.CharField(source='instructor.full_name', read_only=True)
    batchName = serializers.CharField(source='batch_name', read_only=True)
    startDate = serializers.DateField(source='start_date', read_only=True)
    endDate = serializers.DateField(source='end_date', read_only=True, allow_null=True)
    maxStudents = serializers.IntegerField(source='max_students', read_only=True)
    enrollmentCount = serializers.IntegerField(source='enrollment_count', read_only=True)
    instructorSalary = serializers.IntegerField(source='instructor_salary', read_only=True, allow_null=True)

    class Meta:
        model = Batch
        fields = [
            'id', 'courseId', 'courseTitle', 'instructorId', 'instructorName',
            'batchName', 'startDate', 'endDate', 'maxStudents', 'enrollmentCount',
            'status', 'schedule', 'instructorSalary',
        ]
        read_only_fields = fields


class BatchUpdateSerializer(serializers.Serializer):
    """PATCH /api/admin/batches/{id} body (all fields optional)."""
    batchName = serializers.CharField(source='batch_name', required=False, max_length=255)
    startDate = serializers.DateField(source='start_date', required=False)
    endDate = serializers.DateField(source='end_date', required=False, allow_null=True)
    maxStudents = serializers.IntegerField(source='max_students', required=False)
    status = serializers.ChoiceField(choices=[c[0] for c in Batch.STATUS_CHOICES], required=False)
    schedule = serializers.CharField(required=False, allow_blank=True)
    meetingLink = serializers.URLField(source='meeting_link', required=False, allow_null=True, allow_blank=True)
    meetingPassword = serializers.CharField(source='meeting_password', required=False, allow_null=True, allow_blank=True)
    chatGroupId = serializers.CharField(source='chat_group_id', required=False, allow_null=True, allow_blank=True)
    instructorSalary = serializers.IntegerField(source='instructor_salary', required=False, allow_null=True, min_value=0)


class RecalculateSalarySerializer(serializers.Serializer):
    batchId = serializers.IntegerField()
