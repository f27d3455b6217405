"""
Serializers for attendance app
"""
from rest_framework import serializers
from .models import AttendanceCode, AttendanceSubmission


class AttendanceCodeSerializer(serializers.ModelSerializer):
    batchId = serializers.IntegerField(source='batch_id', read_only=True)
    generatedAt = serializers.DateTimeField(source='generated_at', read_only=True)
    validUntil = serializers.DateTimeField(source='valid_until', read_only=True)
    isActive = serializers.BooleanField(source='is_active', read_only=True)

    class Meta:
        model = AttendanceCode
        fields = ['id', 'batchId', 'code', 'generatedAt', 'validUntil', 'isActive', 'notes']
        read_only_fields = fields


class AttendanceCodeCreateSerializer(serializers.Serializer):
    """POST /api/instructor/attendance-codes body."""
    batchId = serializers.IntegerField()
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class AttendanceSubmitSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=20)


class AttendanceSubmissionSerializer(serializers.ModelSerializer):
    batchId = serializers.IntegerField(source='batch_id', read_only=True)
    code = serializers.CharField(source='attendance_code.code', read_only=True)
    submittedAt = serializers.DateTimeField(source='submitted_at', read_only=True)

    class Meta:
        model = AttendanceSubmission
        fields = ['id', 'batchId', 'code', 'submittedAt']
        read_only_fields = fields
