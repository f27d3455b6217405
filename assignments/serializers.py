"""
Serializers for assignments app
"""
from rest_framework import serializers
from .models import Assignment, AssignmentSubmission


class AssignmentSerializer(serializers.ModelSerializer):
    batchId = serializers.IntegerField(source='batch_id', read_only=True)
    dueDate = serializers.DateTimeField(source='due_date', read_only=True, allow_null=True)
    maxScore = serializers.IntegerField(source='max_score', read_only=True)

    class Meta:
        model = Assignment
        fields = ['id', 'batchId', 'title', 'description', 'dueDate', 'maxScore']
        read_only_fields = fields


class AssignmentCreateSerializer(serializers.Serializer):
    """POST /api/instructor/assignments body."""
    batchId = serializers.IntegerField()
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    dueDate = serializers.DateTimeField(required=False, allow_null=True)
    maxScore = serializers.IntegerField(required=False, default=100, min_value=1)


class AssignmentSubmitSerializer(serializers.Serializer):
    content = serializers.CharField(allow_blank=True)


class GradeSerializer(serializers.Serializer):
    """Range against max_score is checked by the grading service."""
    score = serializers.IntegerField()
    feedback = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class AssignmentSubmissionSerializer(serializers.ModelSerializer):
    assignmentId = serializers.IntegerField(source='assignment_id', read_only=True)
    studentId = serializers.IntegerField(source='student_id', read_only=True)
    submittedAt = serializers.DateTimeField(source='submitted_at', read_only=True)
    gradedAt = serializers.DateTimeField(source='graded_at', read_only=True, allow_null=True)

    class Meta:
        model = AssignmentSubmission
        fields = [
            'id', 'assignmentId', 'studentId', 'content', 'submittedAt',
            'score', 'feedback', 'status', 'gradedAt',
        ]
        read_only_fields = fields
