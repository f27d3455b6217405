"""
Instructor assignment API.
Endpoints:
- POST /api/instructor/assignments                   Create assignment for own batch
- POST /api/instructor/submissions/{id}/grade        Grade a submission
"""
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsInstructor
from assignments.serializers import (
    AssignmentCreateSerializer,
    AssignmentSerializer,
    AssignmentSubmissionSerializer,
    GradeSerializer,
)
from assignments.services import create_assignment, grade_submission


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsInstructor])
def instructor_assignment_create_view(request):
    """
    POST /api/instructor/assignments
    Body: { batchId, title, description?, dueDate?, maxScore? }
    """
    serializer = AssignmentCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    assignment = create_assignment(
        data['batchId'],
        request.user,
        title=data['title'],
        description=data.get('description', ''),
        due_date=data.get('dueDate'),
        max_score=data.get('maxScore', 100),
    )
    return Response(AssignmentSerializer(assignment).data, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsInstructor])
def instructor_submission_grade_view(request, pk):
    """
    POST /api/instructor/submissions/{id}/grade
    Body: { score, feedback? }
    """
    serializer = GradeSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    submission = grade_submission(
        pk,
        request.user,
        score=serializer.validated_data['score'],
        feedback=serializer.validated_data.get('feedback'),
    )
    return Response(AssignmentSubmissionSerializer(submission).data)
