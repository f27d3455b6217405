from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsStudent
from assignments.serializers import AssignmentSubmissionSerializer, AssignmentSubmitSerializer
from assignments.services import submit_assignment


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsStudent])
def student_assignment_submit_view(request, pk):
    """POST /api/student/assignments/{id}/submit - body: { content }"""
    serializer = AssignmentSubmitSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    submission = submit_assignment(pk, request.user, serializer.validated_data['content'])
    return Response(AssignmentSubmissionSerializer(submission).data)
