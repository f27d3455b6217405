"""
Student attendance API.
"""
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsStudent
from attendance.serializers import AttendanceSubmissionSerializer, AttendanceSubmitSerializer
from attendance.services import submit_code


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsStudent])
def student_attendance_submit_view(request):
    """
    POST /api/student/attendance
    Body: { code }
    """
    serializer = AttendanceSubmitSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    submission = submit_code(request.user, serializer.validated_data['code'])
    return Response(AttendanceSubmissionSerializer(submission).data, status=status.HTTP_201_CREATED)
