"""
Instructor attendance API.
Endpoints:
- POST /api/instructor/attendance-codes                    Generate a code for a batch
- POST /api/instructor/attendance-codes/{id}/deactivate    Deactivate own code
"""
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsInstructor
from attendance.serializers import AttendanceCodeCreateSerializer, AttendanceCodeSerializer
from attendance.services import deactivate_code, generate_code


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsInstructor])
def instructor_attendance_code_create_view(request):
    """
    POST /api/instructor/attendance-codes
    Body: { batchId, notes? }
    """
    serializer = AttendanceCodeCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    attendance_code = generate_code(
        serializer.validated_data['batchId'],
        request.user,
        notes=serializer.validated_data.get('notes'),
    )
    return Response(AttendanceCodeSerializer(attendance_code).data, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsInstructor])
def instructor_attendance_code_deactivate_view(request, pk):
    attendance_code = deactivate_code(pk, request.user)
    return Response(AttendanceCodeSerializer(attendance_code).data)
