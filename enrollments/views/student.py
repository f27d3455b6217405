"""
Student certificate API.
GET /api/student/certificate/{enrollment_id} evaluates eligibility and
returns the metrics. Students only see their own enrollments; admins see any.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsStudentOrAdmin
from core.exceptions import NotFoundError
from enrollments.models import Enrollment
from enrollments.serializers import EnrollmentSerializer
from enrollments.services.certificate import evaluate_certificate


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsStudentOrAdmin])
def student_certificate_view(request, enrollment_id):
    if request.user.is_student and not Enrollment.objects.filter(
        pk=enrollment_id, student=request.user
    ).exists():
        raise NotFoundError('Enrollment not found')

    enrollment, metrics = evaluate_certificate(enrollment_id)
    data = EnrollmentSerializer(enrollment).data
    data['metrics'] = metrics.as_dict()
    return Response(data)
