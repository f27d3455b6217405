"""
Admin enrollment API.
Endpoints:
- POST   /api/admin/enrollments                Enroll a student with a payment plan
- DELETE /api/admin/enrollments/{id}           Remove enrollment (payment cascades)
- POST   /api/admin/certificates/upload        Upload a certificate file (multipart)
"""
from rest_framework import status
from rest_framework.decorators import api_view, parser_classes, permission_classes
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsAdmin
from enrollments.serializers import (
    CertificateUploadSerializer,
    EnrollmentCreateSerializer,
    EnrollmentSerializer,
)
from enrollments.services.certificate import upload_certificate
from enrollments.services.enrollment import enroll_student, remove_enrollment
from payments.serializers import PaymentSerializer
from payments.services.plans import InitialPayment


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdmin])
def admin_enrollment_create_view(request):
    """
    POST /api/admin/enrollments
    Body: { studentId, batchId, paymentPlan?, discountAmount?, enrollmentDate?,
            initialPayment?: { paidDate?, paymentMethod, notes? } }
    """
    serializer = EnrollmentCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    initial = data.get('initialPayment')
    initial_payment = None
    if initial:
        initial_payment = InitialPayment(
            paid_date=initial.get('paidDate'),
            payment_method=initial['paymentMethod'],
            notes=initial.get('notes'),
        )

    enrollment = enroll_student(
        batch_id=data['batchId'],
        student_id=data['studentId'],
        plan_type=data['paymentPlan'],
        initial_payment=initial_payment,
        discount_amount=data.get('discountAmount'),
        enrollment_date=data.get('enrollmentDate'),
    )
    return Response(
        {
            'enrollment': EnrollmentSerializer(enrollment).data,
            'payment': PaymentSerializer(enrollment.payment).data,
        },
        status=status.HTTP_201_CREATED,
    )


@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsAdmin])
def admin_enrollment_delete_view(request, pk):
    remove_enrollment(pk)
    return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdmin])
@parser_classes([MultiPartParser, FormParser])
def admin_certificate_upload_view(request):
    """
    POST /api/admin/certificates/upload
    multipart: enrollmentId, file (PDF/PNG/JPEG, max 10 MB)
    """
    serializer = CertificateUploadSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    enrollment = upload_certificate(
        serializer.validated_data['enrollmentId'],
        serializer.validated_data['file'],
    )
    return Response(EnrollmentSerializer(enrollment).data)
