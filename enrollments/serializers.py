"""
Serializers for enrollments app
"""
from rest_framework import serializers
from payments.models import Payment
from payments.serializers import InitialPaymentSerializer
from .models import Enrollment


class _NullableIntegerField(serializers.IntegerField):
    """Accepts empty string as None for optional amounts from frontend."""

    def to_internal_value(self, data):
        if data in (None, '', []) or (isinstance(data, str) and not str(data).strip()):
            return None
        if isinstance(data, str) and str(data).strip().isdigit():
            return int(str(data).strip())
        return super().to_internal_value(data)


class EnrollmentCreateSerializer(serializers.Serializer):
    """
    POST /api/admin/enrollments body.
    discountAmount omitted/empty -> automatic multi-course discount.
    initialPayment present -> installment 1 is recorded as paid.
    """
    studentId = serializers.IntegerField()
    batchId = serializers.IntegerField()
    paymentPlan = serializers.ChoiceField(
        choices=[c[0] for c in Payment.PLAN_CHOICES],
        required=False,
        default=Payment.PLAN_INSTALLMENT_2,
    )
    discountAmount = _NullableIntegerField(required=False, allow_null=True)
    enrollmentDate = serializers.DateField(required=False, allow_null=True)
    initialPayment = InitialPaymentSerializer(required=False, allow_null=True)


class EnrollmentSerializer(serializers.ModelSerializer):
    studentId = serializers.IntegerField(source='student_id', read_only=True)
    studentName = serializers.CharField(source='student.full_name', read_only=True)
    batchId = serializers.IntegerField(source='batch_id', read_only=True)
    batchName = serializers.CharField(source='batch.batch_name', read_only=True)
    courseTitle = serializers.CharField(source='batch.course.title', read_only=True)
    enrolledDate = serializers.DateField(source='enrolled_date', read_only=True)
    certificateUrl = serializers.CharField(source='certificate_url', read_only=True, allow_null=True)
    certificateSource = serializers.CharField(source='certificate_source', read_only=True, allow_null=True)
    certificateIssuedAt = serializers.DateTimeField(source='certificate_issued_at', read_only=True, allow_null=True)

    class Meta:
        model = Enrollment
        fields = [
            'id', 'studentId', 'studentName', 'batchId', 'batchName', 'courseTitle',
            'enrolledDate', 'status', 'certificate', 'certificateUrl',
            'certificateSource', 'certificateIssuedAt',
        ]
        read_only_fields = fields


class CertificateUploadSerializer(serializers.Serializer):
    """multipart: enrollmentId + file. Type and size are checked by the certificate service."""
    enrollmentId = serializers.IntegerField()
    file = serializers.FileField()
