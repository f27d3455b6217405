"""
Student payment API.
GET /api/student/payments - own enrollments with payment summary and installments.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsStudent
from enrollments.models import Enrollment
from payments.models import Payment
from payments.serializers import PaymentInstallmentSerializer
from payments.services.ledger import from_payment


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsStudent])
def student_payments_view(request):
    enrollments = (
        Enrollment.objects
        .filter(student=request.user)
        .select_related('batch__course')
        .order_by('-enrolled_date', '-created_at')
    )
    payments = {
        p.enrollment_id: p
        for p in Payment.objects.filter(enrollment__in=enrollments).prefetch_related('installments')
    }
    result = []
    for enrollment in enrollments:
        payment = payments.get(enrollment.pk)
        item = {
            'enrollmentId': enrollment.pk,
            'batchId': enrollment.batch_id,
            'batchName': enrollment.batch.batch_name,
            'courseTitle': enrollment.batch.course.title,
            'paymentPlan': payment.plan_type if payment else None,
            'installments': PaymentInstallmentSerializer(
                payment.installments.all() if payment else [], many=True
            ).data,
        }
        item.update(from_payment(payment).as_dict())
        result.append(item)
    return Response(result)
