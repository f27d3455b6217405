"""
Instructor payout API.
GET /api/instructor/payments - payout summary for each batch the instructor teaches.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsInstructor
from courses.models import Batch
from payments.models import InstructorPayment
from payments.serializers import InstructorPaymentSerializer
from payments.services.ledger import get_instructor_payout_summaries


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsInstructor])
def instructor_payments_view(request):
    batches = Batch.objects.filter(instructor=request.user).order_by('-start_date')
    payouts = InstructorPayment.objects.filter(instructor=request.user)
    summaries = get_instructor_payout_summaries(batches)
    return Response({
        'batches': [s.as_dict() for s in summaries],
        'payments': InstructorPaymentSerializer(payouts, many=True).data,
        'totalEarned': sum(s.total_paid for s in summaries),
    })
