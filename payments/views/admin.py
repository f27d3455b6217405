"""
Admin finance API.
Endpoints:
- GET  /api/admin/enrollments/{id}/payment      Payment, installments and summary
- POST /api/admin/payments/record               Record an installment payment
- GET  /api/admin/finance                       Per-batch financial summaries
- POST /api/admin/batches/{id}/expenses         Record a batch expense
- PATCH/DELETE /api/admin/batches/{id}/expenses/{expenseId}   Edit or remove a batch expense
- POST /api/admin/instructor-payments           Record an instructor payout
"""
import logging

from django.conf import settings
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsAdmin
from core.exceptions import NotFoundError
from payments.models import Payment
from payments.serializers import (
    BatchExpenseCreateSerializer,
    BatchExpenseSerializer,
    InstructorPaymentCreateSerializer,
    InstructorPaymentSerializer,
    PaymentSerializer,
    RecordPaymentSerializer,
)
from payments.services.ledger import (
    delete_batch_expense,
    from_payment,
    get_batch_finance_summaries,
    get_instructor_payout_summary,
    record_batch_expense,
    record_installment_payment,
    record_instructor_payout,
    update_batch_expense,
)

logger = logging.getLogger(__name__)


def _payment_response(payment):
    data = PaymentSerializer(payment).data
    data['summary'] = from_payment(payment).as_dict()
    return data


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdmin])
def admin_enrollment_payment_view(request, pk):
    payment = (
        Payment.objects
        .prefetch_related('installments')
        .filter(enrollment_id=pk)
        .first()
    )
    if payment is None:
        raise NotFoundError('Payment record not found')
    return Response(_payment_response(payment))


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdmin])
def admin_record_payment_view(request):
    """
    POST /api/admin/payments/record
    Body: { installmentId, paymentId?, paidDate, paymentMethod, notes? }
    """
    serializer = RecordPaymentSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    payment = record_installment_payment(
        installment_id=data['installmentId'],
        paid_date=data['paidDate'],
        payment_method=data['paymentMethod'],
        notes=data.get('notes'),
        payment_id=data.get('paymentId'),
    )
    payment = Payment.objects.prefetch_related('installments').get(pk=payment.pk)
    return Response(_payment_response(payment))


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdmin])
def admin_finance_view(request):
    """
    GET /api/admin/finance
    Returns { batches: [BatchFinanceSummary], totals: {...} }
    """
    summaries = get_batch_finance_summaries()
    totals = {
        'income': sum(s.income for s in summaries),
        'expenses': sum(s.expenses for s in summaries),
        'instructorSalary': sum(s.instructor_salary for s in summaries),
        'net': sum(s.net for s in summaries),
    }
    if settings.DEBUG:
        logger.debug("admin_finance batches=%s totals=%s", len(summaries), totals)
    return Response({
        'batches': [s.as_dict() for s in summaries],
        'totals': totals,
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdmin])
def admin_batch_expense_create_view(request, pk):
    """
    POST /api/admin/batches/{id}/expenses
    Body: { title, amount, expenseDate, notes? }
    """
    serializer = BatchExpenseCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    expense = record_batch_expense(
        batch_id=pk,
        title=data['title'],
        amount=data['amount'],
        expense_date=data['expenseDate'],
        notes=data.get('notes'),
        created_by=request.user,
    )
    return Response(BatchExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)


@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdmin])
def admin_batch_expense_detail_view(request, pk, expense_id):
    if request.method == 'DELETE':
        delete_batch_expense(pk, expense_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
    serializer = BatchExpenseCreateSerializer(data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    expense = update_batch_expense(pk, expense_id, serializer.validated_data)
    return Response(BatchExpenseSerializer(expense).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdmin])
def admin_instructor_payment_create_view(request):
    """
    POST /api/admin/instructor-payments
    Body: { batchId, amount, paymentDate, paymentMethod?, notes? }
    """
    serializer = InstructorPaymentCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    payout = record_instructor_payout(
        batch_id=data['batchId'],
        amount=data['amount'],
        payment_date=data['paymentDate'],
        payment_method=data['paymentMethod'],
        notes=data.get('notes'),
        created_by=request.user,
    )
    return Response(
        {
            'payment': InstructorPaymentSerializer(payout).data,
            'summary': get_instructor_payout_summary(payout.batch_id).as_dict(),
        },
        status=status.HTTP_201_CREATED,
    )
