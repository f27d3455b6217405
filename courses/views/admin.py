"""
Admin batch API.
Endpoints:
- PATCH  /api/admin/batches/{id}                    Edit batch (capacity rule enforced)
- DELETE /api/admin/batches/{id}                    Delete batch (refused while students are enrolled)
- POST   /api/admin/batches/recalculate-salary      Profit-share salary recalculation
"""
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsAdmin
from courses.serializers import BatchSerializer, BatchUpdateSerializer, RecalculateSalarySerializer
from courses.services import delete_batch, recalculate_instructor_salary, update_batch


@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdmin])
def admin_batch_detail_view(request, pk):
    if request.method == 'DELETE':
        delete_batch(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
    serializer = BatchUpdateSerializer(data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    batch = update_batch(pk, serializer.validated_data)
    return Response(BatchSerializer(batch).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdmin])
def admin_recalculate_salary_view(request):
    """
    POST /api/admin/batches/recalculate-salary
    Body: { batchId }
    Returns { updated, salary }; updated=false for fixed-salary instructors.
    """
    serializer = RecalculateSalarySerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    result = recalculate_instructor_salary(serializer.validated_data['batchId'])
    return Response(result)
