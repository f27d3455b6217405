"""
Serializers for payments app
"""
from rest_framework import serializers
from .models import BatchExpense, InstructorPayment, Payment, PaymentInstallment
from .services.ledger import is_overdue

METHOD_VALUES = [m[0] for m in PaymentInstallment.METHOD_CHOICES]


class PaymentInstallmentSerializer(serializers.ModelSerializer):
    installmentNumber = serializers.IntegerField(source='number', read_only=True)
    dueType = serializers.CharField(source='due_type', read_only=True)
    dueDate = serializers.DateField(source='due_date', read_only=True)
    paidDate = serializers.DateField(source='paid_date', read_only=True, allow_null=True)
    paymentMethod = serializers.CharField(source='payment_method', read_only=True, allow_null=True)
    isOverdue = serializers.SerializerMethodField()

    def get_isOverdue(self, obj):
        return is_overdue(obj)

    class Meta:
        model = PaymentInstallment
        fields = [
            'id', 'installmentNumber', 'amount', 'dueType', 'dueDate',
            'paidDate', 'status', 'paymentMethod', 'notes', 'isOverdue',
        ]
        read_only_fields = fields


class PaymentSerializer(serializers.ModelSerializer):
    """Payment with its installment schedule. camelCase keys for the frontend."""
    enrollmentId = serializers.IntegerField(source='enrollment_id', read_only=True)
    baseAmount = serializers.IntegerField(source='base_amount', read_only=True)
    discountAmount = serializers.IntegerField(source='discount_amount', read_only=True)
    totalAmount = serializers.IntegerField(source='total_amount', read_only=True)
    paidAmount = serializers.IntegerField(source='paid_amount', read_only=True)
    remainingAmount = serializers.SerializerMethodField()
    paymentPlan = serializers.CharField(source='plan_type', read_only=True)
    multiCourseDiscount = serializers.BooleanField(source='multi_course_discount', read_only=True)
    discountNotes = serializers.CharField(source='discount_notes', read_only=True, allow_null=True)
    installments = PaymentInstallmentSerializer(many=True, read_only=True)

    def get_remainingAmount(self, obj):
        return max(0, obj.total_amount - obj.paid_amount)

    class Meta:
        model = Payment
        fields = [
            'id', 'enrollmentId', 'baseAmount', 'discountAmount', 'totalAmount',
            'paidAmount', 'remainingAmount', 'paymentPlan', 'status',
            'multiCourseDiscount', 'discountNotes', 'notes', 'installments',
        ]
        read_only_fields = fields


class InitialPaymentSerializer(serializers.Serializer):
    paidDate = serializers.DateField(required=False, allow_null=True)
    paymentMethod = serializers.ChoiceField(choices=METHOD_VALUES)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class RecordPaymentSerializer(serializers.Serializer):
    """POST /api/admin/payments/record body."""
    installmentId = serializers.IntegerField()
    paymentId = serializers.IntegerField(required=False, allow_null=True)
    paidDate = serializers.DateField()
    paymentMethod = serializers.ChoiceField(choices=METHOD_VALUES)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class InstructorPaymentCreateSerializer(serializers.Serializer):
    """POST /api/admin/instructor-payments body."""
    batchId = serializers.IntegerField()
    amount = serializers.IntegerField()
    paymentDate = serializers.DateField()
    paymentMethod = serializers.ChoiceField(choices=METHOD_VALUES, required=False, default='bank')
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Amount must be greater than 0")
        return value


class InstructorPaymentSerializer(serializers.ModelSerializer):
    batchId = serializers.IntegerField(source='batch_id', read_only=True)
    instructorId = serializers.IntegerField(source='instructor_id', read_only=True)
    paymentDate = serializers.DateField(source='payment_date', read_only=True)
    paymentMethod = serializers.CharField(source='payment_method', read_only=True)

    class Meta:
        model = InstructorPayment
        fields = ['id', 'batchId', 'instructorId', 'amount', 'paymentDate', 'paymentMethod', 'notes']
        read_only_fields = fields


class BatchExpenseCreateSerializer(serializers.Serializer):
    """POST /api/admin/batches/{id}/expenses body; partial for PATCH on a single expense."""
    title = serializers.CharField(max_length=255)
    amount = serializers.IntegerField()
    expenseDate = serializers.DateField()
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Amount must be greater than 0")
        return value


class BatchExpenseSerializer(serializers.ModelSerializer):
    batchId = serializers.IntegerField(source='batch_id', read_only=True)
    expenseDate = serializers.DateField(source='expense_date', read_only=True)

    class Meta:
        model = BatchExpense
        fields = ['id', 'batchId', 'title', 'amount', 'expenseDate', 'notes']
        read_only_fields = fields
