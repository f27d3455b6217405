"""
Admin configuration for payments app
"""
from django.contrib import admin
from .models import BatchExpense, InstructorPayment, Payment, PaymentInstallment


class PaymentInstallmentInline(admin.TabularInline):
    model = PaymentInstallment
    extra = 0
    fields = ['number', 'amount', 'due_type', 'due_date', 'status', 'paid_date', 'payment_method', 'notes']
    readonly_fields = ['number', 'amount', 'due_type']


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    """Payment Admin"""
    list_display = ['enrollment', 'plan_type', 'base_amount', 'discount_amount', 'total_amount', 'paid_amount', 'status']
    list_filter = ['status', 'plan_type', 'multi_course_discount']
    search_fields = ['enrollment__student__email', 'enrollment__student__full_name', 'enrollment__batch__batch_name']
    readonly_fields = ['paid_amount', 'status', 'created_at', 'updated_at']
    inlines = [PaymentInstallmentInline]
    ordering = ['-created_at']


@admin.register(InstructorPayment)
class InstructorPaymentAdmin(admin.ModelAdmin):
    """Instructor Payment Admin"""
    list_display = ['instructor', 'batch', 'amount', 'payment_date', 'payment_method', 'created_by']
    list_filter = ['payment_method', 'payment_date']
    search_fields = ['instructor__full_name', 'batch__batch_name']
    ordering = ['-payment_date']


@admin.register(BatchExpense)
class BatchExpenseAdmin(admin.ModelAdmin):
    list_display = ['title', 'batch', 'amount', 'expense_date', 'created_by']
    list_filter = ['expense_date']
    search_fields = ['title', 'batch__batch_name']
    ordering = ['-expense_date']
