"""
Admin API URLs
"""
from django.urls import path
from ..views.admin import admin_batch_detail_view, admin_recalculate_salary_view
from enrollments.views.admin import (
    admin_certificate_upload_view,
    admin_enrollment_create_view,
    admin_enrollment_delete_view,
)
from payments.views.admin import (
    admin_batch_expense_create_view,
    admin_batch_expense_detail_view,
    admin_enrollment_payment_view,
    admin_finance_view,
    admin_instructor_payment_create_view,
    admin_record_payment_view,
)

app_name = 'admin-api'

urlpatterns = [
    path('enrollments', admin_enrollment_create_view, name='enrollment-create'),
    path('enrollments/<int:pk>', admin_enrollment_delete_view, name='enrollment-delete'),
    path('enrollments/<int:pk>/payment', admin_enrollment_payment_view, name='enrollment-payment'),
    path('payments/record', admin_record_payment_view, name='payment-record'),
    path('finance', admin_finance_view, name='finance'),
    path('batches/recalculate-salary', admin_recalculate_salary_view, name='batch-recalculate-salary'),
    path('batches/<int:pk>', admin_batch_detail_view, name='batch-detail'),
    path('batches/<int:pk>/expenses', admin_batch_expense_create_view, name='batch-expense-create'),
    path('batches/<int:pk>/expenses/<int:expense_id>', admin_batch_expense_detail_view, name='batch-expense-detail'),
    path('instructor-payments', admin_instructor_payment_create_view, name='instructor-payment-create'),
    path('certificates/upload', admin_certificate_upload_view, name='certificate-upload'),
]
