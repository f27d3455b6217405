# Generated migration for payments, installments, instructor payouts and batch expenses
import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

METHOD_CHOICES = [('cash', 'Cash'), ('kbzpay', 'KBZPay'), ('wavepay', 'WavePay'), ('bank', 'Bank Transfer')]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('courses', '0001_initial'),
        ('enrollments', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Payment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('base_amount', models.PositiveIntegerField()),
                ('discount_amount', models.PositiveIntegerField(default=0)),
                ('total_amount', models.PositiveIntegerField()),
                ('paid_amount', models.PositiveIntegerField(default=0)),
                ('plan_type', models.CharField(choices=[('full', 'Full payment'), ('installment_2', '2 installments')], default='installment_2', max_length=20)),
                ('status', models.CharField(choices=[('unpaid', 'Unpaid'), ('partial', 'Partial'), ('paid', 'Paid')], db_index=True, default='unpaid', max_length=20)),
                ('multi_course_discount', models.BooleanField(default=False)),
                ('discount_notes', models.TextField(blank=True, null=True)),
                ('notes', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('enrollment', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='payment', to='enrollments.enrollment')),
            ],
            options={
                'verbose_name': 'Payment',
                'verbose_name_plural': 'Payments',
                'db_table': 'payments',
                'ordering': ['-created_at'],
                'constraints': [models.CheckConstraint(condition=models.Q(('total_amount', models.F('base_amount') - models.F('discount_amount'))), name='payment_total_is_base_minus_discount')],
            },
        ),
        migrations.CreateModel(
            name='PaymentInstallment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('number', models.PositiveSmallIntegerField()),
                ('amount', models.PositiveIntegerField()),
                ('due_type', models.CharField(choices=[('enrollment', 'On enrollment'), ('enrollment_plus_4w', '4 weeks after enrollment')], default='enrollment', max_length=30)),
                ('due_date', models.DateField()),
                ('paid_date', models.DateField(blank=True, null=True)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('paid', 'Paid'), ('overdue', 'Overdue')], db_index=True, default='pending', max_length=20)),
                ('payment_method', models.CharField(blank=True, choices=METHOD_CHOICES, max_length=20, null=True)),
                ('notes', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('payment', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='installments', to='payments.payment')),
            ],
            options={
                'verbose_name': 'Payment Installment',
                'verbose_name_plural': 'Payment Installments',
                'db_table': 'payment_installments',
                'ordering': ['payment', 'number'],
                'constraints': [models.UniqueConstraint(fields=('payment', 'number'), name='unique_payment_installment_number')],
            },
        ),
        migrations.CreateModel(
            name='InstructorPayment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('payment_date', models.DateField()),
                ('payment_method', models.CharField(choices=METHOD_CHOICES, default='bank', max_length=20)),
                ('notes', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('batch', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='instructor_payments', to='courses.batch')),
                ('created_by', models.ForeignKey(blank=True, limit_choices_to={'role': 'admin'}, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='recorded_instructor_payments', to=settings.AUTH_USER_MODEL)),
                ('instructor', models.ForeignKey(limit_choices_to={'role': 'instructor'}, on_delete=django.db.models.deletion.PROTECT, related_name='instructor_payments', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Instructor Payment',
                'verbose_name_plural': 'Instructor Payments',
                'db_table': 'instructor_payments',
                'ordering': ['-payment_date', '-created_at'],
                'indexes': [models.Index(fields=['batch', 'payment_date'], name='instr_pay_batch_date_idx')],
            },
        ),
        migrations.CreateModel(
            name='BatchExpense',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('amount', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('expense_date', models.DateField()),
                ('notes', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('batch', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='expenses', to='courses.batch')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='recorded_batch_expenses', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Batch Expense',
                'verbose_name_plural': 'Batch Expenses',
                'db_table': 'batch_expenses',
                'ordering': ['-expense_date', '-created_at'],
            },
        ),
    ]
