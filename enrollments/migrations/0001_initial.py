# Generated migration for Enrollment
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('courses', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Enrollment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('enrolled_date', models.DateField(default=django.utils.timezone.localdate)),
                ('status', models.CharField(choices=[('active', 'Active'), ('completed', 'Completed'), ('dropped', 'Dropped')], db_index=True, default='active', max_length=20)),
                ('certificate', models.BooleanField(default=False)),
                ('certificate_url', models.URLField(blank=True, max_length=500, null=True)),
                ('certificate_source', models.CharField(blank=True, choices=[('uploaded', 'Uploaded'), ('generated', 'Generated')], max_length=20, null=True)),
                ('certificate_issued_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('batch', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='enrollments', to='courses.batch')),
                ('student', models.ForeignKey(db_column='student_id', limit_choices_to={'role': 'student'}, on_delete=django.db.models.deletion.CASCADE, related_name='enrollments', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Enrollment',
                'verbose_name_plural': 'Enrollments',
                'db_table': 'enrollments',
                'ordering': ['-enrolled_date', '-created_at'],
                'constraints': [models.UniqueConstraint(fields=('student', 'batch'), name='unique_student_batch_enrollment')],
                'indexes': [models.Index(fields=['batch', 'status'], name='enrollments_batch_status_idx')],
            },
        ),
    ]
