# Generated migration for Course and Batch
import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Course',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('slug', models.SlugField(max_length=255, unique=True)),
                ('description', models.TextField(blank=True, default='')),
                ('fee', models.PositiveIntegerField(help_text='Course fee (MMK)', validators=[django.core.validators.MinValueValidator(1)])),
                ('duration', models.CharField(blank=True, default='', max_length=100)),
                ('category', models.CharField(blank=True, db_index=True, default='', max_length=100)),
                ('level', models.CharField(blank=True, choices=[('beginner', 'Beginner'), ('intermediate', 'Intermediate'), ('advanced', 'Advanced')], default='', max_length=20)),
                ('prerequisites', models.JSONField(blank=True, default=list)),
                ('learning_outcomes', models.JSONField(blank=True, default=list)),
                ('outline', models.JSONField(blank=True, default=list)),
                ('image_url', models.URLField(blank=True, max_length=500, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Course',
                'verbose_name_plural': 'Courses',
                'db_table': 'courses',
                'ordering': ['title'],
            },
        ),
        migrations.CreateModel(
            name='Batch',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('batch_name', models.CharField(max_length=255)),
                ('start_date', models.DateField()),
                ('end_date', models.DateField(blank=True, null=True)),
                ('max_students', models.PositiveIntegerField(default=30, validators=[django.core.validators.MinValueValidator(1)])),
                ('status', models.CharField(choices=[('upcoming', 'Upcoming'), ('ongoing', 'Ongoing'), ('completed', 'Completed')], db_index=True, default='upcoming', max_length=20)),
                ('schedule', models.CharField(blank=True, default='', max_length=255)),
                ('meeting_link', models.URLField(blank=True, max_length=500, null=True)),
                ('meeting_password', models.CharField(blank=True, max_length=100, null=True)),
                ('chat_group_id', models.CharField(blank=True, max_length=100, null=True)),
                ('instructor_salary', models.IntegerField(blank=True, help_text='MMK', null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('course', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='batches', to='courses.course')),
                ('instructor', models.ForeignKey(db_column='instructor_id', limit_choices_to={'role': 'instructor'}, on_delete=django.db.models.deletion.PROTECT, related_name='taught_batches', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Batch',
                'verbose_name_plural': 'Batches',
                'db_table': 'batches',
                'ordering': ['-start_date'],
                'constraints': [models.CheckConstraint(condition=models.Q(('max_students__gte', 1)), name='batch_max_students_positive')],
            },
        ),
    ]
