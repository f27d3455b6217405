"""
Course catalog and scheduled batches (cohorts) of a course.
"""
from django.core.validators import MinValueValidator
from django.db import models
from accounts.models import User


class Course(models.Model):
    """
    fee is a whole MMK amount.
    prerequisites / learning_outcomes: ordered lists of strings.
    outline: ordered list of {"title": str, "items": [str, ...]}.
    """
    LEVEL_CHOICES = [
        ('beginner', 'Beginner'),
        ('intermediate', 'Intermediate'),
        ('advanced', 'Advanced'),
    ]

    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    description = models.TextField(blank=True, default='')
    fee = models.PositiveIntegerField(validators=[MinValueValidator(1)], help_text="Course fee (MMK)")
    duration = models.CharField(max_length=100, blank=True, default='')
    category = models.CharField(max_length=100, blank=True, default='', db_index=True)
    level = models.CharField(max_length=20, choices=LEVEL_CHOICES, blank=True, default='')
    prerequisites = models.JSONField(default=list, blank=True)
    learning_outcomes = models.JSONField(default=list, blank=True)
    outline = models.JSONField(default=list, blank=True)
    image_url = models.URLField(max_length=500, blank=True, null=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'courses'
        verbose_name = 'Course'
        verbose_name_plural = 'Courses'
        ordering = ['title']

    def __str__(self):
        return self.title


class Batch(models.Model):
    """
    Batch: one scheduled offering of a Course with one instructor and a capacity.
    instructor_salary: fixed amount for fixed_salary instructors; recalculated
    for profit_share instructors (see courses.services.recalculate_instructor_salary).
    """
    STATUS_UPCOMING = 'upcoming'
    STATUS_ONGOING = 'ongoing'
    STATUS_COMPLETED = 'completed'

    STATUS_CHOICES = [
        (STATUS_UPCOMING, 'Upcoming'),
        (STATUS_ONGOING, 'Ongoing'),
        (STATUS_COMPLETED, 'Completed'),
    ]

    course = models.ForeignKey(
        Course,
        on_delete=models.PROTECT,
        related_name='batches',
    )
    instructor = models.ForeignKey(
        User,
        on_delete=models.PROTECT,
        related_name='taught_batches',
        limit_choices_to={'role': 'instructor'},
        db_column='instructor_id',
    )
    batch_name = models.CharField(max_length=255)
    start_date = models.DateField()
    end_date = models.DateField(blank=True, null=True)
    max_students = models.PositiveIntegerField(default=30, validators=[MinValueValidator(1)])
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_UPCOMING, db_index=True)
    schedule = models.CharField(max_length=255, blank=True, default='')
    meeting_link = models.URLField(max_length=500, blank=True, null=True)
    meeting_password = models.CharField(max_length=100, blank=True, null=True)
    chat_group_id = models.CharField(max_length=100, blank=True, null=True)
    instructor_salary = models.IntegerField(blank=True, null=True, help_text="MMK")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'batches'
        verbose_name = 'Batch'
        verbose_name_plural = 'Batches'
        ordering = ['-start_date']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(max_students__gte=1),
                name='batch_max_students_positive',
            ),
        ]

    def __str__(self):
        return f"{self.batch_name} ({self.course.title})"

    @property
    def enrollment_count(self):
        return self.enrollments.count()
