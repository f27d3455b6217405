"""
Assignment models. One submission per (assignment, student); an ungraded
submission may be replaced, a graded one is final.
"""
from django.core.validators import MinValueValidator
from django.db import models
from accounts.models import User
from courses.models import Batch


class Assignment(models.Model):
    batch = models.ForeignKey(
        Batch,
        on_delete=models.CASCADE,
        related_name='assignments',
    )
    instructor = models.ForeignKey(
        User,
        on_delete=models.PROTECT,
        related_name='assignments',
        limit_choices_to={'role': 'instructor'},
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    due_date = models.DateTimeField(blank=True, null=True)
    max_score = models.PositiveIntegerField(default=100, validators=[MinValueValidator(1)])
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'assignments'
        verbose_name = 'Assignment'
        verbose_name_plural = 'Assignments'
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(condition=models.Q(max_score__gte=1), name='assignment_max_score_positive'),
        ]

    def __str__(self):
        return f"{self.title} ({self.batch.batch_name})"


class AssignmentSubmission(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_GRADED = 'graded'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_GRADED, 'Graded'),
    ]

    assignment = models.ForeignKey(
        Assignment,
        on_delete=models.CASCADE,
        related_name='submissions',
    )
    student = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='assignment_submissions',
        limit_choices_to={'role': 'student'},
    )
    content = models.TextField(blank=True, default='')
    submitted_at = models.DateTimeField()
    score = models.PositiveIntegerField(blank=True, null=True)
    feedback = models.TextField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    graded_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        db_table = 'assignment_submissions'
        verbose_name = 'Assignment Submission'
        verbose_name_plural = 'Assignment Submissions'
        ordering = ['-submitted_at']
        constraints = [
            models.UniqueConstraint(
                fields=['assignment', 'student'],
                name='unique_assignment_student_submission',
            ),
        ]

    def __str__(self):
        return f"{self.student.full_name} - {self.assignment.title}"

    @property
    def is_graded(self):
        return self.status == self.STATUS_GRADED
