"""
Enrollment: a student's membership in one batch, plus its certificate state.
Unique constraint: (student, batch).
"""
from django.db import models
from django.utils import timezone
from accounts.models import User
from courses.models import Batch


class Enrollment(models.Model):
    """
    certificate: cached eligibility flag, rewritten by the certificate evaluator
    unless certificate_source is 'uploaded' (manual uploads are never demoted).
    """
    STATUS_ACTIVE = 'active'
    STATUS_COMPLETED = 'completed'
    STATUS_DROPPED = 'dropped'

    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Active'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_DROPPED, 'Dropped'),
    ]

    SOURCE_UPLOADED = 'uploaded'
    SOURCE_GENERATED = 'generated'

    CERTIFICATE_SOURCE_CHOICES = [
        (SOURCE_UPLOADED, 'Uploaded'),
        (SOURCE_GENERATED, 'Generated'),
    ]

    student = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='enrollments',
        limit_choices_to={'role': 'student'},
        db_column='student_id',
    )
    batch = models.ForeignKey(
        Batch,
        on_delete=models.PROTECT,
        related_name='enrollments',
    )
    enrolled_date = models.DateField(default=timezone.localdate)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True)
    certificate = models.BooleanField(default=False)
    certificate_url = models.URLField(max_length=500, blank=True, null=True)
    certificate_source = models.CharField(
        max_length=20,
        choices=CERTIFICATE_SOURCE_CHOICES,
        blank=True,
        null=True,
    )
    certificate_issued_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'enrollments'
        verbose_name = 'Enrollment'
        verbose_name_plural = 'Enrollments'
        ordering = ['-enrolled_date', '-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['student', 'batch'],
                name='unique_student_batch_enrollment',
            ),
        ]
        indexes = [
            models.Index(fields=['batch', 'status'], name='enrollments_batch_status_idx'),
        ]

    def __str__(self):
        return f"{self.student.full_name} - {self.batch.batch_name}"

    @property
    def has_uploaded_certificate(self):
        return self.certificate_source == self.SOURCE_UPLOADED
