"""
Attendance models: instructor-generated codes and the students who redeemed them.
Unique constraint: (attendance_code, student).
"""
from django.db import models
from accounts.models import User
from courses.models import Batch


class AttendanceCode(models.Model):
    """
    Six-character code an instructor reads out in class.
    Valid while is_active and valid_until has not passed.
    """
    batch = models.ForeignKey(
        Batch,
        on_delete=models.CASCADE,
        related_name='attendance_codes',
    )
    code = models.CharField(max_length=6, unique=True)
    generated_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='generated_attendance_codes',
    )
    generated_at = models.DateTimeField()
    valid_until = models.DateTimeField()
    is_active = models.BooleanField(default=True)
    notes = models.TextField(blank=True, null=True)

    class Meta:
        db_table = 'attendance_codes'
        verbose_name = 'Attendance Code'
        verbose_name_plural = 'Attendance Codes'
        ordering = ['-generated_at']

    def __str__(self):
        return f"{self.code} - {self.batch.batch_name}"

    def is_expired(self, now):
        return now > self.valid_until


class AttendanceSubmission(models.Model):
    """A student's redemption of one attendance code."""
    attendance_code = models.ForeignKey(
        AttendanceCode,
        on_delete=models.CASCADE,
        related_name='submissions',
    )
    student = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='attendance_submissions',
        limit_choices_to={'role': 'student'},
    )
    batch = models.ForeignKey(
        Batch,
        on_delete=models.CASCADE,
        related_name='attendance_submissions',
    )
    submitted_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'attendance_submissions'
        verbose_name = 'Attendance Submission'
        verbose_name_plural = 'Attendance Submissions'
        ordering = ['-submitted_at']
        constraints = [
            models.UniqueConstraint(
                fields=['attendance_code', 'student'],
                name='unique_code_student_submission',
            ),
        ]

    def __str__(self):
        return f"{self.student.full_name} - {self.attendance_code.code}"
