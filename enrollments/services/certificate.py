"""
Certificate eligibility evaluator and manual certificate upload.

A student earns a certificate when the batch has ended and both the attendance
rate and the assignment submission rate reach CERTIFICATE_THRESHOLD percent.
Evaluating writes the result back to Enrollment.certificate, except for
certificates an admin uploaded by hand: those are never demoted.
"""
import logging
import os
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.core.files.storage import default_storage
from django.db import transaction
from django.utils import timezone

from assignments.models import Assignment, AssignmentSubmission
from attendance.models import AttendanceCode, AttendanceSubmission
from core.exceptions import NotFoundError, ValidationError
from enrollments.models import Enrollment

logger = logging.getLogger(__name__)

ALLOWED_CERTIFICATE_TYPES = {
    'application/pdf': '.pdf',
    'image/png': '.png',
    'image/jpeg': '.jpg',
}

_TWO_PLACES = Decimal('0.01')


@dataclass(frozen=True)
class CertificateMetrics:
    total_codes: int
    attended: int
    total_assignments: int
    submitted: int
    batch_ended: bool
    is_eligible: bool

    @property
    def attendance_rate(self):
        return percentage(self.attended, self.total_codes)

    @property
    def assignment_rate(self):
        return percentage(self.submitted, self.total_assignments)

    def as_dict(self):
        return {
            'attendanceRate': float(self.attendance_rate),
            'assignmentRate': float(self.assignment_rate),
            'totalCodes': self.total_codes,
            'attendedCodes': self.attended,
            'totalAssignments': self.total_assignments,
            'submittedAssignments': self.submitted,
            'batchEnded': self.batch_ended,
            'isEligible': self.is_eligible,
        }


def percentage(numerator, denominator):
    """numerator / denominator * 100 as a 2-place Decimal; 0 for an empty denominator."""
    if not denominator:
        return Decimal('0.00')
    return (Decimal(numerator) * 100 / Decimal(denominator)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


def meets_threshold(numerator, denominator, threshold):
    """Exact comparison numerator / denominator * 100 >= threshold."""
    if not denominator:
        return False
    return numerator * 100 >= threshold * denominator


def batch_has_ended(batch, today=None):
    if batch.end_date is None:
        return False
    today = today or timezone.localdate()
    return today >= batch.end_date


def compute_metrics(enrollment, today=None):
    batch = enrollment.batch
    student_id = enrollment.student_id

    total_codes = AttendanceCode.objects.filter(batch=batch).count()
    attended = (
        AttendanceSubmission.objects
        .filter(student_id=student_id, attendance_code__batch=batch)
        .values('attendance_code_id')
        .distinct()
        .count()
    )
    total_assignments = Assignment.objects.filter(batch=batch).count()
    submitted = (
        AssignmentSubmission.objects
        .filter(student_id=student_id, assignment__batch=batch)
        .values('assignment_id')
        .distinct()
        .count()
    )

    threshold = getattr(settings, 'CERTIFICATE_THRESHOLD', 90)
    ended = batch_has_ended(batch, today)
    eligible = (
        ended
        and meets_threshold(attended, total_codes, threshold)
        and meets_threshold(submitted, total_assignments, threshold)
    )
    return CertificateMetrics(
        total_codes=total_codes,
        attended=attended,
        total_assignments=total_assignments,
        submitted=submitted,
        batch_ended=ended,
        is_eligible=eligible,
    )


def evaluate_certificate(enrollment_id, today=None):
    """
    Compute CertificateMetrics and sync Enrollment.certificate with the result.
    Returns (enrollment, metrics). Raises NotFoundError.
    """
    with transaction.atomic():
        enrollment = (
            Enrollment.objects
            .select_for_update(of=('self',))
            .select_related('batch')
            .filter(pk=enrollment_id)
            .first()
        )
        if enrollment is None:
            raise NotFoundError('Enrollment not found')

        metrics = compute_metrics(enrollment, today)

        if enrollment.has_uploaded_certificate:
            return enrollment, metrics

        if metrics.is_eligible and not enrollment.certificate:
            enrollment.certificate = True
            enrollment.certificate_source = Enrollment.SOURCE_GENERATED
            enrollment.certificate_issued_at = timezone.now()
            enrollment.save(update_fields=[
                'certificate', 'certificate_source', 'certificate_issued_at', 'updated_at',
            ])
            logger.info("[CERTIFICATE] issued enrollment_id=%s", enrollment.pk)
        elif not metrics.is_eligible and enrollment.certificate:
            enrollment.certificate = False
            enrollment.certificate_source = None
            enrollment.certificate_issued_at = None
            enrollment.save(update_fields=[
                'certificate', 'certificate_source', 'certificate_issued_at', 'updated_at',
            ])
            logger.info("[CERTIFICATE] revoked enrollment_id=%s", enrollment.pk)

    if settings.DEBUG:
        logger.debug(
            "[CERTIFICATE] enrollment_id=%s attendance=%s assignments=%s ended=%s eligible=%s",
            enrollment.pk, metrics.attendance_rate, metrics.assignment_rate,
            metrics.batch_ended, metrics.is_eligible,
        )
    return enrollment, metrics


def _validate_upload(uploaded_file):
    content_type = getattr(uploaded_file, 'content_type', None)
    if content_type not in ALLOWED_CERTIFICATE_TYPES:
        raise ValidationError('Certificate must be a PDF, PNG or JPEG file')
    max_bytes = getattr(settings, 'CERTIFICATE_MAX_UPLOAD_BYTES', 10 * 1024 * 1024)
    if uploaded_file.size > max_bytes:
        raise ValidationError(f'Certificate file exceeds {max_bytes // (1024 * 1024)} MB')
    return content_type


def upload_certificate(enrollment_id, uploaded_file):
    """Store an admin-provided certificate file and mark the enrollment as certified."""
    if uploaded_file is None:
        raise ValidationError('No certificate file provided')
    content_type = _validate_upload(uploaded_file)

    enrollment = Enrollment.objects.filter(pk=enrollment_id).first()
    if enrollment is None:
        raise NotFoundError('Enrollment not found')

    stem = os.path.splitext(os.path.basename(uploaded_file.name or ''))[0] or 'certificate'
    extension = ALLOWED_CERTIFICATE_TYPES[content_type]
    path = default_storage.save(f'certificates/{enrollment.pk}/{stem}{extension}', uploaded_file)

    enrollment.certificate = True
    enrollment.certificate_source = Enrollment.SOURCE_UPLOADED
    enrollment.certificate_url = default_storage.url(path)
    enrollment.certificate_issued_at = timezone.now()
    enrollment.save(update_fields=[
        'certificate', 'certificate_source', 'certificate_url', 'certificate_issued_at', 'updated_at',
    ])
    logger.info("[CERTIFICATE] uploaded enrollment_id=%s path=%s", enrollment.pk, path)
    return enrollment
