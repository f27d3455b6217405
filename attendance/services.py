"""
Attendance codes: generation by the batch instructor, deactivation, and
redemption by enrolled students.
"""
import logging
import secrets
import string
from datetime import timedelta

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from attendance.models import AttendanceCode, AttendanceSubmission
from core.exceptions import ConflictError, NotFoundError, ValidationError
from courses.services import get_batch
from enrollments.models import Enrollment

logger = logging.getLogger(__name__)

CODE_LENGTH = 6
CODE_ALPHABET = string.ascii_uppercase + string.digits
MAX_CODE_ATTEMPTS = 10


def random_code():
    return ''.join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


def _unique_code():
    for _ in range(MAX_CODE_ATTEMPTS):
        code = random_code()
        if not AttendanceCode.objects.filter(code=code).exists():
            return code
    raise ConflictError('Could not generate a unique attendance code; please retry')


def _get_own_batch(batch_id, instructor):
    batch = get_batch(batch_id)
    if batch.instructor_id != instructor.pk:
        raise NotFoundError('Batch not found')
    return batch


def generate_code(batch_id, instructor, notes=None):
    """New active code for a batch the instructor teaches, valid ATTENDANCE_CODE_VALID_DAYS days."""
    batch = _get_own_batch(batch_id, instructor)
    now = timezone.now()
    valid_days = getattr(settings, 'ATTENDANCE_CODE_VALID_DAYS', 3)
    try:
        with transaction.atomic():
            attendance_code = AttendanceCode.objects.create(
                batch=batch,
                code=_unique_code(),
                generated_by=instructor,
                generated_at=now,
                valid_until=now + timedelta(days=valid_days),
                notes=notes or None,
            )
    except IntegrityError:
        raise ConflictError('Could not generate a unique attendance code; please retry')
    logger.info(
        "[ATTENDANCE] code generated batch_id=%s code_id=%s by=%s",
        batch.pk, attendance_code.pk, instructor.pk,
    )
    return attendance_code


def deactivate_code(code_id, instructor):
    attendance_code = (
        AttendanceCode.objects
        .select_related('batch')
        .filter(pk=code_id, batch__instructor=instructor)
        .first()
    )
    if attendance_code is None:
        raise NotFoundError('Attendance code not found')
    if attendance_code.is_active:
        attendance_code.is_active = False
        attendance_code.save(update_fields=['is_active'])
        logger.info("[ATTENDANCE] code deactivated code_id=%s", attendance_code.pk)
    return attendance_code


def submit_code(student, code):
    """
    Redeem an attendance code.
    Raises ValidationError (unknown, inactive, expired, not enrolled) or
    ConflictError (already submitted).
    """
    code = (code or '').strip().upper()
    if not code:
        raise ValidationError('Attendance code is required')

    attendance_code = AttendanceCode.objects.select_related('batch').filter(code=code).first()
    if attendance_code is None:
        raise ValidationError('Invalid attendance code')
    if not attendance_code.is_active:
        raise ValidationError('This attendance code is no longer active')
    if attendance_code.is_expired(timezone.now()):
        raise ValidationError('This attendance code has expired')

    batch = attendance_code.batch
    if not Enrollment.objects.filter(student=student, batch=batch).exists():
        raise ValidationError('You are not enrolled in this batch')
    if AttendanceSubmission.objects.filter(attendance_code=attendance_code, student=student).exists():
        raise ConflictError('Attendance already submitted for this code')

    try:
        with transaction.atomic():
            submission = AttendanceSubmission.objects.create(
                attendance_code=attendance_code,
                student=student,
                batch=batch,
            )
    except IntegrityError:
        raise ConflictError('Attendance already submitted for this code')

    logger.info(
        "[ATTENDANCE] submitted student_id=%s batch_id=%s code_id=%s",
        student.pk, batch.pk, attendance_code.pk,
    )
    return submission
