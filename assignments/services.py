"""
Assignment lifecycle: instructor creates, enrolled student submits,
instructor grades (0 <= score <= max_score).
"""
import logging

from django.db import IntegrityError, transaction
from django.utils import timezone

from assignments.models import Assignment, AssignmentSubmission
from core.exceptions import ConflictError, NotFoundError, ValidationError
from courses.services import get_batch
from enrollments.models import Enrollment

logger = logging.getLogger(__name__)


def create_assignment(batch_id, instructor, title, description='', due_date=None, max_score=100):
    batch = get_batch(batch_id)
    if batch.instructor_id != instructor.pk:
        raise NotFoundError('Batch not found')
    if not (title or '').strip():
        raise ValidationError('Title is required')
    if max_score is None or int(max_score) < 1:
        raise ValidationError('Max score must be at least 1')

    assignment = Assignment.objects.create(
        batch=batch,
        instructor=instructor,
        title=title.strip(),
        description=description or '',
        due_date=due_date,
        max_score=int(max_score),
    )
    logger.info("[ASSIGNMENT] created assignment_id=%s batch_id=%s", assignment.pk, batch.pk)
    return assignment


def submit_assignment(assignment_id, student, content):
    """
    Create or replace the student's submission.
    Raises NotFoundError, ValidationError (not enrolled), ConflictError (already graded).
    """
    assignment = Assignment.objects.select_related('batch').filter(pk=assignment_id).first()
    if assignment is None:
        raise NotFoundError('Assignment not found')
    if not Enrollment.objects.filter(student=student, batch=assignment.batch).exists():
        raise ValidationError('You are not enrolled in this batch')

    now = timezone.now()
    try:
        with transaction.atomic():
            submission = (
                AssignmentSubmission.objects
                .select_for_update()
                .filter(assignment=assignment, student=student)
                .first()
            )
            if submission is None:
                submission = AssignmentSubmission.objects.create(
                    assignment=assignment,
                    student=student,
                    content=content or '',
                    submitted_at=now,
                )
            elif submission.is_graded:
                raise ConflictError('This assignment has already been graded')
            else:
                submission.content = content or ''
                submission.submitted_at = now
                submission.save(update_fields=['content', 'submitted_at'])
    except IntegrityError:
        raise ConflictError('Submission conflicted with a concurrent request; please retry')

    logger.info(
        "[ASSIGNMENT] submitted assignment_id=%s student_id=%s submission_id=%s",
        assignment.pk, student.pk, submission.pk,
    )
    return submission


def grade_submission(submission_id, instructor, score, feedback=None):
    """Grade a submission of an assignment the instructor owns. 0 <= score <= max_score."""
    with transaction.atomic():
        submission = (
            AssignmentSubmission.objects
            .select_for_update()
            .select_related('assignment')
            .filter(pk=submission_id, assignment__batch__instructor=instructor)
            .first()
        )
        if submission is None:
            raise NotFoundError('Submission not found')

        max_score = submission.assignment.max_score
        if score is None or isinstance(score, bool) or not 0 <= int(score) <= max_score:
            raise ValidationError(f'Score must be between 0 and {max_score}')

        submission.score = int(score)
        submission.feedback = feedback or None
        submission.status = AssignmentSubmission.STATUS_GRADED
        submission.graded_at = timezone.now()
        submission.save(update_fields=['score', 'feedback', 'status', 'graded_at'])

    logger.info("[ASSIGNMENT] graded submission_id=%s score=%s/%s", submission.pk, submission.score, max_score)
    return submission
