import logging

from django.db import DatabaseError, transaction

from .models import ActivityLog

logger = logging.getLogger('activity')


def log_activity(job, activity_type, description, phase=None, user=None,
                 field_name=None, previous_value=None, new_value=None):
    """
    Record an activity entry for a job. Best-effort: a failed write is logged
    and reported as False, it never fails the mutation that triggered it.
    """
    if user is not None and not getattr(user, 'is_authenticated', False):
        user = None
    try:
        with transaction.atomic():
            ActivityLog.objects.create(
                job=job,
                phase=phase,
                user=user,
                activity_type=activity_type,
                description=description,
                field_name=field_name,
                previous_value=previous_value,
                new_value=new_value,
            )
    except DatabaseError as e:
        logger.error(f"Failed to log '{activity_type}' activity for job {job.pk}: {e}")
        return False
    return True
