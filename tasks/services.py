import logging

from activity.services import log_activity
from jobs.services import touch_job
from .models import TaskAssignment

logger = logging.getLogger('tasks')


def log_task_change(task, user, description, previous_value=None, new_value=None):
    phase = task.phase
    touch_job(phase.job_id)
    return log_activity(
        job=phase.job,
        phase=phase,
        user=user,
        activity_type='task_change',
        description=f"{description} (Phase {phase.phase_number}: {phase.phase_name})",
        field_name=task.area,
        previous_value=previous_value,
        new_value=new_value,
    )


def assign_user(task, user, assigned_by=None):
    """Assign a user to a task. Assigning twice is a no-op."""
    assignment, created = TaskAssignment.objects.get_or_create(
        task=task,
        user=user,
        defaults={'assigned_by': assigned_by},
    )
    if created:
        logger.info(f"User {user.pk} assigned to task {task.pk}")
    return assignment, created


def unassign_user(task, user):
    deleted, _ = TaskAssignment.objects.filter(task=task, user=user).delete()
    return deleted > 0
