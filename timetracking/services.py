import logging

from django.db import transaction
from django.utils import timezone

from tasks.services import assign_user
from .models import TaskTimeEntry, TimeEntry

logger = logging.getLogger('timetracking')


class TimerStateError(Exception):
    """The requested clock or timer change does not fit the current state."""

    def __init__(self, message, entry=None):
        super().__init__(message)
        self.entry = entry


def elapsed_seconds(start, end):
    return max(0, int((end - start).total_seconds()))


def current_time_entry(user):
    return TimeEntry.objects.filter(user=user, clock_out_time__isnull=True).order_by('-clock_in_time').first()


def running_task_entry(task, user):
    return TaskTimeEntry.objects.filter(task=task, user=user, end_time__isnull=True).order_by('-start_time').first()


def _open_task_entry(task, user, now):
    return TaskTimeEntry.objects.create(
        task=task,
        user=user,
        phase_id=task.phase_id,
        task_name=task.name,
        start_time=now,
    )


def _close_task_entry(entry, now, paused, notes=None):
    entry.end_time = now
    entry.duration_seconds = elapsed_seconds(entry.start_time, now)
    entry.is_paused = paused
    fields = ['end_time', 'duration_seconds', 'is_paused', 'updated_at']
    if notes is not None:
        entry.notes = notes
        fields.append('notes')
    entry.save(update_fields=fields)
    return entry


def pause_active_task_entries(user, now=None):
    now = now or timezone.now()
    entries = list(TaskTimeEntry.objects.filter(user=user, end_time__isnull=True))
    for entry in entries:
        _close_task_entry(entry, now, paused=True)
    if entries:
        logger.info(f"Paused {len(entries)} running task timer(s) for user {user.pk}")
    return entries


@transaction.atomic
def clock_in(user):
    active = current_time_entry(user)
    if active is not None:
        raise TimerStateError("You are already clocked in", entry=active)

    now = timezone.now()
    entry = TimeEntry.objects.create(user=user, clock_in_time=now)
    logger.info(f"User {user.pk} clocked in")
    return entry


@transaction.atomic
def clock_out(user, notes=None):
    entry = current_time_entry(user)
    if entry is None:
        raise TimerStateError("You are not clocked in")

    now = timezone.now()
    entry.clock_out_time = now
    entry.duration_seconds = elapsed_seconds(entry.clock_in_time, now)
    entry.notes = notes or None
    entry.save()
    pause_active_task_entries(user, now)
    logger.info(f"User {user.pk} clocked out after {entry.duration_seconds}s")
    return entry


@transaction.atomic
def start_task_timer(task, user):
    running = running_task_entry(task, user)
    if running is not None:
        raise TimerStateError("You already have an active timer for this task", entry=running)

    assign_user(task, user, assigned_by=user)
    return _open_task_entry(task, user, timezone.now())


@transaction.atomic
def pause_task_timer(task, user):
    running = running_task_entry(task, user)
    if running is None:
        raise TimerStateError("No active timer found for this task")
    return _close_task_entry(running, timezone.now(), paused=True)


@transaction.atomic
def resume_task_timer(task, user):
    running = running_task_entry(task, user)
    if running is not None:
        raise TimerStateError("There is already an active timer for this task", entry=running)
    return _open_task_entry(task, user, timezone.now())


@transaction.atomic
def stop_task_timer(task, user, notes=None):
    running = running_task_entry(task, user)
    if running is None:
        raise TimerStateError("No active timer found for this task")
    return _close_task_entry(running, timezone.now(), paused=False, notes=notes)
