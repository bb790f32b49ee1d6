import uuid
from django.db import models
from django.conf import settings


class TimeEntry(models.Model):
    """One clock-in/clock-out shift of a user. Open while clock_out_time is null."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='time_entries')
    clock_in_time = models.DateTimeField()
    clock_out_time = models.DateTimeField(blank=True, null=True)
    duration_seconds = models.PositiveIntegerField(blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-clock_in_time']

    def __str__(self):
        return f"{self.user} @ {self.clock_in_time:%Y-%m-%d %H:%M}"


class TaskTimeEntry(models.Model):
    """
    A stretch of work on one task. Pausing closes the entry with
    is_paused=True and resuming opens a new one, so a task's total time is
    the sum of its closed entries.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    task = models.ForeignKey('tasks.Task', on_delete=models.CASCADE, related_name='time_entries')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='task_time_entries')
    phase = models.ForeignKey('jobs.Phase', on_delete=models.CASCADE, related_name='task_time_entries')
    task_name = models.CharField(max_length=255)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField(blank=True, null=True)
    duration_seconds = models.PositiveIntegerField(blank=True, null=True)
    is_paused = models.BooleanField(default=False)
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-start_time']

    def __str__(self):
        return f"{self.task_name} ({self.user})"
