import uuid
from django.db import models
from django.conf import settings


class ActivityLog(models.Model):
    ACTIVITY_TYPES = [
        ('job_created', 'Job Created'),
        ('job_update', 'Job Update'),
        ('phase_added', 'Phase Added'),
        ('phase_update', 'Phase Update'),
        ('phase_deleted', 'Phase Deleted'),
        ('status_update', 'Status Update'),
        ('task_change', 'Task Change'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    job = models.ForeignKey('jobs.Job', on_delete=models.CASCADE, related_name='activity_logs')
    # Kept after the phase is deleted so the job history stays readable
    phase = models.ForeignKey(
        'jobs.Phase',
        on_delete=models.SET_NULL,
        related_name='activity_logs',
        null=True,
        blank=True,
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name='activity_logs',
        null=True,
        blank=True,
    )
    activity_type = models.CharField(max_length=30, choices=ACTIVITY_TYPES)
    description = models.TextField()
    field_name = models.CharField(max_length=100, blank=True, null=True)
    previous_value = models.JSONField(blank=True, null=True)
    new_value = models.JSONField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.job.job_number}: {self.description}"
