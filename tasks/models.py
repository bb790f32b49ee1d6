import uuid
from django.db import models
from django.conf import settings

from jobs.status import TaskArea, TaskStatus


class Task(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    phase = models.ForeignKey('jobs.Phase', on_delete=models.CASCADE, related_name='tasks')
    area = models.CharField(max_length=30, choices=TaskArea.choices)
    name = models.CharField(max_length=255)
    status = models.CharField(max_length=20, choices=TaskStatus.choices, default=TaskStatus.NOT_STARTED)
    hours = models.FloatField(blank=True, null=True)
    eta = models.DateField(blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    assignees = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through='TaskAssignment',
        through_fields=('task', 'user'),
        related_name='assigned_tasks',
        blank=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['created_at']

    @property
    def is_complete(self):
        # status is the only stored completion field
        return self.status == TaskStatus.COMPLETE

    def __str__(self):
        return f"{self.name} ({self.get_area_display()})"


class TaskAssignment(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='assignments')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='task_assignments')
    assigned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name='task_assignments_made',
        null=True,
        blank=True,
    )
    assigned_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['task', 'user'], name='unique_task_assignment'),
        ]

    def __str__(self):
        return f"{self.user} -> {self.task.name}"
