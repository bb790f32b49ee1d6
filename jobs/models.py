import uuid
from django.db import models

from .status import (
    InstallationStatus,
    LaborStatus,
    MaterialStatus,
    PowderCoatStatus,
    RentalEquipmentStatus,
)


def default_material():
    return {'status': MaterialStatus.NOT_ORDERED.value}


def default_labor():
    return {'status': LaborStatus.NOT_NEEDED.value}


def default_powder_coat():
    return {'status': PowderCoatStatus.NOT_NEEDED.value}


def default_installation():
    return {
        'status': InstallationStatus.NOT_STARTED.value,
        'crew_members_needed': 2,
        'crew_hours_needed': 4,
        'rental_equipment': {'status': RentalEquipmentStatus.NOT_NEEDED.value},
    }


class Job(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    job_number = models.CharField(max_length=50, unique=True)
    project_name = models.CharField(max_length=255)
    buyer = models.CharField(max_length=255)
    title = models.CharField(max_length=255)
    salesman = models.CharField(max_length=255)
    drawings_url = models.URLField(max_length=500, blank=True, null=True)
    worksheet_url = models.URLField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['job_number']

    def __str__(self):
        return f"{self.job_number} - {self.project_name}"


class Phase(models.Model):
    """
    A stage of a job. Each checklist area is stored as a small JSON record
    ({"status": ..., "notes": ..., "eta": ...}) so the shape can grow without
    schema churn; the installation record nests its rental equipment.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    job = models.ForeignKey(Job, on_delete=models.CASCADE, related_name='phases')
    phase_name = models.CharField(max_length=255)
    phase_number = models.PositiveIntegerField()

    welding_materials = models.JSONField(default=default_material)
    sewing_materials = models.JSONField(default=default_material)
    welding_labor = models.JSONField(default=default_labor)
    sewing_labor = models.JSONField(default=default_labor)
    installation_materials = models.JSONField(default=default_material)
    powder_coat = models.JSONField(default=default_powder_coat)
    installation = models.JSONField(default=default_installation)

    is_complete = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['phase_number']
        constraints = [
            models.UniqueConstraint(fields=['job', 'phase_number'], name='unique_phase_number_per_job'),
        ]

    def __str__(self):
        return f"Phase {self.phase_number}: {self.phase_name}"
