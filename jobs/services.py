import copy
import logging

from django.db import transaction
from django.utils import timezone

from activity.services import log_activity
from .models import Job
from .serializers import merge_record
from .status import InstallationStatus, StatusTarget

logger = logging.getLogger('jobs')


def touch_job(job_id):
    # Bump updated_at without firing model signals
    Job.objects.filter(pk=job_id).update(updated_at=timezone.now())


def apply_status_update(phase, target, changes, user=None):
    """
    Apply validated changes to one status-bearing sub-record of a phase and
    record a status_update activity. Completing the installation completes
    the phase.
    """
    if target == StatusTarget.RENTAL_EQUIPMENT:
        installation = copy.deepcopy(phase.installation or {})
        previous = installation.get('rental_equipment') or {}
        installation['rental_equipment'] = merge_record(previous, changes)
        phase.installation = installation
        updated = installation['rental_equipment']
    else:
        previous = copy.deepcopy(getattr(phase, target) or {})
        updated = merge_record(previous, changes)
        setattr(phase, target, updated)
        if target == StatusTarget.INSTALLATION and changes.get('status') == InstallationStatus.COMPLETE:
            phase.is_complete = True

    phase._changed_by = user
    with transaction.atomic():
        phase.save()
        touch_job(phase.job_id)

    label = StatusTarget(target).label
    logger.info(f"Phase {phase.pk} {target} status -> {updated.get('status')}")
    log_activity(
        job=phase.job,
        phase=phase,
        user=user,
        activity_type='status_update',
        description=(
            f"{label} status for Phase {phase.phase_number}: {phase.phase_name} changed from "
            f"{previous.get('status', 'unset')} to {updated.get('status')}"
        ),
        field_name=target,
        previous_value=previous,
        new_value=updated,
    )
    return phase


def set_phase_completion(phase, is_complete, user=None):
    phase.is_complete = is_complete
    phase._changed_by = user
    with transaction.atomic():
        phase.save(update_fields=['is_complete', 'updated_at'])
        touch_job(phase.job_id)
    return phase
