import logging

from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from activity.services import log_activity
from .derivation import installation_status
from .models import Phase
from .status import InstallationStatus

logger = logging.getLogger('jobs')


# Store the previous completion state before saving
@receiver(pre_save, sender=Phase)
def store_previous_state(sender, instance, **kwargs):
    """
    Remember the stored completion flags and mark the phase complete when its
    installation has just become complete.
    """
    previous = None
    if not instance._state.adding:
        previous = Phase.objects.filter(pk=instance.pk).only('is_complete', 'installation').first()

    instance._previous_is_complete = previous.is_complete if previous else None
    previous_install = installation_status(previous) if previous else None

    if (installation_status(instance) == InstallationStatus.COMPLETE
            and previous_install != InstallationStatus.COMPLETE):
        instance.is_complete = True


@receiver(post_save, sender=Phase)
def log_completion_change(sender, instance, created, **kwargs):
    """
    Create an activity entry when an existing phase is marked complete or
    incomplete.
    """
    previous = getattr(instance, '_previous_is_complete', None)
    if created or previous is None or previous == instance.is_complete:
        return

    state = 'complete' if instance.is_complete else 'incomplete'
    log_activity(
        job=instance.job,
        phase=instance,
        user=getattr(instance, '_changed_by', None),  # set in the view
        activity_type='phase_update',
        description=f"Phase {instance.phase_number}: {instance.phase_name} was marked as {state}",
        field_name='is_complete',
        previous_value={'is_complete': previous},
        new_value={'is_complete': instance.is_complete},
    )
    logger.info(f"Phase {instance.pk} marked as {state}")
