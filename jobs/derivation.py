"""
Derived status for phases and their checklist areas.

Everything here is a pure function of already-loaded data: model instances
are only read, never saved, and missing records fall back to each area's
default status instead of raising.
"""
from collections import namedtuple

from .status import (
    AREA_DEFAULTS,
    AREA_VOCABULARY,
    RESOLVED_STATUSES,
    Area,
    AreaStatus,
    InstallationStatus,
    PhaseState,
    TaskArea,
    TaskStatus,
)

PhaseSummary = namedtuple('PhaseSummary', ['is_ready', 'progress_percent'])


def derive_area_status(tasks):
    """Roll the tasks of one area up into a single status."""
    statuses = [task.status for task in tasks or ()]
    if not statuses:
        return AreaStatus.NOT_NEEDED
    if all(status == TaskStatus.COMPLETE for status in statuses):
        return AreaStatus.COMPLETE
    if any(status in (TaskStatus.COMPLETE, TaskStatus.IN_PROGRESS) for status in statuses):
        return AreaStatus.IN_PROGRESS
    return AreaStatus.NOT_STARTED


def derive_area_statuses(tasks):
    """Derived status for every task area of a phase, keyed by area value."""
    grouped = {area.value: [] for area in TaskArea}
    for task in tasks or ():
        grouped.setdefault(task.area, []).append(task)
    return {area: derive_area_status(area_tasks) for area, area_tasks in grouped.items()}


def _record(phase, field):
    value = getattr(phase, field, None)
    return value if isinstance(value, dict) else {}


def area_status(phase, area):
    status = _record(phase, area).get('status')
    if status not in AREA_VOCABULARY[area].values:
        return AREA_DEFAULTS[area]
    return status


def installation_status(phase):
    status = _record(phase, 'installation').get('status')
    # Older rows nested the status one level deeper: {"status": {"status": ...}}
    if isinstance(status, dict):
        status = status.get('status')
    if status not in InstallationStatus.values:
        return InstallationStatus.NOT_STARTED
    return status


def is_area_resolved(phase, area):
    return area_status(phase, area) in RESOLVED_STATUSES[AREA_VOCABULARY[area]]


def resolved_area_count(phase):
    return sum(1 for area in Area if is_area_resolved(phase, area))


def progress_percent(phase):
    return round(100 * resolved_area_count(phase) / len(Area))


def is_ready_for_install(phase):
    return (
        all(is_area_resolved(phase, area) for area in Area)
        and installation_status(phase) != InstallationStatus.COMPLETE
    )


def phase_summary(phase):
    return PhaseSummary(is_ready=is_ready_for_install(phase), progress_percent=progress_percent(phase))


def phase_state(phase):
    """
    Dashboard tab a phase belongs to. A phase is pending until any area or
    its installation moves off the default status.
    """
    if phase.is_complete:
        return PhaseState.COMPLETE
    touched = any(area_status(phase, area) != AREA_DEFAULTS[area] for area in Area)
    if touched or installation_status(phase) != InstallationStatus.NOT_STARTED:
        return PhaseState.IN_PROGRESS
    return PhaseState.PENDING


def labor_hours(phase, area):
    hours = _record(phase, area).get('hours')
    try:
        return float(hours or 0)
    except (TypeError, ValueError):
        return 0.0


def crew_hours(phase):
    hours = _record(phase, 'installation').get('crew_hours_needed')
    try:
        return float(hours or 0)
    except (TypeError, ValueError):
        return 0.0
