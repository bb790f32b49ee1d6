"""
Dashboard views over jobs and their phases.

All functions are pure: they take phases whose ``job`` is already loaded and
return new lists. Missing or malformed data degrades to defaults (0 hours,
no date) instead of raising.
"""
import datetime
from collections import namedtuple

from jobs import derivation
from jobs.scheduling import parse_day
from jobs.status import Area, InstallationStatus, LaborStatus

PhaseWithJob = namedtuple('PhaseWithJob', ['job', 'phase'])

ProductionPartitions = namedtuple(
    'ProductionPartitions',
    ['welding', 'sewing', 'ready_for_install', 'welding_hours', 'sewing_hours', 'install_hours'],
)

Deadline = namedtuple('Deadline', ['date', 'kind', 'job', 'phase'])

SEARCH_FIELDS = ('job_number', 'project_name', 'buyer', 'salesman')


def pair_phases(phases):
    return [PhaseWithJob(phase.job, phase) for phase in phases]


def partition_production(pairs):
    """Split phases into the welding, sewing and ready-for-install lists."""
    welding, sewing, ready = [], [], []
    for pair in pairs:
        if derivation.area_status(pair.phase, Area.WELDING_LABOR) != LaborStatus.NOT_NEEDED:
            welding.append(pair)
        if derivation.area_status(pair.phase, Area.SEWING_LABOR) != LaborStatus.NOT_NEEDED:
            sewing.append(pair)
        if derivation.is_ready_for_install(pair.phase):
            ready.append(pair)

    return ProductionPartitions(
        welding=welding,
        sewing=sewing,
        ready_for_install=ready,
        welding_hours=sum(derivation.labor_hours(p.phase, Area.WELDING_LABOR) for p in welding),
        sewing_hours=sum(derivation.labor_hours(p.phase, Area.SEWING_LABOR) for p in sewing),
        install_hours=sum(derivation.crew_hours(p.phase) for p in ready),
    )


def group_by_job(pairs):
    """Ordered list of (job, [phases]) in first-seen job order."""
    groups = {}
    for pair in pairs:
        groups.setdefault(pair.job.pk, (pair.job, []))[1].append(pair.phase)
    return list(groups.values())


def matches_query(pair, query):
    query = (query or '').strip().lower()
    if not query:
        return True
    values = [getattr(pair.job, field, None) for field in SEARCH_FIELDS]
    values.append(pair.phase.phase_name)
    return any(query in str(value).lower() for value in values if value)


def matches_status(pair, area, status):
    if area == 'installation':
        return derivation.installation_status(pair.phase) == status
    return derivation.area_status(pair.phase, area) == status


def filter_phases(pairs, query=None, area=None, status=None, state=None):
    """Apply every supplied filter; omitted filters match everything."""
    result = []
    for pair in pairs:
        if not matches_query(pair, query):
            continue
        if area and status and not matches_status(pair, area, status):
            continue
        if state and derivation.phase_state(pair.phase) != state:
            continue
        result.append(pair)
    return result


def _phase_dates(phase):
    installation = phase.installation if isinstance(phase.installation, dict) else {}
    welding_labor = phase.welding_labor if isinstance(phase.welding_labor, dict) else {}
    candidates = [
        ('installation', parse_day(installation.get('install_start_date'))),
        ('welding', parse_day(welding_labor.get('due_date'))),
    ]
    return [(day, kind) for kind, day in candidates if day is not None]


def upcoming_deadlines(pairs, today, window_days=7, limit=3):
    """
    Phases with an install date or welding due date within
    [today, today + window_days], earliest first. Ties keep input order.
    """
    end = today + datetime.timedelta(days=window_days)
    upcoming = []
    for pair in pairs:
        dates = [(day, kind) for day, kind in _phase_dates(pair.phase) if today <= day <= end]
        if dates:
            day, kind = min(dates, key=lambda item: item[0])
            upcoming.append(Deadline(day, kind, pair.job, pair.phase))
    # sorted() is stable
    upcoming = sorted(upcoming, key=lambda deadline: deadline.date)
    return upcoming[:limit] if limit is not None else upcoming


def job_completion_percent(phases):
    phases = list(phases)
    if not phases:
        return 0
    return round(100 * sum(1 for phase in phases if phase.is_complete) / len(phases))


def active_jobs(jobs_with_phases):
    """Jobs with at least one incomplete phase, as (job, phases) pairs."""
    return [
        (job, phases) for job, phases in jobs_with_phases
        if any(not phase.is_complete for phase in phases)
    ]


def in_progress(pairs):
    return [pair for pair in pairs if not pair.phase.is_complete]


def dashboard_counts(pairs):
    counts = {'active': 0, 'pending_installation': 0, 'completed': 0}
    for pair in pairs:
        if pair.phase.is_complete:
            counts['completed'] += 1
            continue
        counts['active'] += 1
        installation = pair.phase.installation if isinstance(pair.phase.installation, dict) else {}
        if (parse_day(installation.get('install_start_date')) is None
                and derivation.installation_status(pair.phase) != InstallationStatus.COMPLETE):
            counts['pending_installation'] += 1
    return counts
