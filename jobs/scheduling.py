from collections import namedtuple
from datetime import datetime, time, timedelta

from django.utils.dateparse import parse_date, parse_datetime

MAX_CREW_HOURS_PER_DAY = 10
MAX_CREW_HOURS = 1000

Appointment = namedtuple('Appointment', ['start', 'end'])


def parse_day(value):
    """Parse an ISO date or datetime string into a date; None when unusable."""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = parse_datetime(value)
        if parsed is not None:
            return parsed.date()
        return parse_date(value)
    except ValueError:
        return None


def parse_moment(value):
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = parse_datetime(value)
    except ValueError:
        return None
    if parsed is not None:
        return parsed
    day = parse_day(value)
    return datetime.combine(day, time.min) if day else None


def format_day(value):
    day = parse_day(value)
    return day.strftime('%m/%d/%Y') if day else 'N/A'


def installation_appointments(phase):
    """
    Split the installation's crew hours into weekday appointments of at most
    MAX_CREW_HOURS_PER_DAY hours, starting on the install start date.
    """
    installation = phase.installation or {}
    start = parse_moment(installation.get('install_start_date'))
    if start is None:
        raise ValueError('Installation start date is required')

    remaining = float(installation.get('crew_hours_needed') or 0)
    if remaining > MAX_CREW_HOURS:
        raise ValueError(f"Crew hours cannot exceed {MAX_CREW_HOURS}")
    appointments = []
    current = start
    while remaining > 0:
        # Saturday and Sunday
        if current.weekday() >= 5:
            current += timedelta(days=1)
            continue
        hours_today = min(remaining, MAX_CREW_HOURS_PER_DAY)
        appointments.append(Appointment(start=current, end=current + timedelta(hours=hours_today)))
        remaining -= hours_today
        current += timedelta(days=1)
    return appointments


def calendar_title(job, phase):
    installation = phase.installation or {}
    return (
        f"[Phase {phase.phase_number}]-[{job.job_number}] - {job.project_name} - {job.buyer} - "
        f"{job.salesman} - [Crew: {installation.get('crew_members_needed', 0)}], "
        f"{format_day(installation.get('site_ready_date'))} - {format_day(installation.get('install_deadline'))}"
    )
