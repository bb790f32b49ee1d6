"""Unsaved model instances for tests that never touch the database."""
from jobs.models import (
    Job,
    Phase,
    default_installation,
    default_labor,
    default_material,
    default_powder_coat,
)

RESOLVED = {
    'welding_materials': 'received',
    'sewing_materials': 'not-needed',
    'welding_labor': 'complete',
    'sewing_labor': 'not-needed',
    'installation_materials': 'received',
    'powder_coat': 'not-needed',
}


def build_job(job_number='1001', **fields):
    fields.setdefault('project_name', 'Harbor Market Canopy')
    fields.setdefault('buyer', 'Acme Retail')
    fields.setdefault('title', 'Canopy replacement')
    fields.setdefault('salesman', 'Dana Ruiz')
    return Job(job_number=job_number, **fields)


def build_phase(job=None, phase_number=1, phase_name='Front Entrance', statuses=None,
                installation=None, is_complete=False, **records):
    """
    Build a phase with default records. ``statuses`` overrides the status of
    individual areas, ``records`` replaces whole area records.
    """
    phase = Phase(
        job=job or build_job(),
        phase_number=phase_number,
        phase_name=phase_name,
        welding_materials=default_material(),
        sewing_materials=default_material(),
        welding_labor=default_labor(),
        sewing_labor=default_labor(),
        installation_materials=default_material(),
        powder_coat=default_powder_coat(),
        installation=default_installation(),
        is_complete=is_complete,
    )
    for area, status in (statuses or {}).items():
        getattr(phase, area)['status'] = status
    for area, record in records.items():
        setattr(phase, area, record)
    if installation:
        phase.installation.update(installation)
    return phase
