from types import SimpleNamespace

import pytest

from jobs import derivation
from jobs.status import Area, AreaStatus, InstallationStatus, PhaseState
from tasks.models import Task
from tests.factories import RESOLVED, build_phase


def tasks(*statuses, area='welding_labor'):
    return [Task(area=area, name=f"task {i}", status=status) for i, status in enumerate(statuses)]


@pytest.mark.parametrize('value', [[], None, ()])
def test_no_tasks_means_not_needed(value):
    assert derivation.derive_area_status(value) == AreaStatus.NOT_NEEDED


def test_all_complete_tasks_roll_up_to_complete():
    assert derivation.derive_area_status(tasks('complete', 'complete')) == AreaStatus.COMPLETE


def test_untouched_tasks_roll_up_to_not_started():
    assert derivation.derive_area_status(tasks('not-started', 'not-started')) == AreaStatus.NOT_STARTED


def test_majority_complete_is_still_in_progress():
    result = derivation.derive_area_status(tasks('complete', 'complete', 'in-progress'))
    assert result == AreaStatus.IN_PROGRESS


def test_one_complete_task_marks_area_in_progress():
    assert derivation.derive_area_status(tasks('complete', 'not-started')) == AreaStatus.IN_PROGRESS


def test_roll_up_reads_status_only():
    # Anything with a status attribute will do
    items = [SimpleNamespace(status='complete'), SimpleNamespace(status='complete')]
    assert derivation.derive_area_status(items) == AreaStatus.COMPLETE


def test_task_is_complete_follows_status():
    assert Task(status='complete').is_complete is True
    assert Task(status='in-progress').is_complete is False


def test_area_statuses_cover_every_task_area():
    statuses = derivation.derive_area_statuses(
        tasks('complete', area='sewing_labor') + tasks('in-progress', area='installation')
    )
    assert statuses['sewing_labor'] == AreaStatus.COMPLETE
    assert statuses['installation'] == AreaStatus.IN_PROGRESS
    assert statuses['welding_materials'] == AreaStatus.NOT_NEEDED
    assert statuses['rental_equipment'] == AreaStatus.NOT_NEEDED


def test_fully_resolved_phase_is_ready():
    phase = build_phase(statuses=RESOLVED, installation={'status': 'not-started'})

    summary = derivation.phase_summary(phase)

    assert summary.progress_percent == 100
    assert summary.is_ready is True


def test_completed_installation_is_not_ready():
    phase = build_phase(statuses=RESOLVED, installation={'status': 'complete'})

    summary = derivation.phase_summary(phase)

    assert summary.progress_percent == 100
    assert summary.is_ready is False


def test_phase_with_nothing_resolved_has_no_progress():
    phase = build_phase(statuses={
        'welding_labor': 'estimated',
        'sewing_labor': 'estimated',
        'powder_coat': 'not-started',
    })

    assert derivation.progress_percent(phase) == 0
    assert derivation.is_ready_for_install(phase) is False


def test_fresh_phase_counts_not_needed_areas_as_resolved():
    phase = build_phase()

    assert derivation.progress_percent(phase) == 50
    assert derivation.is_ready_for_install(phase) is False


def test_missing_records_fall_back_to_defaults():
    phase = build_phase(welding_materials=None, welding_labor={}, installation=None)
    phase.installation = None

    assert derivation.area_status(phase, Area.WELDING_MATERIALS) == 'not-ordered'
    assert derivation.area_status(phase, Area.WELDING_LABOR) == 'not-needed'
    assert derivation.installation_status(phase) == InstallationStatus.NOT_STARTED


def test_unknown_status_value_uses_default():
    phase = build_phase(statuses={'powder_coat': 'painted'})
    assert derivation.area_status(phase, Area.POWDER_COAT) == 'not-needed'


def test_nested_installation_status_is_read():
    phase = build_phase()
    phase.installation['status'] = {'status': 'complete'}
    assert derivation.installation_status(phase) == InstallationStatus.COMPLETE


@pytest.mark.parametrize('resolved_count', range(7))
def test_progress_is_a_sixth_step(resolved_count):
    areas = list(RESOLVED)[:resolved_count]
    statuses = {area: 'not-ordered' if 'materials' in area else 'estimated' for area in RESOLVED}
    statuses['powder_coat'] = 'in-progress'
    statuses.update({area: RESOLVED[area] for area in areas})
    phase = build_phase(statuses=statuses)

    assert derivation.progress_percent(phase) == [0, 17, 33, 50, 67, 83, 100][resolved_count]


@pytest.mark.parametrize('area, failing', [
    ('welding_materials', 'ordered'),
    ('sewing_materials', 'not-ordered'),
    ('installation_materials', 'ordered'),
    ('welding_labor', 'estimated'),
    ('sewing_labor', 'estimated'),
    ('powder_coat', 'in-progress'),
])
def test_any_unresolved_area_blocks_install(area, failing):
    statuses = dict(RESOLVED, **{area: failing})
    phase = build_phase(statuses=statuses)
    assert derivation.is_ready_for_install(phase) is False

    getattr(phase, area)['status'] = RESOLVED[area]
    assert derivation.is_ready_for_install(phase) is True


def test_phase_state():
    assert derivation.phase_state(build_phase()) == PhaseState.PENDING
    assert derivation.phase_state(build_phase(statuses={'welding_materials': 'received'})) == PhaseState.IN_PROGRESS
    assert derivation.phase_state(build_phase(installation={'status': 'in-progress'})) == PhaseState.IN_PROGRESS
    assert derivation.phase_state(build_phase(is_complete=True)) == PhaseState.COMPLETE


def test_labor_hours_default_to_zero():
    phase = build_phase(welding_labor={'status': 'estimated', 'hours': 'lots'})
    assert derivation.labor_hours(phase, Area.WELDING_LABOR) == 0.0
    assert derivation.labor_hours(phase, Area.SEWING_LABOR) == 0.0
    assert derivation.crew_hours(phase) == 4.0
