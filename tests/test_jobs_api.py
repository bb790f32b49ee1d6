import pytest

from activity.models import ActivityLog
from jobs.models import Job, Phase

pytestmark = pytest.mark.django_db

JOBS_URL = '/api/jobs/'


def phase_url(job, phase, suffix=''):
    return f"{JOBS_URL}{job.id}/phases/{phase.id}/{suffix}"


def test_requires_authentication(client):
    assert client.get(JOBS_URL).status_code == 401


def test_create_job_logs_activity(api_client, user):
    response = api_client.post(JOBS_URL, {
        'job_number': ' 1001 ',
        'project_name': 'Harbor Market Canopy',
        'buyer': 'Acme Retail',
        'title': 'Canopy replacement',
        'salesman': 'Dana Ruiz',
    }, format='json')

    assert response.status_code == 201
    assert response.data['job_number'] == '1001'
    log = ActivityLog.objects.get(activity_type='job_created')
    assert log.user == user


def test_duplicate_job_number_is_rejected(api_client, make_job):
    make_job('1001')

    response = api_client.post(JOBS_URL, {
        'job_number': '1001',
        'project_name': 'Other',
        'buyer': 'Other',
        'title': 'Other',
        'salesman': 'Other',
    }, format='json')

    assert response.status_code == 400
    assert response.data['job_number'] == ['Job number 1001 already exists']


def test_update_job_records_changed_fields(api_client, make_job):
    job = make_job('1001')

    response = api_client.patch(f"{JOBS_URL}{job.id}/", {'buyer': 'New Buyer'}, format='json')

    assert response.status_code == 200
    log = ActivityLog.objects.get(activity_type='job_update')
    assert log.field_name == 'buyer'
    assert log.new_value == {'buyer': 'New Buyer'}


def test_lookup_by_job_number(api_client, make_job, make_phase):
    job = make_job('J2023-001')
    make_phase(job)

    response = api_client.get(f"{JOBS_URL}by-number/J2023-001/")

    assert response.status_code == 200
    assert response.data['id'] == str(job.id)
    assert len(response.data['phases']) == 1


def test_create_phase_applies_defaults(api_client, make_job):
    job = make_job()

    response = api_client.post(f"{JOBS_URL}{job.id}/phases/", {
        'phase_name': 'Side Patio',
        'phase_number': 2,
        'welding_labor': {'status': 'estimated', 'hours': 6},
    }, format='json')

    assert response.status_code == 201
    data = response.data
    assert data['welding_materials']['status'] == 'not-ordered'
    assert data['welding_labor']['status'] == 'estimated'
    assert data['welding_labor']['hours'] == 6.0
    assert data['installation']['crew_members_needed'] == 2
    assert data['installation']['rental_equipment']['status'] == 'not-needed'
    assert data['progress_percent'] == 33
    assert data['phase_state'] == 'in-progress'
    assert ActivityLog.objects.filter(activity_type='phase_added').count() == 1


def test_duplicate_phase_number_is_rejected(api_client, make_job, make_phase):
    job = make_job()
    make_phase(job, phase_number=1)

    response = api_client.post(f"{JOBS_URL}{job.id}/phases/", {
        'phase_name': 'Again',
        'phase_number': 1,
    }, format='json')

    assert response.status_code == 400
    assert response.data['phase_number'] == ['Phase number 1 already exists for this job']


def test_same_phase_number_on_another_job_is_fine(api_client, make_job, make_phase):
    make_phase(make_job('1001'), phase_number=1)
    other = make_job('1002')

    response = api_client.post(f"{JOBS_URL}{other.id}/phases/", {
        'phase_name': 'Front',
        'phase_number': 1,
    }, format='json')

    assert response.status_code == 201


def test_phase_update_merges_records(api_client, make_job, make_phase):
    job = make_job()
    phase = make_phase(job, installation_materials={'status': 'ordered', 'notes': 'bolts'})

    response = api_client.patch(phase_url(job, phase), {
        'installation_materials': {'status': 'received'},
    }, format='json')

    assert response.status_code == 200
    phase.refresh_from_db()
    assert phase.installation_materials == {'status': 'received', 'notes': 'bolts'}


def test_status_update_for_area(api_client, make_job, make_phase):
    job = make_job()
    phase = make_phase(job)

    response = api_client.patch(phase_url(job, phase, 'status/'), {
        'target': 'welding_materials',
        'changes': {'status': 'ordered', 'eta': '2024-06-01'},
    }, format='json')

    assert response.status_code == 200
    phase.refresh_from_db()
    assert phase.welding_materials == {'status': 'ordered', 'eta': '2024-06-01'}
    log = ActivityLog.objects.get(activity_type='status_update')
    assert log.field_name == 'welding_materials'
    assert 'from not-ordered to ordered' in log.description


def test_status_update_for_rental_equipment(api_client, make_job, make_phase):
    job = make_job()
    phase = make_phase(job)

    response = api_client.patch(phase_url(job, phase, 'status/'), {
        'target': 'installation.rental_equipment',
        'changes': {'status': 'ordered', 'details': 'scissor lift'},
    }, format='json')

    assert response.status_code == 200
    phase.refresh_from_db()
    assert phase.installation['rental_equipment'] == {'status': 'ordered', 'details': 'scissor lift'}
    assert phase.installation['crew_hours_needed'] == 4


@pytest.mark.parametrize('payload', [
    {'target': 'installation.rentalEquipment.status', 'changes': {'status': 'ordered'}},
    {'target': 'welding_labor', 'changes': {'status': 'received'}},
    {'target': 'powder_coat', 'changes': {'color': 'black'}},
])
def test_bad_status_updates_are_rejected(api_client, make_job, make_phase, payload):
    job = make_job()
    phase = make_phase(job)

    response = api_client.patch(phase_url(job, phase, 'status/'), payload, format='json')

    assert response.status_code == 400
    assert 'errors' in response.data


def test_completing_installation_completes_phase(api_client, make_job, make_phase, user):
    job = make_job()
    phase = make_phase(job)

    response = api_client.patch(phase_url(job, phase, 'status/'), {
        'target': 'installation',
        'changes': {'status': 'complete'},
    }, format='json')

    assert response.status_code == 200
    assert response.data['is_complete'] is True
    assert response.data['is_ready_for_install'] is False
    completion = ActivityLog.objects.get(activity_type='phase_update', field_name='is_complete')
    assert completion.user == user


def test_mark_phase_complete_and_back(api_client, make_job, make_phase):
    job = make_job()
    phase = make_phase(job)

    assert api_client.post(phase_url(job, phase, 'complete/'), {'is_complete': True}, format='json').status_code == 200
    assert api_client.post(phase_url(job, phase, 'complete/'), {'is_complete': False}, format='json').status_code == 200

    phase.refresh_from_db()
    assert phase.is_complete is False
    descriptions = list(
        ActivityLog.objects.filter(field_name='is_complete').order_by('created_at').values_list('description', flat=True)
    )
    assert descriptions == [
        'Phase 1: Front Entrance was marked as complete',
        'Phase 1: Front Entrance was marked as incomplete',
    ]


def test_completion_flag_must_be_boolean(api_client, make_job, make_phase):
    job = make_job()
    phase = make_phase(job)

    response = api_client.post(phase_url(job, phase, 'complete/'), {'is_complete': 'yes'}, format='json')

    assert response.status_code == 400


def test_delete_phase_keeps_history(api_client, make_job, make_phase):
    job = make_job()
    phase = make_phase(job)

    response = api_client.delete(phase_url(job, phase))

    assert response.status_code == 204
    assert not Phase.objects.filter(id=phase.id).exists()
    assert ActivityLog.objects.filter(job=job, activity_type='phase_deleted').exists()


def test_phase_from_another_job_is_not_found(api_client, make_job, make_phase):
    phase = make_phase(make_job('1001'))
    other = make_job('1002')

    assert api_client.get(phase_url(other, phase)).status_code == 404


def test_appointments(api_client, make_job, make_phase):
    job = make_job()
    phase = make_phase(job)

    assert api_client.get(phase_url(job, phase, 'appointments/')).status_code == 400

    phase.installation['install_start_date'] = '2024-05-06'
    phase.save()
    response = api_client.get(phase_url(job, phase, 'appointments/'))

    assert response.status_code == 200
    assert len(response.data['appointments']) == 1
    assert response.data['title'].startswith('[Phase 1]-[1001]')


@pytest.mark.parametrize('crew_hours, expected', [(1000, 200), (1000.5, 400), (2e7, 400)])
def test_crew_hours_are_capped(api_client, make_job, make_phase, crew_hours, expected):
    job = make_job()
    phase = make_phase(job)

    response = api_client.patch(phase_url(job, phase, 'status/'), {
        'target': 'installation',
        'changes': {'status': 'in-progress', 'crew_hours_needed': crew_hours},
    }, format='json')

    assert response.status_code == expected


def test_appointments_refuse_oversized_crew_hours(api_client, make_job, make_phase):
    job = make_job()
    phase = make_phase(job)
    phase.installation.update(install_start_date='2024-05-06', crew_hours_needed=2e7)
    phase.save()

    response = api_client.get(phase_url(job, phase, 'appointments/'))

    assert response.status_code == 400
    assert response.data['error'] == 'Crew hours cannot exceed 1000'


def test_deleting_job_removes_phases(api_client, make_job, make_phase):
    job = make_job()
    make_phase(job)

    assert api_client.delete(f"{JOBS_URL}{job.id}/").status_code == 204
    assert not Job.objects.exists()
    assert not Phase.objects.exists()


def test_job_search(api_client, make_job, make_phase):
    make_phase(make_job('1001', buyer='Harbor Foods'), phase_name='Loading Dock')
    make_job('2002')

    by_buyer = api_client.get(JOBS_URL, {'search': 'harbor foods'})
    by_phase = api_client.get(JOBS_URL, {'search': 'dock'})

    assert [job['job_number'] for job in by_buyer.data] == ['1001']
    assert [job['job_number'] for job in by_phase.data] == ['1001']
