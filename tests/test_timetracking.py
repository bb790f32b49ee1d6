import datetime

import pytest
from django.utils import timezone

from tasks.models import Task, TaskAssignment
from timetracking import services
from timetracking.models import TaskTimeEntry, TimeEntry

pytestmark = pytest.mark.django_db


@pytest.fixture
def task(make_job, make_phase):
    phase = make_phase(make_job())
    return Task.objects.create(phase=phase, area='welding_labor', name='Cut frame')


def timer_url(task, action=''):
    return f"/api/time/tasks/{task.id}/{action + '/' if action else ''}"


def test_clock_in_and_out(api_client, user):
    response = api_client.post('/api/time/clock-in/')
    assert response.status_code == 201

    entry = TimeEntry.objects.get()
    entry.clock_in_time = timezone.now() - datetime.timedelta(hours=2)
    entry.save()

    response = api_client.post('/api/time/clock-out/', {'notes': 'Shop day'}, format='json')

    assert response.status_code == 200
    entry.refresh_from_db()
    assert entry.clock_out_time is not None
    assert 7190 <= entry.duration_seconds <= 7260
    assert entry.notes == 'Shop day'


def test_second_clock_in_is_a_conflict(api_client):
    api_client.post('/api/time/clock-in/')

    response = api_client.post('/api/time/clock-in/')

    assert response.status_code == 409
    assert response.data['error'] == 'You are already clocked in'
    assert response.data['entry']['id'] == str(TimeEntry.objects.get().id)


def test_clock_out_without_clock_in(api_client):
    assert api_client.post('/api/time/clock-out/').status_code == 409


def test_current_entry(api_client):
    assert api_client.get('/api/time/current/').data == {'entry': None}
    api_client.post('/api/time/clock-in/')
    assert api_client.get('/api/time/current/').data['entry'] is not None


def test_start_timer_assigns_user(api_client, task, user):
    response = api_client.post(timer_url(task, 'start'))

    assert response.status_code == 201
    assert response.data['task_name'] == 'Cut frame'
    assert TaskAssignment.objects.filter(task=task, user=user).exists()
    assert api_client.post(timer_url(task, 'start')).status_code == 409


def test_pause_resume_stop(api_client, task):
    api_client.post(timer_url(task, 'start'))

    paused = api_client.post(timer_url(task, 'pause'))
    assert paused.status_code == 200
    assert paused.data['is_paused'] is True
    assert api_client.get(timer_url(task)).data == {'entry': None}

    assert api_client.post(timer_url(task, 'resume')).status_code == 201
    stopped = api_client.post(timer_url(task, 'stop'), {'notes': 'Frame done'}, format='json')

    assert stopped.status_code == 200
    assert stopped.data['is_paused'] is False
    assert stopped.data['notes'] == 'Frame done'
    assert TaskTimeEntry.objects.count() == 2
    assert not TaskTimeEntry.objects.filter(end_time__isnull=True).exists()


def test_pause_without_timer(api_client, task):
    assert api_client.post(timer_url(task, 'pause')).status_code == 409


def test_unknown_timer_action(api_client, task):
    assert api_client.post(timer_url(task, 'rewind')).status_code == 404


def test_clock_out_pauses_and_clock_in_leaves_timers_paused(task, user):
    services.clock_in(user)
    services.start_task_timer(task, user)

    services.clock_out(user)
    assert TaskTimeEntry.objects.get().is_paused is True
    assert services.running_task_entry(task, user) is None

    services.clock_in(user)
    assert services.running_task_entry(task, user) is None
    assert TaskTimeEntry.objects.count() == 1

    services.resume_task_timer(task, user)
    assert services.running_task_entry(task, user) is not None


def test_manually_paused_timer_stays_paused_across_shifts(task, user):
    services.clock_in(user)
    services.start_task_timer(task, user)
    services.pause_task_timer(task, user)
    services.clock_out(user)

    services.clock_in(user)

    assert services.running_task_entry(task, user) is None
    assert TaskTimeEntry.objects.get().is_paused is True


def test_stopped_timers_are_not_resumed(task, user):
    services.clock_in(user)
    services.start_task_timer(task, user)
    services.stop_task_timer(task, user)
    services.clock_out(user)

    services.clock_in(user)

    assert services.running_task_entry(task, user) is None


def test_history(api_client, task):
    api_client.post('/api/time/clock-in/')
    api_client.post(timer_url(task, 'start'))

    response = api_client.get('/api/time/history/', {'limit': 5})

    assert response.status_code == 200
    assert len(response.data['time_entries']) == 1
    assert response.data['task_entries'][0]['job_number'] == '1001'
