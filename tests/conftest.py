import pytest
from rest_framework.test import APIClient

from authentication.models import CustomUser
from jobs.models import Job, Phase


@pytest.fixture
def user(db):
    return CustomUser.objects.create_user(
        username='welder1',
        password='Sturdy-Frame-2024',
        first_name='Walt',
        last_name='Welder',
        email='walt@example.com',
        role='Welder',
        work_area='Welding',
    )


@pytest.fixture
def shop_admin(db):
    return CustomUser.objects.create_user(
        username='frontdesk',
        password='Sturdy-Frame-2024',
        email='desk@example.com',
        role='Front Office',
        work_area='Front Office',
    )


@pytest.fixture
def api_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def admin_client(shop_admin):
    client = APIClient()
    client.force_authenticate(user=shop_admin)
    return client


@pytest.fixture
def make_job(db):
    def make(job_number='1001', **fields):
        fields.setdefault('project_name', 'Harbor Market Canopy')
        fields.setdefault('buyer', 'Acme Retail')
        fields.setdefault('title', 'Canopy replacement')
        fields.setdefault('salesman', 'Dana Ruiz')
        return Job.objects.create(job_number=job_number, **fields)
    return make


@pytest.fixture
def make_phase(db):
    def make(job, phase_number=1, phase_name='Front Entrance', **fields):
        return Phase.objects.create(job=job, phase_number=phase_number, phase_name=phase_name, **fields)
    return make
