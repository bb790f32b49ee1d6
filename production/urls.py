from django.urls import path
from .views import (
    ProductionOverviewView,
    ReadyForInstallView,
    DashboardView,
    UpcomingDeadlinesView,
    ActiveProjectsView,
    InProgressPhasesView,
)

urlpatterns = [
    path('', ProductionOverviewView.as_view(), name='production_overview'),
    path('ready-for-install/', ReadyForInstallView.as_view(), name='ready_for_install'),
    path('dashboard/', DashboardView.as_view(), name='production_dashboard'),
    path('upcoming-deadlines/', UpcomingDeadlinesView.as_view(), name='upcoming_deadlines'),
    path('projects/', ActiveProjectsView.as_view(), name='active_projects'),
    path('in-progress/', InProgressPhasesView.as_view(), name='in_progress_phases'),
]
