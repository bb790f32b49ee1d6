from django.urls import path
from .views import (
    JobListCreateView,
    JobDetailView,
    JobByNumberView,
    PhaseListCreateView,
    PhaseDetailView,
    PhaseStatusUpdateView,
    PhaseCompletionView,
    PhaseAppointmentsView,
)

urlpatterns = [
    path('', JobListCreateView.as_view(), name='job_list_create'),
    path('<uuid:id>/', JobDetailView.as_view(), name='job_detail'),
    path('by-number/<str:job_number>/', JobByNumberView.as_view(), name='job_by_number'),

    path('<uuid:job_id>/phases/', PhaseListCreateView.as_view(), name='phase_list_create'),
    path('<uuid:job_id>/phases/<uuid:phase_id>/', PhaseDetailView.as_view(), name='phase_detail'),
    path('<uuid:job_id>/phases/<uuid:phase_id>/status/', PhaseStatusUpdateView.as_view(), name='phase_status_update'),
    path('<uuid:job_id>/phases/<uuid:phase_id>/complete/', PhaseCompletionView.as_view(), name='phase_completion'),
    path('<uuid:job_id>/phases/<uuid:phase_id>/appointments/', PhaseAppointmentsView.as_view(), name='phase_appointments'),
]
