from django.urls import path
from .views import JobActivityListView, PhaseActivityListView, JobActivityExportView

urlpatterns = [
    path('jobs/<uuid:job_id>/', JobActivityListView.as_view(), name='job_activity_list'),
    path('jobs/<uuid:job_id>/export/', JobActivityExportView.as_view(), name='job_activity_export'),
    path('jobs/<uuid:job_id>/phases/<uuid:phase_id>/', PhaseActivityListView.as_view(), name='phase_activity_list'),
]
