from django.urls import path
from .views import (
    PhaseTaskListCreateView,
    PhaseTaskBulkCreateView,
    TaskDetailView,
    TaskStatusView,
    TaskAssigneeView,
)

urlpatterns = [
    path('phases/<uuid:phase_id>/', PhaseTaskListCreateView.as_view(), name='phase_task_list_create'),
    path('phases/<uuid:phase_id>/bulk/', PhaseTaskBulkCreateView.as_view(), name='phase_task_bulk_create'),
    path('<uuid:pk>/', TaskDetailView.as_view(), name='task_detail'),
    path('<uuid:pk>/status/', TaskStatusView.as_view(), name='task_status'),
    path('<uuid:pk>/assignees/', TaskAssigneeView.as_view(), name='task_assign'),
    path('<uuid:pk>/assignees/<int:user_id>/', TaskAssigneeView.as_view(), name='task_unassign'),
]
