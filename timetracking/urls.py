from django.urls import path
from .views import (
    ClockInView,
    ClockOutView,
    CurrentTimeEntryView,
    TimeEntryHistoryView,
    TaskTimerView,
)

urlpatterns = [
    path('clock-in/', ClockInView.as_view(), name='clock_in'),
    path('clock-out/', ClockOutView.as_view(), name='clock_out'),
    path('current/', CurrentTimeEntryView.as_view(), name='current_time_entry'),
    path('history/', TimeEntryHistoryView.as_view(), name='time_entry_history'),
    path('tasks/<uuid:task_id>/', TaskTimerView.as_view(), name='task_timer'),
    path('tasks/<uuid:task_id>/<str:action>/', TaskTimerView.as_view(), name='task_timer_action'),
]
