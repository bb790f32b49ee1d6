from django.contrib import admin
from .models import TaskTimeEntry, TimeEntry


@admin.register(TimeEntry)
class TimeEntryAdmin(admin.ModelAdmin):
    list_display = ('user', 'clock_in_time', 'clock_out_time', 'duration_seconds')
    list_filter = ('user',)


@admin.register(TaskTimeEntry)
class TaskTimeEntryAdmin(admin.ModelAdmin):
    list_display = ('task_name', 'user', 'start_time', 'end_time', 'duration_seconds', 'is_paused')
    list_filter = ('is_paused',)
    search_fields = ('task_name',)
