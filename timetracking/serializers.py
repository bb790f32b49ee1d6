from rest_framework import serializers
from .models import TaskTimeEntry, TimeEntry


class TimeEntrySerializer(serializers.ModelSerializer):
    class Meta:
        model = TimeEntry
        fields = ['id', 'user', 'clock_in_time', 'clock_out_time', 'duration_seconds', 'notes', 'created_at', 'updated_at']
        read_only_fields = fields


class TaskTimeEntrySerializer(serializers.ModelSerializer):
    phase_name = serializers.CharField(source='phase.phase_name', read_only=True)
    job_number = serializers.CharField(source='phase.job.job_number', read_only=True)
    project_name = serializers.CharField(source='phase.job.project_name', read_only=True)

    class Meta:
        model = TaskTimeEntry
        fields = [
            'id',
            'task',
            'task_name',
            'user',
            'phase',
            'phase_name',
            'job_number',
            'project_name',
            'start_time',
            'end_time',
            'duration_seconds',
            'is_paused',
            'notes',
        ]
        read_only_fields = fields


class NotesSerializer(serializers.Serializer):
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class HistoryQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(required=False, min_value=1, max_value=100, default=10)
