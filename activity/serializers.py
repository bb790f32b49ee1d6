from rest_framework import serializers
from .models import ActivityLog


class ActivityLogSerializer(serializers.ModelSerializer):
    user = serializers.StringRelatedField()
    phase_name = serializers.CharField(source='phase.phase_name', read_only=True, default=None)

    class Meta:
        model = ActivityLog
        fields = [
            'id',
            'job',
            'phase',
            'phase_name',
            'user',
            'activity_type',
            'description',
            'field_name',
            'previous_value',
            'new_value',
            'created_at',
        ]
