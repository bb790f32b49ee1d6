import json

from rest_framework import serializers

from jobs.status import TaskArea, TaskStatus
from .models import Task, TaskAssignment


def parse_task_name(name):
    """
    Older clients stored task names as JSON objects like '{"name": "Cut frame"}'.
    Unwrap those, and return anything else unchanged.
    """
    if not name:
        return ''
    if name.startswith('{') and 'name' in name:
        try:
            parsed = json.loads(name)
        except ValueError:
            return name
        if isinstance(parsed, dict) and parsed.get('name'):
            return str(parsed['name'])
    return name


class TaskAssignmentSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source='user.username', read_only=True)
    full_name = serializers.SerializerMethodField()

    class Meta:
        model = TaskAssignment
        fields = ['id', 'user', 'username', 'full_name', 'assigned_by', 'assigned_at']
        read_only_fields = fields

    def get_full_name(self, obj):
        return obj.user.get_full_name() or obj.user.username


class TaskSerializer(serializers.ModelSerializer):
    # Accepted on input for older clients; status stays the stored field
    is_complete = serializers.BooleanField(required=False, allow_null=True)
    assignments = TaskAssignmentSerializer(many=True, read_only=True)

    class Meta:
        model = Task
        fields = [
            'id',
            'phase',
            'area',
            'name',
            'status',
            'is_complete',
            'hours',
            'eta',
            'notes',
            'assignments',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'phase', 'created_at', 'updated_at']

    def validate_name(self, value):
        value = parse_task_name(value).strip()
        if not value:
            raise serializers.ValidationError("Task name is required.")
        return value

    def validate_hours(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError("Hours cannot be negative.")
        return value

    def validate(self, attrs):
        is_complete = attrs.pop('is_complete', None)
        if is_complete is None:
            return attrs

        status = attrs.get('status')
        if status is None:
            attrs['status'] = TaskStatus.COMPLETE if is_complete else TaskStatus.IN_PROGRESS
        elif (status == TaskStatus.COMPLETE) != is_complete:
            raise serializers.ValidationError(
                {'is_complete': f"is_complete={str(is_complete).lower()} conflicts with status '{status}'."}
            )
        return attrs


class TaskStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TaskStatus.choices)


class BulkTaskSerializer(serializers.Serializer):
    area = serializers.ChoiceField(choices=TaskArea.choices)
    names = serializers.ListField(child=serializers.CharField(allow_blank=True), allow_empty=False)

    def validate_names(self, value):
        names = [parse_task_name(name).strip() for name in value]
        names = [name for name in names if name]
        if not names:
            raise serializers.ValidationError("Please enter at least one task name.")
        return names


class TaskAssignSerializer(serializers.Serializer):
    user = serializers.IntegerField()
