from rest_framework import serializers

from jobs import derivation
from jobs.models import Job, Phase


class JobBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Job
        fields = ['id', 'job_number', 'project_name', 'buyer', 'title', 'salesman']


class ProductionPhaseSerializer(serializers.ModelSerializer):
    """A phase as shown on the production boards, with its job's headline fields."""
    job = JobBriefSerializer(read_only=True)
    progress_percent = serializers.SerializerMethodField()
    is_ready_for_install = serializers.SerializerMethodField()
    phase_state = serializers.SerializerMethodField()

    class Meta:
        model = Phase
        fields = [
            'id',
            'job',
            'phase_name',
            'phase_number',
            'welding_materials',
            'sewing_materials',
            'welding_labor',
            'sewing_labor',
            'installation_materials',
            'powder_coat',
            'installation',
            'is_complete',
            'progress_percent',
            'is_ready_for_install',
            'phase_state',
            'updated_at',
        ]
        read_only_fields = fields

    def get_progress_percent(self, obj):
        return derivation.progress_percent(obj)

    def get_is_ready_for_install(self, obj):
        return derivation.is_ready_for_install(obj)

    def get_phase_state(self, obj):
        return derivation.phase_state(obj)


def serialize_pairs(pairs):
    return ProductionPhaseSerializer([pair.phase for pair in pairs], many=True).data
