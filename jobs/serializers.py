import datetime

from rest_framework import serializers

from tasks.serializers import TaskSerializer
from . import derivation
from .models import (
    Job,
    Phase,
    default_installation,
    default_labor,
    default_material,
    default_powder_coat,
)
from .scheduling import MAX_CREW_HOURS
from .status import (
    InstallationStatus,
    LaborStatus,
    MaterialStatus,
    PowderCoatStatus,
    RentalEquipmentStatus,
    StatusTarget,
)


class RecordSerializer(serializers.Serializer):
    """
    Validates one JSON status record of a phase. Dates are stored back as
    ISO strings so the record stays JSON-serialisable.
    """

    def to_internal_value(self, data):
        validated = super().to_internal_value(data)
        for key, value in validated.items():
            if isinstance(value, (datetime.date, datetime.datetime)):
                validated[key] = value.isoformat()
        return validated


class MaterialSerializer(RecordSerializer):
    status = serializers.ChoiceField(choices=MaterialStatus.choices, required=False)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    eta = serializers.DateField(required=False, allow_null=True)


class LaborSerializer(RecordSerializer):
    status = serializers.ChoiceField(choices=LaborStatus.choices, required=False)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    hours = serializers.FloatField(required=False, allow_null=True, min_value=0)
    due_date = serializers.DateField(required=False, allow_null=True)


class PowderCoatSerializer(RecordSerializer):
    status = serializers.ChoiceField(choices=PowderCoatStatus.choices, required=False)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    eta = serializers.DateField(required=False, allow_null=True)
    color = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class RentalEquipmentSerializer(RecordSerializer):
    status = serializers.ChoiceField(choices=RentalEquipmentStatus.choices, required=False)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    details = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class InstallationSerializer(RecordSerializer):
    status = serializers.ChoiceField(choices=InstallationStatus.choices, required=False)
    crew_members_needed = serializers.IntegerField(required=False, min_value=0)
    crew_hours_needed = serializers.FloatField(required=False, min_value=0, max_value=MAX_CREW_HOURS)
    site_ready_date = serializers.DateField(required=False, allow_null=True)
    install_deadline = serializers.DateField(required=False, allow_null=True)
    install_start_date = serializers.DateField(required=False, allow_null=True)
    install_finish_date = serializers.DateField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    rental_equipment = RentalEquipmentSerializer(required=False)


RECORD_FIELDS = {
    'welding_materials': default_material,
    'sewing_materials': default_material,
    'welding_labor': default_labor,
    'sewing_labor': default_labor,
    'installation_materials': default_material,
    'powder_coat': default_powder_coat,
    'installation': default_installation,
}


def merge_record(current, changes):
    """Overlay validated changes on a stored record, one nesting level deep."""
    merged = dict(current or {})
    for key, value in changes.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


class PhaseSerializer(serializers.ModelSerializer):
    job_number = serializers.CharField(source='job.job_number', read_only=True)
    welding_materials = MaterialSerializer(required=False)
    sewing_materials = MaterialSerializer(required=False)
    welding_labor = LaborSerializer(required=False)
    sewing_labor = LaborSerializer(required=False)
    installation_materials = MaterialSerializer(required=False)
    powder_coat = PowderCoatSerializer(required=False)
    installation = InstallationSerializer(required=False)

    progress_percent = serializers.SerializerMethodField()
    is_ready_for_install = serializers.SerializerMethodField()
    phase_state = serializers.SerializerMethodField()
    area_statuses = serializers.SerializerMethodField()
    tasks = TaskSerializer(many=True, read_only=True)

    class Meta:
        model = Phase
        fields = [
            'id',
            'job',
            'job_number',
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
            'area_statuses',
            'tasks',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'job', 'created_at', 'updated_at']
        validators = []

    def get_progress_percent(self, obj):
        return derivation.progress_percent(obj)

    def get_is_ready_for_install(self, obj):
        return derivation.is_ready_for_install(obj)

    def get_phase_state(self, obj):
        return derivation.phase_state(obj)

    def get_area_statuses(self, obj):
        return derivation.derive_area_statuses(obj.tasks.all())

    def validate_phase_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Please enter a phase name.")
        return value.strip()

    def validate_phase_number(self, value):
        if value <= 0:
            raise serializers.ValidationError("Please enter a valid phase number.")
        job = self.instance.job if self.instance else self.context.get('job')
        if job is not None:
            clashes = Phase.objects.filter(job=job, phase_number=value)
            if self.instance:
                clashes = clashes.exclude(pk=self.instance.pk)
            if clashes.exists():
                raise serializers.ValidationError(f"Phase number {value} already exists for this job")
        return value

    def create(self, validated_data):
        for field, default in RECORD_FIELDS.items():
            validated_data[field] = merge_record(default(), validated_data.get(field, {}))
        return Phase.objects.create(**validated_data)

    def update(self, instance, validated_data):
        for field in RECORD_FIELDS:
            if field in validated_data:
                validated_data[field] = merge_record(getattr(instance, field), validated_data[field])
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()
        return instance


class JobSerializer(serializers.ModelSerializer):
    phases = PhaseSerializer(many=True, read_only=True)

    class Meta:
        model = Job
        fields = [
            'id',
            'job_number',
            'project_name',
            'buyer',
            'title',
            'salesman',
            'drawings_url',
            'worksheet_url',
            'phases',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        extra_kwargs = {'job_number': {'validators': []}}

    def validate_job_number(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Job number is required.")
        clashes = Job.objects.filter(job_number=value)
        if self.instance:
            clashes = clashes.exclude(pk=self.instance.pk)
        if clashes.exists():
            raise serializers.ValidationError(f"Job number {value} already exists")
        return value


STATUS_TARGET_SERIALIZERS = {
    StatusTarget.WELDING_MATERIALS: MaterialSerializer,
    StatusTarget.SEWING_MATERIALS: MaterialSerializer,
    StatusTarget.INSTALLATION_MATERIALS: MaterialSerializer,
    StatusTarget.WELDING_LABOR: LaborSerializer,
    StatusTarget.SEWING_LABOR: LaborSerializer,
    StatusTarget.POWDER_COAT: PowderCoatSerializer,
    StatusTarget.INSTALLATION: InstallationSerializer,
    StatusTarget.RENTAL_EQUIPMENT: RentalEquipmentSerializer,
}


class PhaseStatusUpdateSerializer(serializers.Serializer):
    """
    Change the status (and companion fields) of exactly one sub-record of a
    phase. The target is a closed set, and the payload is validated with the
    record serializer of that target.
    """
    target = serializers.ChoiceField(choices=StatusTarget.choices)
    changes = serializers.DictField()

    def validate(self, attrs):
        record_serializer = STATUS_TARGET_SERIALIZERS[attrs['target']](data=attrs['changes'])
        if not record_serializer.is_valid():
            raise serializers.ValidationError({'changes': record_serializer.errors})
        if 'status' not in record_serializer.validated_data:
            raise serializers.ValidationError({'changes': {'status': ["This field is required."]}})
        attrs['changes'] = dict(record_serializer.validated_data)
        return attrs
