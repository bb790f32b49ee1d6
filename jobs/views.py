import logging

from django.db.models import Prefetch
from django.shortcuts import get_object_or_404
from rest_framework import filters, generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from activity.services import log_activity
from tasks.models import Task
from .models import Job, Phase
from .scheduling import calendar_title, installation_appointments
from .serializers import JobSerializer, PhaseSerializer, PhaseStatusUpdateSerializer
from .services import apply_status_update, set_phase_completion, touch_job

logger = logging.getLogger('jobs')

JOB_FIELDS = ['job_number', 'project_name', 'buyer', 'title', 'salesman', 'drawings_url', 'worksheet_url']


def phases_with_tasks():
    return Phase.objects.select_related('job').prefetch_related(
        Prefetch('tasks', queryset=Task.objects.order_by('created_at'))
    )


def jobs_with_phases():
    return Job.objects.prefetch_related(Prefetch('phases', queryset=phases_with_tasks()))


class JobListCreateView(generics.ListCreateAPIView):
    serializer_class = JobSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['job_number', 'project_name', 'buyer', 'salesman', 'phases__phase_name']
    ordering_fields = ['job_number', 'created_at', 'updated_at']

    def get_queryset(self):
        return jobs_with_phases()

    def perform_create(self, serializer):
        job = serializer.save()
        logger.info(f"Job {job.job_number} created")
        log_activity(
            job=job,
            user=self.request.user,
            activity_type='job_created',
            description=f"Job {job.job_number} was created",
        )


class JobDetailView(generics.RetrieveUpdateDestroyAPIView):
    serializer_class = JobSerializer
    permission_classes = [IsAuthenticated]
    lookup_field = 'id'

    def get_queryset(self):
        return jobs_with_phases()

    def perform_update(self, serializer):
        before = {field: getattr(serializer.instance, field) for field in JOB_FIELDS}
        job = serializer.save()
        after = {field: getattr(job, field) for field in JOB_FIELDS}
        changed = sorted(field for field in JOB_FIELDS if before[field] != after[field])
        if changed:
            log_activity(
                job=job,
                user=self.request.user,
                activity_type='job_update',
                description=f"Job details updated: {', '.join(changed)}",
                field_name=','.join(changed),
                previous_value={field: before[field] for field in changed},
                new_value={field: after[field] for field in changed},
            )


class JobByNumberView(generics.RetrieveAPIView):
    serializer_class = JobSerializer
    permission_classes = [IsAuthenticated]
    lookup_field = 'job_number'

    def get_queryset(self):
        return jobs_with_phases()


class PhaseListCreateView(generics.ListCreateAPIView):
    serializer_class = PhaseSerializer
    permission_classes = [IsAuthenticated]

    def get_job(self):
        if not hasattr(self, '_job'):
            self._job = get_object_or_404(Job, id=self.kwargs['job_id'])
        return self._job

    def get_queryset(self):
        return phases_with_tasks().filter(job=self.get_job())

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['job'] = self.get_job()
        return context

    def perform_create(self, serializer):
        job = self.get_job()
        phase = serializer.save(job=job)
        touch_job(job.pk)
        log_activity(
            job=job,
            phase=phase,
            user=self.request.user,
            activity_type='phase_added',
            description=f"Phase {phase.phase_number}: {phase.phase_name} was added to the job",
        )


class PhaseDetailView(generics.RetrieveUpdateDestroyAPIView):
    serializer_class = PhaseSerializer
    permission_classes = [IsAuthenticated]
    lookup_field = 'id'
    lookup_url_kwarg = 'phase_id'

    def get_queryset(self):
        return phases_with_tasks().filter(job_id=self.kwargs['job_id'])

    def perform_update(self, serializer):
        serializer.instance._changed_by = self.request.user
        changed = sorted(serializer.validated_data)
        phase = serializer.save()
        touch_job(phase.job_id)
        log_activity(
            job=phase.job,
            phase=phase,
            user=self.request.user,
            activity_type='phase_update',
            description=f"Phase {phase.phase_number}: {phase.phase_name} was updated",
            field_name=','.join(changed) or None,
        )

    def perform_destroy(self, instance):
        job = instance.job
        description = f"Phase {instance.phase_number}: {instance.phase_name} was deleted"
        instance.delete()
        touch_job(job.pk)
        log_activity(
            job=job,
            user=self.request.user,
            activity_type='phase_deleted',
            description=description,
        )


class PhaseStatusUpdateView(APIView):
    permission_classes = [IsAuthenticated]

    def patch(self, request, job_id, phase_id):
        phase = get_object_or_404(Phase.objects.select_related('job'), id=phase_id, job_id=job_id)
        serializer = PhaseStatusUpdateSerializer(data=request.data)
        if serializer.is_valid():
            phase = apply_status_update(
                phase,
                serializer.validated_data['target'],
                serializer.validated_data['changes'],
                user=request.user,
            )
            phase = phases_with_tasks().get(pk=phase.pk)
            return Response(PhaseSerializer(phase).data, status=status.HTTP_200_OK)
        return Response({"errors": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)


class PhaseCompletionView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, job_id, phase_id):
        phase = get_object_or_404(Phase.objects.select_related('job'), id=phase_id, job_id=job_id)
        is_complete = request.data.get('is_complete', True)
        if not isinstance(is_complete, bool):
            return Response({"error": "is_complete must be true or false"}, status=status.HTTP_400_BAD_REQUEST)

        set_phase_completion(phase, is_complete, user=request.user)
        phase = phases_with_tasks().get(pk=phase.pk)
        return Response(PhaseSerializer(phase).data, status=status.HTTP_200_OK)


class PhaseAppointmentsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, job_id, phase_id):
        phase = get_object_or_404(Phase.objects.select_related('job'), id=phase_id, job_id=job_id)
        try:
            appointments = installation_appointments(phase)
        except ValueError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({
            'title': calendar_title(phase.job, phase),
            'appointments': [
                {'start': appointment.start, 'end': appointment.end}
                for appointment in appointments
            ],
        })
