from django.conf import settings
from django.db.models import Prefetch
from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from jobs.models import Job, Phase
from jobs.status import AREA_VOCABULARY, InstallationStatus, PhaseState, StatusTarget
from . import aggregation
from .serializers import JobBriefSerializer, ProductionPhaseSerializer, serialize_pairs


def load_pairs():
    phases = Phase.objects.select_related('job').order_by('job__job_number', 'phase_number')
    return aggregation.pair_phases(phases)


class ProductionOverviewView(APIView):
    """Welding, sewing and ready-for-install boards with their hour totals."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        partitions = aggregation.partition_production(aggregation.in_progress(load_pairs()))
        return Response({
            'welding': serialize_pairs(partitions.welding),
            'sewing': serialize_pairs(partitions.sewing),
            'ready_for_install': serialize_pairs(partitions.ready_for_install),
            'welding_hours': partitions.welding_hours,
            'sewing_hours': partitions.sewing_hours,
            'install_hours': partitions.install_hours,
        })


class ReadyForInstallView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        ready = aggregation.partition_production(aggregation.in_progress(load_pairs())).ready_for_install
        return Response([
            {
                'job': JobBriefSerializer(job).data,
                'phases': ProductionPhaseSerializer(phases, many=True).data,
            }
            for job, phases in aggregation.group_by_job(ready)
        ])


class DashboardView(APIView):
    """
    Phase list for the dashboard.

    Query params: ``q`` (free text), ``area`` and ``status`` (stored status of
    one area), ``state`` (pending, in-progress or complete).
    """
    permission_classes = [IsAuthenticated]
    filterable_areas = {target.value for target in StatusTarget} - {StatusTarget.RENTAL_EQUIPMENT.value}

    def status_vocabulary(self, area):
        if not area:
            return ()
        if area == StatusTarget.INSTALLATION:
            return InstallationStatus.values
        return AREA_VOCABULARY[area].values

    def get(self, request):
        query = request.query_params.get('q', '')
        area = request.query_params.get('area')
        status_value = request.query_params.get('status')
        state = request.query_params.get('state')

        if area and area not in self.filterable_areas:
            return Response({"error": f"Unknown area '{area}'"}, status=status.HTTP_400_BAD_REQUEST)
        if status_value and status_value not in self.status_vocabulary(area):
            return Response(
                {"error": f"Unknown status '{status_value}' for area '{area}'"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        if state and state not in PhaseState.values:
            return Response({"error": f"Unknown state '{state}'"}, status=status.HTTP_400_BAD_REQUEST)

        pairs = load_pairs()
        filtered = aggregation.filter_phases(pairs, query=query, area=area, status=status_value, state=state)
        return Response({
            'counts': aggregation.dashboard_counts(pairs),
            'count': len(filtered),
            'results': serialize_pairs(filtered),
        })


class UpcomingDeadlinesView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        deadlines = aggregation.upcoming_deadlines(
            aggregation.in_progress(load_pairs()),
            timezone.localdate(),
            window_days=settings.UPCOMING_DEADLINE_DAYS,
            limit=settings.UPCOMING_DEADLINE_LIMIT,
        )
        return Response([
            {
                'date': deadline.date,
                'kind': deadline.kind,
                'phase': ProductionPhaseSerializer(deadline.phase).data,
            }
            for deadline in deadlines
        ])


class ActiveProjectsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        jobs = Job.objects.prefetch_related(
            Prefetch('phases', queryset=Phase.objects.order_by('phase_number'))
        )
        groups = aggregation.active_jobs((job, list(job.phases.all())) for job in jobs)
        return Response([
            {
                'job': JobBriefSerializer(job).data,
                'phase_count': len(phases),
                'completed_phase_count': sum(1 for phase in phases if phase.is_complete),
                'completion_percent': aggregation.job_completion_percent(phases),
            }
            for job, phases in groups
        ])


class InProgressPhasesView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(serialize_pairs(aggregation.in_progress(load_pairs())))
