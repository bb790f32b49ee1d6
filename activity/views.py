from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.generics import ListAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from jobs.models import Job, Phase
from .export import render_activity_pdf
from .models import ActivityLog
from .serializers import ActivityLogSerializer


class JobActivityListView(ListAPIView):
    serializer_class = ActivityLogSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['activity_type', 'user']

    def get_queryset(self):
        job = get_object_or_404(Job, id=self.kwargs['job_id'])
        return ActivityLog.objects.filter(job=job).select_related('user', 'phase')


class PhaseActivityListView(ListAPIView):
    serializer_class = ActivityLogSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['activity_type', 'user']

    def get_queryset(self):
        phase = get_object_or_404(Phase, id=self.kwargs['phase_id'], job_id=self.kwargs['job_id'])
        return ActivityLog.objects.filter(job_id=phase.job_id, phase=phase).select_related('user', 'phase')


class JobActivityExportView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, job_id):
        job = get_object_or_404(Job, id=job_id)
        activities = ActivityLog.objects.filter(job=job)
        pdf_bytes = render_activity_pdf(job, activities)

        response = HttpResponse(pdf_bytes, content_type='application/pdf')
        response['Content-Disposition'] = f'attachment; filename="activity-log-{job.job_number}.pdf"'
        return response
