import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from jobs.models import Phase
from jobs.status import TaskArea
from .models import Task
from .serializers import (
    BulkTaskSerializer,
    TaskAssignSerializer,
    TaskSerializer,
    TaskStatusSerializer,
)
from .services import assign_user, log_task_change, unassign_user

logger = logging.getLogger('tasks')


def task_queryset():
    return Task.objects.select_related('phase__job').prefetch_related('assignments__user')


class PhaseTaskListCreateView(generics.ListCreateAPIView):
    """Tasks of one phase, filterable by area and status."""
    serializer_class = TaskSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['area', 'status']
    ordering_fields = ['created_at', 'name', 'status']

    def get_phase(self):
        if not hasattr(self, '_phase'):
            self._phase = get_object_or_404(Phase.objects.select_related('job'), id=self.kwargs['phase_id'])
        return self._phase

    def get_queryset(self):
        return task_queryset().filter(phase=self.get_phase())

    def perform_create(self, serializer):
        task = serializer.save(phase=self.get_phase())
        log_task_change(
            task,
            self.request.user,
            f"Task '{task.name}' added to {task.get_area_display()}",
            new_value={'name': task.name, 'status': task.status},
        )


class PhaseTaskBulkCreateView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, phase_id):
        phase = get_object_or_404(Phase.objects.select_related('job'), id=phase_id)
        serializer = BulkTaskSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        area = serializer.validated_data['area']
        names = serializer.validated_data['names']
        with transaction.atomic():
            tasks = [Task.objects.create(phase=phase, area=area, name=name) for name in names]
        logger.info(f"Added {len(tasks)} {area} task(s) to phase {phase.pk}")

        log_task_change(
            tasks[0],
            request.user,
            f"{len(tasks)} task(s) added to {TaskArea(area).label}",
            new_value={'names': names},
        )
        return Response(TaskSerializer(tasks, many=True).data, status=status.HTTP_201_CREATED)


class TaskDetailView(generics.RetrieveUpdateDestroyAPIView):
    serializer_class = TaskSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return task_queryset()

    def perform_update(self, serializer):
        previous = {'name': serializer.instance.name, 'status': serializer.instance.status}
        task = serializer.save()
        log_task_change(
            task,
            self.request.user,
            f"Task '{task.name}' updated",
            previous_value=previous,
            new_value={'name': task.name, 'status': task.status},
        )

    def perform_destroy(self, instance):
        name = instance.name
        instance.delete()
        log_task_change(instance, self.request.user, f"Task '{name}' deleted", previous_value={'name': name})


class TaskStatusView(APIView):
    permission_classes = [IsAuthenticated]

    def patch(self, request, pk):
        task = get_object_or_404(task_queryset(), pk=pk)
        serializer = TaskStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        previous = task.status
        task.status = serializer.validated_data['status']
        task.save(update_fields=['status', 'updated_at'])
        if previous != task.status:
            log_task_change(
                task,
                request.user,
                f"Task '{task.name}' changed from {previous} to {task.status}",
                previous_value={'status': previous},
                new_value={'status': task.status},
            )
        return Response(TaskSerializer(task).data, status=status.HTTP_200_OK)


class TaskAssigneeView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, pk):
        task = get_object_or_404(task_queryset(), pk=pk)
        serializer = TaskAssignSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        user = get_object_or_404(get_user_model(), id=serializer.validated_data['user'], is_active=True)
        _, created = assign_user(task, user, assigned_by=request.user)
        if created:
            log_task_change(task, request.user, f"{user.username} assigned to task '{task.name}'")
        task = task_queryset().get(pk=task.pk)
        return Response(
            TaskSerializer(task).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    def delete(self, request, pk, user_id):
        task = get_object_or_404(task_queryset(), pk=pk)
        user = get_object_or_404(get_user_model(), id=user_id)
        if unassign_user(task, user):
            log_task_change(task, request.user, f"{user.username} unassigned from task '{task.name}'")
        return Response(status=status.HTTP_204_NO_CONTENT)
