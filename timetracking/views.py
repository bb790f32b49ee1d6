from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from tasks.models import Task
from . import services
from .models import TaskTimeEntry, TimeEntry
from .serializers import HistoryQuerySerializer, NotesSerializer, TaskTimeEntrySerializer, TimeEntrySerializer


def conflict(error, serializer_class):
    data = {"error": str(error)}
    if error.entry is not None:
        data["entry"] = serializer_class(error.entry).data
    return Response(data, status=status.HTTP_409_CONFLICT)


class ClockInView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        try:
            entry = services.clock_in(request.user)
        except services.TimerStateError as e:
            return conflict(e, TimeEntrySerializer)
        return Response(TimeEntrySerializer(entry).data, status=status.HTTP_201_CREATED)


class ClockOutView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = NotesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            entry = services.clock_out(request.user, notes=serializer.validated_data.get('notes'))
        except services.TimerStateError as e:
            return conflict(e, TimeEntrySerializer)
        return Response(TimeEntrySerializer(entry).data, status=status.HTTP_200_OK)


class CurrentTimeEntryView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        entry = services.current_time_entry(request.user)
        return Response({"entry": TimeEntrySerializer(entry).data if entry else None})


class TimeEntryHistoryView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        query = HistoryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        limit = query.validated_data['limit']

        entries = TimeEntry.objects.filter(user=request.user)[:limit]
        task_entries = (
            TaskTimeEntry.objects.filter(user=request.user)
            .select_related('phase__job')[:limit]
        )
        return Response({
            "time_entries": TimeEntrySerializer(entries, many=True).data,
            "task_entries": TaskTimeEntrySerializer(task_entries, many=True).data,
        })


class TaskTimerView(APIView):
    """
    POST with action start, pause, resume or stop. GET returns the running
    entry for this task and user, if any.
    """
    permission_classes = [IsAuthenticated]
    timer_actions = {
        'start': services.start_task_timer,
        'pause': services.pause_task_timer,
        'resume': services.resume_task_timer,
        'stop': services.stop_task_timer,
    }

    def get(self, request, task_id, action=None):
        task = get_object_or_404(Task, id=task_id)
        entry = services.running_task_entry(task, request.user)
        return Response({"entry": TaskTimeEntrySerializer(entry).data if entry else None})

    def post(self, request, task_id, action=None):
        if action not in self.timer_actions:
            return Response({"error": f"Unknown timer action '{action}'"}, status=status.HTTP_404_NOT_FOUND)
        task = get_object_or_404(Task.objects.select_related('phase'), id=task_id)

        kwargs = {}
        if action == 'stop':
            serializer = NotesSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            kwargs['notes'] = serializer.validated_data.get('notes')

        try:
            entry = self.timer_actions[action](task, request.user, **kwargs)
        except services.TimerStateError as e:
            return conflict(e, TaskTimeEntrySerializer)

        code = status.HTTP_201_CREATED if action in ('start', 'resume') else status.HTTP_200_OK
        return Response(TaskTimeEntrySerializer(entry).data, status=code)
