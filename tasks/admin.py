from django.contrib import admin
from .models import Task, TaskAssignment


class TaskAssignmentInline(admin.TabularInline):
    model = TaskAssignment
    fk_name = 'task'
    extra = 0


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ('name', 'phase', 'area', 'status', 'updated_at')
    list_filter = ('area', 'status')
    search_fields = ('name', 'phase__phase_name', 'phase__job__job_number')
    inlines = [TaskAssignmentInline]
