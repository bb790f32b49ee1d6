from django.contrib import admin
from .models import Job, Phase


class PhaseInline(admin.TabularInline):
    model = Phase
    fields = ('phase_number', 'phase_name', 'is_complete')
    extra = 0


@admin.register(Job)
class JobAdmin(admin.ModelAdmin):
    list_display = ('job_number', 'project_name', 'buyer', 'salesman', 'updated_at')
    search_fields = ('job_number', 'project_name', 'buyer', 'salesman')
    inlines = [PhaseInline]


@admin.register(Phase)
class PhaseAdmin(admin.ModelAdmin):
    list_display = ('__str__', 'job', 'is_complete', 'updated_at')
    list_filter = ('is_complete',)
    search_fields = ('phase_name', 'job__job_number')
