from django.contrib import admin
from .models import ActivityLog


@admin.register(ActivityLog)
class ActivityLogAdmin(admin.ModelAdmin):
    list_display = ('job', 'phase', 'activity_type', 'user', 'created_at')
    list_filter = ('activity_type',)
    search_fields = ('description', 'job__job_number')
    readonly_fields = [field.name for field in ActivityLog._meta.fields]
