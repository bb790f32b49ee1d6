from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('auth/', include('authentication.urls')),
    path('api/jobs/', include('jobs.urls')),
    path('api/tasks/', include('tasks.urls')),
    path('api/activity/', include('activity.urls')),
    path('api/production/', include('production.urls')),
    path('api/time/', include('timetracking.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
