# pokrok/urls.py
from django.contrib import admin
from django.urls import path, include


urlpatterns = [
    path('admin/', admin.site.urls),
    # JSON API, one include per app
    path('api/', include('apps.core.urls')),
    path('api/', include('apps.steps.urls')),
    path('api/', include('apps.goals.urls')),
    path('api/', include('apps.habits.urls')),
    path('api/', include('apps.areas.urls')),
    path('api/', include('apps.workflows.urls')),
    path('api/', include('apps.players.urls')),
    path('api/', include('apps.calendar_app.urls')),
    path('api/', include('apps.crm.urls')),
    path('api/', include('apps.newsletter.urls')),
    path('api/', include('apps.content.urls')),
]
