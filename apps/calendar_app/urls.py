from django.urls import path
from . import views

urlpatterns = [
    path('calendar/events', views.events_view, name='calendar_events'),
]
