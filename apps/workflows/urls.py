from django.urls import path
from . import views

urlpatterns = [
    path('workflows', views.workflows_view, name='workflows'),
    path('automations', views.automations_view, name='automations'),
]
