from django.urls import path
from . import views

urlpatterns = [
    path('areas', views.areas_view, name='areas'),
    path('milestones', views.milestones_view, name='milestones'),
]
