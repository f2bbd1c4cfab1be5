from django.urls import path
from . import views

urlpatterns = [
    path('goals', views.goals_view, name='goals'),
    path('goals/focus', views.focus_view, name='goals_focus'),
]
