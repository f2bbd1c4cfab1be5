from django.urls import path
from . import views

urlpatterns = [
    path('habits', views.habits_view, name='habits'),
    path('habits/complete', views.habit_complete_view, name='habit_complete'),
]
