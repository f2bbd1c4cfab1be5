from django.urls import path
from . import views

urlpatterns = [
    path('daily-steps', views.daily_steps_view, name='daily_steps'),
    path('cron/generate-recurring-instances', views.cron_generate_recurring_instances,
         name='cron_generate_recurring_instances'),
]
