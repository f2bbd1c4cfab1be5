from django.urls import path
from . import views

urlpatterns = [
    path('profile', views.profile_view, name='profile'),
    path('account', views.account_view, name='account'),
    path('account/reset-data', views.reset_data_view, name='account_reset_data'),
    path('google/connect', views.google_connect, name='google_connect'),
    path('google/callback', views.google_callback, name='google_callback'),
    path('cron/process-outbox', views.cron_process_outbox, name='cron_process_outbox'),
]
