from django.urls import path
from . import views

urlpatterns = [
    path('leads', views.leads_view, name='leads'),
    path('booking-events', views.booking_events_view, name='booking_events'),
    path('availability', views.availability_view, name='availability'),
    path('bookings', views.bookings_view, name='bookings'),
    path('bookings/slots', views.slots_view, name='booking_slots'),
    path('cron/send-booking-reminders', views.cron_send_booking_reminders, name='cron_send_booking_reminders'),
]
