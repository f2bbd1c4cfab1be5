from django.contrib import admin
from .models import Booking, BookingEvent, Lead, WeeklyAvailability


@admin.register(Lead)
class LeadAdmin(admin.ModelAdmin):
    list_display = ('name', 'email', 'status', 'source', 'user', 'created_at')
    list_filter = ('status', 'source')
    search_fields = ('name', 'email')


class WeeklyAvailabilityInline(admin.TabularInline):
    model = WeeklyAvailability
    extra = 1
    fields = ('day_of_week', 'start_time', 'end_time', 'slot_duration_minutes')


@admin.register(BookingEvent)
class BookingEventAdmin(admin.ModelAdmin):
    list_display = ('name', 'slug', 'duration_minutes', 'one_booking_per_email', 'is_active', 'user')
    list_filter = ('is_active',)
    search_fields = ('name', 'slug')
    prepopulated_fields = {'slug': ('name',)}
    inlines = [WeeklyAvailabilityInline]


@admin.register(WeeklyAvailability)
class WeeklyAvailabilityAdmin(admin.ModelAdmin):
    list_display = ('user', 'event', 'day_of_week', 'start_time', 'end_time', 'slot_duration_minutes')
    list_filter = ('day_of_week',)
    search_fields = ('user__username', 'event__name')


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ('name', 'email', 'scheduled_at', 'status', 'event', 'reminder_sent_at')
    list_filter = ('status', 'event')
    search_fields = ('name', 'email')
    date_hierarchy = 'scheduled_at'
