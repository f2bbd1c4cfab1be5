# apps/crm/models.py
from datetime import timedelta

from django.db import models
from django.conf import settings


class Lead(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='leads')  # coach
    email = models.EmailField()
    name = models.CharField(max_length=200)
    phone = models.CharField(max_length=50, blank=True)
    source = models.CharField(max_length=50, default='manual')  # manual, booking, web, ...

    class StatusChoices(models.TextChoices):
        NOVY = 'novy', 'Nový'
        UVODNI_CALL = 'uvodni_call', 'Úvodní call'
        NABIDKA = 'nabidka', 'Nabídka'
        SPOLUPRACE = 'spoluprace', 'Spolupráce'
        NEAKTIVNI = 'neaktivni', 'Neaktivní'

    status = models.CharField(max_length=20, choices=StatusChoices.choices, default=StatusChoices.NOVY)
    notes = models.TextField(blank=True)

    # Id of the mirrored task-board item
    taskboard_id = models.CharField(max_length=64, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'email'], name='unique_lead_email_per_coach'),
        ]

    def save(self, *args, **kwargs):
        self.email = (self.email or '').strip().lower()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.name} <{self.email}>"


class BookingEvent(models.Model):
    """Bookable meeting type, e.g. a free 30 min intro call."""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='booking_events')
    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    duration_minutes = models.PositiveIntegerField(default=30)
    one_booking_per_email = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name


class WeeklyAvailability(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='availability')
    # Empty event = applies to every event of the coach
    event = models.ForeignKey(BookingEvent, null=True, blank=True, on_delete=models.CASCADE, related_name='availability')
    day_of_week = models.PositiveSmallIntegerField(help_text="0 = Monday, 6 = Sunday")
    start_time = models.TimeField()
    end_time = models.TimeField()
    slot_duration_minutes = models.PositiveIntegerField(default=30)

    class Meta:
        ordering = ['day_of_week', 'start_time']
        verbose_name_plural = 'weekly availability'

    def __str__(self):
        return f"{self.day_of_week}: {self.start_time}-{self.end_time}"


class Booking(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='bookings')  # coach
    event = models.ForeignKey(BookingEvent, null=True, blank=True, on_delete=models.SET_NULL, related_name='bookings')
    lead = models.ForeignKey(Lead, null=True, blank=True, on_delete=models.SET_NULL, related_name='bookings')

    scheduled_at = models.DateTimeField()
    duration_minutes = models.PositiveIntegerField(default=30)

    email = models.EmailField()
    name = models.CharField(max_length=200)
    phone = models.CharField(max_length=50, blank=True)
    note = models.TextField(blank=True)

    class StatusChoices(models.TextChoices):
        PENDING = 'pending', 'Čeká na potvrzení'
        CONFIRMED = 'confirmed', 'Potvrzeno'
        CANCELLED = 'cancelled', 'Zrušeno'

    status = models.CharField(max_length=20, choices=StatusChoices.choices, default=StatusChoices.PENDING)
    source = models.CharField(max_length=50, default='web')
    reminder_sent_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['scheduled_at']
        indexes = [models.Index(fields=['user', 'scheduled_at'], name='booking_user_start_idx')]

    def __str__(self):
        return f"{self.name} @ {self.scheduled_at:%Y-%m-%d %H:%M}"

    @property
    def ends_at(self):
        return self.scheduled_at + timedelta(minutes=self.duration_minutes)
