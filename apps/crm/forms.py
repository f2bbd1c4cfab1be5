from django import forms
from apps.core.forms import ApiModelForm
from .domain.availability import MAX_DURATION, MIN_DURATION
from .models import Booking, BookingEvent, Lead, WeeklyAvailability


class LeadForm(ApiModelForm):
    class Meta:
        model = Lead
        fields = ['email', 'name', 'phone', 'source', 'status', 'notes']

    def clean_email(self):
        email = self.cleaned_data['email'].strip().lower()
        duplicate = Lead.objects.filter(user=self.user, email=email)
        if self.instance.pk:
            duplicate = duplicate.exclude(pk=self.instance.pk)
        if duplicate.exists():
            raise forms.ValidationError("A lead with this e-mail already exists")
        return email


class BookingEventForm(ApiModelForm):
    class Meta:
        model = BookingEvent
        fields = ['name', 'slug', 'description', 'duration_minutes', 'one_booking_per_email', 'is_active']

    def clean_duration_minutes(self):
        value = self.cleaned_data['duration_minutes']
        if not MIN_DURATION <= value <= MAX_DURATION:
            raise forms.ValidationError(f"Duration must be {MIN_DURATION}-{MAX_DURATION} minutes")
        return value


class WeeklyAvailabilityForm(ApiModelForm):
    class Meta:
        model = WeeklyAvailability
        fields = ['event', 'day_of_week', 'start_time', 'end_time', 'slot_duration_minutes']

    def __init__(self, user, *args, **kwargs):
        super().__init__(user, *args, **kwargs)
        self.limit_to_user('event')

    def clean(self):
        cleaned = super().clean()
        day = cleaned.get('day_of_week')
        if day is not None and day > 6:
            self.add_error('day_of_week', "Day of week is 0 (Monday) to 6 (Sunday)")
        start, end = cleaned.get('start_time'), cleaned.get('end_time')
        if start and end and start >= end:
            self.add_error('end_time', "End must be after start")
        minutes = cleaned.get('slot_duration_minutes')
        if minutes is not None and not MIN_DURATION <= minutes <= MAX_DURATION:
            self.add_error('slot_duration_minutes', f"Slot must be {MIN_DURATION}-{MAX_DURATION} minutes")
        return cleaned


class BookingUpdateForm(ApiModelForm):
    """What the coach may change on an existing booking."""
    class Meta:
        model = Booking
        fields = ['status', 'note', 'scheduled_at', 'duration_minutes', 'phone']

    def clean_duration_minutes(self):
        value = self.cleaned_data['duration_minutes']
        if not MIN_DURATION <= value <= MAX_DURATION:
            raise forms.ValidationError(f"Duration must be {MIN_DURATION}-{MAX_DURATION} minutes")
        return value
