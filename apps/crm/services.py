# apps/crm/services.py
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import List, Optional

import pytz
from django.conf import settings
from django.contrib.auth.models import User
from django.core.validators import validate_email
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from apps.calendar_app.adapters import get_calendar_provider
from apps.calendar_app.ports.calendar_provider import ICalendarProvider
from apps.core.exceptions import Conflict, NotFound, ValidationFailed
from apps.core.notifications import enqueue, queue_email
from apps.core.notifications.email import send_templated_email
from .domain.availability import AvailabilityWindow, Slot, clamp_duration, generate_slots, overlaps
from .models import Booking, BookingEvent, Lead, WeeklyAvailability

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = [Booking.StatusChoices.PENDING, Booking.StatusChoices.CONFIRMED]


def coach_timezone():
    return pytz.timezone(settings.COACH_TIMEZONE)


def email_context(booking: Booking) -> dict:
    local_start = booking.scheduled_at.astimezone(coach_timezone())
    return {
        'name': booking.name,
        'email': booking.email,
        'event_name': booking.event.name if booking.event else 'Konzultace',
        'date': f"{local_start.day}.{local_start.month}.{local_start.year}",
        'time': local_start.strftime('%H:%M'),
        'duration': booking.duration_minutes,
        'note': booking.note,
    }


class BookingService:
    def __init__(self, calendar: Optional[ICalendarProvider] = None):
        self.calendar = calendar or get_calendar_provider()

    # --- availability ---

    def windows_for(self, coach: User, event: Optional[BookingEvent]) -> List[AvailabilityWindow]:
        qs = WeeklyAvailability.objects.filter(user=coach)
        if event is not None:
            # Event-specific rows win over the coach's general ones
            specific = qs.filter(event=event)
            qs = specific if specific.exists() else qs.filter(event__isnull=True)
        else:
            qs = qs.filter(event__isnull=True)

        return [
            AvailabilityWindow(
                day_of_week=a.day_of_week,
                start_time=a.start_time,
                end_time=a.end_time,
                slot_minutes=a.slot_duration_minutes,
            )
            for a in qs
        ]

    def busy_intervals(self, coach: User, date_from: date, date_to: date, exclude_booking_id=None):
        tz = coach_timezone()
        range_start = tz.localize(datetime.combine(date_from, datetime.min.time()))
        range_end = tz.localize(datetime.combine(date_to + timedelta(days=1), datetime.min.time()))

        bookings = Booking.objects.filter(
            user=coach,
            status__in=ACTIVE_STATUSES,
            scheduled_at__lt=range_end,
            scheduled_at__gte=range_start - timedelta(minutes=120),
        )
        if exclude_booking_id:
            bookings = bookings.exclude(pk=exclude_booking_id)

        busy = [(b.scheduled_at, b.ends_at) for b in bookings]
        busy += [
            (e.start_time, e.end_time)
            for e in self.calendar.get_events_range(coach.id, date_from, date_to)
            if e.is_busy
        ]
        return busy

    def available_slots(self, coach: User, event: Optional[BookingEvent], date_from: date, date_to: date,
                        now: Optional[datetime] = None) -> List[Slot]:
        windows = self.windows_for(coach, event)
        if not windows:
            return []
        duration = event.duration_minutes if event else None
        return generate_slots(
            windows, date_from, date_to, coach_timezone(),
            busy=self.busy_intervals(coach, date_from, date_to),
            now=now or timezone.now(),
            duration_minutes=duration,
        )

    def is_slot_offered(self, coach: User, event: Optional[BookingEvent], start: datetime, duration: int,
                        now: Optional[datetime] = None) -> bool:
        """The start lies on the slot grid of the coach's availability (busy or not)."""
        local_day = start.astimezone(coach_timezone()).date()
        slots = generate_slots(
            self.windows_for(coach, event), local_day, local_day, coach_timezone(),
            now=now or timezone.now(), duration_minutes=duration,
        )
        return any(s.start == start for s in slots)

    def is_slot_free(self, coach: User, start: datetime, end: datetime, exclude_booking_id=None) -> bool:
        local_day = start.astimezone(coach_timezone()).date()
        busy = self.busy_intervals(coach, local_day, local_day, exclude_booking_id=exclude_booking_id)
        return not overlaps(start, end, busy)

    # --- booking ---

    def resolve_target(self, coach_name, event_slug):
        """Finds the event and/or coach a public booking is for."""
        if not coach_name and not event_slug:
            raise ValidationFailed('coach or event is required')

        event = None
        if event_slug:
            event = BookingEvent.objects.select_related('user').filter(slug=event_slug, is_active=True).first()
            if event is None:
                raise NotFound('Event not found')
            return event.user, event

        coach = User.objects.filter(username=coach_name, is_active=True).first()
        if coach is None:
            raise NotFound('Coach not found')
        return coach, None

    def create_booking(self, payload: dict, now: Optional[datetime] = None) -> Booking:
        coach, event = self.resolve_target(payload.get('coach'), payload.get('event'))

        # 1. Required fields
        email = str(payload.get('email') or '').strip().lower()
        name = str(payload.get('name') or '').strip()
        raw_start = payload.get('scheduled_at')
        if not raw_start or not email or not name:
            raise ValidationFailed('scheduled_at, email and name are required')
        try:
            validate_email(email)
        except ValidationError:
            raise ValidationFailed('Invalid e-mail')

        try:
            start = parse_datetime(raw_start) if isinstance(raw_start, str) else None
        except ValueError:
            start = None
        if start is None:
            raise ValidationFailed('Invalid scheduled_at')
        if timezone.is_naive(start):
            start = coach_timezone().localize(start)

        duration = clamp_duration(event.duration_minutes if event else payload.get('duration_minutes', 30))
        end = start + timedelta(minutes=duration)

        # 2. Slot checks
        if not self.is_slot_offered(coach, event, start, duration, now=now):
            raise ValidationFailed('This time is not offered')

        with transaction.atomic():
            # Serializes bookings of one coach
            User.objects.select_for_update().filter(pk=coach.pk).first()

            if not self.is_slot_free(coach, start, end):
                raise Conflict('This time is already booked')

            if event and event.one_booking_per_email and Booking.objects.filter(
                event=event, email=email, status__in=ACTIVE_STATUSES
            ).exists():
                raise Conflict('You already have a booking for this event')

            lead = self.upsert_lead(coach, email, name, payload.get('phone', ''))

            booking = Booking.objects.create(
                user=coach,
                event=event,
                lead=lead,
                scheduled_at=start,
                duration_minutes=duration,
                email=email,
                name=name,
                phone=str(payload.get('phone') or ''),
                note=str(payload.get('note') or ''),
                source=str(payload.get('source') or 'web'),
                status=Booking.StatusChoices.PENDING,
            )

            # 3. Side effects leave after commit, failures never undo the booking
            context = email_context(booking)
            queue_email(email, 'Potvrzení rezervace', 'booking_confirmation', context)
            if coach.email:
                queue_email(coach.email, f'Nová rezervace: {name}', 'booking_coach_notification', context,
                            reply_to=email)
            enqueue('taskboard.booking', {'booking_id': booking.pk})

        logger.info("Booking %s created for coach %s", booking.pk, coach.pk)
        return booking

    def upsert_lead(self, coach: User, email: str, name: str, phone: str = '') -> Lead:
        lead, created = Lead.objects.get_or_create(
            user=coach,
            email=email,
            defaults={
                'name': name,
                'phone': phone or '',
                'source': 'booking',
                'status': Lead.StatusChoices.UVODNI_CALL,
            }
        )
        if not created and lead.status == Lead.StatusChoices.NOVY:
            # A booked call moves a fresh lead forward, never backwards
            lead.status = Lead.StatusChoices.UVODNI_CALL
            lead.save(update_fields=['status', 'updated_at'])
        return lead

    # --- reminders ---

    def send_reminders(self, now: Optional[datetime] = None) -> 'ReminderResult':
        """Mails every active booking starting in [now+24h, now+25h) once."""
        now = now or timezone.now()
        result = ReminderResult()

        due = Booking.objects.select_related('event').filter(
            status__in=ACTIVE_STATUSES,
            reminder_sent_at__isnull=True,
            scheduled_at__gte=now + timedelta(hours=24),
            scheduled_at__lt=now + timedelta(hours=25),
        )

        for booking in due:
            try:
                send_templated_email({
                    'to': [booking.email],
                    'subject': 'Připomínka: zítra máme schůzku',
                    'template': 'booking_reminder',
                    'context': email_context(booking),
                })
            except Exception as e:
                logger.warning("Reminder for booking %s failed: %s", booking.pk, e)
                result.failed += 1
                result.errors.append({'bookingId': booking.pk, 'error': str(e)})
                continue

            Booking.objects.filter(pk=booking.pk).update(reminder_sent_at=timezone.now())
            result.sent += 1

        logger.info("Booking reminders: %s sent, %s failed", result.sent, result.failed)
        return result


@dataclass
class ReminderResult:
    sent: int = 0
    failed: int = 0
    errors: list = field(default_factory=list)
