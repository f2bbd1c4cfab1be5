# apps/crm/views.py
from datetime import date, timedelta

from django.db import transaction
from django.http import JsonResponse
from django.utils import timezone

from apps.core.api import (
    apply_filter, bind_form, error_response, get_record_id, json_endpoint, model_to_json,
    parse_json, verify_ownership,
)
from apps.core.cron import cron_secret_required
from apps.core.exceptions import Conflict, Unauthorized, ValidationFailed
from apps.core.notifications import enqueue, queue_email
from .filters import BookingFilter, LeadFilter
from .forms import BookingEventForm, BookingUpdateForm, LeadForm, WeeklyAvailabilityForm
from .models import Booking, BookingEvent, Lead, WeeklyAvailability
from .services import BookingService, email_context

MAX_SLOT_RANGE_DAYS = 31


def booking_to_json(booking):
    data = model_to_json(booking)
    data['ends_at'] = booking.ends_at
    return data


@json_endpoint('GET', 'POST', 'PUT', 'DELETE')
def leads_view(request):
    user = request.user

    if request.method == 'GET':
        leads = apply_filter(LeadFilter, request, Lead.objects.filter(user=user))
        return JsonResponse({'leads': [model_to_json(l) for l in leads]})

    payload = parse_json(request)

    if request.method == 'POST':
        if not payload.get('email') or not payload.get('name'):
            raise ValidationFailed('email and name are required')
        with transaction.atomic():
            lead = bind_form(LeadForm, payload, user).save()
            enqueue('taskboard.lead', {'lead_id': lead.pk})
        return JsonResponse(model_to_json(lead), status=201)

    lead = verify_ownership(Lead, get_record_id(request, payload), user)

    if request.method == 'PUT':
        lead = bind_form(LeadForm, payload, user, instance=lead).save()
        return JsonResponse(model_to_json(lead))

    lead.delete()
    return JsonResponse({'success': True})


@json_endpoint('GET', 'POST', 'PUT', 'DELETE')
def booking_events_view(request):
    user = request.user

    if request.method == 'GET':
        events = BookingEvent.objects.filter(user=user)
        return JsonResponse({'events': [model_to_json(e) for e in events]})

    payload = parse_json(request)

    if request.method == 'POST':
        if not payload.get('name') or not payload.get('slug'):
            raise ValidationFailed('name and slug are required')
        if BookingEvent.objects.filter(slug=payload['slug']).exists():
            raise Conflict('Slug is already taken')
        event = bind_form(BookingEventForm, payload, user).save()
        return JsonResponse(model_to_json(event), status=201)

    event = verify_ownership(BookingEvent, get_record_id(request, payload), user)

    if request.method == 'PUT':
        event = bind_form(BookingEventForm, payload, user, instance=event).save()
        return JsonResponse(model_to_json(event))

    event.delete()
    return JsonResponse({'success': True})


@json_endpoint('GET', 'POST', 'PUT', 'DELETE')
def availability_view(request):
    user = request.user

    if request.method == 'GET':
        rows = WeeklyAvailability.objects.filter(user=user)
        return JsonResponse({'availability': [model_to_json(a) for a in rows]})

    payload = parse_json(request)

    if request.method == 'POST':
        row = bind_form(WeeklyAvailabilityForm, payload, user).save()
        return JsonResponse(model_to_json(row), status=201)

    row = verify_ownership(WeeklyAvailability, get_record_id(request, payload), user)

    if request.method == 'PUT':
        row = bind_form(WeeklyAvailabilityForm, payload, user, instance=row).save()
        return JsonResponse(model_to_json(row))

    row.delete()
    return JsonResponse({'success': True})


def _date_param(request, name, default):
    raw = request.GET.get(name)
    if not raw:
        return default
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise ValidationFailed(f'{name} must be YYYY-MM-DD')


@json_endpoint('GET', public=True)
def slots_view(request):
    """Free slots of a coach (or one event) for the public booking page."""
    service = BookingService()
    coach, event = service.resolve_target(request.GET.get('coach'), request.GET.get('event'))

    today = timezone.localdate()
    date_from = _date_param(request, 'date_from', today)
    date_to = _date_param(request, 'date_to', date_from + timedelta(days=14))
    if date_to < date_from or (date_to - date_from).days > MAX_SLOT_RANGE_DAYS:
        raise ValidationFailed(f'Date range must be 0..{MAX_SLOT_RANGE_DAYS} days')

    slots = service.available_slots(coach, event, date_from, date_to)
    return JsonResponse({
        'coach': coach.username,
        'event': event.slug if event else None,
        'slots': [{'start': s.start.isoformat(), 'end': s.end.isoformat()} for s in slots],
    })


@json_endpoint('GET', 'POST', 'PUT', 'DELETE', public=True)
def bookings_view(request):
    # Creating is public (booking page), everything else is the coach's
    if request.method == 'POST':
        booking = BookingService().create_booking(parse_json(request))
        return JsonResponse({'success': True, 'booking': booking_to_json(booking)}, status=201)

    user = request.user
    if not user.is_authenticated:
        return error_response(Unauthorized())

    if request.method == 'GET':
        bookings = apply_filter(BookingFilter, request, Booking.objects.filter(user=user))
        return JsonResponse({'bookings': [booking_to_json(b) for b in bookings]})

    payload = parse_json(request)
    booking = verify_ownership(Booking, get_record_id(request, payload), user)

    if request.method == 'DELETE':
        booking.delete()
        return JsonResponse({'success': True})

    previous_status = booking.status
    previous_start = booking.scheduled_at
    form = bind_form(BookingUpdateForm, payload, user, instance=booking)

    with transaction.atomic():
        booking = form.save(commit=False)
        rescheduled = booking.scheduled_at != previous_start
        if rescheduled and booking.status != Booking.StatusChoices.CANCELLED:
            if not BookingService().is_slot_free(user, booking.scheduled_at, booking.ends_at,
                                                 exclude_booking_id=booking.pk):
                raise Conflict('This time is already booked')
            booking.reminder_sent_at = None
        booking.save()

        context = email_context(booking)
        if booking.status == Booking.StatusChoices.CONFIRMED and previous_status != booking.status:
            queue_email(booking.email, 'Rezervace potvrzena', 'booking_confirmed', context)
        elif booking.status == Booking.StatusChoices.CANCELLED and previous_status != booking.status:
            queue_email(booking.email, 'Rezervace zrušena', 'booking_cancelled', context)
        elif rescheduled:
            queue_email(booking.email, 'Změna termínu rezervace', 'booking_rescheduled', context)

    return JsonResponse({'success': True, 'booking': booking_to_json(booking)})


@json_endpoint('GET', 'POST', public=True)
@cron_secret_required
def cron_send_booking_reminders(request):
    result = BookingService().send_reminders()
    return JsonResponse({
        'success': True,
        'sent': result.sent,
        'failed': result.failed,
        'errors': result.errors,
        'timestamp': timezone.now().isoformat(),
    })
