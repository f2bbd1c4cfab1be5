# apps/calendar_app/views.py
from datetime import date, timedelta

from django.http import JsonResponse
from django.utils import timezone

from apps.core.api import json_endpoint
from apps.core.exceptions import ValidationFailed
from apps.core.models import GoogleCredentials
from .adapters import get_calendar_provider

MAX_RANGE_DAYS = 62


def parse_date_param(request, name, default):
    raw = request.GET.get(name)
    if not raw:
        return default
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise ValidationFailed(f'{name} must be YYYY-MM-DD')


@json_endpoint('GET')
def events_view(request):
    """Busy blocks from the connected calendar."""
    today = timezone.localdate()
    start = parse_date_param(request, 'date_from', today)
    end = parse_date_param(request, 'date_to', start + timedelta(days=7))
    if end < start or (end - start).days > MAX_RANGE_DAYS:
        raise ValidationFailed(f'Date range must be 0..{MAX_RANGE_DAYS} days')

    events = get_calendar_provider().get_events_range(request.user.id, start, end)
    return JsonResponse({
        'connected': GoogleCredentials.objects.filter(user=request.user).exists(),
        'events': [
            {
                'title': e.title,
                'start': e.start_time.isoformat(),
                'end': e.end_time.isoformat(),
                'busy': e.is_busy,
            }
            for e in events
        ],
    })
