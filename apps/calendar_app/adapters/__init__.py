from django.conf import settings
from apps.calendar_app.ports.calendar_provider import ICalendarProvider


def get_calendar_provider() -> ICalendarProvider:
    """Adapter selected by CALENDAR_PROVIDER ('google' or 'mock')."""
    if settings.CALENDAR_PROVIDER == 'mock':
        from .mock_calendar import MockCalendarProvider
        return MockCalendarProvider()

    from .google_calendar import GoogleCalendarAdapter
    return GoogleCalendarAdapter()
