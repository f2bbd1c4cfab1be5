# apps/calendar_app/adapters/mock_calendar.py
from typing import List
from datetime import date, datetime, timedelta, time
import pytz
from django.conf import settings
from apps.calendar_app.ports.calendar_provider import ICalendarProvider, FixedEvent


class MockCalendarProvider(ICalendarProvider):
    """Fixed lunch 12:00-13:00 on weekdays, for local development."""

    def get_events(self, user_id: int, day: date) -> List[FixedEvent]:
        if day.weekday() >= 5:
            return []

        tz = pytz.timezone(settings.COACH_TIMEZONE)
        start = tz.localize(datetime.combine(day, time(12, 0)))
        end = start + timedelta(hours=1)

        return [FixedEvent(title="Oběd", start_time=start, end_time=end)]

    def get_events_range(self, user_id: int, start_date: date, end_date: date) -> List[FixedEvent]:
        events = []
        day = start_date
        while day <= end_date:
            events.extend(self.get_events(user_id, day))
            day += timedelta(days=1)
        return events
