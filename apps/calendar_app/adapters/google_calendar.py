# apps/calendar_app/adapters/google_calendar.py
import logging
from typing import List
from datetime import date, datetime, time, timedelta
import pytz
from google.oauth2.credentials import Credentials
from google.auth.exceptions import GoogleAuthError, RefreshError
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from apps.calendar_app.ports.calendar_provider import ICalendarProvider, FixedEvent
from apps.core.models import GoogleCredentials

logger = logging.getLogger(__name__)


class GoogleCalendarAdapter(ICalendarProvider):

    def _parse_events(self, items) -> List[FixedEvent]:
        fixed_events = []
        for event in items:
            # All-day events carry only a date, skip them
            if 'dateTime' not in event.get('start', {}):
                continue

            try:
                start_dt = datetime.fromisoformat(event['start']['dateTime'].replace('Z', '+00:00'))
                end_dt = datetime.fromisoformat(event['end']['dateTime'].replace('Z', '+00:00'))
            except (KeyError, ValueError):
                continue

            fixed_events.append(FixedEvent(
                title=event.get('summary', 'Bez názvu'),
                start_time=start_dt,
                end_time=end_dt,
                is_busy=event.get('transparency') != 'transparent'
            ))
        return fixed_events

    def _fetch_from_google(self, service, t_min: str, t_max: str) -> List[FixedEvent]:
        try:
            events_result = service.events().list(
                calendarId='primary',
                timeMin=t_min,
                timeMax=t_max,
                singleEvents=True,
                orderBy='startTime'
            ).execute()
        except (HttpError, GoogleAuthError) as e:
            logger.warning("Google Calendar API error: %s", e)
            return []

        return self._parse_events(events_result.get('items', []))

    def _get_service(self, user_id: int):
        """Builds the API client for the user, None when not connected."""
        try:
            creds_db = GoogleCredentials.objects.get(user_id=user_id)
        except GoogleCredentials.DoesNotExist:
            return None

        creds = Credentials(
            token=creds_db.token,
            refresh_token=creds_db.refresh_token,
            token_uri=creds_db.token_uri,
            client_id=creds_db.client_id,
            client_secret=creds_db.client_secret,
            scopes=creds_db.scopes.split()
        )

        try:
            return build('calendar', 'v3', credentials=creds, cache_discovery=False)
        except RefreshError:
            logger.warning("Google token expired for user %s", user_id)
            return None

    def get_events(self, user_id: int, day: date) -> List[FixedEvent]:
        return self.get_events_range(user_id, day, day)

    def get_events_range(self, user_id: int, start_date: date, end_date: date) -> List[FixedEvent]:
        service = self._get_service(user_id)
        if not service:
            return []

        # Whole days in UTC, widened by a day so other time zones are covered
        t_min = pytz.UTC.localize(datetime.combine(start_date - timedelta(days=1), time.min)).isoformat()
        t_max = pytz.UTC.localize(datetime.combine(end_date + timedelta(days=1), time.max)).isoformat()

        return self._fetch_from_google(service, t_min, t_max)
