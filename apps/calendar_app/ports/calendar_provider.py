# apps/calendar_app/ports/calendar_provider.py
from abc import ABC, abstractmethod
from typing import List
from dataclasses import dataclass
from datetime import date, datetime


@dataclass
class FixedEvent:
    title: str
    start_time: datetime  # timezone aware
    end_time: datetime
    is_busy: bool = True  # transparent events do not block slots

    def overlaps(self, start: datetime, end: datetime) -> bool:
        return self.start_time < end and start < self.end_time


class ICalendarProvider(ABC):
    @abstractmethod
    def get_events(self, user_id: int, day: date) -> List[FixedEvent]:
        """Fixed events of one day."""
        pass

    @abstractmethod
    def get_events_range(self, user_id: int, start_date: date, end_date: date) -> List[FixedEvent]:
        """Fixed events from start_date to end_date inclusive."""
        pass
