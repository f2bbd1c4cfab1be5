# apps/crm/domain/availability.py
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Tuple

MIN_DURATION = 15
MAX_DURATION = 120
DEFAULT_DURATION = 30


@dataclass
class AvailabilityWindow:
    day_of_week: int  # 0 = Monday
    start_time: time
    end_time: time
    slot_minutes: int = DEFAULT_DURATION


@dataclass
class Slot:
    start: datetime
    end: datetime

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() / 60)


def clamp_duration(minutes) -> int:
    """Meeting length in minutes, kept within 15..120 (default 30)."""
    try:
        minutes = int(minutes)
    except (TypeError, ValueError):
        return DEFAULT_DURATION
    return max(MIN_DURATION, min(MAX_DURATION, minutes))


def overlaps(start: datetime, end: datetime, busy: Iterable[Tuple[datetime, datetime]]) -> bool:
    return any(b_start < end and start < b_end for b_start, b_end in busy)


def generate_slots(
    windows: List[AvailabilityWindow],
    date_from: date,
    date_to: date,
    tz,
    busy: Iterable[Tuple[datetime, datetime]] = (),
    now: Optional[datetime] = None,
    duration_minutes: Optional[int] = None,
) -> List[Slot]:
    """
    Cuts the weekly windows into bookable slots between date_from and date_to.

    Windows are wall-clock times in `tz` (a pytz zone). A slot starts every
    slot_minutes; it is dropped when it runs past the window end, lies in the
    past, or overlaps any busy interval.
    """
    busy = list(busy)
    slots = []

    day = date_from
    while day <= date_to:
        for window in windows:
            if window.day_of_week != day.weekday():
                continue

            # 1. Window boundaries in the coach's zone
            cursor = tz.localize(datetime.combine(day, window.start_time))
            window_end = tz.localize(datetime.combine(day, window.end_time))

            step = timedelta(minutes=max(window.slot_minutes, MIN_DURATION))
            length = timedelta(minutes=clamp_duration(duration_minutes or window.slot_minutes))

            # 2. Walk the window
            while cursor + length <= window_end:
                slot_end = cursor + length
                if (now is None or cursor > now) and not overlaps(cursor, slot_end, busy):
                    slots.append(Slot(start=cursor, end=slot_end))
                cursor += step

        day += timedelta(days=1)

    slots.sort(key=lambda s: s.start)
    return slots
