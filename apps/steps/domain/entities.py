# apps/steps/domain/entities.py
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import List, Optional

from dateutil.rrule import DAILY, MONTHLY, WEEKLY, MO, TU, WE, TH, FR, SA, SU, rrule, rruleset


class Frequency(str, Enum):
    DAILY = 'daily'
    WEEKLY = 'weekly'
    MONTHLY = 'monthly'


WEEKDAYS = {
    'monday': MO, 'tuesday': TU, 'wednesday': WE, 'thursday': TH,
    'friday': FR, 'saturday': SA, 'sunday': SU,
}

THIRTY_DAY_MONTHS = (4, 6, 9, 11)


@dataclass(frozen=True)
class RecurrenceRule:
    """
    When a step template is due.

    weekly  -> selected_days holds day names ('monday'..'sunday')
    monthly -> selected_days holds days of month (1..31); 31 also matches
               the 30th of 30-day months
    """
    frequency: Frequency
    selected_days: tuple = ()

    @classmethod
    def from_fields(cls, frequency, selected_days=None) -> Optional['RecurrenceRule']:
        """Builds and validates a rule; raises ValueError on malformed input."""
        if not frequency:
            return None
        try:
            freq = Frequency(frequency)
        except ValueError:
            raise ValueError(f"Unknown frequency: {frequency!r}")
        if selected_days is not None and not isinstance(selected_days, (list, tuple)):
            raise ValueError("selected_days must be a list")

        rule = cls(freq, tuple(selected_days or ()))
        rule.build(date.today())
        return rule

    def _weekdays(self):
        if not self.selected_days:
            raise ValueError("Weekly recurrence needs at least one day")
        try:
            return [WEEKDAYS[str(d).strip().lower()] for d in self.selected_days]
        except KeyError as e:
            raise ValueError(f"Unknown weekday: {e.args[0]!r}")

    def _month_days(self):
        if not self.selected_days:
            raise ValueError("Monthly recurrence needs at least one day")
        try:
            days = sorted({int(d) for d in self.selected_days})
        except (TypeError, ValueError):
            raise ValueError(f"Invalid day of month in {list(self.selected_days)!r}")
        if days[0] < 1 or days[-1] > 31:
            raise ValueError("Day of month must be between 1 and 31")
        return days

    def build(self, start: date) -> rruleset:
        dtstart = datetime.combine(start, time.min)
        rules = rruleset()

        if self.frequency == Frequency.DAILY:
            rules.rrule(rrule(DAILY, dtstart=dtstart))
        elif self.frequency == Frequency.WEEKLY:
            rules.rrule(rrule(WEEKLY, byweekday=self._weekdays(), dtstart=dtstart))
        else:
            month_days = self._month_days()
            rules.rrule(rrule(MONTHLY, bymonthday=month_days, dtstart=dtstart))
            if 31 in month_days:
                rules.rrule(rrule(MONTHLY, bymonth=THIRTY_DAY_MONTHS, bymonthday=30, dtstart=dtstart))

        return rules

    def occurrences(self, start: date, end: date) -> List[date]:
        """Due days between start and end, both inclusive."""
        rules = self.build(start)
        return [
            dt.date() for dt in rules.between(
                datetime.combine(start, time.min), datetime.combine(end, time.min), inc=True
            )
        ]

    def matches(self, day: date) -> bool:
        return bool(self.occurrences(day, day))


@dataclass
class StepEntity:
    id: Optional[int]
    user_id: int
    title: str
    date: Optional[date] = None
    completed: bool = False

    # description is kept in its stored (possibly encrypted) form
    description: str = ""
    goal_id: Optional[int] = None
    area_id: Optional[int] = None
    is_important: bool = False
    is_urgent: bool = False
    estimated_time: Optional[int] = 30
    xp_reward: Optional[int] = 1
    deadline: Optional[date] = None
    checklist: List[dict] = field(default_factory=list)
    require_checklist_complete: bool = False

    frequency: Optional[str] = None
    selected_days: list = field(default_factory=list)
    source_template_id: Optional[int] = None

    @property
    def is_template(self) -> bool:
        return bool(self.frequency)

    @property
    def recurrence(self) -> Optional[RecurrenceRule]:
        return RecurrenceRule.from_fields(self.frequency, self.selected_days)


def instance_title(template_title: str, day: date) -> str:
    """'Ranní běh' on 2024-03-06 -> 'Ranní běh - 6.3.2024'"""
    return f"{template_title} - {day.day}.{day.month}.{day.year}"


def instance_prefix(template_title: str) -> str:
    return f"{template_title} - "
