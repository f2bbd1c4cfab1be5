# apps/goals/domain/entities.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FocusStatus(str, Enum):
    ACTIVE_FOCUS = 'active_focus'
    DEFERRED = 'deferred'


@dataclass
class GoalEntity:
    id: Optional[int]
    title: str = ""
    focus_status: Optional[FocusStatus] = None
    focus_order: Optional[int] = None

    @property
    def is_ranked(self) -> bool:
        return self.focus_status == FocusStatus.ACTIVE_FOCUS

    def focus_state(self):
        return (self.focus_status, self.focus_order)
