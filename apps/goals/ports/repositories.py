# apps/goals/ports/repositories.py
from abc import ABC, abstractmethod
from typing import ContextManager, List
from apps.goals.domain.entities import GoalEntity


class IGoalRepository(ABC):
    @abstractmethod
    def locked_goals(self, owner_id: int) -> ContextManager[List[GoalEntity]]:
        """
        Opens a transaction, locks every goal of the owner and yields them.
        Everything saved inside the block commits (or rolls back) together.
        """
        pass

    @abstractmethod
    def save_focus(self, goals: List[GoalEntity]) -> None:
        """Persists focus_status and focus_order of the given goals."""
        pass
