# apps/steps/ports/repositories.py
from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional
from apps.steps.domain.entities import StepEntity


class IStepRepository(ABC):
    @abstractmethod
    def recurring_templates(self, user_id: Optional[int] = None) -> List[StepEntity]:
        """Uncompleted steps that carry a frequency (all users when user_id is None)."""
        pass

    @abstractmethod
    def instance_exists(self, user_id: int, title: str, day: date) -> bool:
        """Any step with exactly this title on this day, completed or not."""
        pass

    @abstractmethod
    def completed_instance_exists(self, user_id: int, title_prefix: str, day: date) -> bool:
        """A completed step on this day whose title starts with the prefix."""
        pass

    @abstractmethod
    def create_instance(self, template: StepEntity, title: str, day: date) -> Optional[StepEntity]:
        """Creates the dated copy; None if another run created it first."""
        pass
