# apps/steps/domain/services/recurrence.py
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional, Tuple

from apps.steps.domain.entities import StepEntity, instance_prefix, instance_title
from apps.steps.ports.repositories import IStepRepository

logger = logging.getLogger(__name__)

LOOKAHEAD_DAYS = 30


@dataclass
class ExpansionResult:
    created: List[StepEntity] = field(default_factory=list)
    errors: List[Tuple[int, str]] = field(default_factory=list)  # (template id, message)

    @property
    def created_count(self) -> int:
        return len(self.created)


class RecurrenceService:
    """
    Materializes dated instances from recurring step templates.

    For each template the days today..today+LOOKAHEAD_DAYS are scanned in order
    and only the next occurrence is ensured: the scan stops at the first day
    whose instance already exists or gets created. Days whose occurrence was
    already completed are skipped. Running it twice on one day is a no-op.
    """

    def __init__(self, repository: IStepRepository, lookahead_days: int = LOOKAHEAD_DAYS):
        self.repository = repository
        self.lookahead_days = lookahead_days

    def generate_instances(self, today: Optional[date] = None, user_id: Optional[int] = None) -> ExpansionResult:
        today = today or date.today()
        result = ExpansionResult()

        for template in self.repository.recurring_templates(user_id):
            # A broken template must not stop the batch
            try:
                created = self.expand_template(template, today)
            except Exception as e:
                logger.exception("Recurring step %s (%s) failed to expand", template.id, template.title)
                result.errors.append((template.id, str(e)))
                continue

            if created:
                result.created.append(created)

        logger.info(
            "Recurring steps: %s created, %s failed",
            result.created_count, len(result.errors),
        )
        return result

    def expand_template(self, template: StepEntity, today: date) -> Optional[StepEntity]:
        """Returns the newly created instance, or None if nothing was needed."""
        if not template.is_template:
            # Instances are never expanded
            return None

        rule = template.recurrence
        window_end = today + timedelta(days=self.lookahead_days)
        prefix = instance_prefix(template.title)

        for day in rule.occurrences(today, window_end):
            title = instance_title(template.title, day)

            if self.repository.instance_exists(template.user_id, title, day):
                return None

            if self.repository.completed_instance_exists(template.user_id, prefix, day):
                # This occurrence is done already, look at the next one
                continue

            return self.repository.create_instance(template, title, day)

        return None
