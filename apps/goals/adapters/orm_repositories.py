# apps/goals/adapters/orm_repositories.py
from contextlib import contextmanager
from typing import List
from django.db import transaction
from apps.goals.domain.entities import FocusStatus, GoalEntity
from apps.goals.ports.repositories import IGoalRepository
from apps.goals.models import Goal as GoalModel


class DjangoGoalRepository(IGoalRepository):
    def to_entity(self, model: GoalModel) -> GoalEntity:
        return GoalEntity(
            id=model.id,
            title=model.title,
            focus_status=FocusStatus(model.focus_status) if model.focus_status else None,
            focus_order=model.focus_order,
        )

    @contextmanager
    def locked_goals(self, owner_id: int):
        with transaction.atomic():
            # SELECT ... FOR UPDATE serializes concurrent rank changes of one owner
            qs = GoalModel.objects.select_for_update().filter(user_id=owner_id).order_by('id')
            yield [self.to_entity(g) for g in qs]

    def save_focus(self, goals: List[GoalEntity]) -> None:
        if not goals:
            return
        rows = [
            GoalModel(
                id=g.id,
                focus_status=g.focus_status.value if g.focus_status else None,
                focus_order=g.focus_order,
            )
            for g in goals
        ]
        GoalModel.objects.bulk_update(rows, ['focus_status', 'focus_order'])
