# apps/steps/adapters/orm_repositories.py
from datetime import date
from typing import List, Optional
from django.db import IntegrityError, transaction
from apps.steps.domain.entities import StepEntity
from apps.steps.ports.repositories import IStepRepository
from apps.steps.models import DailyStep as StepModel


class DjangoStepRepository(IStepRepository):
    def to_entity(self, model: StepModel) -> StepEntity:
        return StepEntity(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            date=model.date,
            completed=model.completed,
            description=model.description,
            goal_id=model.goal_id,
            area_id=model.area_id,
            is_important=model.is_important,
            is_urgent=model.is_urgent,
            estimated_time=model.estimated_time,
            xp_reward=model.xp_reward,
            deadline=model.deadline,
            checklist=list(model.checklist or []),
            require_checklist_complete=model.require_checklist_complete,
            frequency=model.frequency,
            selected_days=list(model.selected_days or []),
            source_template_id=model.source_template_id,
        )

    def recurring_templates(self, user_id: Optional[int] = None) -> List[StepEntity]:
        qs = StepModel.objects.filter(frequency__isnull=False, completed=False).order_by('user_id', 'id')
        if user_id is not None:
            qs = qs.filter(user_id=user_id)
        return [self.to_entity(s) for s in qs]

    def instance_exists(self, user_id: int, title: str, day: date) -> bool:
        return StepModel.objects.filter(user_id=user_id, title=title, date=day).exists()

    def completed_instance_exists(self, user_id: int, title_prefix: str, day: date) -> bool:
        return StepModel.objects.filter(
            user_id=user_id,
            title__startswith=title_prefix,
            date=day,
            completed=True,
        ).exists()

    def create_instance(self, template: StepEntity, title: str, day: date) -> Optional[StepEntity]:
        # Checklist ticks are reset on every copy
        checklist = [
            {**item, 'done': False} if isinstance(item, dict) else {'text': str(item), 'done': False}
            for item in template.checklist
        ]
        try:
            with transaction.atomic():
                obj = StepModel.objects.create(
                    user_id=template.user_id,
                    goal_id=template.goal_id,
                    area_id=template.area_id,
                    title=title,
                    description=template.description,
                    date=day,
                    completed=False,
                    is_important=template.is_important,
                    is_urgent=template.is_urgent,
                    estimated_time=template.estimated_time or 30,
                    xp_reward=template.xp_reward or 1,
                    deadline=template.deadline,
                    checklist=checklist,
                    require_checklist_complete=template.require_checklist_complete,
                    frequency=None,
                    selected_days=[],
                    source_template_id=template.id,
                )
        except IntegrityError:
            # A concurrent run already created this day's instance
            return None
        return self.to_entity(obj)
