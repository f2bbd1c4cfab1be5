# apps/goals/models.py
from django.db import models
from django.conf import settings
from apps.goals.domain.entities import FocusStatus


class Goal(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='goals')
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)  # stored encrypted
    target_date = models.DateField(null=True, blank=True)

    class StatusChoices(models.TextChoices):
        ACTIVE = 'active', 'Aktivní'
        COMPLETED = 'completed', 'Splněno'
        PAUSED = 'paused', 'Pozastaveno'
        CANCELLED = 'cancelled', 'Zrušeno'

    class PriorityChoices(models.TextChoices):
        MEANINGFUL = 'meaningful', 'Smysluplný'
        NICE_TO_HAVE = 'nice-to-have', 'Bylo by fajn'

    class GoalTypeChoices(models.TextChoices):
        OUTCOME = 'outcome', 'Výsledek'
        PROCESS = 'process', 'Proces'

    class ProgressTypeChoices(models.TextChoices):
        PERCENTAGE = 'percentage', 'Procenta'
        COUNT = 'count', 'Počet'
        STEPS = 'steps', 'Podle kroků'

    # Mirrors the domain enum so the admin shows readable labels
    class FocusChoices(models.TextChoices):
        ACTIVE_FOCUS = FocusStatus.ACTIVE_FOCUS.value, 'V hlavním fokusu'
        DEFERRED = FocusStatus.DEFERRED.value, 'Odloženo'

    status = models.CharField(max_length=20, choices=StatusChoices.choices, default=StatusChoices.ACTIVE)
    priority = models.CharField(max_length=20, choices=PriorityChoices.choices, default=PriorityChoices.MEANINGFUL)
    goal_type = models.CharField(max_length=20, choices=GoalTypeChoices.choices, default=GoalTypeChoices.OUTCOME)

    progress_percentage = models.PositiveIntegerField(default=0, help_text="Progress in percent (0-100)")
    progress_type = models.CharField(
        max_length=20,
        choices=ProgressTypeChoices.choices,
        default=ProgressTypeChoices.PERCENTAGE
    )

    area = models.ForeignKey(
        'areas.Area',
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='goals'
    )

    # Ranked subset: only ACTIVE_FOCUS goals carry a focus_order (dense 1..N per user)
    focus_status = models.CharField(max_length=20, choices=FocusChoices.choices, null=True, blank=True)
    focus_order = models.PositiveIntegerField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['focus_order', 'target_date', 'id']
        indexes = [models.Index(fields=['user', 'focus_status', 'focus_order'], name='goal_focus_rank_idx')]

    def __str__(self):
        return self.title
