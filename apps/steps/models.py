# apps/steps/models.py
from django.db import models
from django.conf import settings
from django.utils import timezone
from apps.steps.domain.entities import Frequency


class DailyStep(models.Model):
    """
    One to-do item for a day.

    A row with a frequency is a template: it is never shown as a to-do itself,
    the recurrence job materializes dated copies (instances) from it.
    """
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='daily_steps')
    goal = models.ForeignKey('goals.Goal', null=True, blank=True, on_delete=models.SET_NULL, related_name='steps')
    area = models.ForeignKey('areas.Area', null=True, blank=True, on_delete=models.SET_NULL, related_name='steps')

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)  # stored encrypted

    completed = models.BooleanField(default=False)
    completed_at = models.DateTimeField(null=True, blank=True)
    date = models.DateField(default=timezone.localdate)

    # Eisenhower matrix
    is_important = models.BooleanField(default=False)
    is_urgent = models.BooleanField(default=False)

    estimated_time = models.PositiveIntegerField(default=30, help_text="Minutes")
    xp_reward = models.PositiveIntegerField(default=1)
    deadline = models.DateField(null=True, blank=True)

    # [{"text": "...", "done": false}, ...]
    checklist = models.JSONField(default=list, blank=True)
    require_checklist_complete = models.BooleanField(default=False)

    class FrequencyChoices(models.TextChoices):
        DAILY = Frequency.DAILY.value, 'Denně'
        WEEKLY = Frequency.WEEKLY.value, 'Týdně'
        MONTHLY = Frequency.MONTHLY.value, 'Měsíčně'

    frequency = models.CharField(max_length=10, choices=FrequencyChoices.choices, null=True, blank=True)
    # weekly: ['monday', 'friday'], monthly: [1, 15, 31]
    selected_days = models.JSONField(default=list, blank=True)

    source_template = models.ForeignKey(
        'self',
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='instances'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['date', '-is_important', '-is_urgent', 'id']
        indexes = [
            models.Index(fields=['user', 'date'], name='step_user_date_idx'),
            models.Index(fields=['user', 'title', 'date'], name='step_user_title_date_idx'),
        ]
        constraints = [
            # One generated instance per template and day
            models.UniqueConstraint(
                fields=['source_template', 'date'],
                condition=models.Q(source_template__isnull=False),
                name='unique_instance_per_template_day',
            ),
        ]

    def __str__(self):
        return self.title

    @property
    def is_template(self):
        return bool(self.frequency)

    @property
    def open_checklist_items(self):
        return [item for item in (self.checklist or []) if not item.get('done')]

    def save(self, *args, **kwargs):
        # completed_at follows the completed flag
        if self.completed and not self.completed_at:
            self.completed_at = timezone.now()
        elif not self.completed:
            self.completed_at = None
        super().save(*args, **kwargs)
