# apps/workflows/models.py
import datetime

from django.db import models
from django.conf import settings


class Workflow(models.Model):
    """Recurring ritual, e.g. the evening review."""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='workflows')
    type = models.CharField(max_length=50)  # e.g. 'daily_review'
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    trigger_time = models.TimeField(default=datetime.time(18, 0))
    enabled = models.BooleanField(default=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['trigger_time', 'id']

    def __str__(self):
        return self.name


class Automation(models.Model):
    """Periodically moves a target value (goal progress, metric) by update_value."""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='automations')
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    class TypeChoices(models.TextChoices):
        GOAL = 'goal', 'Cíl'
        METRIC = 'metric', 'Metrika'
        HABIT = 'habit', 'Návyk'

    class FrequencyTypeChoices(models.TextChoices):
        ONE_TIME = 'one-time', 'Jednorázově'
        RECURRING = 'recurring', 'Opakovaně'

    class UpdateFrequencyChoices(models.TextChoices):
        DAILY = 'daily', 'Denně'
        WEEKLY = 'weekly', 'Týdně'
        MONTHLY = 'monthly', 'Měsíčně'

    type = models.CharField(max_length=20, choices=TypeChoices.choices)
    target_id = models.PositiveBigIntegerField()

    frequency_type = models.CharField(
        max_length=20,
        choices=FrequencyTypeChoices.choices,
        default=FrequencyTypeChoices.RECURRING
    )
    frequency_time = models.TimeField(null=True, blank=True)
    scheduled_date = models.DateField(null=True, blank=True)
    is_active = models.BooleanField(default=True)

    target_value = models.FloatField(null=True, blank=True)
    current_value = models.FloatField(default=0)
    update_value = models.FloatField(null=True, blank=True)
    update_frequency = models.CharField(max_length=10, choices=UpdateFrequencyChoices.choices, null=True, blank=True)
    update_day_of_week = models.PositiveSmallIntegerField(null=True, blank=True, help_text="0 = Monday")
    update_day_of_month = models.PositiveSmallIntegerField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['created_at', 'id']

    def __str__(self):
        return self.name
