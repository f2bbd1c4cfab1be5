from django.db import models
from django.conf import settings
from django.utils import timezone


class Habit(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='habits')
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    class FrequencyChoices(models.TextChoices):
        DAILY = 'daily', 'Denně'
        WEEKLY = 'weekly', 'Týdně'
        CUSTOM = 'custom', 'Vlastní dny'

    class DifficultyChoices(models.TextChoices):
        EASY = 'easy', 'Lehký'
        MEDIUM = 'medium', 'Střední'
        HARD = 'hard', 'Těžký'

    frequency = models.CharField(max_length=10, choices=FrequencyChoices.choices, default=FrequencyChoices.DAILY)
    selected_days = models.JSONField(default=list, blank=True)  # ['monday', ...]
    category = models.CharField(max_length=50, default='osobní')
    difficulty = models.CharField(max_length=10, choices=DifficultyChoices.choices, default=DifficultyChoices.MEDIUM)
    always_show = models.BooleanField(default=False)
    xp_reward = models.PositiveIntegerField(default=1)
    reminder_time = models.TimeField(null=True, blank=True)

    # Stats
    current_streak = models.PositiveIntegerField(default=0)
    longest_streak = models.PositiveIntegerField(default=0)
    last_completed_date = models.DateField(null=True, blank=True)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['created_at', 'id']

    def __str__(self):
        return self.name


class HabitCompletion(models.Model):
    habit = models.ForeignKey(Habit, on_delete=models.CASCADE, related_name='completions')
    date = models.DateField(default=timezone.localdate)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ('habit', 'date')  # one entry per day
        ordering = ['-date']

    def __str__(self):
        return f"{self.habit} @ {self.date}"
