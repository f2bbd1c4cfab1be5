from django import forms
from apps.core.forms import ApiModelForm
from apps.steps.domain.entities import WEEKDAYS
from .models import Habit


class HabitForm(ApiModelForm):
    class Meta:
        model = Habit
        fields = [
            'name', 'description', 'frequency', 'selected_days', 'category', 'difficulty',
            'always_show', 'xp_reward', 'reminder_time', 'is_active',
        ]

    def clean_selected_days(self):
        days = self.cleaned_data.get('selected_days') or []
        if not isinstance(days, list) or any(str(d).lower() not in WEEKDAYS for d in days):
            raise forms.ValidationError("selected_days must be weekday names")
        return [str(d).lower() for d in days]

    def clean(self):
        cleaned = super().clean()
        # Description falls back to the name
        if not cleaned.get('description') and cleaned.get('name'):
            cleaned['description'] = cleaned['name']
        return cleaned
