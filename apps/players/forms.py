from django import forms
from apps.core.forms import ApiModelForm
from .models import Player


class PlayerForm(ApiModelForm):
    class Meta:
        model = Player
        fields = [
            'name', 'gender', 'avatar', 'appearance', 'level', 'experience',
            'energy', 'current_day', 'current_time',
        ]

    def clean_appearance(self):
        value = self.cleaned_data.get('appearance') or {}
        if not isinstance(value, dict):
            raise forms.ValidationError("appearance must be an object")
        return value

    def clean_level(self):
        level = self.cleaned_data['level']
        if level < 1:
            raise forms.ValidationError("Level starts at 1")
        return level
