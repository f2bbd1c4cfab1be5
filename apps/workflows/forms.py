from django import forms
from apps.core.forms import ApiModelForm
from .models import Automation, Workflow


class WorkflowForm(ApiModelForm):
    class Meta:
        model = Workflow
        fields = ['type', 'name', 'description', 'trigger_time', 'enabled', 'completed_at']


class AutomationForm(ApiModelForm):
    class Meta:
        model = Automation
        fields = [
            'name', 'description', 'type', 'target_id', 'frequency_type', 'frequency_time',
            'scheduled_date', 'is_active', 'target_value', 'current_value', 'update_value',
            'update_frequency', 'update_day_of_week', 'update_day_of_month',
        ]

    def clean_update_day_of_week(self):
        value = self.cleaned_data.get('update_day_of_week')
        if value is not None and value > 6:
            raise forms.ValidationError("Day of week is 0 (Monday) to 6 (Sunday)")
        return value

    def clean_update_day_of_month(self):
        value = self.cleaned_data.get('update_day_of_month')
        if value is not None and not 1 <= value <= 31:
            raise forms.ValidationError("Day of month is 1 to 31")
        return value

    def clean(self):
        cleaned = super().clean()
        if cleaned.get('frequency_type') == Automation.FrequencyTypeChoices.ONE_TIME and not cleaned.get('scheduled_date'):
            self.add_error('scheduled_date', "One-time automations need a scheduled date")
        return cleaned
