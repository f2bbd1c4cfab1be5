from datetime import date

from django import forms
from apps.core.forms import ApiModelForm
from .domain.entities import RecurrenceRule, instance_title
from .models import DailyStep

# Template titles leave room for the " - D.M.YYYY" suffix of their instances
TEMPLATE_TITLE_MAX_LENGTH = (
    DailyStep._meta.get_field('title').max_length - len(instance_title('', date(9999, 12, 31)))
)


class DailyStepForm(ApiModelForm):
    encrypted_fields = ('description',)

    class Meta:
        model = DailyStep
        fields = [
            'title', 'description', 'goal', 'area', 'completed', 'date',
            'is_important', 'is_urgent', 'estimated_time', 'xp_reward', 'deadline',
            'checklist', 'require_checklist_complete', 'frequency', 'selected_days',
        ]

    def __init__(self, user, *args, **kwargs):
        super().__init__(user, *args, **kwargs)
        self.limit_to_user('goal', 'area')

    def clean_checklist(self):
        items = self.cleaned_data.get('checklist') or []
        if not isinstance(items, list):
            raise forms.ValidationError("Checklist must be a list")

        normalized = []
        for item in items:
            if isinstance(item, str):
                item = {'text': item, 'done': False}
            if not isinstance(item, dict) or not str(item.get('text', '')).strip():
                raise forms.ValidationError("Every checklist item needs a text")
            normalized.append({**item, 'text': str(item['text']).strip(), 'done': bool(item.get('done'))})
        return normalized

    def clean(self):
        cleaned = super().clean()

        frequency = cleaned.get('frequency')
        if frequency:
            try:
                RecurrenceRule.from_fields(frequency, cleaned.get('selected_days'))
            except ValueError as e:
                self.add_error('selected_days', str(e))
            title = cleaned.get('title') or ''
            if len(title) > TEMPLATE_TITLE_MAX_LENGTH:
                self.add_error('title', f"A recurring step title has at most {TEMPLATE_TITLE_MAX_LENGTH} characters")
        else:
            cleaned['selected_days'] = []

        # One generated instance per template and day
        day = cleaned.get('date')
        template_id = self.instance.source_template_id
        if template_id and day and DailyStep.objects.filter(
            source_template_id=template_id, date=day
        ).exclude(pk=self.instance.pk).exists():
            self.add_error('date', "This recurring step already has an instance on that day")

        # Completing is blocked while required checklist items are open
        checklist = cleaned.get('checklist') or []
        if cleaned.get('completed') and cleaned.get('require_checklist_complete'):
            if any(not item.get('done') for item in checklist):
                self.add_error('completed', "Finish the checklist first")

        return cleaned
