from django import forms
from apps.core.forms import ApiModelForm
from .models import Campaign


class CampaignForm(ApiModelForm):
    class Meta:
        model = Campaign
        fields = ['subject', 'sender', 'description', 'sections', 'status', 'scheduled_at', 'show_on_blog']

    def clean_sections(self):
        sections = self.cleaned_data.get('sections') or []
        if not isinstance(sections, list):
            raise forms.ValidationError("Sections must be a list")
        for section in sections:
            if not isinstance(section, dict) or not section.get('title'):
                raise forms.ValidationError("Every section needs a title")
        return [
            {'title': str(s['title']), 'description': str(s.get('description') or '')}
            for s in sections
        ]

    def clean(self):
        cleaned = super().clean()
        if cleaned.get('status') == Campaign.StatusChoices.SCHEDULED and not cleaned.get('scheduled_at'):
            self.add_error('scheduled_at', "A scheduled campaign needs a send time")
        return cleaned
