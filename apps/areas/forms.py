from django import forms
from apps.core.forms import ApiModelForm
from .models import Area, Milestone


class AreaForm(ApiModelForm):
    class Meta:
        model = Area
        fields = ['name', 'description', 'color', 'icon', 'order']

    def clean_color(self):
        color = self.cleaned_data['color']
        if len(color) != 7 or not color.startswith('#'):
            raise forms.ValidationError("Color must be a HEX value like #1a2b3c")
        return color


class MilestoneForm(ApiModelForm):
    encrypted_fields = ('title', 'description')

    class Meta:
        model = Milestone
        fields = ['area', 'title', 'description', 'completed_date', 'progress']

    def __init__(self, user, *args, **kwargs):
        super().__init__(user, *args, **kwargs)
        self.limit_to_user('area')

    def clean_progress(self):
        progress = self.cleaned_data['progress']
        if progress > 100:
            raise forms.ValidationError("Progress cannot exceed 100")
        return progress
