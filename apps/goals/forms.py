from django import forms
from apps.core.forms import ApiModelForm
from .models import Goal


class GoalForm(ApiModelForm):
    # Focus fields are managed by FocusService only
    encrypted_fields = ('description',)

    class Meta:
        model = Goal
        fields = [
            'title', 'description', 'target_date', 'status', 'priority', 'goal_type',
            'progress_percentage', 'progress_type', 'area',
        ]

    def __init__(self, user, *args, **kwargs):
        super().__init__(user, *args, **kwargs)
        # Only the user's own areas can be linked
        self.limit_to_user('area')

    def clean_progress_percentage(self):
        value = self.cleaned_data['progress_percentage']
        if value > 100:
            raise forms.ValidationError("Progress cannot exceed 100")
        return value
