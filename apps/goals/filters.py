# apps/goals/filters.py
import django_filters
from .models import Goal


class GoalFilter(django_filters.FilterSet):
    title = django_filters.CharFilter(lookup_expr='icontains')
    status = django_filters.ChoiceFilter(choices=Goal.StatusChoices.choices)
    priority = django_filters.ChoiceFilter(choices=Goal.PriorityChoices.choices)
    goal_type = django_filters.ChoiceFilter(choices=Goal.GoalTypeChoices.choices)
    focus_status = django_filters.ChoiceFilter(choices=Goal.FocusChoices.choices)
    target_before = django_filters.DateFilter(field_name='target_date', lookup_expr='lte')

    class Meta:
        model = Goal
        fields = ['area']
