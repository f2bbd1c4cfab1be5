# apps/steps/filters.py
import django_filters
from apps.areas.models import Area
from apps.goals.models import Goal
from .models import DailyStep


def user_goals(request):
    if request is None:
        return Goal.objects.none()
    return Goal.objects.filter(user=request.user)


def user_areas(request):
    if request is None:
        return Area.objects.none()
    return Area.objects.filter(user=request.user)


class StepFilter(django_filters.FilterSet):
    date = django_filters.DateFilter(field_name='date')
    date_from = django_filters.DateFilter(field_name='date', lookup_expr='gte')
    date_to = django_filters.DateFilter(field_name='date', lookup_expr='lte')
    goal = django_filters.ModelChoiceFilter(queryset=user_goals)
    area = django_filters.ModelChoiceFilter(queryset=user_areas)
    completed = django_filters.BooleanFilter()
    # true = templates only, false = instances and plain steps
    recurring = django_filters.BooleanFilter(field_name='frequency', lookup_expr='isnull', exclude=True)
    title = django_filters.CharFilter(lookup_expr='icontains')

    class Meta:
        model = DailyStep
        fields = ['is_important', 'is_urgent']
