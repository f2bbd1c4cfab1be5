# apps/crm/filters.py
import django_filters
from django.db.models import Q
from .models import Booking, Lead


class LeadFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Lead.StatusChoices.choices)
    q = django_filters.CharFilter(method='search', label="Name or e-mail")

    class Meta:
        model = Lead
        fields = ['source']

    def search(self, queryset, name, value):
        return queryset.filter(Q(name__icontains=value) | Q(email__icontains=value))


class BookingFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Booking.StatusChoices.choices)
    date_from = django_filters.DateFilter(field_name='scheduled_at', lookup_expr='date__gte')
    date_to = django_filters.DateFilter(field_name='scheduled_at', lookup_expr='date__lte')

    class Meta:
        model = Booking
        fields = ['event', 'lead']
