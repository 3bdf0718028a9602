import django_filters
from django.db.models import Q

from .models import Location, User


class LocationFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(field_name='name', lookup_expr='icontains')
    status = django_filters.ChoiceFilter(choices=Location.STATUS_CHOICES)

    class Meta:
        model = Location
        fields = ['search', 'status']


class UserFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method='filter_search')
    role = django_filters.ChoiceFilter(choices=User.ROLE_CHOICES)
    status = django_filters.ChoiceFilter(field_name='account_status', choices=User.STATUS_CHOICES)

    class Meta:
        model = User
        fields = ['search', 'role', 'status']

    def filter_search(self, queryset, name, value):
        return queryset.filter(Q(name__icontains=value) | Q(email__icontains=value))
