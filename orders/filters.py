import django_filters
from django.db.models import Q

from .models import Customer, Order


class CustomerFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method='filter_search')
    status = django_filters.ChoiceFilter(field_name='account_status', choices=Customer.STATUS_CHOICES)

    class Meta:
        model = Customer
        fields = ['search', 'status']

    def filter_search(self, queryset, name, value):
        return queryset.filter(
            Q(name__icontains=value) | Q(email__icontains=value) | Q(contact_number__icontains=value)
        )


class OrderFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Order.STATUS_CHOICES)
    customer_id = django_filters.UUIDFilter(field_name='customer_id')
    date_from = django_filters.DateTimeFilter(field_name='order_date', lookup_expr='gte')
    date_to = django_filters.DateTimeFilter(field_name='order_date', lookup_expr='lte')

    class Meta:
        model = Order
        fields = ['status', 'customer_id', 'date_from', 'date_to']
