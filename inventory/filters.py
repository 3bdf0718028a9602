import django_filters
from django.db.models import Q

from .models import FoodType, Specification, CookType, Ingredient, MenuItem


class FoodTypeFilter(django_filters.FilterSet):
    category_id = django_filters.UUIDFilter(field_name='category_id')

    class Meta:
        model = FoodType
        fields = ['category_id']


class SpecificationFilter(django_filters.FilterSet):
    food_type_id = django_filters.UUIDFilter(field_name='food_type_id')

    class Meta:
        model = Specification
        fields = ['food_type_id']


class CookTypeFilter(django_filters.FilterSet):
    category_id = django_filters.UUIDFilter(field_name='category_id')

    class Meta:
        model = CookType
        fields = ['category_id']


class IngredientFilter(django_filters.FilterSet):
    category_id = django_filters.UUIDFilter(field_name='food_type__category_id')
    food_type_id = django_filters.UUIDFilter(field_name='food_type_id')
    is_active = django_filters.BooleanFilter()

    class Meta:
        model = Ingredient
        fields = ['category_id', 'food_type_id', 'is_active']


class MenuItemFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=MenuItem.STATUS_CHOICES)
    search = django_filters.CharFilter(method='filter_search')
    category_id = django_filters.UUIDFilter(field_name='food_category_id')

    class Meta:
        model = MenuItem
        fields = ['status', 'search', 'category_id']

    def filter_search(self, queryset, name, value):
        return queryset.filter(Q(name__icontains=value) | Q(tags__icontains=value))
