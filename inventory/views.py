from rest_framework import generics
from django.db.models import Prefetch
from drf_spectacular.utils import extend_schema
import logging

from authentication.mixins import EnvelopeMixin, LocationScopedMixin, envelope
from authentication.permissions import IsAnyRole, IsManagement
from authentication.views import LOCATION_HEADER
from .filters import (
    FoodTypeFilter, SpecificationFilter, CookTypeFilter, IngredientFilter, MenuItemFilter
)
from .models import (
    FoodCategory, FoodType, Specification, CookType, Ingredient, MenuItem
)
from .serializers import (
    FoodCategorySerializer, FoodTypeSerializer, SpecificationSerializer, CookTypeSerializer,
    IngredientSerializer, IngredientCreateUpdateSerializer, IngredientsByCategorySerializer,
    MenuItemListSerializer, MenuItemDetailSerializer, MenuItemCreateUpdateSerializer
)

logger = logging.getLogger(__name__)


class ManagementWriteMixin:
    """Reads are open to every role; writes need admin or manager"""

    def get_permissions(self):
        if self.request.method in ['POST', 'PUT', 'PATCH', 'DELETE']:
            return [IsManagement()]
        return [IsAnyRole()]


# =============== TAXONOMY ===============

class FoodCategoryListCreateView(ManagementWriteMixin, EnvelopeMixin, generics.ListCreateAPIView):
    """
    get: List food categories ordered by display order, then name
    post: Create a category (display_order defaults to the next free slot)
    """
    resource_name = 'Category'
    queryset = FoodCategory.objects.order_by('display_order', 'name')
    serializer_class = FoodCategorySerializer


class FoodCategoryDetailView(ManagementWriteMixin, EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    resource_name = 'Category'
    queryset = FoodCategory.objects.all()
    serializer_class = FoodCategorySerializer


class FoodTypeListCreateView(ManagementWriteMixin, EnvelopeMixin, generics.ListCreateAPIView):
    """
    get: List food types, optionally for one category
    post: Create a food type
    """
    resource_name = 'Food type'
    queryset = FoodType.objects.select_related('category').order_by('category__display_order', 'name')
    serializer_class = FoodTypeSerializer
    filterset_class = FoodTypeFilter


class FoodTypeDetailView(ManagementWriteMixin, EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    resource_name = 'Food type'
    queryset = FoodType.objects.select_related('category')
    serializer_class = FoodTypeSerializer


class SpecificationListCreateView(ManagementWriteMixin, EnvelopeMixin, generics.ListCreateAPIView):
    """
    get: List specifications, optionally for one food type
    post: Create a specification
    """
    resource_name = 'Specification'
    queryset = Specification.objects.select_related('food_type').order_by('food_type__name', 'name')
    serializer_class = SpecificationSerializer
    filterset_class = SpecificationFilter


class SpecificationDetailView(ManagementWriteMixin, EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    resource_name = 'Specification'
    queryset = Specification.objects.select_related('food_type')
    serializer_class = SpecificationSerializer


class CookTypeListCreateView(ManagementWriteMixin, EnvelopeMixin, generics.ListCreateAPIView):
    """
    get: List cook types, optionally for one category
    post: Create a cook type
    """
    resource_name = 'Cook type'
    queryset = CookType.objects.select_related('category').order_by('category__display_order', 'name')
    serializer_class = CookTypeSerializer
    filterset_class = CookTypeFilter


class CookTypeDetailView(ManagementWriteMixin, EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    resource_name = 'Cook type'
    queryset = CookType.objects.select_related('category')
    serializer_class = CookTypeSerializer


# =============== INGREDIENTS ===============

def ingredient_queryset():
    return Ingredient.objects.select_related(
        'food_type__category', 'specification', 'cook_type'
    ).prefetch_related('quantities')


class IngredientListCreateView(ManagementWriteMixin, EnvelopeMixin, generics.ListCreateAPIView):
    """
    get: List ingredients with their quantity tiers
    post: Create an ingredient together with its quantity tiers
    """
    resource_name = 'Ingredient'
    serializer_class = IngredientCreateUpdateSerializer
    read_serializer_class = IngredientSerializer
    filterset_class = IngredientFilter

    def get_queryset(self):
        return ingredient_queryset().order_by('food_type__category__display_order', 'food_type__name', '-created_at')

    def refresh_instance(self, instance):
        return ingredient_queryset().get(pk=instance.pk)


class IngredientDetailView(ManagementWriteMixin, EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    get: Get an ingredient with tiers ordered by grams
    put/patch: Update fields; a supplied quantities list replaces every tier
    delete: Delete the ingredient and its tiers
    """
    resource_name = 'Ingredient'
    serializer_class = IngredientCreateUpdateSerializer
    read_serializer_class = IngredientSerializer

    def get_queryset(self):
        return ingredient_queryset()

    def refresh_instance(self, instance):
        return ingredient_queryset().get(pk=instance.pk)


class IngredientsByCategoryView(generics.GenericAPIView):
    """
    get: Every category with its active ingredients, grouped for the ingredient tabs
    """
    permission_classes = [IsAnyRole]
    serializer_class = IngredientsByCategorySerializer

    def get_queryset(self):
        active_ingredients = Ingredient.objects.filter(is_active=True).select_related(
            'food_type', 'specification', 'cook_type'
        ).order_by('-created_at')
        return FoodCategory.objects.order_by('display_order', 'name').prefetch_related(
            Prefetch('food_types', queryset=FoodType.objects.order_by('name')),
            Prefetch('food_types__ingredients', queryset=active_ingredients),
        )

    def get(self, request):
        categories = list(self.get_queryset())
        for category in categories:
            # Food types arrive ordered by name, their ingredients newest first
            category.active_ingredients = [
                ingredient
                for food_type in category.food_types.all()
                for ingredient in food_type.ingredients.all()
            ]
        data = self.get_serializer(categories, many=True).data
        return envelope(data, count=len(data))


# =============== MENU ===============

def menu_queryset():
    return MenuItem.objects.select_related(
        'location', 'food_category', 'food_type', 'specification', 'cook_type'
    ).prefetch_related('photos', 'ingredients__ingredient__food_type', 'ingredients__ingredient_quantity')


@extend_schema(parameters=[LOCATION_HEADER])
class MenuItemListCreateView(ManagementWriteMixin, EnvelopeMixin, LocationScopedMixin, generics.ListCreateAPIView):
    """
    get: List the menu of a location with photos
    post: Create a menu item with its photos and ingredient composition
    """
    resource_name = 'Menu item'
    serializer_class = MenuItemCreateUpdateSerializer
    read_serializer_class = MenuItemListSerializer
    detail_serializer_class = MenuItemDetailSerializer
    filterset_class = MenuItemFilter

    def get_queryset(self):
        queryset = menu_queryset().order_by('-created_at')
        if self.request.method == 'GET':
            queryset = queryset.filter(location_id=self.get_location_id())
        return queryset

    def refresh_instance(self, instance):
        return menu_queryset().get(pk=instance.pk)


class MenuItemDetailView(ManagementWriteMixin, EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    get: Get a menu item with photos and ingredient composition
    put/patch: Update fields; supplied photos or ingredients replace the whole set
    delete: Delete the menu item
    """
    resource_name = 'Menu item'
    serializer_class = MenuItemCreateUpdateSerializer
    read_serializer_class = MenuItemDetailSerializer

    def get_queryset(self):
        return menu_queryset()

    def refresh_instance(self, instance):
        return menu_queryset().get(pk=instance.pk)


class MenuItemToggleStatusView(EnvelopeMixin, generics.GenericAPIView):
    """
    patch: Flip a menu item between draft and active
    """
    resource_name = 'Menu item'
    permission_classes = [IsManagement]
    serializer_class = MenuItemDetailSerializer

    def get_queryset(self):
        return menu_queryset()

    def patch(self, request, *args, **kwargs):
        menu_item = self.get_object()
        status = menu_item.toggle_status()
        logger.info(f"Menu item {menu_item.display_id} is now {status}")
        return envelope(self.get_serializer(menu_item).data)
