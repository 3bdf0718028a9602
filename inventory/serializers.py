from rest_framework import serializers
from django.db import transaction
from django.db.models import Max
import logging

from authentication.exceptions import DuplicateIngredient
from authentication.models import Location
from authentication.serializers import LocationScopedSerializerMixin
from .models import (
    FoodCategory, FoodType, Specification, CookType, Ingredient,
    IngredientQuantity, MenuItem, MenuItemPhoto, MenuItemIngredient
)

logger = logging.getLogger(__name__)


# =============== TAXONOMY ===============
class FoodCategorySerializer(serializers.ModelSerializer):
    display_order = serializers.IntegerField(required=False)

    class Meta:
        model = FoodCategory
        fields = [
            'id', 'name', 'display_order', 'show_specification', 'show_cook_type',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        # Duplicate names are reported by the database as a 409
        extra_kwargs = {'name': {'validators': []}}

    def create(self, validated_data):
        if validated_data.get('display_order') is None:
            current = FoodCategory.objects.aggregate(highest=Max('display_order'))['highest']
            validated_data['display_order'] = (current or 0) + 1
        return super().create(validated_data)


class FoodTypeSerializer(serializers.ModelSerializer):
    category_id = serializers.PrimaryKeyRelatedField(source='category', queryset=FoodCategory.objects.all())
    category_name = serializers.CharField(source='category.name', read_only=True)

    class Meta:
        model = FoodType
        fields = ['id', 'category_id', 'category_name', 'name', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']
        validators = []


class SpecificationSerializer(serializers.ModelSerializer):
    food_type_id = serializers.PrimaryKeyRelatedField(source='food_type', queryset=FoodType.objects.all())
    food_type_name = serializers.CharField(source='food_type.name', read_only=True)

    class Meta:
        model = Specification
        fields = ['id', 'food_type_id', 'food_type_name', 'name', 'created_at']
        read_only_fields = ['id', 'created_at']
        validators = []


class CookTypeSerializer(serializers.ModelSerializer):
    category_id = serializers.PrimaryKeyRelatedField(source='category', queryset=FoodCategory.objects.all())
    category_name = serializers.CharField(source='category.name', read_only=True)

    class Meta:
        model = CookType
        fields = ['id', 'category_id', 'category_name', 'name', 'created_at']
        read_only_fields = ['id', 'created_at']
        validators = []


# =============== INGREDIENTS ===============
class IngredientQuantitySerializer(serializers.ModelSerializer):
    class Meta:
        model = IngredientQuantity
        fields = ['id', 'quantity_value', 'quantity_grams', 'price', 'is_available']
        read_only_fields = ['id']


class IngredientSerializer(serializers.ModelSerializer):
    food_type_id = serializers.UUIDField(read_only=True)
    food_type_name = serializers.CharField(source='food_type.name', read_only=True)
    category_id = serializers.UUIDField(source='food_type.category_id', read_only=True)
    category_name = serializers.CharField(source='food_type.category.name', read_only=True)
    specification_id = serializers.UUIDField(read_only=True)
    specification_name = serializers.CharField(source='specification.name', read_only=True, default=None)
    cook_type_id = serializers.UUIDField(read_only=True)
    cook_type_name = serializers.CharField(source='cook_type.name', read_only=True, default=None)
    quantities = IngredientQuantitySerializer(many=True, read_only=True)

    class Meta:
        model = Ingredient
        fields = [
            'id', 'name', 'description', 'is_active',
            'food_type_id', 'food_type_name', 'category_id', 'category_name',
            'specification_id', 'specification_name', 'cook_type_id', 'cook_type_name',
            'quantities', 'created_at', 'updated_at'
        ]


class IngredientCreateUpdateSerializer(serializers.ModelSerializer):
    food_type_id = serializers.PrimaryKeyRelatedField(source='food_type', queryset=FoodType.objects.all())
    specification_id = serializers.PrimaryKeyRelatedField(
        source='specification', queryset=Specification.objects.all(), required=False, allow_null=True
    )
    cook_type_id = serializers.PrimaryKeyRelatedField(
        source='cook_type', queryset=CookType.objects.all(), required=False, allow_null=True
    )
    quantities = IngredientQuantitySerializer(many=True, required=False)

    class Meta:
        model = Ingredient
        fields = [
            'id', 'food_type_id', 'specification_id', 'cook_type_id',
            'name', 'description', 'is_active', 'quantities'
        ]
        read_only_fields = ['id']

    def validate_quantities(self, value):
        seen = set()
        for tier in value:
            quantity_value = tier.get('quantity_value')
            if not quantity_value:
                raise serializers.ValidationError('Each quantity needs a quantity_value.')
            if quantity_value in seen:
                raise serializers.ValidationError(f"Quantity '{quantity_value}' is listed more than once.")
            seen.add(quantity_value)
        return value

    def _replace_quantities(self, ingredient, quantities_data):
        ingredient.quantities.all().delete()
        IngredientQuantity.objects.bulk_create([
            IngredientQuantity(ingredient=ingredient, **tier) for tier in quantities_data
        ])

    @transaction.atomic
    def create(self, validated_data):
        quantities_data = validated_data.pop('quantities', [])

        ingredient = Ingredient.objects.create(**validated_data)
        self._replace_quantities(ingredient, quantities_data)

        logger.info(f"Created ingredient {ingredient.pk} with {len(quantities_data)} quantities")
        return ingredient

    @transaction.atomic
    def update(self, instance, validated_data):
        quantities_data = validated_data.pop('quantities', None)

        # Update ingredient fields
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()

        # An empty list clears every tier; an omitted list leaves them alone
        if quantities_data is not None:
            self._replace_quantities(instance, quantities_data)

        return instance


class CategoryIngredientSerializer(serializers.ModelSerializer):
    food_type_id = serializers.UUIDField(read_only=True)
    food_type_name = serializers.CharField(source='food_type.name', read_only=True)
    specification_name = serializers.CharField(source='specification.name', read_only=True, default=None)
    cook_type_name = serializers.CharField(source='cook_type.name', read_only=True, default=None)

    class Meta:
        model = Ingredient
        fields = [
            'id', 'name', 'food_type_id', 'food_type_name',
            'specification_name', 'cook_type_name', 'is_active'
        ]


class IngredientsByCategorySerializer(serializers.ModelSerializer):
    category_id = serializers.UUIDField(source='id', read_only=True)
    category_name = serializers.CharField(source='name', read_only=True)
    ingredients = CategoryIngredientSerializer(source='active_ingredients', many=True, read_only=True)

    class Meta:
        model = FoodCategory
        fields = [
            'category_id', 'category_name', 'display_order',
            'show_specification', 'show_cook_type', 'ingredients'
        ]


# =============== MENU ===============
class MenuItemPhotoSerializer(serializers.ModelSerializer):
    class Meta:
        model = MenuItemPhoto
        fields = ['id', 'photo_url', 'display_order']


class MenuItemIngredientSerializer(serializers.ModelSerializer):
    ingredient_id = serializers.UUIDField(read_only=True)
    ingredient_name = serializers.CharField(source='ingredient.name', read_only=True)
    food_type_name = serializers.CharField(source='ingredient.food_type.name', read_only=True)
    ingredient_quantity_id = serializers.UUIDField(read_only=True)
    quantity_value = serializers.CharField(source='ingredient_quantity.quantity_value', read_only=True, default=None)
    quantity_price = serializers.DecimalField(
        source='ingredient_quantity.price', max_digits=10, decimal_places=2, read_only=True, default=None
    )

    class Meta:
        model = MenuItemIngredient
        fields = [
            'id', 'ingredient_id', 'ingredient_name', 'food_type_name',
            'ingredient_quantity_id', 'quantity_value', 'quantity_price', 'custom_quantity'
        ]


class MenuItemListSerializer(serializers.ModelSerializer):
    location_id = serializers.UUIDField(read_only=True)
    location_name = serializers.CharField(source='location.name', read_only=True)
    food_category_id = serializers.UUIDField(read_only=True)
    category_name = serializers.CharField(source='food_category.name', read_only=True, default=None)
    food_type_id = serializers.UUIDField(read_only=True)
    food_type_name = serializers.CharField(source='food_type.name', read_only=True, default=None)
    specification_id = serializers.UUIDField(read_only=True)
    specification_name = serializers.CharField(source='specification.name', read_only=True, default=None)
    cook_type_id = serializers.UUIDField(read_only=True)
    cook_type_name = serializers.CharField(source='cook_type.name', read_only=True, default=None)
    photos = MenuItemPhotoSerializer(many=True, read_only=True)

    class Meta:
        model = MenuItem
        fields = [
            'id', 'display_id', 'location_id', 'location_name', 'name',
            'food_category_id', 'category_name', 'food_type_id', 'food_type_name',
            'specification_id', 'specification_name', 'cook_type_id', 'cook_type_name',
            'quantity', 'description', 'price', 'tags', 'prep_workout', 'status',
            'photos', 'created_at', 'updated_at'
        ]


class MenuItemDetailSerializer(MenuItemListSerializer):
    ingredients = MenuItemIngredientSerializer(many=True, read_only=True)

    class Meta(MenuItemListSerializer.Meta):
        fields = MenuItemListSerializer.Meta.fields + ['ingredients']


class MenuItemIngredientWriteSerializer(serializers.Serializer):
    ingredient_id = serializers.PrimaryKeyRelatedField(source='ingredient', queryset=Ingredient.objects.all())
    ingredient_quantity_id = serializers.PrimaryKeyRelatedField(
        source='ingredient_quantity', queryset=IngredientQuantity.objects.all(), required=False, allow_null=True
    )
    custom_quantity = serializers.CharField(max_length=100, required=False, allow_null=True, allow_blank=True)

    def validate(self, attrs):
        # Required fields are not enforced for nested rows on partial updates
        if attrs.get('ingredient') is None:
            raise serializers.ValidationError({'ingredient_id': ['This field is required.']})
        tier = attrs.get('ingredient_quantity')
        if tier is not None and tier.ingredient_id != attrs['ingredient'].pk:
            raise serializers.ValidationError({
                'ingredient_quantity_id': ['Quantity does not belong to this ingredient.']
            })
        return attrs


class MenuItemCreateUpdateSerializer(LocationScopedSerializerMixin, serializers.ModelSerializer):
    location_id = serializers.PrimaryKeyRelatedField(
        source='location', queryset=Location.objects.all(), required=False
    )
    food_category_id = serializers.PrimaryKeyRelatedField(
        source='food_category', queryset=FoodCategory.objects.all(), required=False, allow_null=True
    )
    food_type_id = serializers.PrimaryKeyRelatedField(
        source='food_type', queryset=FoodType.objects.all(), required=False, allow_null=True
    )
    specification_id = serializers.PrimaryKeyRelatedField(
        source='specification', queryset=Specification.objects.all(), required=False, allow_null=True
    )
    cook_type_id = serializers.PrimaryKeyRelatedField(
        source='cook_type', queryset=CookType.objects.all(), required=False, allow_null=True
    )
    photos = serializers.ListField(child=serializers.CharField(), required=False)
    ingredients = MenuItemIngredientWriteSerializer(many=True, required=False)

    class Meta:
        model = MenuItem
        fields = [
            'id', 'location_id', 'display_id', 'name', 'food_category_id', 'food_type_id',
            'specification_id', 'cook_type_id', 'quantity', 'description', 'price',
            'tags', 'prep_workout', 'status', 'photos', 'ingredients'
        ]
        read_only_fields = ['id', 'display_id']

    def validate_ingredients(self, value):
        seen = set()
        for row in value:
            ingredient_id = row['ingredient'].pk
            if ingredient_id in seen:
                raise DuplicateIngredient(f"Ingredient {ingredient_id} is listed more than once")
            seen.add(ingredient_id)
        return value

    def validate(self, attrs):
        return self.resolve_location(attrs)

    def _replace_photos(self, menu_item, photos_data):
        menu_item.photos.all().delete()
        MenuItemPhoto.objects.bulk_create([
            MenuItemPhoto(menu_item=menu_item, photo_url=url, display_order=index)
            for index, url in enumerate(photos_data)
        ])

    def _replace_ingredients(self, menu_item, ingredients_data):
        menu_item.ingredients.all().delete()
        MenuItemIngredient.objects.bulk_create([
            MenuItemIngredient(
                menu_item=menu_item,
                ingredient=row['ingredient'],
                ingredient_quantity=row.get('ingredient_quantity'),
                custom_quantity=row.get('custom_quantity') or None,
            )
            for row in ingredients_data
        ])

    @transaction.atomic
    def create(self, validated_data):
        photos_data = validated_data.pop('photos', [])
        ingredients_data = validated_data.pop('ingredients', [])

        menu_item = MenuItem.objects.create(**validated_data)
        self._replace_photos(menu_item, photos_data)
        self._replace_ingredients(menu_item, ingredients_data)

        logger.info(f"Created menu item {menu_item.display_id} at location {menu_item.location_id}")
        return menu_item

    @transaction.atomic
    def update(self, instance, validated_data):
        photos_data = validated_data.pop('photos', None)
        ingredients_data = validated_data.pop('ingredients', None)

        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()

        if photos_data is not None:
            self._replace_photos(instance, photos_data)
        if ingredients_data is not None:
            self._replace_ingredients(instance, ingredients_data)

        return instance
