from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid

from authentication.models import Location, TimeStampedModel


# =============== FOOD TAXONOMY ===============
class FoodCategory(TimeStampedModel):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    display_order = models.IntegerField(default=0)
    show_specification = models.BooleanField(default=True)
    show_cook_type = models.BooleanField(default=True)

    def __str__(self):
        return str(self.name)

    class Meta:
        db_table = 'food_categories'
        ordering = ['display_order', 'name']
        verbose_name_plural = "Food Categories"


class FoodType(TimeStampedModel):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    category = models.ForeignKey(FoodCategory, on_delete=models.CASCADE, related_name='food_types')
    name = models.CharField(max_length=100)

    def __str__(self):
        return f"{self.category.name} - {self.name}"

    class Meta:
        db_table = 'food_types'
        ordering = ['category__display_order', 'name']
        constraints = [
            models.UniqueConstraint(fields=['category', 'name'], name='food_types_category_name_unique'),
        ]


class Specification(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    food_type = models.ForeignKey(FoodType, on_delete=models.CASCADE, related_name='specifications')
    name = models.CharField(max_length=100)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.food_type.name} - {self.name}"

    class Meta:
        db_table = 'specifications'
        ordering = ['food_type__name', 'name']
        constraints = [
            models.UniqueConstraint(fields=['food_type', 'name'], name='specifications_food_type_name_unique'),
        ]


class CookType(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    category = models.ForeignKey(FoodCategory, on_delete=models.CASCADE, related_name='cook_types')
    name = models.CharField(max_length=100)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.category.name} - {self.name}"

    class Meta:
        db_table = 'cook_types'
        ordering = ['category__display_order', 'name']
        constraints = [
            models.UniqueConstraint(fields=['category', 'name'], name='cook_types_category_name_unique'),
        ]


# =============== INGREDIENTS ===============
class Ingredient(TimeStampedModel):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    food_type = models.ForeignKey(FoodType, on_delete=models.CASCADE, related_name='ingredients')
    specification = models.ForeignKey(Specification, on_delete=models.SET_NULL, null=True, blank=True, related_name='ingredients')
    cook_type = models.ForeignKey(CookType, on_delete=models.SET_NULL, null=True, blank=True, related_name='ingredients')
    name = models.CharField(max_length=255, null=True, blank=True)
    description = models.TextField(null=True, blank=True)
    is_active = models.BooleanField(default=True)

    def __str__(self):
        return self.name or str(self.food_type.name)

    class Meta:
        db_table = 'ingredients'
        ordering = ['food_type__category__display_order', 'food_type__name', '-created_at']


class IngredientQuantity(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    ingredient = models.ForeignKey(Ingredient, on_delete=models.CASCADE, related_name='quantities')
    quantity_value = models.CharField(max_length=50)  # e.g. '100g', '250g'
    quantity_grams = models.IntegerField(null=True, blank=True)  # numeric sort key
    price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'), validators=[MinValueValidator(0)])
    is_available = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.ingredient} - {self.quantity_value}"

    class Meta:
        db_table = 'ingredient_quantities'
        ordering = [models.F('quantity_grams').asc(nulls_last=True), 'created_at']
        constraints = [
            models.UniqueConstraint(fields=['ingredient', 'quantity_value'], name='ingredient_quantities_value_unique'),
        ]


# =============== MENU ===============
class MenuItem(TimeStampedModel):
    STATUS_CHOICES = [
        ('draft', 'Draft'),
        ('active', 'Active'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    location = models.ForeignKey(Location, on_delete=models.CASCADE, related_name='menu_items')
    display_id = models.CharField(max_length=20, null=True, blank=True)  # e.g. '#001'
    name = models.CharField(max_length=255)
    food_category = models.ForeignKey(FoodCategory, on_delete=models.SET_NULL, null=True, blank=True, related_name='menu_items')
    food_type = models.ForeignKey(FoodType, on_delete=models.SET_NULL, null=True, blank=True, related_name='menu_items')
    quantity = models.CharField(max_length=100, null=True, blank=True)
    specification = models.ForeignKey(Specification, on_delete=models.SET_NULL, null=True, blank=True, related_name='menu_items')
    cook_type = models.ForeignKey(CookType, on_delete=models.SET_NULL, null=True, blank=True, related_name='menu_items')
    description = models.TextField(null=True, blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'), validators=[MinValueValidator(0)])
    tags = models.TextField(null=True, blank=True)  # comma separated
    prep_workout = models.CharField(max_length=255, null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='draft')

    def save(self, *args, **kwargs):
        # display_id is handed out once, from the location's own counter
        if self._state.adding and not self.display_id:
            number = Location.objects.next_sequence(self.location_id, 'menu_item_sequence')
            self.display_id = f"#{number:03d}"
        super(MenuItem, self).save(*args, **kwargs)

    def toggle_status(self):
        """Flip between draft and active"""
        self.status = 'draft' if self.status == 'active' else 'active'
        self.save(update_fields=['status', 'updated_at'])
        return self.status

    def __str__(self):
        return f"{self.display_id} {self.name}"

    class Meta:
        db_table = 'menu_items'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['location', 'status'], name='menu_items_location_status'),
        ]


class MenuItemPhoto(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    menu_item = models.ForeignKey(MenuItem, on_delete=models.CASCADE, related_name='photos')
    photo_url = models.TextField()
    display_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.menu_item.name} photo {self.display_order}"

    class Meta:
        db_table = 'menu_item_photos'
        ordering = ['display_order']


class MenuItemIngredient(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    menu_item = models.ForeignKey(MenuItem, on_delete=models.CASCADE, related_name='ingredients')
    ingredient = models.ForeignKey(Ingredient, on_delete=models.CASCADE, related_name='menu_items')
    ingredient_quantity = models.ForeignKey(IngredientQuantity, on_delete=models.SET_NULL, null=True, blank=True, related_name='menu_items')
    custom_quantity = models.CharField(max_length=100, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.menu_item.name} - {self.ingredient}"

    class Meta:
        db_table = 'menu_item_ingredients'
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(fields=['menu_item', 'ingredient'], name='menu_item_ingredients_unique'),
        ]
