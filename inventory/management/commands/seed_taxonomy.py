from django.core.management.base import BaseCommand
from django.db import transaction

from inventory.models import FoodCategory, FoodType, Specification, CookType

# (name, display_order, show_specification, show_cook_type, {food type: [specifications]}, [cook types])
DEFAULT_TAXONOMY = [
    ('Meat', 1, True, True, {
        'Chicken': ['Breast', 'Thigh', 'Drumstick'],
        'Beef': ['Steak', 'Mince', 'Cubes'],
        'Lamb': ['Steak', 'Mince', 'Cubes'],
        'Turkey': ['Breast', 'Thigh'],
    }, ['Grilled', 'Boiled', 'Pan-fried', 'Air-fried', 'Steamed', 'Roasted']),
    ('Seafood', 2, True, True, {
        'Fish': ['Fillet', 'Steak', 'Whole'],
        'Prawns': ['Peeled', 'Whole'],
        'Cuttle Fish': ['Rings', 'Whole'],
    }, ['Grilled', 'Pan-fried', 'Steamed', 'Baked']),
    ('Vegetables', 3, False, True, {
        'Potatoes': [],
        'Broccoli': [],
        'Carrots': [],
        'Spinach': [],
    }, ['Steamed', 'Stir-fried', 'Roasted', 'Raw']),
    ('Dairy', 4, True, False, {
        'Cheese': ['Mozzarella', 'Cheddar'],
        'Yogurt': ['Plain', 'Low Fat'],
    }, ['No Cooking']),
    ('Add Ons', 5, True, True, {
        'Sauces': [],
        'Spices': [],
    }, ['No Cooking', 'Heated']),
]


class Command(BaseCommand):
    help = 'Load the default food categories, types, specifications and cook types'

    @transaction.atomic
    def handle(self, *args, **options):
        created = 0
        for name, display_order, show_specification, show_cook_type, food_types, cook_types in DEFAULT_TAXONOMY:
            category, was_created = FoodCategory.objects.get_or_create(
                name=name,
                defaults={
                    'display_order': display_order,
                    'show_specification': show_specification,
                    'show_cook_type': show_cook_type,
                },
            )
            created += was_created

            for type_name, specifications in food_types.items():
                food_type, was_created = FoodType.objects.get_or_create(category=category, name=type_name)
                created += was_created
                for spec_name in specifications:
                    _, was_created = Specification.objects.get_or_create(food_type=food_type, name=spec_name)
                    created += was_created

            for cook_name in cook_types:
                _, was_created = CookType.objects.get_or_create(category=category, name=cook_name)
                created += was_created

        self.stdout.write(self.style.SUCCESS(f'Taxonomy seeded ({created} new rows)'))
