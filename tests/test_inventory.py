"""Tests for the food taxonomy and ingredient endpoints."""

from unittest import mock

import pytest

from inventory.models import CookType, FoodCategory, FoodType, Ingredient, IngredientQuantity, Specification


@pytest.mark.django_db
class TestTaxonomy:
    """Test suite for /api/settings/."""

    def test_category_display_order_defaults_to_next_slot(self, admin_client):
        FoodCategory.objects.create(name='Meat', display_order=1)
        FoodCategory.objects.create(name='Seafood', display_order=3)

        response = admin_client.post('/api/settings/categories/', {'name': 'Dairy'}, format='json')

        assert response.status_code == 201
        assert response.json()['data']['display_order'] == 4

    def test_first_category_gets_display_order_one(self, admin_client):
        response = admin_client.post('/api/settings/categories/', {'name': 'Meat'}, format='json')

        assert response.json()['data']['display_order'] == 1

    def test_categories_are_ordered_by_display_order_then_name(self, client_for):
        FoodCategory.objects.create(name='Vegetables', display_order=2)
        FoodCategory.objects.create(name='Add Ons', display_order=2)
        FoodCategory.objects.create(name='Meat', display_order=1)

        response = client_for('kitchen_staff').get('/api/settings/categories/')

        assert [row['name'] for row in response.json()['data']] == ['Meat', 'Add Ons', 'Vegetables']

    def test_duplicate_category_name_is_conflict(self, admin_client, category):
        response = admin_client.post('/api/settings/categories/', {'name': 'Meat'}, format='json')

        assert response.status_code == 409

    def test_staff_cannot_write_taxonomy(self, client_for):
        response = client_for('staff').post('/api/settings/categories/', {'name': 'Meat'}, format='json')

        assert response.status_code == 403

    def test_food_types_filter_by_category(self, admin_client, category, food_type):
        other = FoodCategory.objects.create(name='Seafood', display_order=2)
        FoodType.objects.create(category=other, name='Fish')

        response = admin_client.get('/api/settings/types/', {'category_id': str(category.pk)})

        data = response.json()['data']
        assert [row['name'] for row in data] == ['Chicken']
        assert data[0]['category_name'] == 'Meat'

    def test_duplicate_food_type_in_category_is_conflict(self, admin_client, category, food_type):
        response = admin_client.post('/api/settings/types/', {
            'category_id': str(category.pk), 'name': 'Chicken',
        }, format='json')

        assert response.status_code == 409

    def test_unknown_category_reference_is_rejected(self, admin_client):
        response = admin_client.post('/api/settings/types/', {
            'category_id': '00000000-0000-0000-0000-000000000000', 'name': 'Ghost',
        }, format='json')

        assert response.status_code == 400
        assert 'category_id' in response.json()['details']

    def test_specifications_and_cook_types(self, admin_client, category, food_type):
        spec = admin_client.post('/api/settings/specifications/', {
            'food_type_id': str(food_type.pk), 'name': 'Breast',
        }, format='json')
        cook = admin_client.post('/api/settings/cook-types/', {
            'category_id': str(category.pk), 'name': 'Grilled',
        }, format='json')

        assert spec.status_code == 201
        assert spec.json()['data']['food_type_name'] == 'Chicken'
        assert cook.status_code == 201
        assert cook.json()['data']['category_name'] == 'Meat'

        response = admin_client.get('/api/settings/specifications/', {'food_type_id': str(food_type.pk)})
        assert response.json()['count'] == 1

    def test_deleting_category_cascades(self, admin_client, category, ingredient):
        CookType.objects.create(category=category, name='Grilled')
        Specification.objects.create(food_type=ingredient.food_type, name='Breast')

        response = admin_client.delete(f'/api/settings/categories/{category.pk}/')

        assert response.status_code == 200
        assert not FoodType.objects.exists()
        assert not CookType.objects.exists()
        assert not Specification.objects.exists()
        assert not Ingredient.objects.exists()
        assert not IngredientQuantity.objects.exists()


@pytest.mark.django_db
class TestIngredients:
    """Test suite for /api/ingredients/."""

    def test_create_with_quantity_tiers(self, admin_client, food_type):
        response = admin_client.post('/api/ingredients/', {
            'food_type_id': str(food_type.pk),
            'name': 'Chicken Thigh',
            'quantities': [
                {'quantity_value': '200g', 'quantity_grams': 200, 'price': '700.00'},
                {'quantity_value': '100g', 'quantity_grams': 100, 'price': '380.00'},
            ],
        }, format='json')

        assert response.status_code == 201
        data = response.json()['data']
        assert data['category_name'] == 'Meat'
        assert [tier['quantity_value'] for tier in data['quantities']] == ['100g', '200g']

    def test_duplicate_tier_value_is_rejected(self, admin_client, food_type):
        response = admin_client.post('/api/ingredients/', {
            'food_type_id': str(food_type.pk),
            'quantities': [{'quantity_value': '100g'}, {'quantity_value': '100g'}],
        }, format='json')

        assert response.status_code == 400
        assert not Ingredient.objects.exists()

    def test_supplied_quantities_replace_all_tiers(self, admin_client, ingredient):
        response = admin_client.put(f'/api/ingredients/{ingredient.pk}/', {
            'quantities': [{'quantity_value': '500g', 'quantity_grams': 500, 'price': '2000.00'}],
        }, format='json')

        assert response.status_code == 200
        assert [tier['quantity_value'] for tier in response.json()['data']['quantities']] == ['500g']
        assert ingredient.quantities.count() == 1

    def test_empty_quantities_clears_tiers(self, admin_client, ingredient):
        admin_client.patch(f'/api/ingredients/{ingredient.pk}/', {'quantities': []}, format='json')

        assert ingredient.quantities.count() == 0

    def test_omitted_quantities_keeps_tiers(self, admin_client, ingredient):
        response = admin_client.patch(f'/api/ingredients/{ingredient.pk}/', {'is_active': False}, format='json')

        assert response.json()['data']['is_active'] is False
        assert ingredient.quantities.count() == 2

    def test_list_filters(self, admin_client, ingredient, category):
        Ingredient.objects.create(food_type=ingredient.food_type, name='Old Stock', is_active=False)

        response = admin_client.get('/api/ingredients/', {'category_id': str(category.pk), 'is_active': 'true'})

        assert [row['name'] for row in response.json()['data']] == ['Chicken Breast']

    def test_by_category_lists_active_ingredients(self, client_for, ingredient, category):
        FoodCategory.objects.create(name='Dairy', display_order=2)
        Ingredient.objects.create(food_type=ingredient.food_type, name='Old Stock', is_active=False)

        response = client_for('staff').get('/api/ingredients/by-category/')

        data = response.json()['data']
        assert [row['category_name'] for row in data] == ['Meat', 'Dairy']
        assert [row['name'] for row in data[0]['ingredients']] == ['Chicken Breast']
        assert data[1]['ingredients'] == []

    def test_delete_removes_tiers(self, admin_client, ingredient):
        response = admin_client.delete(f'/api/ingredients/{ingredient.pk}/')

        assert response.json()['message'] == 'Ingredient deleted successfully'
        assert not IngredientQuantity.objects.exists()

    def test_failed_tier_insert_rolls_back_create(self, admin_client, food_type):
        with mock.patch.object(IngredientQuantity.objects, 'bulk_create', side_effect=RuntimeError('disk full')):
            response = admin_client.post('/api/ingredients/', {
                'food_type_id': str(food_type.pk),
                'name': 'Chicken Thigh',
                'quantities': [{'quantity_value': '100g', 'quantity_grams': 100, 'price': '380.00'}],
            }, format='json')

        assert response.status_code == 500
        assert response.json() == {'success': False, 'error': 'Internal server error'}
        assert not Ingredient.objects.exists()

    def test_failed_tier_insert_keeps_previous_tiers(self, admin_client, ingredient):
        with mock.patch.object(IngredientQuantity.objects, 'bulk_create', side_effect=RuntimeError('disk full')):
            response = admin_client.patch(f'/api/ingredients/{ingredient.pk}/', {
                'name': 'Renamed',
                'quantities': [{'quantity_value': '500g', 'quantity_grams': 500, 'price': '2000.00'}],
            }, format='json')

        assert response.status_code == 500
        ingredient.refresh_from_db()
        assert ingredient.name == 'Chicken Breast'
        assert sorted(ingredient.quantities.values_list('quantity_value', flat=True)) == ['100g', '200g']
