"""Tests for the menu item aggregate."""

from unittest import mock

import pytest

from inventory.models import Ingredient, MenuItem, MenuItemIngredient, MenuItemPhoto


@pytest.mark.django_db
class TestMenuItems:
    """Test suite for /api/menu/."""

    @pytest.fixture
    def payload(self, location, category, food_type, ingredient) -> dict:
        tier = ingredient.quantities.get(quantity_value='200g')
        return {
            'location_id': str(location.pk),
            'name': 'Chicken Rice Bowl',
            'food_category_id': str(category.pk),
            'food_type_id': str(food_type.pk),
            'price': '1450.00',
            'tags': 'high-protein, lunch',
            'photos': ['https://cdn.thrive.lk/bowl-1.jpg', 'https://cdn.thrive.lk/bowl-2.jpg'],
            'ingredients': [{'ingredient_id': str(ingredient.pk), 'ingredient_quantity_id': str(tier.pk)}],
        }

    def test_create_assigns_display_id_and_children(self, admin_client, payload):
        response = admin_client.post('/api/menu/', payload, format='json')

        assert response.status_code == 201
        data = response.json()['data']
        assert data['display_id'] == '#001'
        assert data['status'] == 'draft'
        assert data['category_name'] == 'Meat'
        assert [(p['photo_url'], p['display_order']) for p in data['photos']] == [
            ('https://cdn.thrive.lk/bowl-1.jpg', 0),
            ('https://cdn.thrive.lk/bowl-2.jpg', 1),
        ]
        assert data['ingredients'][0]['ingredient_name'] == 'Chicken Breast'
        assert data['ingredients'][0]['quantity_value'] == '200g'

    def test_display_ids_count_per_location(self, location, other_location):
        first = MenuItem.objects.create(location=location, name='A')
        second = MenuItem.objects.create(location=location, name='B')
        elsewhere = MenuItem.objects.create(location=other_location, name='C')

        assert (first.display_id, second.display_id, elsewhere.display_id) == ('#001', '#002', '#001')

    def test_display_ids_are_not_reused_after_delete(self, location):
        MenuItem.objects.create(location=location, name='A').delete()

        assert MenuItem.objects.create(location=location, name='B').display_id == '#002'

    def test_create_uses_request_location(self, admin_client, payload, location):
        del payload['location_id']

        response = admin_client.post('/api/menu/', payload, format='json', HTTP_X_LOCATION_ID=str(location.pk))

        assert response.status_code == 201
        assert response.json()['data']['location_id'] == str(location.pk)

    def test_create_without_any_location_is_rejected(self, admin_client, payload):
        del payload['location_id']

        response = admin_client.post('/api/menu/', payload, format='json')

        assert response.status_code == 400
        assert 'location_id' in response.json()['details']

    def test_duplicate_ingredient_is_rejected(self, admin_client, payload, ingredient):
        payload['ingredients'].append({'ingredient_id': str(ingredient.pk), 'custom_quantity': 'extra'})

        response = admin_client.post('/api/menu/', payload, format='json')

        assert response.status_code == 400
        assert not MenuItem.objects.exists()

    def test_tier_must_belong_to_ingredient(self, admin_client, payload, food_type, ingredient):
        other = Ingredient.objects.create(food_type=food_type, name='Other')
        payload['ingredients'] = [{
            'ingredient_id': str(other.pk),
            'ingredient_quantity_id': str(ingredient.quantities.first().pk),
        }]

        response = admin_client.post('/api/menu/', payload, format='json')

        assert response.status_code == 400

    def test_list_requires_location(self, admin_client):
        response = admin_client.get('/api/menu/')

        assert response.status_code == 400
        assert response.json() == {'success': False, 'error': 'location_id is required'}

    def test_list_filters(self, client_for, location, menu_item, category):
        MenuItem.objects.create(location=location, name='Prawn Curry', tags='spicy', status='active', food_category=category)

        client = client_for('kitchen_staff')
        response = client.get('/api/menu/', {'location_id': str(location.pk), 'status': 'active'})
        assert [row['name'] for row in response.json()['data']] == ['Prawn Curry']

        response = client.get('/api/menu/', {'location_id': str(location.pk), 'search': 'SPICY'})
        assert response.json()['count'] == 1

        response = client.get('/api/menu/', {'location_id': str(location.pk), 'category_id': str(category.pk)})
        assert response.json()['count'] == 1

    def test_update_replaces_supplied_children_only(self, admin_client, payload):
        created = admin_client.post('/api/menu/', payload, format='json').json()['data']

        response = admin_client.patch(f"/api/menu/{created['id']}/", {
            'photos': ['https://cdn.thrive.lk/new.jpg'], 'price': '1500.00',
        }, format='json')

        data = response.json()['data']
        assert data['price'] == '1500.00'
        assert [p['photo_url'] for p in data['photos']] == ['https://cdn.thrive.lk/new.jpg']
        assert len(data['ingredients']) == 1
        assert data['display_id'] == '#001'

    def test_toggle_status_flips_between_draft_and_active(self, admin_client, menu_item):
        url = f'/api/menu/{menu_item.pk}/toggle-status/'

        assert admin_client.patch(url).json()['data']['status'] == 'active'
        assert admin_client.patch(url).json()['data']['status'] == 'draft'

    def test_toggle_unknown_item_is_not_found(self, admin_client):
        response = admin_client.patch('/api/menu/00000000-0000-0000-0000-000000000000/toggle-status/')

        assert response.status_code == 404
        assert response.json()['error'] == 'Menu item not found'

    def test_delete_removes_composition(self, admin_client, payload):
        created = admin_client.post('/api/menu/', payload, format='json').json()['data']

        admin_client.delete(f"/api/menu/{created['id']}/")

        assert not MenuItemIngredient.objects.exists()

    def test_failed_composition_insert_rolls_back_create(self, admin_client, payload):
        with mock.patch.object(MenuItemIngredient.objects, 'bulk_create', side_effect=RuntimeError('disk full')):
            response = admin_client.post('/api/menu/', payload, format='json')

        assert response.status_code == 500
        assert response.json() == {'success': False, 'error': 'Internal server error'}
        assert not MenuItem.objects.exists()
        assert not MenuItemPhoto.objects.exists()

    def test_failed_composition_insert_keeps_previous_rows(self, admin_client, payload, ingredient):
        created = admin_client.post('/api/menu/', payload, format='json').json()['data']
        replacement = Ingredient.objects.create(food_type=ingredient.food_type, name='Chicken Thigh')

        with mock.patch.object(MenuItemIngredient.objects, 'bulk_create', side_effect=RuntimeError('disk full')):
            response = admin_client.patch(f"/api/menu/{created['id']}/", {
                'photos': ['https://cdn.thrive.lk/new.jpg'],
                'ingredients': [{'ingredient_id': str(replacement.pk)}],
            }, format='json')

        assert response.status_code == 500
        rows = MenuItemIngredient.objects.filter(menu_item_id=created['id'])
        assert list(rows.values_list('ingredient_id', flat=True)) == [ingredient.pk]
        photos = MenuItemPhoto.objects.filter(menu_item_id=created['id']).order_by('display_order')
        assert list(photos.values_list('photo_url', flat=True)) == payload['photos']
