"""Shared pytest fixtures for the API tests."""

from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from authentication.models import Location, User
from inventory.models import FoodCategory, FoodType, Ingredient, IngredientQuantity, MenuItem
from orders.models import Customer


@pytest.fixture(autouse=True)
def fast_password_hasher(settings):
    """Use a cheap hasher so account fixtures stay fast."""
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']


@pytest.fixture
def location(db) -> Location:
    """Fixture providing the main test location."""
    return Location.objects.create(name='Thrive Colombo', location_type='restaurant')


@pytest.fixture
def other_location(db) -> Location:
    """Fixture providing a second, unrelated location."""
    return Location.objects.create(name='Thrive Kandy', location_type='restaurant')


@pytest.fixture
def make_user(location):
    """Factory creating a user at the main location unless told otherwise."""

    def _make_user(role='admin', email=None, password='Secret123!', **extra):
        extra.setdefault('location', location)
        extra.setdefault('name', f'{role.title()} User')
        return User.objects.create_user(email or f'{role}@thrive.lk', password, role=role, **extra)

    return _make_user


@pytest.fixture
def admin_user(make_user) -> User:
    return make_user('admin')


@pytest.fixture
def api_client() -> APIClient:
    """Unauthenticated API client."""
    return APIClient()


@pytest.fixture
def client_for(make_user):
    """Factory returning an API client authenticated with the given role."""

    def _client_for(role='admin', **extra):
        client = APIClient()
        client.force_authenticate(user=make_user(role, **extra))
        return client

    return _client_for


@pytest.fixture
def admin_client(client_for) -> APIClient:
    return client_for('admin', email='owner@thrive.lk')


@pytest.fixture
def category(db) -> FoodCategory:
    return FoodCategory.objects.create(name='Meat', display_order=1)


@pytest.fixture
def food_type(category) -> FoodType:
    return FoodType.objects.create(category=category, name='Chicken')


@pytest.fixture
def ingredient(food_type) -> Ingredient:
    """Fixture providing an ingredient with two quantity tiers."""
    ingredient = Ingredient.objects.create(food_type=food_type, name='Chicken Breast')
    IngredientQuantity.objects.create(ingredient=ingredient, quantity_value='100g', quantity_grams=100, price=Decimal('450.00'))
    IngredientQuantity.objects.create(ingredient=ingredient, quantity_value='200g', quantity_grams=200, price=Decimal('850.00'))
    return ingredient


@pytest.fixture
def menu_item(location) -> MenuItem:
    return MenuItem.objects.create(location=location, name='Grilled Chicken Bowl', price=Decimal('1200.00'))


@pytest.fixture
def customer(location) -> Customer:
    return Customer.objects.create(location=location, email='guest@example.com', name='Nimal Perera')
