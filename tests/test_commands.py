"""Tests for the management commands."""

from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from authentication.models import Location, User
from inventory.management.commands.seed_taxonomy import DEFAULT_TAXONOMY
from inventory.models import CookType, FoodCategory, FoodType


@pytest.mark.django_db
class TestSeedTaxonomy:
    """Test suite for seed_taxonomy."""

    def test_seeds_once(self):
        call_command('seed_taxonomy', stdout=StringIO())
        counts = (FoodCategory.objects.count(), FoodType.objects.count(), CookType.objects.count())

        out = StringIO()
        call_command('seed_taxonomy', stdout=out)

        assert counts[0] == len(DEFAULT_TAXONOMY)
        assert (FoodCategory.objects.count(), FoodType.objects.count(), CookType.objects.count()) == counts
        assert '(0 new rows)' in out.getvalue()

    def test_category_flags(self):
        call_command('seed_taxonomy', stdout=StringIO())

        vegetables = FoodCategory.objects.get(name='Vegetables')
        assert vegetables.show_specification is False
        assert vegetables.show_cook_type is True


@pytest.mark.django_db
class TestStaffCommands:
    """Test suite for create_staff_user and activate_user."""

    def test_create_staff_user_creates_location_by_name(self):
        call_command(
            'create_staff_user', 'owner@thrive.lk', '--password', 'pw', '--name', 'Owner',
            '--location-name', 'Thrive Negombo', stdout=StringIO(),
        )

        user = User.objects.get(email='owner@thrive.lk')
        assert user.role == 'admin'
        assert user.location.name == 'Thrive Negombo'
        assert user.check_password('pw')

    def test_create_staff_user_rejects_duplicate(self, make_user, location):
        make_user('staff')

        with pytest.raises(CommandError):
            call_command(
                'create_staff_user', 'staff@thrive.lk', '--password', 'pw', '--name', 'Again',
                '--location-id', str(location.pk), stdout=StringIO(),
            )

    def test_create_staff_user_rejects_unknown_location(self, db):
        with pytest.raises(CommandError):
            call_command(
                'create_staff_user', 'x@thrive.lk', '--password', 'pw', '--name', 'X',
                '--location-id', 'not-a-uuid', stdout=StringIO(),
            )
        assert not Location.objects.exists()

    def test_activate_user(self, make_user):
        user = make_user('manager', account_status='inactive')

        call_command('activate_user', 'MANAGER@thrive.lk', stdout=StringIO())

        user.refresh_from_db()
        assert user.account_status == 'active'

    def test_activate_unknown_user(self, db):
        with pytest.raises(CommandError):
            call_command('activate_user', 'ghost@thrive.lk', stdout=StringIO())
