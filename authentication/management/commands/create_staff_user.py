from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from authentication.models import Location, User
from authentication.permissions import ALL_ROLES


class Command(BaseCommand):
    help = 'Create a staff account, creating its location by name when needed'

    def add_arguments(self, parser):
        parser.add_argument('email')
        parser.add_argument('--password', required=True)
        parser.add_argument('--name', required=True)
        parser.add_argument('--role', default='admin', choices=ALL_ROLES)
        group = parser.add_mutually_exclusive_group(required=True)
        group.add_argument('--location-id')
        group.add_argument('--location-name')

    @transaction.atomic
    def handle(self, *args, **options):
        if options.get('location_id'):
            try:
                location = Location.objects.get(pk=options['location_id'])
            except (Location.DoesNotExist, ValidationError):
                raise CommandError(f"Location {options['location_id']} not found")
        else:
            location = Location.objects.filter(name=options['location_name']).order_by('created_at').first()
            if location is None:
                location = Location.objects.create(name=options['location_name'])
                self.stdout.write(f'Created location "{location.name}" ({location.pk})')

        if User.objects.filter(location=location, email__iexact=options['email']).exists():
            raise CommandError(f"{options['email']} already exists at {location.name}")

        user = User.objects.create_user(
            options['email'],
            options['password'],
            location=location,
            name=options['name'],
            role=options['role'],
        )
        self.stdout.write(self.style.SUCCESS(
            f'Created {user.role} {user.email} at {location.name} ({user.pk})'
        ))
