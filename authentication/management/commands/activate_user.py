from django.core.management.base import BaseCommand, CommandError

from authentication.models import User


class Command(BaseCommand):
    help = 'Activate a user account by email'

    def add_arguments(self, parser):
        parser.add_argument('email')
        parser.add_argument('--location-id', help='Only activate the account at this location')

    def handle(self, *args, **options):
        email = options['email']
        users = User.objects.filter(email__iexact=email)
        if options.get('location_id'):
            users = users.filter(location_id=options['location_id'])

        users = list(users.select_related('location'))
        if not users:
            raise CommandError(f'User with email "{email}" not found')

        for user in users:
            if user.account_status == 'active':
                self.stdout.write(f'User "{user.email}" at {user.location.name} is already active')
                continue

            user.account_status = 'active'
            user.save(update_fields=['account_status', 'updated_at'])
            self.stdout.write(self.style.SUCCESS(
                f'Activated {user.email} at {user.location.name} (role: {user.role})'
            ))
