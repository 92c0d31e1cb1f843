from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from apps.premium.services import (
    generate_activation_codes,
    InsufficientPermissionsError,
    InvalidBatchSizeError,
)

User = get_user_model()


class Command(BaseCommand):
    help = 'Generate a batch of premium activation codes'

    def add_arguments(self, parser):
        parser.add_argument('count', type=int, help='Number of codes (1-100)')
        parser.add_argument(
            '--admin-email',
            required=True,
            help='Email of the administrator recorded as creator',
        )

    def handle(self, *args, **options):
        try:
            admin = User.objects.get(email=options['admin_email'])
        except User.DoesNotExist:
            raise CommandError(f"No user with email {options['admin_email']}")

        try:
            codes = generate_activation_codes(count=options['count'], created_by=admin)
        except (InsufficientPermissionsError, InvalidBatchSizeError) as e:
            raise CommandError(str(e))

        for activation in codes:
            self.stdout.write(activation.code)

        self.stdout.write(self.style.SUCCESS(f'Generated {len(codes)} activation code(s)'))
