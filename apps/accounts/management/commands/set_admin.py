from django.core.management.base import BaseCommand, CommandError

from apps.accounts.services import set_admin_status, AccountNotFoundError


class Command(BaseCommand):
    help = 'Grant (or revoke with --revoke) the Solvix administrator flag'

    def add_arguments(self, parser):
        parser.add_argument('email', help='Email of an active account')
        parser.add_argument('--revoke', action='store_true', help='Remove the flag instead')

    def handle(self, *args, **options):
        try:
            user = set_admin_status(email=options['email'], is_admin=not options['revoke'])
        except AccountNotFoundError as e:
            raise CommandError(str(e))

        state = 'is now' if user.is_admin else 'is no longer'
        self.stdout.write(self.style.SUCCESS(f'{user.email} {state} an administrator'))
