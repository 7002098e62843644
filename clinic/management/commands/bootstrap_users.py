# clinic/management/commands/bootstrap_users.py
import os

from django.core.management.base import BaseCommand

from clinic.services.users import BOOTSTRAP_ACCOUNTS, ensure_user


class Command(BaseCommand):
    help = "Ensure the 'user' and 'admin' accounts exist with their roles (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument('--user-password', default=os.getenv('BOOTSTRAP_USER_PASSWORD'))
        parser.add_argument('--admin-password', default=os.getenv('BOOTSTRAP_ADMIN_PASSWORD'))
        parser.add_argument('--reset', action='store_true', help='Reset passwords of existing accounts')

    def handle(self, *args, **opts):
        passwords = {'user': opts['user_password'], 'admin': opts['admin_password']}
        for username, roles in BOOTSTRAP_ACCOUNTS:
            user, created, password = ensure_user(
                username, roles, password=passwords.get(username), reset=opts['reset'],
            )
            state = 'created' if created else 'updated'
            self.stdout.write(self.style.SUCCESS(f"ok: {username} ({', '.join(roles)}) {state}"))
            # Only generated credentials are shown; supplied ones are already known
            if password and not passwords.get(username):
                self.stdout.write(f"   initial password for {username}: {password}")
        self.stdout.write(self.style.SUCCESS("All bootstrap users ensured."))
