"""
Create or update an administrator account.

Usage: python manage.py create_admin --username admin --email admin@aifans.pro --password ...
"""

from django.core.management.base import BaseCommand, CommandError

from apps.authentication.models import User, Role, UserStatus


class Command(BaseCommand):
    help = 'Create an ADMIN account, or promote and reset an existing one'

    def add_arguments(self, parser):
        parser.add_argument('--username', default='admin')
        parser.add_argument('--email', default='admin@aifans.pro')
        parser.add_argument('--password', required=True)
        parser.add_argument('--nickname', default='管理员')

    def handle(self, *args, **options):
        username = options['username']
        email = options['email'].lower()

        clash = User.objects.filter(email=email).exclude(username=username).first()
        if clash:
            raise CommandError(f'Email {email} already belongs to user {clash.username}')

        user, created = User.objects.get_or_create(
            username=username,
            defaults={'email': email, 'nickname': options['nickname']},
        )
        user.email = email
        user.role = Role.ADMIN
        user.status = UserStatus.ACTIVE
        user.set_password(options['password'])
        user.save()

        action = 'Created' if created else 'Updated'
        self.stdout.write(self.style.SUCCESS(f'{action} admin account {user.username} (id={user.id})'))
