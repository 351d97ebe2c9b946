"""
Seed the default social media entries.

Usage: python manage.py seed_social_media
"""

from django.core.management.base import BaseCommand

from apps.social_media.models import SocialMedia

DEFAULT_ENTRIES = ['微信', '抖音', '微博', '小红书']


class Command(BaseCommand):
    help = 'Create the default social media entries (idempotent)'

    def handle(self, *args, **options):
        created_count = 0
        for index, name in enumerate(DEFAULT_ENTRIES):
            _, created = SocialMedia.objects.get_or_create(name=name, defaults={'sort_order': index})
            created_count += int(created)

        self.stdout.write(self.style.SUCCESS(f'Seeded {created_count} social media entries'))
