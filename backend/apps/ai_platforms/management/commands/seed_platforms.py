"""
Seed the default AI platforms and their models.

Usage: python manage.py seed_platforms
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.ai_platforms.models import AIPlatform, AIPlatformType, AIModel

DEFAULT_PLATFORMS = [
    ('Midjourney', AIPlatformType.IMAGE, ['Midjourney V6', 'Midjourney V5.2', 'Niji 6']),
    ('DALL-E', AIPlatformType.IMAGE, ['DALL-E 3', 'DALL-E 2']),
    ('Stable Diffusion', AIPlatformType.IMAGE, ['SDXL 1.0', 'SD 1.5', 'SD 3']),
    ('RunwayML', AIPlatformType.VIDEO, ['Gen-3 Alpha', 'Gen-2']),
    ('Pika Labs', AIPlatformType.VIDEO, ['Pika 1.0']),
]


class Command(BaseCommand):
    help = 'Create the default AI platforms and models (idempotent)'

    @transaction.atomic
    def handle(self, *args, **options):
        created_platforms = created_models = 0
        for name, platform_type, model_names in DEFAULT_PLATFORMS:
            platform, created = AIPlatform.objects.get_or_create(name=name, defaults={'type': platform_type})
            created_platforms += int(created)
            for model_name in model_names:
                _, created = AIModel.objects.get_or_create(platform=platform, name=model_name)
                created_models += int(created)

        self.stdout.write(self.style.SUCCESS(
            f'Seeded {created_platforms} platforms and {created_models} models'
        ))
