"""
AI platform catalogue.

Tables: ai_platforms, ai_models
"""

from django.db import models


class AIPlatformType(models.TextChoices):
    IMAGE = 'IMAGE', '图片'
    VIDEO = 'VIDEO', '视频'


class AIPlatform(models.Model):
    """
    A generation platform such as Midjourney or RunwayML
    """
    name = models.CharField(max_length=100, unique=True)
    logo_url = models.CharField(max_length=500, blank=True, default='')
    type = models.CharField(max_length=10, choices=AIPlatformType.choices)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'ai_platforms'
        ordering = ['name']
        indexes = [
            models.Index(fields=['type'], name='ai_platforms_type_idx'),
        ]

    def __str__(self):
        return self.name


class AIModel(models.Model):
    """
    A model offered by a platform
    """
    platform = models.ForeignKey(AIPlatform, on_delete=models.CASCADE, related_name='models')
    name = models.CharField(max_length=100)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'ai_models'
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(fields=['platform', 'name'], name='uniq_platform_model'),
        ]

    def __str__(self):
        return f'{self.platform.name} / {self.name}'
