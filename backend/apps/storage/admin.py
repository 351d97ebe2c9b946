"""
Django admin configuration for storage app.
"""

from django.contrib import admin
from .models import UploadLimit, OssConfig, StorageConfig


@admin.register(UploadLimit)
class UploadLimitAdmin(admin.ModelAdmin):
    list_display = ('module', 'image_max_size_mb', 'video_max_size_mb', 'audio_max_size_mb', 'updated_at')


@admin.register(OssConfig)
class OssConfigAdmin(admin.ModelAdmin):
    """Secrets are managed through /api/admin/settings/storage"""
    list_display = ('bucket', 'region', 'endpoint', 'domain', 'updated_at')
    exclude = ('access_key_secret',)


@admin.register(StorageConfig)
class StorageConfigAdmin(admin.ModelAdmin):
    list_display = ('default_storage', 'max_file_size', 'enable_cleanup', 'cleanup_days', 'updated_at')
