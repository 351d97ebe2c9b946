"""
Storage settings models.

Tables: upload_limits, oss_configs, storage_configs
"""

from django.db import models


class UploadLimit(models.Model):
    """
    Per-module upload size limits in MB (0 = unlimited)
    """
    module = models.CharField(max_length=50, unique=True)
    image_max_size_mb = models.PositiveIntegerField(default=0)
    video_max_size_mb = models.PositiveIntegerField(default=0)
    audio_max_size_mb = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'upload_limits'
        ordering = ['module']

    def __str__(self):
        return f'UploadLimit({self.module})'


class OssConfig(models.Model):
    """
    Aliyun OSS credentials; one row is used

    access_key_secret is stored encrypted (apps.core.utils.crypto).
    """
    access_key_id = models.CharField(max_length=255, blank=True, default='')
    access_key_secret = models.TextField(blank=True, default='')
    bucket = models.CharField(max_length=255, blank=True, default='')
    region = models.CharField(max_length=100, default='cn-hangzhou')
    endpoint = models.CharField(max_length=255, blank=True, default='')
    domain = models.CharField(max_length=255, blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'oss_configs'

    def __str__(self):
        return f'OssConfig({self.bucket or "-"})'

    @property
    def is_complete(self):
        return all([self.access_key_id, self.access_key_secret, self.bucket, self.region, self.endpoint])


class StorageBackend(models.TextChoices):
    LOCAL = 'local', '本地存储'
    OSS = 'oss', '阿里云OSS'


class StorageConfig(models.Model):
    """
    Active storage backend and housekeeping options; one row is used
    """
    default_storage = models.CharField(max_length=20, choices=StorageBackend.choices, default=StorageBackend.LOCAL)
    max_file_size = models.PositiveIntegerField(default=100)  # MB
    enable_cleanup = models.BooleanField(default=False)
    cleanup_days = models.PositiveIntegerField(default=30)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'storage_configs'

    def __str__(self):
        return f'StorageConfig({self.default_storage})'
