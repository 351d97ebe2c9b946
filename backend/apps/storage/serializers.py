"""
Storage settings serializers.
"""

from rest_framework import serializers

from .models import StorageBackend


class UploadSerializer(serializers.Serializer):
    file = serializers.FileField()
    folder = serializers.RegexField(r'^[A-Za-z0-9_-]+$', required=False, max_length=50)


class UploadLimitSerializer(serializers.Serializer):
    imageMaxSizeMB = serializers.IntegerField(min_value=0, required=False)
    videoMaxSizeMB = serializers.IntegerField(min_value=0, required=False)
    audioMaxSizeMB = serializers.IntegerField(min_value=0, required=False)


class ModuleSizesSerializer(serializers.Serializer):
    imageSize = serializers.IntegerField(min_value=0, required=False)
    videoSize = serializers.IntegerField(min_value=0, required=False)


class AllUploadLimitsSerializer(serializers.Serializer):
    """Body of POST /admin/settings/upload-limits: {limits: {notes, inspiration, screenings}}"""
    notes = ModuleSizesSerializer(required=False)
    inspiration = ModuleSizesSerializer(required=False)
    screenings = ModuleSizesSerializer(required=False)


class OssConfigSerializer(serializers.Serializer):
    accessKeyId = serializers.CharField(required=False, allow_blank=True, max_length=255)
    accessKeySecret = serializers.CharField(required=False, allow_blank=True, max_length=255)
    bucket = serializers.CharField(required=False, allow_blank=True, max_length=255)
    region = serializers.CharField(required=False, allow_blank=True, max_length=100)
    endpoint = serializers.CharField(required=False, allow_blank=True, max_length=255)
    domain = serializers.CharField(required=False, allow_blank=True, max_length=255)


class StorageConfigSerializer(serializers.Serializer):
    defaultStorage = serializers.ChoiceField(choices=StorageBackend.values, required=False)
    maxFileSize = serializers.IntegerField(min_value=1, required=False)
    enableCleanup = serializers.BooleanField(required=False)
    cleanupDays = serializers.IntegerField(min_value=1, required=False)


class StorageSettingsSerializer(serializers.Serializer):
    oss = OssConfigSerializer(required=False)
    storage = StorageConfigSerializer(required=False)
