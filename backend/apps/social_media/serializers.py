"""
Social media serializers.
"""

from rest_framework import serializers

from .models import SocialMedia


class SocialMediaSerializer(serializers.ModelSerializer):
    logoUrl = serializers.CharField(source='logo_url', read_only=True)
    qrCodeUrl = serializers.CharField(source='qr_code_url', read_only=True)
    sortOrder = serializers.IntegerField(source='sort_order', read_only=True)
    isActive = serializers.BooleanField(source='is_active', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = SocialMedia
        fields = ['id', 'name', 'logoUrl', 'qrCodeUrl', 'sortOrder', 'isActive', 'createdAt', 'updatedAt']


class SocialMediaCreateSerializer(serializers.Serializer):
    """Multipart body; both images are required on create"""
    name = serializers.CharField(max_length=50)
    logo = serializers.FileField()
    qrCode = serializers.FileField()
    sortOrder = serializers.IntegerField(required=False, default=0)
    isActive = serializers.BooleanField(required=False, default=True)


class SocialMediaUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=50, required=False)
    logo = serializers.FileField(required=False)
    qrCode = serializers.FileField(required=False)
    logoUrl = serializers.CharField(max_length=500, required=False, allow_blank=True)
    qrCodeUrl = serializers.CharField(max_length=500, required=False, allow_blank=True)
    sortOrder = serializers.IntegerField(required=False)
    isActive = serializers.BooleanField(required=False)


class SortItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    sortOrder = serializers.IntegerField()
