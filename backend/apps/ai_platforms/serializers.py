"""
AI platform serializers.
"""

from rest_framework import serializers

from .models import AIPlatform, AIPlatformType, AIModel


class AIModelSerializer(serializers.ModelSerializer):
    platformId = serializers.IntegerField(source='platform_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = AIModel
        fields = ['id', 'name', 'platformId', 'createdAt']


class AIPlatformBriefSerializer(serializers.ModelSerializer):
    """Embedded in posts"""
    logoUrl = serializers.CharField(source='logo_url', read_only=True)

    class Meta:
        model = AIPlatform
        fields = ['id', 'name', 'logoUrl', 'type']


class AIPlatformSerializer(serializers.ModelSerializer):
    logoUrl = serializers.CharField(source='logo_url', read_only=True)
    models = AIModelSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = AIPlatform
        fields = ['id', 'name', 'logoUrl', 'type', 'models', 'createdAt']


class AIPlatformWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    type = serializers.ChoiceField(choices=AIPlatformType.values)
    logoUrl = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)


class AIModelWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)


class PlatformQuerySerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=AIPlatformType.values, required=False)
