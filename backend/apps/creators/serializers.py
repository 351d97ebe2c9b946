"""
Creator serializers.
"""

from rest_framework import serializers

from .models import Creator


class CreatorSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source='user_id', read_only=True)
    avatarUrl = serializers.CharField(source='avatar_url', read_only=True)
    backgroundUrl = serializers.CharField(source='background_url', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Creator
        fields = [
            'id',
            'userId',
            'nickname',
            'avatarUrl',
            'bio',
            'expertise',
            'backgroundUrl',
            'images',
            'videos',
            'audios',
            'score',
            'createdAt',
            'updatedAt',
        ]


class CreatorProfileSerializer(serializers.Serializer):
    """Body of POST /api/creators"""
    nickname = serializers.CharField(max_length=50)
    avatarUrl = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)
    bio = serializers.CharField(max_length=2000, required=False, allow_blank=True)
    expertise = serializers.CharField(max_length=200, required=False, allow_blank=True)
    backgroundUrl = serializers.CharField(max_length=500, required=False, allow_blank=True)
    images = serializers.ListField(child=serializers.JSONField(), required=False)
    videos = serializers.ListField(child=serializers.JSONField(), required=False)
    audios = serializers.ListField(child=serializers.JSONField(), required=False)


class CreatorUploadSerializer(serializers.Serializer):
    file = serializers.FileField()
