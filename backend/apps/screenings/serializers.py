"""
Screening serializers.
"""

from rest_framework import serializers

from apps.authentication.serializers import UserBriefSerializer
from .models import Screening

ORDER_BY_CHOICES = ['latest', 'popular', 'views', 'oldest']
TIME_RANGE_CHOICES = ['today', 'week', 'month', 'year']


class ScreeningSerializer(serializers.ModelSerializer):
    videoUrl = serializers.CharField(source='video_url', read_only=True)
    thumbnailUrl = serializers.CharField(source='thumbnail_url', read_only=True)
    creatorId = serializers.IntegerField(source='creator_id', read_only=True)
    creator = UserBriefSerializer(read_only=True)
    uploader = UserBriefSerializer(read_only=True)
    likesCount = serializers.IntegerField(source='likes_count', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Screening
        fields = [
            'id',
            'title',
            'description',
            'videoUrl',
            'thumbnailUrl',
            'creatorId',
            'creator',
            'uploader',
            'views',
            'likesCount',
            'createdAt',
            'updatedAt',
        ]


class ScreeningQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True, max_length=100)
    orderBy = serializers.ChoiceField(choices=ORDER_BY_CHOICES, required=False, default='latest')
    timeRange = serializers.ChoiceField(choices=TIME_RANGE_CHOICES, required=False)


class ScreeningCreateSerializer(serializers.Serializer):
    """Multipart body of POST /api/admin/screenings"""
    video = serializers.FileField()
    thumbnail = serializers.FileField(required=False)
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, max_length=5000)
    creatorId = serializers.IntegerField(required=False, allow_null=True)


class ScreeningUpdateSerializer(serializers.Serializer):
    video = serializers.FileField(required=False)
    thumbnail = serializers.FileField(required=False)
    title = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True, max_length=5000)
    creatorId = serializers.IntegerField(required=False, allow_null=True)
