"""
Announcement serializers.
"""

from rest_framework import serializers

from .models import Announcement


class AnnouncementSerializer(serializers.ModelSerializer):
    imageUrl = serializers.CharField(source='image_url', read_only=True)
    linkUrl = serializers.CharField(source='link_url', read_only=True)
    showImage = serializers.BooleanField(source='show_image', read_only=True)
    showSummary = serializers.BooleanField(source='show_summary', read_only=True)
    showLink = serializers.BooleanField(source='show_link', read_only=True)
    startDate = serializers.DateTimeField(source='start_date', read_only=True)
    endDate = serializers.DateTimeField(source='end_date', read_only=True)
    isActive = serializers.BooleanField(source='is_active', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Announcement
        fields = [
            'id',
            'title',
            'content',
            'imageUrl',
            'summary',
            'linkUrl',
            'showImage',
            'showSummary',
            'showLink',
            'startDate',
            'endDate',
            'isActive',
            'priority',
            'createdAt',
            'updatedAt',
        ]


class AdminAnnouncementSerializer(AnnouncementSerializer):
    """Adds the number of recorded views"""
    viewCount = serializers.IntegerField(source='view_count', read_only=True, default=0)

    class Meta(AnnouncementSerializer.Meta):
        fields = AnnouncementSerializer.Meta.fields + ['viewCount']


class AnnouncementWriteSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    content = serializers.JSONField()
    imageUrl = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)
    summary = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)
    linkUrl = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)
    showImage = serializers.BooleanField(required=False)
    showSummary = serializers.BooleanField(required=False)
    showLink = serializers.BooleanField(required=False)
    startDate = serializers.DateTimeField()
    endDate = serializers.DateTimeField()
    isActive = serializers.BooleanField(required=False)
    priority = serializers.IntegerField(required=False)


class AnnouncementQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True, max_length=100)
    isActive = serializers.BooleanField(required=False, allow_null=True, default=None)
