"""
Post serializers.

PostSerializer reads the viewer's liked/favorited id sets from its context:
    PostSerializer(posts, many=True, context={'viewer': user, 'liked_ids': {...}, 'favorited_ids': {...}})
"""

from rest_framework import serializers

from apps.authentication.serializers import UserBriefSerializer
from apps.ai_platforms.serializers import AIPlatformBriefSerializer
from apps.core.permissions import can_copy_prompt, can_download_post
from .models import Post, PostStatus, PostType, VideoCategory

ORDER_BY_CHOICES = ['newest', 'oldest', 'popular', 'views', 'favorites']


class PostSerializer(serializers.ModelSerializer):
    user = UserBriefSerializer(read_only=True)
    aiPlatform = AIPlatformBriefSerializer(source='ai_platform', read_only=True)
    aiPlatformId = serializers.IntegerField(source='ai_platform_id', read_only=True)
    modelUsed = serializers.CharField(source='model_used', read_only=True)
    videoCategory = serializers.CharField(source='video_category', read_only=True)
    fileUrl = serializers.CharField(source='file_url', read_only=True)
    originalFilename = serializers.CharField(source='original_filename', read_only=True)
    mimeType = serializers.CharField(source='mime_type', read_only=True)
    allowDownload = serializers.BooleanField(source='allow_download', read_only=True)
    likesCount = serializers.IntegerField(source='likes_count', read_only=True)
    favoritesCount = serializers.IntegerField(source='favorites_count', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)
    hasLiked = serializers.SerializerMethodField()
    hasFavorited = serializers.SerializerMethodField()
    canDownload = serializers.SerializerMethodField()
    canCopyPrompt = serializers.SerializerMethodField()

    class Meta:
        model = Post
        fields = [
            'id',
            'type',
            'title',
            'prompt',
            'modelUsed',
            'aiPlatformId',
            'aiPlatform',
            'videoCategory',
            'fileUrl',
            'originalFilename',
            'mimeType',
            'size',
            'allowDownload',
            'status',
            'views',
            'likesCount',
            'favoritesCount',
            'user',
            'createdAt',
            'updatedAt',
            'hasLiked',
            'hasFavorited',
            'canDownload',
            'canCopyPrompt',
        ]

    def get_hasLiked(self, obj):
        return obj.id in self.context.get('liked_ids', ())

    def get_hasFavorited(self, obj):
        return obj.id in self.context.get('favorited_ids', ())

    def get_canDownload(self, obj):
        viewer = self.context.get('viewer')
        if viewer is not None and getattr(viewer, 'is_authenticated', False) and viewer.id == obj.user_id:
            return True
        return can_download_post(viewer, obj)

    def get_canCopyPrompt(self, obj):
        return can_copy_prompt(self.context.get('viewer'))


class PostCreateSerializer(serializers.Serializer):
    """Multipart body of POST /api/posts"""
    file = serializers.FileField()
    type = serializers.ChoiceField(choices=PostType.values)
    title = serializers.CharField(max_length=200, required=False, allow_blank=True)
    aiPlatformId = serializers.IntegerField()
    modelUsed = serializers.CharField(max_length=100, required=False, allow_blank=True)
    prompt = serializers.CharField(max_length=5000)
    videoCategory = serializers.ChoiceField(choices=VideoCategory.values, required=False, allow_null=True, allow_blank=True)
    allowDownload = serializers.BooleanField(required=False, default=False)


class PostUpdateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200, required=False, allow_blank=True)
    aiPlatformId = serializers.IntegerField(required=False)
    modelUsed = serializers.CharField(max_length=100, required=False, allow_blank=True)
    prompt = serializers.CharField(max_length=5000, required=False)
    videoCategory = serializers.ChoiceField(choices=VideoCategory.values, required=False, allow_null=True, allow_blank=True)
    allowDownload = serializers.BooleanField(required=False)


class PostQuerySerializer(serializers.Serializer):
    """Filters for GET /api/posts; page and limit are read separately"""
    type = serializers.ChoiceField(choices=PostType.values, required=False)
    aiPlatformId = serializers.IntegerField(required=False)
    aiPlatformIds = serializers.RegexField(r'^\d+(,\d+)*$', required=False)
    userId = serializers.IntegerField(required=False)
    onlyMyPosts = serializers.BooleanField(required=False, default=False)
    onlyFavorites = serializers.BooleanField(required=False, default=False)
    search = serializers.CharField(required=False, allow_blank=True, max_length=100)
    orderBy = serializers.ChoiceField(choices=ORDER_BY_CHOICES, required=False, default='newest')


class AdminPostQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=PostStatus.values, required=False)
    type = serializers.ChoiceField(choices=PostType.values, required=False)
    search = serializers.CharField(required=False, allow_blank=True, max_length=100)


class PostStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=PostStatus.values)
