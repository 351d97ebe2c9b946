"""
Note and note category serializers.

NoteSerializer reads the viewer's liked/favorited id sets from its context,
the same way PostSerializer does.
"""

from rest_framework import serializers

from apps.authentication.serializers import UserBriefSerializer
from .models import Note, NoteCategory, NoteStatus

ORDER_BY_CHOICES = ['latest', 'oldest', 'popular', 'views', 'favorites']
TIME_RANGE_CHOICES = ['today', 'week', 'month', 'year']


class NoteCategorySerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = NoteCategory
        fields = ['id', 'name', 'description', 'createdAt', 'updatedAt']


class NoteCategoryWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=50)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True)


class NoteSerializer(serializers.ModelSerializer):
    user = UserBriefSerializer(read_only=True)
    category = NoteCategorySerializer(read_only=True)
    categoryId = serializers.IntegerField(source='category_id', read_only=True)
    coverImageUrl = serializers.CharField(source='cover_image_url', read_only=True)
    likesCount = serializers.IntegerField(source='likes_count', read_only=True)
    favoritesCount = serializers.IntegerField(source='favorites_count', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)
    isLiked = serializers.SerializerMethodField()
    isFavorited = serializers.SerializerMethodField()

    class Meta:
        model = Note
        fields = [
            'id',
            'title',
            'content',
            'coverImageUrl',
            'categoryId',
            'category',
            'status',
            'views',
            'likesCount',
            'favoritesCount',
            'user',
            'createdAt',
            'updatedAt',
            'isLiked',
            'isFavorited',
        ]

    def get_isLiked(self, obj):
        return obj.id in self.context.get('liked_ids', ())

    def get_isFavorited(self, obj):
        return obj.id in self.context.get('favorited_ids', ())


class NoteCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    # HTML string or editor JSON
    content = serializers.JSONField()
    categoryId = serializers.IntegerField(min_value=1)
    coverImageUrl = serializers.CharField(max_length=500, required=False, allow_blank=True)

    def validate_content(self, value):
        if value in (None, '', {}, []):
            raise serializers.ValidationError('内容不能为空')
        return value


class NoteUpdateSerializer(NoteCreateSerializer):
    title = serializers.CharField(max_length=200, required=False)
    content = serializers.JSONField(required=False)
    categoryId = serializers.IntegerField(min_value=1, required=False)
    status = serializers.ChoiceField(choices=NoteStatus.choices, required=False)


class NoteQuerySerializer(serializers.Serializer):
    userId = serializers.IntegerField(required=False, min_value=1)
    categoryId = serializers.IntegerField(required=False, min_value=1)
    query = serializers.CharField(required=False, allow_blank=True, max_length=100)
    orderBy = serializers.ChoiceField(choices=ORDER_BY_CHOICES, required=False, default='latest')
    timeRange = serializers.ChoiceField(choices=TIME_RANGE_CHOICES, required=False)


class NoteUploadSerializer(serializers.Serializer):
    file = serializers.FileField()
