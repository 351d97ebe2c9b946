"""
Interaction serializers.
"""

from rest_framework import serializers

from apps.authentication.serializers import UserBriefSerializer
from .models import Comment


class CommentCreateSerializer(serializers.Serializer):
    content = serializers.CharField(max_length=1000, trim_whitespace=True)


class CommentSerializer(serializers.ModelSerializer):
    """Comment with its author"""
    user = UserBriefSerializer(read_only=True)
    entityType = serializers.CharField(source='entity_type', read_only=True)
    entityId = serializers.IntegerField(source='entity_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Comment
        fields = ['id', 'content', 'status', 'entityType', 'entityId', 'user', 'createdAt']


class InteractionQuerySerializer(serializers.Serializer):
    """?entityType= filter for the likes/favorites lists"""
    entityType = serializers.ChoiceField(choices=['POST', 'SCREENING'], required=False)
