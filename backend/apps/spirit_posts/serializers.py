"""
Spirit post serializers.
"""

from rest_framework import serializers

from apps.authentication.serializers import UserBriefSerializer
from .models import SpiritPost, SpiritPostClaim, SpiritPostMessage


class SpiritPostSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source='user_id', read_only=True)
    user = UserBriefSerializer(read_only=True)
    isHidden = serializers.BooleanField(source='is_hidden', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = SpiritPost
        fields = ['id', 'title', 'content', 'isHidden', 'userId', 'user', 'createdAt', 'updatedAt']


class SpiritPostClaimSerializer(serializers.ModelSerializer):
    postId = serializers.IntegerField(source='post_id', read_only=True)
    userId = serializers.IntegerField(source='user_id', read_only=True)
    user = UserBriefSerializer(read_only=True)
    isCompleted = serializers.BooleanField(source='is_completed', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = SpiritPostClaim
        fields = ['id', 'postId', 'userId', 'user', 'isCompleted', 'createdAt']


class SpiritPostMessageSerializer(serializers.ModelSerializer):
    postId = serializers.IntegerField(source='post_id', read_only=True)
    senderId = serializers.IntegerField(source='sender_id', read_only=True)
    receiverId = serializers.IntegerField(source='receiver_id', read_only=True)
    sender = UserBriefSerializer(read_only=True)
    receiver = UserBriefSerializer(read_only=True)
    isRead = serializers.BooleanField(source='is_read', read_only=True)
    readAt = serializers.DateTimeField(source='read_at', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = SpiritPostMessage
        fields = [
            'id',
            'postId',
            'senderId',
            'receiverId',
            'sender',
            'receiver',
            'content',
            'isRead',
            'readAt',
            'createdAt',
        ]


class SpiritPostCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    content = serializers.CharField(max_length=5000)


class SpiritPostUpdateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200, required=False)
    content = serializers.CharField(max_length=5000, required=False)
    isHidden = serializers.BooleanField(required=False)


class MessageCreateSerializer(serializers.Serializer):
    content = serializers.CharField(max_length=2000)


class MarkCompletedSerializer(serializers.Serializer):
    claimerIds = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=False)
