"""
Private message serializers.
"""

from rest_framework import serializers

from apps.authentication.serializers import UserBriefSerializer
from .models import UserMessage


class UserMessageSerializer(serializers.ModelSerializer):
    senderId = serializers.IntegerField(source='sender_id', read_only=True)
    receiverId = serializers.IntegerField(source='receiver_id', read_only=True)
    sender = UserBriefSerializer(read_only=True)
    receiver = UserBriefSerializer(read_only=True)
    read = serializers.BooleanField(source='is_read', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = UserMessage
        fields = ['id', 'senderId', 'receiverId', 'sender', 'receiver', 'content', 'read', 'createdAt']


class UserMessageCreateSerializer(serializers.Serializer):
    receiverId = serializers.IntegerField(min_value=1)
    content = serializers.CharField(max_length=2000)


class ContactSerializer(serializers.Serializer):
    """Row of the contact list built by user_message_service.contacts"""

    def to_representation(self, instance):
        data = UserBriefSerializer(instance['user']).data
        data['lastMessage'] = {
            'content': instance['lastMessage']['content'],
            'createdAt': serializers.DateTimeField().to_representation(instance['lastMessage']['createdAt']),
            'isFromMe': instance['lastMessage']['isFromMe'],
        }
        data['unreadCount'] = instance['unreadCount']
        return data


class ThreadQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(required=False, default=20, min_value=1)
    offset = serializers.IntegerField(required=False, default=0, min_value=0)
