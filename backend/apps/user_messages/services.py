"""
Private messaging: send, contact list with unread counts, threads.
"""

import logging

from django.db.models import Count, Q

from apps.authentication.models import User
from apps.core.exceptions import NotFoundError, ValidationError
from apps.core.permissions import UserAction, check_user_status
from apps.moderation.services import sensitive_word_service
from .models import UserMessage

logger = logging.getLogger(__name__)

MAX_THREAD_LIMIT = 100


def _between(user_id: int, other_id: int) -> Q:
    return Q(sender_id=user_id, receiver_id=other_id) | Q(sender_id=other_id, receiver_id=user_id)


class UserMessageService:
    """
    Direct messages between two accounts
    """

    def send(self, sender, receiver_id: int, content: str) -> UserMessage:
        """
        Raises:
            PermissionDeniedError: banned sender
            NotFoundError: unknown receiver
            ValidationError: message to self or sensitive words
        """
        check_user_status(sender, UserAction.SEND_MESSAGE)
        receiver = User.objects.filter(id=receiver_id).first()
        if receiver is None:
            raise NotFoundError('接收者不存在')
        if receiver.id == sender.id:
            raise ValidationError('不能给自己发送消息')
        sensitive_word_service.ensure_clean(content, prefix='消息包含敏感词')

        message = UserMessage.objects.create(sender=sender, receiver=receiver, content=content)
        logger.info(f'User {sender.id} messaged user {receiver.id}')
        return message

    def contacts(self, user) -> list[dict]:
        """
        Everyone the user has exchanged messages with, latest conversation first

        Returns:
            [{user, lastMessage: {content, createdAt, isFromMe}, unreadCount}]
        """
        messages = (
            UserMessage.objects.filter(Q(sender=user) | Q(receiver=user))
            .order_by('-created_at', '-id')
            .only('sender_id', 'receiver_id', 'content', 'created_at')
        )
        latest = {}
        for message in messages.iterator():
            other_id = message.receiver_id if message.sender_id == user.id else message.sender_id
            latest.setdefault(other_id, message)

        unread = dict(
            UserMessage.objects.filter(receiver=user, is_read=False)
            .values('sender_id')
            .annotate(count=Count('id'))
            .values_list('sender_id', 'count')
        )
        users = User.objects.in_bulk(list(latest))

        contacts = []
        for other_id, message in latest.items():
            if other_id not in users:
                continue
            contacts.append({
                'user': users[other_id],
                'lastMessage': {
                    'content': message.content,
                    'createdAt': message.created_at,
                    'isFromMe': message.sender_id == user.id,
                },
                'unreadCount': unread.get(other_id, 0),
            })
        return contacts

    def unread_count(self, user) -> int:
        return UserMessage.objects.filter(receiver=user, is_read=False).count()

    def thread(self, user, other_id: int, limit: int = 20, offset: int = 0) -> list[UserMessage]:
        """
        A page of the conversation, oldest first; incoming messages become read

        Raises:
            NotFoundError: unknown user
        """
        if not User.objects.filter(id=other_id).exists():
            raise NotFoundError('用户不存在')

        limit = max(1, min(limit, MAX_THREAD_LIMIT))
        offset = max(0, offset)
        page = list(
            UserMessage.objects.filter(_between(user.id, other_id))
            .select_related('sender', 'receiver')
            .order_by('-created_at', '-id')[offset:offset + limit]
        )
        self.mark_read(user, other_id)
        page.reverse()
        return page

    def mark_read(self, user, other_id: int) -> int:
        return UserMessage.objects.filter(sender_id=other_id, receiver=user, is_read=False).update(is_read=True)


# Create singleton instance
user_message_service = UserMessageService()
