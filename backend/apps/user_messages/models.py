"""
Private messages between users.

Tables: user_messages
"""

from django.db import models

from apps.authentication.models import User


class UserMessage(models.Model):
    """
    One direct message; is_read flips when the receiver opens the thread
    """
    sender = models.ForeignKey(User, on_delete=models.CASCADE, related_name='sent_user_messages')
    receiver = models.ForeignKey(User, on_delete=models.CASCADE, related_name='received_user_messages')
    content = models.TextField()
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'user_messages'
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['receiver', 'is_read'], name='user_msgs_unread_idx'),
            models.Index(fields=['sender', 'receiver', 'created_at'], name='user_msgs_thread_idx'),
        ]

    def __str__(self):
        return f'Message {self.id} {self.sender_id} -> {self.receiver_id}'
