"""
Spirit posts: requests that premium members claim and resolve by private messages.

Tables: spirit_posts, spirit_post_claims, spirit_post_messages
"""

from django.db import models

from apps.authentication.models import User


class SpiritPost(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='spirit_posts')
    title = models.CharField(max_length=200)
    content = models.TextField()
    is_hidden = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'spirit_posts'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['is_hidden', 'created_at'], name='spirit_posts_hidden_idx'),
        ]

    def __str__(self):
        return self.title


class SpiritPostClaim(models.Model):
    """
    A user taking on a spirit post; completed once the owner confirms
    """
    post = models.ForeignKey(SpiritPost, on_delete=models.CASCADE, related_name='claims')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='spirit_post_claims')
    is_completed = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'spirit_post_claims'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['post', 'user'], name='uniq_spirit_post_claim'),
        ]

    def __str__(self):
        return f'{self.user_id} claimed {self.post_id}'


class SpiritPostMessage(models.Model):
    """
    Private message between the owner and one claimer
    """
    post = models.ForeignKey(SpiritPost, on_delete=models.CASCADE, related_name='messages')
    sender = models.ForeignKey(User, on_delete=models.CASCADE, related_name='sent_spirit_messages')
    receiver = models.ForeignKey(User, on_delete=models.CASCADE, related_name='received_spirit_messages')
    content = models.TextField()
    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'spirit_post_messages'
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['post', 'receiver', 'is_read'], name='spirit_msg_unread_idx'),
        ]

    def __str__(self):
        return f'Message {self.id} on {self.post_id}'
