"""
Interaction models shared by posts, notes and screenings.

Tables: likes, favorites, comments
"""

from django.db import models

from apps.authentication.models import User


class EntityType(models.TextChoices):
    POST = 'POST', '作品'
    NOTE = 'NOTE', '笔记'
    SCREENING = 'SCREENING', '放映'


class CommentStatus(models.TextChoices):
    VISIBLE = 'VISIBLE', '可见'
    HIDDEN = 'HIDDEN', '隐藏'
    DELETED = 'DELETED', '已删除'


class Like(models.Model):
    """
    A user's like on a post, note or screening
    """
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='likes')
    entity_type = models.CharField(max_length=20, choices=EntityType.choices)
    entity_id = models.BigIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'likes'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'entity_type', 'entity_id'], name='uniq_like'),
        ]
        indexes = [
            models.Index(fields=['entity_type', 'entity_id'], name='likes_entity_idx'),
        ]

    def __str__(self):
        return f'{self.user_id} likes {self.entity_type}:{self.entity_id}'


class Favorite(models.Model):
    """
    A user's bookmark on a post, note or screening
    """
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='favorites')
    entity_type = models.CharField(max_length=20, choices=EntityType.choices)
    entity_id = models.BigIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'favorites'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'entity_type', 'entity_id'], name='uniq_favorite'),
        ]
        indexes = [
            models.Index(fields=['entity_type', 'entity_id'], name='favorites_entity_idx'),
        ]

    def __str__(self):
        return f'{self.user_id} favorites {self.entity_type}:{self.entity_id}'


class Comment(models.Model):
    """
    Comment on a post or screening
    """
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='comments')
    entity_type = models.CharField(max_length=20, choices=EntityType.choices)
    entity_id = models.BigIntegerField()
    content = models.TextField()
    status = models.CharField(max_length=20, choices=CommentStatus.choices, default=CommentStatus.VISIBLE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'comments'
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['entity_type', 'entity_id'], name='comments_entity_idx'),
        ]

    def __str__(self):
        return f'Comment {self.id} on {self.entity_type}:{self.entity_id}'
