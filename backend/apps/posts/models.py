"""
Inspiration posts: AI-generated images and videos with their prompts.

Tables: posts
"""

from django.db import models

from apps.authentication.models import User
from apps.ai_platforms.models import AIPlatform


class PostType(models.TextChoices):
    IMAGE = 'IMAGE', '图片'
    VIDEO = 'VIDEO', '视频'


class PostStatus(models.TextChoices):
    VISIBLE = 'VISIBLE', '可见'
    HIDDEN = 'HIDDEN', '隐藏'
    ADMIN_DELETED = 'ADMIN_DELETED', '管理员删除'


class VideoCategory(models.TextChoices):
    IMAGE_TO_VIDEO = 'IMAGE_TO_VIDEO', '图生视频'
    TEXT_TO_VIDEO = 'TEXT_TO_VIDEO', '文生视频'
    FRAME_INTERPOLATION = 'FRAME_INTERPOLATION', '首尾帧'
    MULTI_IMAGE_REF = 'MULTI_IMAGE_REF', '多图参考'


class Post(models.Model):
    """
    A published work

    Posts are never removed by their owners; deleting hides them.
    """
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='posts')
    type = models.CharField(max_length=10, choices=PostType.choices)
    title = models.CharField(max_length=200, blank=True, default='')
    prompt = models.TextField()
    model_used = models.CharField(max_length=100, blank=True, default='')
    ai_platform = models.ForeignKey(AIPlatform, on_delete=models.PROTECT, related_name='posts')
    video_category = models.CharField(max_length=30, choices=VideoCategory.choices, null=True, blank=True)
    file_url = models.CharField(max_length=500)
    original_filename = models.CharField(max_length=255, blank=True, default='')
    mime_type = models.CharField(max_length=100, blank=True, default='')
    size = models.BigIntegerField(default=0)
    allow_download = models.BooleanField(default=False)
    status = models.CharField(max_length=20, choices=PostStatus.choices, default=PostStatus.VISIBLE)
    views = models.PositiveIntegerField(default=0)
    likes_count = models.PositiveIntegerField(default=0)
    favorites_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'posts'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'created_at'], name='posts_status_created_idx'),
            models.Index(fields=['user', 'status'], name='posts_user_status_idx'),
            models.Index(fields=['ai_platform'], name='posts_platform_idx'),
        ]

    def __str__(self):
        return f'Post {self.id} ({self.type}) by {self.user_id}'
