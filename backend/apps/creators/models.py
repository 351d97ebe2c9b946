"""
Creator profiles and their activity score.

Tables: creators
"""

from django.db import models

from apps.authentication.models import User


class Creator(models.Model):
    """
    Public showcase profile of a user

    images, videos and audios are lists of {url, ...} objects uploaded through
    the creator upload endpoint. score is recomputed from the user's activity.
    """
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='creator')
    nickname = models.CharField(max_length=50)
    avatar_url = models.CharField(max_length=500, blank=True, null=True)
    bio = models.TextField(blank=True, default='')
    expertise = models.CharField(max_length=200, blank=True, default='')
    background_url = models.CharField(max_length=500, blank=True, default='')
    images = models.JSONField(default=list, blank=True)
    videos = models.JSONField(default=list, blank=True)
    audios = models.JSONField(default=list, blank=True)
    score = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'creators'
        ordering = ['-score', 'id']
        indexes = [
            models.Index(fields=['score'], name='creators_score_idx'),
        ]

    def __str__(self):
        return f'{self.nickname} ({self.score})'
