"""
Screenings: curated videos uploaded by admins on behalf of creators.

Tables: screenings
"""

from django.db import models

from apps.authentication.models import User


class Screening(models.Model):
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default='')
    video_url = models.CharField(max_length=500)
    thumbnail_url = models.CharField(max_length=500, blank=True, null=True)
    creator = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name='created_screenings'
    )
    uploader = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name='uploaded_screenings'
    )
    views = models.PositiveIntegerField(default=0)
    likes_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'screenings'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['created_at'], name='screenings_created_idx'),
        ]

    def __str__(self):
        return self.title
