"""
Site announcements shown as pop-ups, and per-day view records.

Tables: announcements, announcement_views
"""

from django.db import models

from apps.authentication.models import User


class Announcement(models.Model):
    """
    Pop-up announcement, live while is_active and start_date <= now <= end_date
    """
    title = models.CharField(max_length=200)
    content = models.JSONField()
    image_url = models.CharField(max_length=500, blank=True, null=True)
    summary = models.CharField(max_length=500, blank=True, null=True)
    link_url = models.CharField(max_length=500, blank=True, null=True)
    show_image = models.BooleanField(default=True)
    show_summary = models.BooleanField(default=True)
    show_link = models.BooleanField(default=False)
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    is_active = models.BooleanField(default=True)
    priority = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'announcements'
        ordering = ['-priority', '-created_at']
        indexes = [
            models.Index(fields=['is_active', 'start_date', 'end_date'], name='announcements_live_idx'),
        ]

    def __str__(self):
        return self.title


class AnnouncementView(models.Model):
    """
    A user dismissed an announcement on view_date; it stays hidden for that day
    """
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='announcement_views')
    announcement = models.ForeignKey(Announcement, on_delete=models.CASCADE, related_name='views')
    view_date = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'announcement_views'
        constraints = [
            models.UniqueConstraint(fields=['user', 'announcement', 'view_date'], name='uniq_announcement_view'),
        ]

    def __str__(self):
        return f'{self.user_id} viewed {self.announcement_id} @ {self.view_date}'
