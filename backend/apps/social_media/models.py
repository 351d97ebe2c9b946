"""
Social media links shown in the site footer.

Tables: social_media
"""

from django.db import models


class SocialMedia(models.Model):
    name = models.CharField(max_length=50)
    logo_url = models.CharField(max_length=500, blank=True, default='')
    qr_code_url = models.CharField(max_length=500, blank=True, default='')
    sort_order = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'social_media'
        ordering = ['sort_order', 'created_at']

    def __str__(self):
        return self.name
