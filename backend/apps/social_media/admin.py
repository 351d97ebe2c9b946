"""
Django admin configuration for social_media app.
"""

from django.contrib import admin
from .models import SocialMedia


@admin.register(SocialMedia)
class SocialMediaAdmin(admin.ModelAdmin):
    list_display = ('name', 'sort_order', 'is_active', 'updated_at')
    list_editable = ('sort_order', 'is_active')
