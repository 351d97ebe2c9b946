"""
Django admin configuration for spirit_posts app.
"""

from django.contrib import admin
from .models import SpiritPost, SpiritPostClaim, SpiritPostMessage


@admin.register(SpiritPost)
class SpiritPostAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'user', 'is_hidden', 'created_at')
    list_filter = ('is_hidden',)
    search_fields = ('title', 'content')


@admin.register(SpiritPostClaim)
class SpiritPostClaimAdmin(admin.ModelAdmin):
    list_display = ('post', 'user', 'is_completed', 'created_at')
    list_filter = ('is_completed',)


@admin.register(SpiritPostMessage)
class SpiritPostMessageAdmin(admin.ModelAdmin):
    list_display = ('post', 'sender', 'receiver', 'is_read', 'created_at')
    list_filter = ('is_read',)
