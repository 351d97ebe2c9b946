"""
Django admin configuration for posts app.
"""

from django.contrib import admin
from .models import Post


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'type', 'title', 'ai_platform', 'status', 'views', 'likes_count', 'created_at')
    list_filter = ('type', 'status', 'ai_platform')
    search_fields = ('title', 'prompt', 'user__username')
    readonly_fields = ('views', 'likes_count', 'favorites_count', 'created_at', 'updated_at')
