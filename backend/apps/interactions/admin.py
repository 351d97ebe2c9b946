"""
Django admin configuration for interactions app.
"""

from django.contrib import admin
from .models import Like, Favorite, Comment


@admin.register(Like)
class LikeAdmin(admin.ModelAdmin):
    list_display = ('user', 'entity_type', 'entity_id', 'created_at')
    list_filter = ('entity_type',)
    search_fields = ('user__username',)


@admin.register(Favorite)
class FavoriteAdmin(admin.ModelAdmin):
    list_display = ('user', 'entity_type', 'entity_id', 'created_at')
    list_filter = ('entity_type',)
    search_fields = ('user__username',)


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    """Admin interface for Comment model"""
    list_display = ('id', 'user', 'entity_type', 'entity_id', 'status', 'created_at')
    list_filter = ('entity_type', 'status')
    search_fields = ('content', 'user__username')
    readonly_fields = ('created_at', 'updated_at')
