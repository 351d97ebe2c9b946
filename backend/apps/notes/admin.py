"""
Django admin configuration for notes app.
"""

from django.contrib import admin
from .models import Note, NoteCategory


@admin.register(NoteCategory)
class NoteCategoryAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'description')
    search_fields = ('name',)


@admin.register(Note)
class NoteAdmin(admin.ModelAdmin):
    """Admin interface for Note model"""
    list_display = ('id', 'title', 'user', 'category', 'status', 'views', 'likes_count', 'created_at')
    list_filter = ('status', 'category')
    search_fields = ('title', 'user__username')
    readonly_fields = ('views', 'likes_count', 'favorites_count', 'created_at', 'updated_at')
