"""
Django admin configuration for user_messages app.
"""

from django.contrib import admin
from .models import UserMessage


@admin.register(UserMessage)
class UserMessageAdmin(admin.ModelAdmin):
    list_display = ('id', 'sender', 'receiver', 'is_read', 'created_at')
    list_filter = ('is_read',)
    search_fields = ('content', 'sender__username', 'receiver__username')
