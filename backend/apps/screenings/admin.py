"""
Django admin configuration for screenings app.
"""

from django.contrib import admin
from .models import Screening


@admin.register(Screening)
class ScreeningAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'creator', 'uploader', 'views', 'likes_count', 'created_at')
    search_fields = ('title', 'description')
    readonly_fields = ('views', 'likes_count', 'created_at', 'updated_at')
