"""
Django admin configuration for announcements app.
"""

from django.contrib import admin
from .models import Announcement, AnnouncementView


@admin.register(Announcement)
class AnnouncementAdmin(admin.ModelAdmin):
    list_display = ('title', 'is_active', 'priority', 'start_date', 'end_date')
    list_filter = ('is_active',)
    search_fields = ('title', 'summary')


@admin.register(AnnouncementView)
class AnnouncementViewAdmin(admin.ModelAdmin):
    list_display = ('announcement', 'user', 'view_date')
