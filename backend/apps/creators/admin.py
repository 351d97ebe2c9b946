"""
Django admin configuration for creators app.
"""

from django.contrib import admin
from .models import Creator


@admin.register(Creator)
class CreatorAdmin(admin.ModelAdmin):
    list_display = ('nickname', 'user', 'score', 'updated_at')
    search_fields = ('nickname', 'user__username')
    readonly_fields = ('score', 'created_at', 'updated_at')
