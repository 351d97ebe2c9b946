"""
Django admin configuration for ai_platforms app.
"""

from django.contrib import admin
from .models import AIPlatform, AIModel


class AIModelInline(admin.TabularInline):
    model = AIModel
    extra = 0


@admin.register(AIPlatform)
class AIPlatformAdmin(admin.ModelAdmin):
    list_display = ('name', 'type', 'created_at')
    list_filter = ('type',)
    search_fields = ('name',)
    inlines = [AIModelInline]
