"""
Django admin configuration for membership app.
"""

from django.contrib import admin
from .models import MembershipProduct, RedemptionCode


@admin.register(MembershipProduct)
class MembershipProductAdmin(admin.ModelAdmin):
    list_display = ('title', 'type', 'price', 'duration_days', 'is_active', 'created_at')
    list_filter = ('type', 'is_active')


@admin.register(RedemptionCode)
class RedemptionCodeAdmin(admin.ModelAdmin):
    list_display = ('code', 'duration_days', 'is_used', 'used_by_user', 'used_at', 'created_at')
    list_filter = ('is_used',)
    search_fields = ('code',)
    readonly_fields = ('used_by_user', 'used_at')
