"""
Django admin configuration for authentication app.
"""

from django.contrib import admin
from .models import User, RefreshToken, UserDailyLogin


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    """Admin interface for User model"""
    list_display = ('username', 'email', 'nickname', 'role', 'status', 'premium_expiry_date', 'created_at')
    list_filter = ('role', 'status')
    search_fields = ('username', 'email', 'nickname')
    readonly_fields = ('id', 'created_at', 'updated_at', 'password_hash')
    ordering = ('-created_at',)

    fieldsets = (
        ('Account', {
            'fields': ('id', 'username', 'email', 'nickname', 'avatar_url')
        }),
        ('Membership', {
            'fields': ('role', 'status', 'premium_expiry_date')
        }),
        ('Security', {
            'fields': ('password_hash',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at')
        }),
    )


@admin.register(RefreshToken)
class RefreshTokenAdmin(admin.ModelAdmin):
    """Admin interface for RefreshToken model"""
    list_display = ('user', 'expires_at', 'is_valid', 'created_at', 'revoked_at')
    search_fields = ('user__username', 'user__email')
    list_filter = ('revoked_at', 'expires_at')
    readonly_fields = ('id', 'token', 'created_at')
    ordering = ('-created_at',)

    def is_valid(self, obj):
        return obj.is_valid
    is_valid.boolean = True
    is_valid.short_description = 'Valid'


@admin.register(UserDailyLogin)
class UserDailyLoginAdmin(admin.ModelAdmin):
    list_display = ('user', 'login_date', 'created_at')
    search_fields = ('user__username',)
    date_hierarchy = 'login_date'
