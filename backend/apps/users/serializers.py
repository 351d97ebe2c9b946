"""
User serializers for profile and admin endpoints.
"""

from rest_framework import serializers

from apps.authentication.models import Role, UserStatus
from apps.authentication.serializers import PasswordField


class ProfileUpdateSerializer(serializers.Serializer):
    nickname = serializers.CharField(max_length=50, required=False, allow_blank=True)
    avatarUrl = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)
    email = serializers.EmailField(max_length=255, required=False)


class ChangePasswordSerializer(serializers.Serializer):
    currentPassword = serializers.CharField(max_length=128, write_only=True)
    newPassword = PasswordField()


class InteractionListQuerySerializer(serializers.Serializer):
    entityType = serializers.ChoiceField(choices=['POST', 'NOTE', 'SCREENING'], required=False)


class AdminUserQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True, max_length=100)
    role = serializers.ChoiceField(choices=Role.values + ['all'], required=False)
    status = serializers.ChoiceField(choices=UserStatus.values + ['all'], required=False)


class AdminUserCreateSerializer(serializers.Serializer):
    username = serializers.CharField(min_length=3, max_length=50)
    email = serializers.EmailField(max_length=255)
    password = PasswordField(min_length=6)
    nickname = serializers.CharField(max_length=50, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=Role.values, required=False)


class UserStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=UserStatus.values)


class UserRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=Role.values)
    premiumExpiryDate = serializers.DateTimeField(required=False, allow_null=True)
