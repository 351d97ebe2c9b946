"""
Authentication serializers for request/response validation.
"""

from rest_framework import serializers

from .models import User


# bcrypt only hashes the first 72 bytes and newer releases refuse longer input
BCRYPT_MAX_BYTES = 72


class PasswordField(serializers.CharField):
    """Write-only password input bounded by what bcrypt accepts"""

    def __init__(self, **kwargs):
        kwargs.setdefault('write_only', True)
        kwargs.setdefault('max_length', 128)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        if len(value.encode('utf-8')) > BCRYPT_MAX_BYTES:
            raise serializers.ValidationError(f'密码长度不能超过{BCRYPT_MAX_BYTES}字节')
        return value


class RegisterSerializer(serializers.Serializer):
    """
    Serializer for user registration
    """
    username = serializers.RegexField(
        r'^[A-Za-z0-9_一-龥]+$',
        min_length=3,
        max_length=20,
        error_messages={'invalid': '用户名只能包含字母、数字、下划线和中文'},
    )
    email = serializers.EmailField(max_length=255)
    password = PasswordField()
    nickname = serializers.CharField(required=False, allow_blank=True, max_length=50)


class LoginSerializer(serializers.Serializer):
    """
    Serializer for user login

    `login` accepts either a username or an email address.
    """
    login = serializers.CharField(max_length=255)
    password = serializers.CharField(write_only=True, max_length=128)
    captchaId = serializers.CharField(required=False, allow_blank=True)
    captcha = serializers.CharField(required=False, allow_blank=True, max_length=10)


class RefreshTokenSerializer(serializers.Serializer):
    """
    Serializer for token refresh and logout
    """
    refreshToken = serializers.CharField(required=True)


class UserBriefSerializer(serializers.ModelSerializer):
    """Public author block embedded in posts, comments and messages"""
    avatarUrl = serializers.CharField(source='avatar_url', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'nickname', 'avatarUrl']


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for the account owner's view of a user
    """
    avatarUrl = serializers.CharField(source='avatar_url', read_only=True)
    premiumExpiryDate = serializers.DateTimeField(source='premium_expiry_date', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'nickname',
            'avatarUrl',
            'role',
            'status',
            'premiumExpiryDate',
            'createdAt',
        ]
