"""
Authentication models.

Tables: users, refresh_tokens, user_daily_logins
"""

import bcrypt
from django.conf import settings
from django.db import models
from django.utils import timezone


class Role(models.TextChoices):
    NORMAL = 'NORMAL', '普通用户'
    PREMIUM = 'PREMIUM', '黄金会员'
    LIFETIME = 'LIFETIME', '白金会员'
    ADMIN = 'ADMIN', '管理员'


class UserStatus(models.TextChoices):
    ACTIVE = 'ACTIVE', '正常'
    MUTED = 'MUTED', '禁言'
    BANNED = 'BANNED', '封禁'


class User(models.Model):
    """
    Platform account

    Not Django's auth user: API access goes through JWTs, never sessions.
    """
    username = models.CharField(unique=True, max_length=50)
    email = models.EmailField(unique=True, max_length=255)
    password_hash = models.CharField(max_length=255)
    nickname = models.CharField(max_length=50, blank=True, default='')
    avatar_url = models.CharField(max_length=500, blank=True, null=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.NORMAL)
    status = models.CharField(max_length=20, choices=UserStatus.choices, default=UserStatus.ACTIVE)
    premium_expiry_date = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'users'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['role'], name='users_role_idx'),
            models.Index(fields=['status'], name='users_status_idx'),
        ]

    def __str__(self):
        return self.username

    # DRF treats any object returned by an authenticator as the request user
    is_authenticated = True
    is_anonymous = False

    @property
    def display_name(self):
        return self.nickname or self.username

    @property
    def is_admin(self):
        return self.role == Role.ADMIN

    @property
    def is_premium_expired(self):
        """PREMIUM with an expiry in the past"""
        return (
            self.role == Role.PREMIUM
            and self.premium_expiry_date is not None
            and self.premium_expiry_date < timezone.now()
        )

    def set_password(self, raw_password):
        """Hash and set password using bcrypt"""
        self.password_hash = bcrypt.hashpw(
            raw_password.encode('utf-8'),
            bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
        ).decode('utf-8')

    def check_password(self, raw_password):
        """Verify password using bcrypt"""
        if not raw_password or not self.password_hash:
            return False
        encoded = raw_password.encode('utf-8')
        # Longer input can never have been hashed
        if len(encoded) > 72:
            return False
        return bcrypt.checkpw(encoded, self.password_hash.encode('utf-8'))


class RefreshToken(models.Model):
    """
    Issued refresh token; rotated on every refresh
    """
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='refresh_tokens')
    token = models.CharField(max_length=500)
    expires_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)
    revoked_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'refresh_tokens'
        indexes = [
            models.Index(fields=['token'], name='refresh_tok_token_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f'RefreshToken for {self.user.username}'

    @property
    def is_expired(self):
        return timezone.now() > self.expires_at

    @property
    def is_revoked(self):
        return self.revoked_at is not None

    @property
    def is_valid(self):
        """Check if token is valid (not expired and not revoked)"""
        return not self.is_expired and not self.is_revoked


class UserDailyLogin(models.Model):
    """
    One row per user per calendar day with a successful login
    """
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='daily_logins')
    login_date = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'user_daily_logins'
        ordering = ['-login_date']
        constraints = [
            models.UniqueConstraint(fields=['user', 'login_date'], name='uniq_user_daily_login'),
        ]

    def __str__(self):
        return f'{self.user.username} @ {self.login_date}'
