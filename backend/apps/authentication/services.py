"""
Authentication service.

Registration, login with captcha, JWT issuing and refresh-token rotation.
"""

import logging
import re
from datetime import datetime, timezone as dt_timezone

import jwt
from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.core.exceptions import AuthenticationError, ConflictError, ValidationError
from apps.core.services.captcha import captcha_service
from apps.creators.tasks import schedule_score_update
from .models import User, UserStatus, RefreshToken, UserDailyLogin

logger = logging.getLogger(__name__)

PASSWORD_MIN_LENGTH = 8
PASSWORD_RULE_MESSAGE = '密码至少8位，且必须包含大写字母、小写字母和数字'


def is_strong_password(password: str) -> bool:
    """At least 8 chars with an uppercase letter, a lowercase letter and a digit"""
    if not password or len(password) < PASSWORD_MIN_LENGTH:
        return False
    return all(re.search(pattern, password) for pattern in (r'[A-Z]', r'[a-z]', r'\d'))


def validate_password_strength(password: str) -> None:
    if not is_strong_password(password):
        raise ValidationError(PASSWORD_RULE_MESSAGE, code='WEAK_PASSWORD')


class AuthService:
    """
    Authentication service for user registration, login, and token management
    """

    def register(self, username: str, email: str, password: str, nickname: str = None) -> User:
        """
        Register a new user

        Raises:
            ValidationError: weak password
            ConflictError: username or email already taken
        """
        validate_password_strength(password)

        email = email.strip().lower()
        if User.objects.filter(username=username).exists():
            raise ConflictError('用户名已存在', code='USERNAME_TAKEN')
        if User.objects.filter(email=email).exists():
            raise ConflictError('邮箱已被注册', code='EMAIL_TAKEN')

        user = User(username=username, email=email, nickname=nickname or username)
        user.set_password(password)
        try:
            user.save()
        except IntegrityError:
            # Lost a race with a concurrent registration
            raise ConflictError('用户名或邮箱已被注册', code='USER_EXISTS')

        logger.info(f'Registered user {user.id} ({user.username})')
        return user

    def login(self, login: str, password: str, captcha_id: str = None, captcha: str = None) -> tuple[User, dict]:
        """
        Login with username or email and generate tokens

        Raises:
            ValidationError: captcha mismatch
            AuthenticationError: unknown account, wrong password or disabled account
        """
        if settings.CAPTCHA_ENABLED and not captcha_service.verify(captcha_id, captcha):
            raise ValidationError('验证码错误或已过期', code='INVALID_CAPTCHA')

        login = (login or '').strip()
        lookup = {'email': login.lower()} if '@' in login else {'username': login}

        try:
            user = User.objects.get(**lookup)
        except User.DoesNotExist:
            raise AuthenticationError('用户名/邮箱或密码错误', code='AUTHENTICATION_FAILED')

        if not user.check_password(password):
            raise AuthenticationError('用户名/邮箱或密码错误', code='AUTHENTICATION_FAILED')

        if user.status != UserStatus.ACTIVE:
            raise AuthenticationError('账号已被禁用', code='ACCOUNT_DISABLED')

        self.record_daily_login(user)
        tokens = self.generate_tokens(user)
        return user, tokens

    def record_daily_login(self, user: User) -> bool:
        """
        Store today's login once

        Returns:
            True when this is the first login of the day
        """
        _, created = UserDailyLogin.objects.get_or_create(
            user=user,
            login_date=timezone.localdate(),
        )
        if created:
            schedule_score_update(user.id)
        return created

    def generate_tokens(self, user: User) -> dict:
        """
        Generate access and refresh tokens

        Returns:
            Dict with accessToken and refreshToken
        """
        now = datetime.now(dt_timezone.utc)
        payload = {
            'sub': str(user.id),
            'email': user.email,
            'role': user.role,
        }

        access_token = jwt.encode(
            {
                **payload,
                'exp': now + settings.JWT_ACCESS_TOKEN_LIFETIME,
                'iat': now,
            },
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM
        )

        refresh_token_str = jwt.encode(
            {
                **payload,
                'exp': now + settings.JWT_REFRESH_TOKEN_LIFETIME,
                'iat': now,
                'jti': f'{user.id}-{now.timestamp()}',
            },
            settings.JWT_REFRESH_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM
        )

        RefreshToken.objects.create(
            user=user,
            token=refresh_token_str,
            expires_at=timezone.now() + settings.JWT_REFRESH_TOKEN_LIFETIME
        )

        return {
            'accessToken': access_token,
            'refreshToken': refresh_token_str
        }

    def refresh_access_token(self, refresh_token: str) -> dict:
        """
        Rotate a refresh token

        Raises:
            AuthenticationError: If token is invalid, expired, or revoked
        """
        try:
            jwt.decode(
                refresh_token,
                settings.JWT_REFRESH_SECRET_KEY,
                algorithms=[settings.JWT_ALGORITHM]
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError('Refresh token has expired', code='TOKEN_EXPIRED')
        except jwt.InvalidTokenError:
            raise AuthenticationError('Invalid refresh token', code='INVALID_TOKEN')

        with transaction.atomic():
            # Row lock so two refreshes with one token cannot both rotate it
            token_record = (
                RefreshToken.objects.select_for_update().select_related('user')
                .filter(token=refresh_token).first()
            )
            return self._rotate(token_record)

    def _rotate(self, token_record) -> dict:
        if token_record is None:
            raise AuthenticationError('Invalid refresh token', code='INVALID_TOKEN')

        if token_record.is_revoked:
            raise AuthenticationError('Refresh token has been revoked', code='TOKEN_REVOKED')

        if token_record.is_expired:
            raise AuthenticationError('Refresh token has expired', code='TOKEN_EXPIRED')

        if token_record.user.status != UserStatus.ACTIVE:
            raise AuthenticationError('账号已被禁用', code='ACCOUNT_DISABLED')

        new_tokens = self.generate_tokens(token_record.user)

        token_record.revoked_at = timezone.now()
        token_record.save(update_fields=['revoked_at'])

        return new_tokens

    def logout(self, refresh_token: str) -> None:
        """
        Logout user by revoking refresh token
        """
        RefreshToken.objects.filter(token=refresh_token, revoked_at__isnull=True).update(
            revoked_at=timezone.now()
        )

    def revoke_all_user_tokens(self, user_id: int) -> None:
        """
        Revoke all refresh tokens for a user (password change, ban)
        """
        RefreshToken.objects.filter(
            user_id=user_id,
            revoked_at__isnull=True
        ).update(revoked_at=timezone.now())


# Create singleton instance
auth_service = AuthService()
