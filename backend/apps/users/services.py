"""
User self-service and admin user management.
"""

import hashlib
import json
import logging
from datetime import timedelta

from django.core.cache import cache
from django.db.models import Q
from django.utils import timezone

from apps.authentication.models import Role, User, UserStatus
from apps.authentication.services import auth_service, validate_password_strength
from apps.core.exceptions import ConflictError, NotFoundError, ValidationError
from apps.core.permissions import UserAction, check_user_status
from apps.interactions.models import EntityType, Favorite, Like
from apps.notes.models import Note, NoteStatus
from apps.posts.models import Post, PostStatus
from apps.screenings.models import Screening

logger = logging.getLogger(__name__)

DEFAULT_RESET_PASSWORD = '123456'
PREMIUM_DEFAULT_DAYS = 30

ADMIN_LIST_CACHE_TTL = 60
ADMIN_LIST_VERSION_KEY = 'admin_users:version'


class UserService:
    """
    Profile, password and the user's likes/favorites
    """

    def update_profile(self, user: User, data: dict) -> User:
        """
        Raises:
            PermissionDeniedError: muted or banned
            ConflictError: email taken by another user
        """
        check_user_status(user, UserAction.EDIT_PROFILE)

        if 'email' in data:
            email = data['email'].strip().lower()
            if User.objects.filter(email=email).exclude(id=user.id).exists():
                raise ConflictError('该邮箱已被其他用户使用', code='EMAIL_TAKEN')
            user.email = email
        if 'nickname' in data:
            user.nickname = data['nickname']
        if 'avatarUrl' in data:
            user.avatar_url = data['avatarUrl'] or None

        user.save()
        admin_user_service.invalidate_list_cache()
        return user

    def change_password(self, user: User, current_password: str, new_password: str) -> None:
        """
        Raises:
            ValidationError: wrong current password or weak new password
        """
        if not user.check_password(current_password):
            raise ValidationError('当前密码不正确', code='INVALID_PASSWORD')
        validate_password_strength(new_password)

        user.set_password(new_password)
        user.save(update_fields=['password_hash', 'updated_at'])
        auth_service.revoke_all_user_tokens(user.id)
        logger.info(f'User {user.id} changed password')

    def interactions(self, user: User, model, entity_type: str = None):
        """Likes or favorites of a user, newest first"""
        queryset = model.objects.filter(user=user)
        if entity_type:
            queryset = queryset.filter(entity_type=entity_type)
        return queryset.order_by('-created_at')

    def likes(self, user: User, entity_type: str = None):
        return self.interactions(user, Like, entity_type)

    def favorites(self, user: User, entity_type: str = None):
        return self.interactions(user, Favorite, entity_type)

    def load_entities(self, rows) -> dict:
        """
        Fetch the posts, notes and screenings referenced by interaction rows

        Returns:
            {(entity_type, entity_id): instance}; hidden or deleted entities are absent
        """
        post_ids = [row.entity_id for row in rows if row.entity_type == EntityType.POST]
        note_ids = [row.entity_id for row in rows if row.entity_type == EntityType.NOTE]
        screening_ids = [row.entity_id for row in rows if row.entity_type == EntityType.SCREENING]

        entities = {}
        posts = Post.objects.select_related('user', 'ai_platform').filter(
            id__in=post_ids, status=PostStatus.VISIBLE
        )
        for post in posts:
            entities[(EntityType.POST, post.id)] = post
        notes = Note.objects.select_related('user', 'category').filter(id__in=note_ids, status=NoteStatus.VISIBLE)
        for note in notes:
            entities[(EntityType.NOTE, note.id)] = note
        for screening in Screening.objects.select_related('creator', 'uploader').filter(id__in=screening_ids):
            entities[(EntityType.SCREENING, screening.id)] = screening
        return entities


class AdminUserService:
    """
    Admin listing and account management
    """

    def _list_version(self) -> int:
        version = cache.get(ADMIN_LIST_VERSION_KEY)
        if version is None:
            version = 1
            cache.set(ADMIN_LIST_VERSION_KEY, version, timeout=None)
        return version

    def invalidate_list_cache(self) -> None:
        try:
            cache.incr(ADMIN_LIST_VERSION_KEY)
        except ValueError:
            cache.set(ADMIN_LIST_VERSION_KEY, 2, timeout=None)

    def list_cache_key(self, params: dict) -> str:
        digest = hashlib.md5(json.dumps(params, sort_keys=True, default=str).encode()).hexdigest()
        return f'admin_users:v{self._list_version()}:{digest}'

    def get_cached_list(self, params: dict):
        return cache.get(self.list_cache_key(params))

    def set_cached_list(self, params: dict, payload: dict) -> None:
        cache.set(self.list_cache_key(params), payload, timeout=ADMIN_LIST_CACHE_TTL)

    def list_users(self, filters: dict):
        queryset = User.objects.all()
        search = (filters.get('search') or '').strip()
        if search:
            queryset = queryset.filter(
                Q(nickname__icontains=search) | Q(username__icontains=search) | Q(email__icontains=search)
            )
        if filters.get('role') and filters['role'] != 'all':
            queryset = queryset.filter(role=filters['role'])
        if filters.get('status') and filters['status'] != 'all':
            queryset = queryset.filter(status=filters['status'])
        return queryset.order_by('-created_at')

    def get_user(self, user_id: int) -> User:
        try:
            return User.objects.get(id=user_id)
        except User.DoesNotExist:
            raise NotFoundError('用户不存在')

    def create_user(self, data: dict) -> User:
        """
        Raises:
            ConflictError: username or email taken
        """
        email = data['email'].strip().lower()
        if User.objects.filter(username=data['username']).exists():
            raise ConflictError('用户名已存在', code='USERNAME_TAKEN')
        if User.objects.filter(email=email).exists():
            raise ConflictError('邮箱已被注册', code='EMAIL_TAKEN')

        user = User(
            username=data['username'],
            email=email,
            nickname=data.get('nickname') or data['username'],
            role=data.get('role') or Role.NORMAL,
            status=UserStatus.ACTIVE,
        )
        user.set_password(data['password'])
        user.save()
        self.invalidate_list_cache()
        logger.info(f'Admin created user {user.id} ({user.username})')
        return user

    def set_status(self, user_id: int, status: str) -> User:
        user = self.get_user(user_id)
        user.status = status
        user.save(update_fields=['status', 'updated_at'])
        if status == UserStatus.BANNED:
            auth_service.revoke_all_user_tokens(user.id)
        self.invalidate_list_cache()
        logger.info(f'User {user.id} status set to {status}')
        return user

    def set_role(self, user_id: int, role: str, premium_expiry_date=None) -> User:
        """PREMIUM keeps the given expiry (default 30 days); NORMAL clears it"""
        user = self.get_user(user_id)
        user.role = role
        if role == Role.PREMIUM:
            user.premium_expiry_date = premium_expiry_date or timezone.now() + timedelta(days=PREMIUM_DEFAULT_DAYS)
        elif role == Role.NORMAL:
            user.premium_expiry_date = None
        user.save(update_fields=['role', 'premium_expiry_date', 'updated_at'])
        self.invalidate_list_cache()
        logger.info(f'User {user.id} role set to {role}')
        return user

    def reset_password(self, user_id: int) -> User:
        user = self.get_user(user_id)
        user.set_password(DEFAULT_RESET_PASSWORD)
        user.save(update_fields=['password_hash', 'updated_at'])
        auth_service.revoke_all_user_tokens(user.id)
        logger.info(f'Password reset for user {user.id}')
        return user


# Create singleton instances
user_service = UserService()
admin_user_service = AdminUserService()
