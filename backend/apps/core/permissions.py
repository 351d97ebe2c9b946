"""
Role helpers, the user status guard and DRF permission classes.
"""

from rest_framework.permissions import BasePermission

from apps.authentication.models import Role, UserStatus
from .exceptions import PermissionDeniedError

PREMIUM_ROLES = (Role.PREMIUM, Role.LIFETIME, Role.ADMIN)


class UserAction:
    """Actions checked against the account status"""
    CREATE_CONTENT = 'CREATE_CONTENT'
    UPLOAD_POST = 'UPLOAD_POST'
    CREATE_NOTE = 'CREATE_NOTE'
    CREATE_SPIRIT_POST = 'CREATE_SPIRIT_POST'
    CLAIM_SPIRIT_POST = 'CLAIM_SPIRIT_POST'
    EDIT_PROFILE = 'EDIT_PROFILE'
    COMMENT = 'COMMENT'
    LIKE = 'LIKE'
    FAVORITE = 'FAVORITE'
    SEND_MESSAGE = 'SEND_MESSAGE'


# Muted users may still like, favorite and send private messages
MUTED_RESTRICTED_ACTIONS = frozenset({
    UserAction.CREATE_CONTENT,
    UserAction.UPLOAD_POST,
    UserAction.CREATE_NOTE,
    UserAction.CREATE_SPIRIT_POST,
    UserAction.CLAIM_SPIRIT_POST,
    UserAction.EDIT_PROFILE,
    UserAction.COMMENT,
})

MUTED_MESSAGES = {
    UserAction.CREATE_CONTENT: '您的账号已被禁言，无法发布内容',
    UserAction.UPLOAD_POST: '您的账号已被禁言，无法上传作品',
    UserAction.CREATE_NOTE: '您的账号已被禁言，无法发布笔记',
    UserAction.CREATE_SPIRIT_POST: '您的账号已被禁言，无法发布灵贴',
    UserAction.CLAIM_SPIRIT_POST: '您的账号已被禁言，无法认领灵贴',
    UserAction.EDIT_PROFILE: '您的账号已被禁言，无法修改个人资料',
    UserAction.COMMENT: '您的账号已被禁言，无法发表评论',
}


def check_user_status(user, action: str) -> None:
    """
    Refuse an action for banned or muted accounts

    Raises:
        PermissionDeniedError: 403 for missing, banned or muted users
    """
    if user is None or not getattr(user, 'is_authenticated', False):
        raise PermissionDeniedError('用户不存在')

    if user.status == UserStatus.BANNED:
        raise PermissionDeniedError('您的账号已被封禁，无法执行此操作', code='USER_BANNED')

    if user.status == UserStatus.MUTED and action in MUTED_RESTRICTED_ACTIONS:
        raise PermissionDeniedError(MUTED_MESSAGES.get(action, '您的账号已被禁言'), code='USER_MUTED')


def is_admin(user) -> bool:
    return bool(user and getattr(user, 'is_authenticated', False) and user.role == Role.ADMIN)


def is_premium_or_above(user) -> bool:
    return bool(user and getattr(user, 'is_authenticated', False) and user.role in PREMIUM_ROLES)


def can_upload_post(user) -> bool:
    return is_premium_or_above(user)


def can_copy_prompt(user) -> bool:
    return is_premium_or_above(user)


def can_download_post(user, post) -> bool:
    """Admins always; premium members only where the author allows it"""
    if is_admin(user):
        return True
    if is_premium_or_above(user):
        return bool(post.allow_download)
    return False


def membership_display_name(user) -> str:
    if not user or not getattr(user, 'is_authenticated', False):
        return '游客'
    return {
        Role.ADMIN: '管理员',
        Role.LIFETIME: '白金会员',
        Role.PREMIUM: '黄金会员',
    }.get(user.role, '普通用户')


class IsAuthenticatedUser(BasePermission):
    """Require a valid access token"""
    message = '请先登录'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated)


class IsAdmin(BasePermission):
    """Require role ADMIN"""
    message = '需要管理员权限'

    def has_permission(self, request, view):
        return is_admin(request.user)


class IsPremiumMember(BasePermission):
    """Require PREMIUM, LIFETIME or ADMIN"""
    message = '只有高级用户和终身会员可以执行此操作'

    def has_permission(self, request, view):
        return is_premium_or_above(request.user)
