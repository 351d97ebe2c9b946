"""
Tests for role helpers, the status guard, pagination, password rules and
secret encryption.
"""

import pytest
from django.test import override_settings
from hypothesis import given, strategies as st, settings

from apps.authentication.models import Role, UserStatus
from apps.authentication.services import is_strong_password
from apps.core.exceptions import PermissionDeniedError
from apps.core.permissions import (
    UserAction,
    can_download_post,
    check_user_status,
    is_premium_or_above,
    membership_display_name,
)
from apps.core.utils import crypto
from apps.core.utils.pagination import paginate, parse_pagination
from apps.posts.models import Post


class _StubUser:
    is_authenticated = True

    def __init__(self, role=Role.NORMAL, status=UserStatus.ACTIVE):
        self.role = role
        self.status = status


class TestUserStatusGuard:
    """check_user_status"""

    def test_active_user_passes_every_action(self):
        user = _StubUser()
        for action in vars(UserAction).values():
            if isinstance(action, str) and action.isupper():
                check_user_status(user, action)

    def test_banned_user_is_refused(self):
        with pytest.raises(PermissionDeniedError) as exc:
            check_user_status(_StubUser(status=UserStatus.BANNED), UserAction.LIKE)
        assert exc.value.code == 'USER_BANNED'

    def test_muted_user_can_like_and_favorite(self):
        user = _StubUser(status=UserStatus.MUTED)
        check_user_status(user, UserAction.LIKE)
        check_user_status(user, UserAction.FAVORITE)
        check_user_status(user, UserAction.SEND_MESSAGE)

    @pytest.mark.parametrize('action', [
        UserAction.COMMENT,
        UserAction.UPLOAD_POST,
        UserAction.CREATE_NOTE,
        UserAction.CREATE_SPIRIT_POST,
        UserAction.EDIT_PROFILE,
    ])
    def test_muted_user_cannot_create(self, action):
        with pytest.raises(PermissionDeniedError) as exc:
            check_user_status(_StubUser(status=UserStatus.MUTED), action)
        assert exc.value.code == 'USER_MUTED'
        assert '禁言' in exc.value.message

    def test_missing_user(self):
        with pytest.raises(PermissionDeniedError):
            check_user_status(None, UserAction.LIKE)


class TestRoleHelpers:
    """Membership tiers"""

    @pytest.mark.parametrize('role,expected', [
        (Role.NORMAL, False),
        (Role.PREMIUM, True),
        (Role.LIFETIME, True),
        (Role.ADMIN, True),
    ])
    def test_premium_or_above(self, role, expected):
        assert is_premium_or_above(_StubUser(role=role)) is expected

    def test_display_names(self):
        assert membership_display_name(None) == '游客'
        assert membership_display_name(_StubUser()) == '普通用户'
        assert membership_display_name(_StubUser(role=Role.LIFETIME)) == '白金会员'

    def test_download_rules(self):
        open_post = Post(allow_download=True)
        closed_post = Post(allow_download=False)

        assert can_download_post(_StubUser(role=Role.ADMIN), closed_post)
        assert can_download_post(_StubUser(role=Role.PREMIUM), open_post)
        assert not can_download_post(_StubUser(role=Role.PREMIUM), closed_post)
        assert not can_download_post(_StubUser(), open_post)


class TestPasswordStrength:
    """is_strong_password"""

    @pytest.mark.parametrize('password', ['Secret123', 'Abcdefg1', 'ZZZZzzz9'])
    def test_accepts_strong(self, password):
        assert is_strong_password(password)

    @pytest.mark.parametrize('password', ['', 'Short1A', 'nouppercase1', 'NOLOWERCASE1', 'NoDigitsHere'])
    def test_rejects_weak(self, password):
        assert not is_strong_password(password)

    @given(st.text(max_size=7))
    @settings(max_examples=100)
    def test_short_passwords_never_pass(self, password):
        assert not is_strong_password(password)

    @given(st.text(alphabet='abcdefghijklmnopqrstuvwxyz0123456789', min_size=8, max_size=40))
    @settings(max_examples=100)
    def test_uppercase_is_required(self, password):
        assert not is_strong_password(password)

    @given(
        st.text(alphabet='ABCDEFGHIJKLMNOPQRSTUVWXYZ', min_size=1, max_size=5),
        st.text(alphabet='abcdefghijklmnopqrstuvwxyz', min_size=1, max_size=5),
        st.text(alphabet='0123456789', min_size=6, max_size=10),
    )
    @settings(max_examples=100)
    def test_mixed_classes_pass(self, upper, lower, digits):
        assert is_strong_password(upper + lower + digits)


class TestPagination:
    """parse_pagination and paginate"""

    def test_defaults(self):
        assert parse_pagination({}) == (1, 20)

    def test_invalid_values_fall_back(self):
        assert parse_pagination({'page': 'x', 'limit': '-3'}, default_limit=10) == (1, 10)

    def test_limit_is_capped(self):
        assert parse_pagination({'limit': '1000'}) == (1, 100)

    @pytest.mark.django_db
    def test_meta_block(self, make_post, normal_user):
        for index in range(5):
            make_post(normal_user, title=f'post {index}')

        items, meta = paginate(Post.objects.order_by('id'), 2, 2)

        assert [item.title for item in items] == ['post 2', 'post 3']
        assert meta == {'page': 2, 'limit': 2, 'total': 5, 'totalPages': 3}


class TestCrypto:
    """AES-GCM helpers for stored secrets"""

    @given(st.text(min_size=1, max_size=200))
    @settings(max_examples=50)
    def test_decrypt_reverses_encrypt(self, text):
        assert crypto.decrypt(crypto.encrypt(text)) == text

    def test_ciphertext_is_randomized(self):
        assert crypto.encrypt('secret') != crypto.encrypt('secret')

    def test_tampered_value_is_rejected(self):
        token = crypto.encrypt('secret')
        tampered = token[:-4] + ('AAAA' if not token.endswith('AAAA') else 'BBBB')

        with pytest.raises(crypto.EncryptionError):
            crypto.decrypt(tampered)

    def test_empty_values(self):
        with pytest.raises(crypto.EncryptionError):
            crypto.encrypt('')
        assert not crypto.is_encrypted('plain')


@pytest.mark.django_db
class TestRateLimit:
    """RateLimitMiddleware"""

    @override_settings(RATE_LIMIT_ENABLED=True, RATE_LIMIT_MAX_REQUESTS=2)
    def test_blocks_after_limit(self, client_for, normal_user):
        client = client_for(normal_user)

        first = client.get('/api/users/me')
        client.get('/api/users/me')
        blocked = client.get('/api/users/me')

        assert first['X-RateLimit-Remaining'] == '1'
        assert blocked.status_code == 429
        assert blocked.json()['error']['code'] == 'RATE_LIMIT_EXCEEDED'
        assert int(blocked['Retry-After']) >= 1

    @override_settings(RATE_LIMIT_ENABLED=True, RATE_LIMIT_MAX_REQUESTS=1)
    def test_anonymous_and_auth_paths_are_not_limited(self, api_client):
        for _ in range(3):
            assert api_client.get('/api/ai-platforms').status_code == 200
            assert api_client.get('/api/auth/captcha').status_code == 200
