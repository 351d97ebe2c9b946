"""
Tests for the profile endpoints, the user's likes/favorites and admin user management.
"""

from datetime import timedelta

import pytest
from django.utils import timezone

from apps.authentication.models import RefreshToken, Role, User, UserStatus
from apps.authentication.services import auth_service
from apps.interactions.models import EntityType, Favorite, Like
from apps.posts.models import PostStatus
from apps.screenings.models import Screening
from apps.users.services import admin_user_service
from tests.conftest import DEFAULT_PASSWORD


@pytest.mark.django_db
class TestProfile:
    """/api/users/me"""

    def test_get_me(self, client_for, normal_user):
        body = client_for(normal_user).get('/api/users/me').json()

        assert body['id'] == normal_user.id
        assert body['membershipName'] == '普通用户'

    def test_update_nickname_and_email(self, client_for, normal_user):
        response = client_for(normal_user).patch('/api/users/me', {'nickname': '小画家', 'email': 'NEW@example.com'})

        assert response.status_code == 200
        normal_user.refresh_from_db()
        assert normal_user.nickname == '小画家'
        assert normal_user.email == 'new@example.com'

    def test_email_taken(self, client_for, normal_user, make_user):
        make_user(email='taken@example.com')

        response = client_for(normal_user).patch('/api/users/me', {'email': 'taken@example.com'})

        assert response.status_code == 409
        assert response.json()['error']['message'] == '该邮箱已被其他用户使用'

    def test_muted_user_cannot_edit(self, client_for, make_user):
        muted = make_user(status=UserStatus.MUTED)

        response = client_for(muted).patch('/api/users/me', {'nickname': 'x'})

        assert response.status_code == 403
        assert response.json()['error']['message'] == '您的账号已被禁言，无法修改个人资料'


@pytest.mark.django_db
class TestChangePassword:
    """POST /api/users/change-password"""

    def test_change_password_revokes_tokens(self, client_for, normal_user):
        tokens = auth_service.generate_tokens(normal_user)

        response = client_for(normal_user).post('/api/users/change-password', {
            'currentPassword': DEFAULT_PASSWORD,
            'newPassword': 'Brandnew99',
        })

        assert response.json()['message'] == '密码修改成功'
        normal_user.refresh_from_db()
        assert normal_user.check_password('Brandnew99')
        assert RefreshToken.objects.get(token=tokens['refreshToken']).is_revoked

    def test_wrong_current_password(self, client_for, normal_user):
        response = client_for(normal_user).post('/api/users/change-password', {
            'currentPassword': 'Nope12345',
            'newPassword': 'Brandnew99',
        })

        assert response.status_code == 400
        assert response.json()['error']['message'] == '当前密码不正确'

    def test_weak_new_password(self, client_for, normal_user):
        response = client_for(normal_user).post('/api/users/change-password', {
            'currentPassword': DEFAULT_PASSWORD,
            'newPassword': 'weak',
        })

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'WEAK_PASSWORD'

    def test_new_password_over_72_bytes(self, client_for, normal_user):
        response = client_for(normal_user).post('/api/users/change-password', {
            'currentPassword': DEFAULT_PASSWORD,
            'newPassword': 'Aa1' + 'x' * 77,
        })

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'VALIDATION_ERROR'


@pytest.mark.django_db
class TestMyInteractions:
    """/api/users/me/likes and /api/users/me/favorites"""

    def test_likes_embed_entities(self, client_for, normal_user, premium_user, make_post):
        post = make_post(premium_user)
        screening = Screening.objects.create(title='Clip', video_url='/uploads/screenings/clip.mp4')
        Like.objects.create(user=normal_user, entity_type=EntityType.POST, entity_id=post.id)
        Like.objects.create(user=normal_user, entity_type=EntityType.SCREENING, entity_id=screening.id)

        body = client_for(normal_user).get('/api/users/me/likes').json()

        assert body['meta']['total'] == 2
        by_type = {item['entityType']: item for item in body['data']}
        assert by_type['POST']['entity']['id'] == post.id
        assert by_type['POST']['entity']['hasLiked'] is True
        assert by_type['SCREENING']['entity']['title'] == 'Clip'

    def test_filter_by_entity_type(self, client_for, normal_user, premium_user, make_post):
        post = make_post(premium_user)
        Favorite.objects.create(user=normal_user, entity_type=EntityType.POST, entity_id=post.id)
        Favorite.objects.create(user=normal_user, entity_type=EntityType.SCREENING, entity_id=999)

        body = client_for(normal_user).get('/api/users/me/favorites', {'entityType': 'POST'}).json()

        assert [item['entityId'] for item in body['data']] == [post.id]

    def test_hidden_post_has_null_entity(self, client_for, normal_user, premium_user, make_post):
        post = make_post(premium_user, status=PostStatus.HIDDEN)
        Favorite.objects.create(user=normal_user, entity_type=EntityType.POST, entity_id=post.id)

        body = client_for(normal_user).get('/api/users/me/favorites').json()

        assert body['data'][0]['entity'] is None


@pytest.mark.django_db
class TestAdminUsers:
    """/api/admin/users"""

    def test_list_and_filter(self, admin_client, normal_user, premium_user):
        everyone = admin_client.get('/api/admin/users').json()
        premium = admin_client.get('/api/admin/users', {'role': 'PREMIUM'}).json()

        assert everyone['meta']['total'] == 3
        assert [item['id'] for item in premium['data']] == [premium_user.id]

    def test_list_is_cached_until_a_write(self, admin_client, normal_user):
        first = admin_client.get('/api/admin/users').json()
        User.objects.filter(id=normal_user.id).update(nickname='changed behind the cache')

        cached = admin_client.get('/api/admin/users').json()
        assert cached == first

        admin_user_service.invalidate_list_cache()
        fresh = admin_client.get('/api/admin/users').json()
        nicknames = {item['nickname'] for item in fresh['data']}
        assert 'changed behind the cache' in nicknames

    def test_create_user(self, admin_client):
        response = admin_client.post('/api/admin/users', {
            'username': 'newbie',
            'email': 'newbie@example.com',
            'password': '123456',
            'role': 'PREMIUM',
        })

        assert response.status_code == 201
        assert response.json()['role'] == 'PREMIUM'
        assert admin_client.get('/api/admin/users').json()['meta']['total'] == 2

    def test_create_rejects_overlong_password(self, admin_client):
        response = admin_client.post('/api/admin/users', {
            'username': 'newbie',
            'email': 'newbie@example.com',
            'password': '密' * 25,
        })

        assert response.status_code == 400

    def test_create_duplicate(self, admin_client, normal_user):
        response = admin_client.post('/api/admin/users', {
            'username': normal_user.username,
            'email': 'fresh@example.com',
            'password': '123456',
        })

        assert response.status_code == 409

    def test_ban_revokes_tokens(self, admin_client, normal_user):
        tokens = auth_service.generate_tokens(normal_user)

        response = admin_client.patch(f'/api/admin/users/{normal_user.id}/status', {'status': 'BANNED'})

        assert response.json()['status'] == 'BANNED'
        assert RefreshToken.objects.get(token=tokens['refreshToken']).is_revoked

    def test_premium_role_defaults_to_thirty_days(self, admin_client, normal_user):
        admin_client.patch(f'/api/admin/users/{normal_user.id}/role', {'role': 'PREMIUM'})

        normal_user.refresh_from_db()
        assert normal_user.role == Role.PREMIUM
        remaining = normal_user.premium_expiry_date - timezone.now()
        assert timedelta(days=29) < remaining <= timedelta(days=30)

    def test_normal_role_clears_expiry(self, admin_client, make_user):
        user = make_user(Role.PREMIUM, premium_expiry_date=timezone.now() + timedelta(days=5))

        admin_client.patch(f'/api/admin/users/{user.id}/role', {'role': 'NORMAL'})

        user.refresh_from_db()
        assert user.premium_expiry_date is None

    def test_reset_password(self, admin_client, normal_user):
        response = admin_client.post(f'/api/admin/users/{normal_user.id}/reset-password')

        assert response.json()['message'] == '密码已重置为 123456'
        normal_user.refresh_from_db()
        assert normal_user.check_password('123456')

    def test_missing_user(self, admin_client):
        response = admin_client.get('/api/admin/users/9999')

        assert response.status_code == 404
        assert response.json()['error']['message'] == '用户不存在'

    def test_non_admin(self, client_for, premium_user):
        assert client_for(premium_user).get('/api/admin/users').status_code == 403
