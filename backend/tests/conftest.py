"""
Shared fixtures: API clients, users with each role and small content factories.
"""

import pytest
from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient

from apps.authentication.models import Role, User, UserStatus
from apps.authentication.services import auth_service
from apps.ai_platforms.models import AIPlatform, AIPlatformType
from apps.posts.models import Post, PostType

DEFAULT_PASSWORD = 'Passw0rdX'


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    counter = {'n': 0}

    def factory(role=Role.NORMAL, status=UserStatus.ACTIVE, username=None, password=DEFAULT_PASSWORD, **extra):
        counter['n'] += 1
        username = username or f'user{counter["n"]}_{role.lower()}'
        user = User(
            username=username,
            email=extra.pop('email', f'{username}@example.com'),
            nickname=extra.pop('nickname', username),
            role=role,
            status=status,
            **extra,
        )
        user.set_password(password)
        user.save()
        return user

    return factory


@pytest.fixture
def client_for():
    """APIClient authenticated as the given user"""

    def factory(user):
        client = APIClient()
        token = auth_service.generate_tokens(user)['accessToken']
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
        return client

    return factory


@pytest.fixture
def normal_user(make_user):
    return make_user(Role.NORMAL)


@pytest.fixture
def premium_user(make_user):
    return make_user(Role.PREMIUM)


@pytest.fixture
def admin_user(make_user):
    return make_user(Role.ADMIN)


@pytest.fixture
def admin_client(client_for, admin_user):
    return client_for(admin_user)


@pytest.fixture
def image_platform(db):
    return AIPlatform.objects.create(name='Midjourney', type=AIPlatformType.IMAGE)


@pytest.fixture
def image_file():
    def factory(name='art.png', size=64, content_type='image/png'):
        return SimpleUploadedFile(name, b'\x89PNG' + b'0' * size, content_type=content_type)

    return factory


@pytest.fixture
def video_file():
    def factory(name='clip.mp4', size=64):
        return SimpleUploadedFile(name, b'\x00\x00\x00\x18ftyp' + b'0' * size, content_type='video/mp4')

    return factory


@pytest.fixture
def make_post(db, image_platform):
    def factory(user, **fields):
        defaults = {
            'type': PostType.IMAGE,
            'title': 'Sunset',
            'prompt': 'a sunset over the sea',
            'ai_platform': image_platform,
            'file_url': '/uploads/posts/sunset.png',
            'original_filename': 'sunset.png',
            'mime_type': 'image/png',
        }
        defaults.update(fields)
        return Post.objects.create(user=user, **defaults)

    return factory
