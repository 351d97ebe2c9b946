"""
Tests for screenings: public browsing, likes, comments and admin uploads.
"""

from datetime import timedelta
from unittest import mock

import pytest
from django.utils import timezone

from apps.authentication.models import UserStatus
from apps.interactions.models import Comment, EntityType, Like
from apps.screenings.models import Screening
from apps.screenings.services import time_range_start


@pytest.fixture
def make_screening(db):
    def factory(**fields):
        defaults = {'title': 'Dreamscape', 'video_url': '/uploads/screenings/dream.mp4'}
        defaults.update(fields)
        return Screening.objects.create(**defaults)

    return factory


class TestTimeRange:
    """time_range_start"""

    def test_today_starts_at_midnight(self):
        now = timezone.localtime()
        start = time_range_start('today', now)

        assert start.date() == now.date()
        assert (start.hour, start.minute, start.second) == (0, 0, 0)

    def test_week(self):
        now = timezone.now()
        assert time_range_start('week', now) == now - timedelta(days=7)

    def test_unknown_range(self):
        assert time_range_start(None) is None


@pytest.mark.django_db
class TestPublicScreenings:
    """GET /api/screenings"""

    def test_list_defaults_to_ten_per_page(self, api_client, make_screening):
        for index in range(12):
            make_screening(title=f'clip {index}')

        body = api_client.get('/api/screenings').json()

        assert len(body['screenings']) == 10
        assert body['meta']['total'] == 12
        assert body['meta']['totalPages'] == 2
        assert body['screenings'][0]['title'] == 'clip 11'

    def test_search_by_creator(self, api_client, make_screening, make_user):
        creator = make_user(username='director')
        mine = make_screening(creator=creator)
        make_screening(title='Other')

        body = api_client.get('/api/screenings', {'search': 'direct'}).json()

        assert [item['id'] for item in body['screenings']] == [mine.id]
        assert body['screenings'][0]['creator']['username'] == 'director'

    def test_time_range_filter(self, api_client, make_screening):
        recent = make_screening(title='recent')
        old = make_screening(title='old')
        Screening.objects.filter(id=old.id).update(created_at=timezone.now() - timedelta(days=40))

        body = api_client.get('/api/screenings', {'timeRange': 'month'}).json()

        assert [item['id'] for item in body['screenings']] == [recent.id]

    def test_detail_counts_views_and_like_state(self, client_for, normal_user, make_screening):
        screening = make_screening()
        Like.objects.create(user=normal_user, entity_type=EntityType.SCREENING, entity_id=screening.id)

        body = client_for(normal_user).get(f'/api/screenings/{screening.id}').json()

        assert body['views'] == 1
        assert body['isLiked'] is True

    def test_missing_screening(self, api_client, db):
        response = api_client.get('/api/screenings/404')

        assert response.status_code == 404
        assert response.json()['error']['message'] == '放映视频不存在'


@pytest.mark.django_db
class TestScreeningInteractions:
    """Likes and comments"""

    def test_like_toggle(self, client_for, normal_user, make_screening):
        screening = make_screening()
        client = client_for(normal_user)

        assert client.post(f'/api/screenings/{screening.id}/like').json() == {'liked': True}
        screening.refresh_from_db()
        assert screening.likes_count == 1

        assert client.post(f'/api/screenings/{screening.id}/like').json() == {'liked': False}
        screening.refresh_from_db()
        assert screening.likes_count == 0

    def test_comment_and_list(self, client_for, api_client, normal_user, make_screening):
        screening = make_screening()

        created = client_for(normal_user).post(f'/api/screenings/{screening.id}/comments', {'content': '太美了'})
        listed = api_client.get(f'/api/screenings/{screening.id}/comments').json()

        assert created.status_code == 201
        assert [item['content'] for item in listed] == ['太美了']
        assert listed[0]['user']['id'] == normal_user.id

    def test_muted_user_cannot_comment(self, client_for, make_user, make_screening):
        screening = make_screening()
        muted = make_user(status=UserStatus.MUTED)

        response = client_for(muted).post(f'/api/screenings/{screening.id}/comments', {'content': 'hi'})

        assert response.status_code == 403
        assert response.json()['error']['message'] == '您的账号已被禁言，无法发表评论'

    def test_anonymous_cannot_comment(self, api_client, make_screening):
        screening = make_screening()

        assert api_client.post(f'/api/screenings/{screening.id}/comments', {'content': 'hi'}).status_code == 401


@pytest.mark.django_db
class TestAdminScreenings:
    """/api/admin/screenings"""

    def test_upload_with_creator(self, admin_client, admin_user, make_user, video_file, image_file):
        creator = make_user(username='director')

        response = admin_client.post('/api/admin/screenings', {
            'video': video_file(),
            'thumbnail': image_file(name='cover.png'),
            'title': 'Night drive',
            'description': 'A short film',
            'creatorId': creator.id,
        }, format='multipart')

        assert response.status_code == 201
        body = response.json()
        assert body['videoUrl'].startswith('/uploads/screenings/')
        assert body['thumbnailUrl'].endswith('.png')
        assert body['creatorId'] == creator.id
        assert body['uploader']['id'] == admin_user.id

    def test_unknown_creator(self, admin_client, video_file):
        response = admin_client.post('/api/admin/screenings', {
            'video': video_file(),
            'title': 'Night drive',
            'creatorId': 9999,
        }, format='multipart')

        assert response.status_code == 400
        assert response.json()['error']['message'] == '指定的创作者不存在'

    def test_video_must_be_video(self, admin_client, image_file):
        response = admin_client.post('/api/admin/screenings', {
            'video': image_file(),
            'title': 'Not a video',
        }, format='multipart')

        assert response.status_code == 400
        assert response.json()['error']['message'] == '请上传视频文件'

    def test_update_title(self, admin_client, make_screening):
        screening = make_screening()

        response = admin_client.post(f'/api/admin/screenings/{screening.id}', {'title': 'Renamed'}, format='multipart')

        assert response.status_code == 200
        assert response.json()['title'] == 'Renamed'

    def test_delete_removes_interactions(self, admin_client, normal_user, make_screening):
        screening = make_screening()
        Comment.objects.create(user=normal_user, entity_type=EntityType.SCREENING, entity_id=screening.id, content='x')

        response = admin_client.delete(f'/api/admin/screenings/{screening.id}')

        assert response.json()['message'] == '放映视频已删除'
        assert not Screening.objects.exists()
        assert not Comment.objects.exists()

    def test_requires_admin(self, client_for, premium_user):
        assert client_for(premium_user).get('/api/admin/screenings').status_code == 403


@pytest.mark.django_db
class TestUploadCleanup:
    """Files are not left behind when an admin upload fails"""

    @pytest.fixture
    def media_root(self, settings, tmp_path):
        settings.MEDIA_ROOT = str(tmp_path)
        return tmp_path

    def test_bad_thumbnail_stores_nothing(self, admin_client, video_file, media_root):
        response = admin_client.post('/api/admin/screenings', {
            'video': video_file(),
            'thumbnail': video_file(name='cover.mp4'),
            'title': 'Night drive',
        }, format='multipart')

        assert response.status_code == 400
        assert response.json()['error']['message'] == '封面必须是图片文件'
        assert not [path for path in media_root.rglob('*') if path.is_file()]

    def test_failed_insert_removes_stored_files(self, admin_client, video_file, image_file, media_root):
        with mock.patch.object(Screening.objects, 'create', side_effect=RuntimeError('db down')):
            response = admin_client.post('/api/admin/screenings', {
                'video': video_file(),
                'thumbnail': image_file(name='cover.png'),
                'title': 'Night drive',
            }, format='multipart')

        assert response.status_code == 500
        assert not [path for path in media_root.rglob('*') if path.is_file()]
