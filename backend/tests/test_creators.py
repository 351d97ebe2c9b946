"""
Tests for creator profiles and the activity score.
"""

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone
from hypothesis import given, strategies as st, settings

from apps.authentication.models import UserDailyLogin, UserStatus
from apps.creators.models import Creator
from apps.creators.services import creator_service, score_from_counts
from apps.creators.tasks import update_all_creator_scores
from apps.notes.models import Note, NoteCategory, NoteStatus
from apps.posts.models import PostStatus, PostType
from apps.spirit_posts.models import SpiritPost
from apps.storage.models import UploadLimit
from tests.conftest import DEFAULT_PASSWORD

COUNT_NAMES = [
    'image_posts', 'video_posts', 'post_likes', 'post_favorites',
    'notes', 'note_likes', 'note_favorites', 'login_days', 'spirit_posts',
]

counts = st.fixed_dictionaries({name: st.integers(min_value=0, max_value=1000) for name in COUNT_NAMES})


@pytest.fixture
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = str(tmp_path)
    return tmp_path


@pytest.fixture
def audio_file():
    def factory(name='theme.mp3', size=64):
        return SimpleUploadedFile(name, b'ID3' + b'0' * size, content_type='audio/mpeg')

    return factory


class TestScoreFromCounts:
    """score_from_counts"""

    def test_no_activity(self):
        assert score_from_counts() == 0

    def test_weights(self):
        assert score_from_counts(image_posts=1) == 10
        assert score_from_counts(video_posts=1) == 20
        assert score_from_counts(post_likes=1, post_favorites=1) == 3
        assert score_from_counts(notes=1, note_likes=1, note_favorites=1) == 107
        assert score_from_counts(login_days=1) == 20
        assert score_from_counts(spirit_posts=1) == 15

    @given(counts, st.sampled_from(COUNT_NAMES))
    @settings(max_examples=100)
    def test_more_activity_never_lowers_score(self, values, name):
        more = dict(values, **{name: values[name] + 1})
        assert score_from_counts(**more) > score_from_counts(**values)

    @given(counts, counts)
    @settings(max_examples=100)
    def test_additive(self, first, second):
        combined = {name: first[name] + second[name] for name in COUNT_NAMES}
        assert score_from_counts(**combined) == score_from_counts(**first) + score_from_counts(**second)


@pytest.mark.django_db
class TestCalculateScore:
    """creator_service.calculate_score / update_score"""

    def test_counts_visible_activity(self, normal_user, make_post):
        make_post(normal_user, likes_count=3, favorites_count=1)
        make_post(normal_user, type=PostType.VIDEO, mime_type='video/mp4')
        make_post(normal_user, status=PostStatus.HIDDEN, likes_count=50)
        category = NoteCategory.objects.create(name='技巧')
        Note.objects.create(user=normal_user, category=category, title='n', content='c', favorites_count=2)
        Note.objects.create(user=normal_user, category=category, title='h', content='c',
                            status=NoteStatus.HIDDEN_BY_ADMIN)
        UserDailyLogin.objects.create(user=normal_user, login_date=timezone.localdate())
        SpiritPost.objects.create(user=normal_user, title='求助', content='c')
        SpiritPost.objects.create(user=normal_user, title='隐藏', content='c', is_hidden=True)

        # posts 10 + 20 + 3 + 2, note 100 + 10, login 20, spirit post 15
        assert creator_service.calculate_score(normal_user.id) == 180

    def test_update_creates_profile(self, make_user):
        user = make_user(nickname='画师')
        UserDailyLogin.objects.create(user=user, login_date=timezone.localdate())

        creator = creator_service.update_score(user.id)

        assert creator.nickname == '画师'
        assert creator.score == 20

    def test_update_unknown_user(self, db):
        assert creator_service.update_score(999999) is None

    def test_update_all(self, make_user, make_post):
        author = make_user()
        make_post(author)
        Creator.objects.create(user=make_user(), nickname='空', score=99)

        assert creator_service.update_all_scores() == 2
        assert Creator.objects.get(user=author).score == 10
        assert Creator.objects.get(nickname='空').score == 0

    def test_nightly_task(self, normal_user, make_post):
        make_post(normal_user, type=PostType.VIDEO, mime_type='video/mp4')

        assert update_all_creator_scores() == 'Updated 1 creators'
        assert Creator.objects.get(user=normal_user).score == 20

    def test_login_refreshes_score(self, api_client, normal_user, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            response = api_client.post('/api/auth/login', {
                'login': normal_user.username,
                'password': DEFAULT_PASSWORD,
            })

        assert response.status_code == 200
        assert Creator.objects.get(user=normal_user).score == 20


@pytest.mark.django_db
class TestCreatorProfile:
    """GET and POST /api/creators"""

    def test_create_profile(self, client_for, normal_user):
        response = client_for(normal_user).post('/api/creators', {
            'nickname': '光影',
            'bio': '擅长风景',
            'images': [{'url': '/uploads/creator/a.png', 'title': '作品'}, {'title': '没有地址'}],
        }, format='json')

        assert response.status_code == 200
        body = response.json()
        assert body['userId'] == normal_user.id
        assert body['images'] == [{'url': '/uploads/creator/a.png', 'title': '作品'}]

    def test_update_keeps_single_profile(self, client_for, normal_user):
        client = client_for(normal_user)
        client.post('/api/creators', {'nickname': '一'}, format='json')
        client.post('/api/creators', {'nickname': '二', 'expertise': '视频'}, format='json')

        creator = Creator.objects.get(user=normal_user)
        assert creator.nickname == '二'
        assert creator.expertise == '视频'

    def test_nickname_required(self, client_for, normal_user):
        response = client_for(normal_user).post('/api/creators', {'bio': 'x'}, format='json')

        assert response.status_code == 400

    def test_banned_user(self, client_for, make_user):
        banned = make_user(status=UserStatus.BANNED)

        response = client_for(banned).post('/api/creators', {'nickname': 'x'}, format='json')

        assert response.status_code == 403

    def test_list_by_score(self, api_client, make_user):
        low = Creator.objects.create(user=make_user(), nickname='低', score=5)
        high = Creator.objects.create(user=make_user(), nickname='高', score=50)

        body = api_client.get('/api/creators').json()

        assert [item['id'] for item in body] == [high.id, low.id]

    def test_get_by_id_and_user(self, api_client, normal_user):
        creator = Creator.objects.create(user=normal_user, nickname='我')

        assert api_client.get(f'/api/creators/{creator.id}').json()['nickname'] == '我'
        assert api_client.get(f'/api/creators/user/{normal_user.id}').json()['id'] == creator.id

    def test_missing_creator(self, api_client, normal_user):
        response = api_client.get(f'/api/creators/user/{normal_user.id}')

        assert response.status_code == 404
        assert response.json()['error']['message'] == '创作者不存在'


@pytest.mark.django_db
class TestCreatorScoreEndpoints:
    """Score refresh and sync"""

    def test_refresh_own_score(self, client_for, normal_user):
        UserDailyLogin.objects.create(user=normal_user, login_date=timezone.localdate())

        response = client_for(normal_user).post(f'/api/creators/score/update/{normal_user.id}')

        assert response.json() == {'message': '积分更新成功', 'score': 20}

    def test_cannot_refresh_others(self, client_for, normal_user, make_user):
        other = make_user()

        response = client_for(normal_user).post(f'/api/creators/score/update/{other.id}')

        assert response.status_code == 403

    def test_admin_refreshes_anyone(self, admin_client, normal_user):
        response = admin_client.post(f'/api/creators/score/update/{normal_user.id}')

        assert response.status_code == 200

    def test_update_all_requires_admin(self, client_for, normal_user, admin_client):
        assert client_for(normal_user).post('/api/creators/score/update-all').status_code == 403
        assert admin_client.post('/api/creators/score/update-all').status_code == 200

    def test_sync_copies_account_profile(self, admin_client, make_user):
        user = make_user(nickname='新昵称', avatar_url='/uploads/avatars/new.png')
        Creator.objects.create(user=user, nickname='旧昵称')

        body = admin_client.post('/api/creators/sync-all').json()

        assert body['total'] == 1
        assert body['updated'] == 1
        creator = Creator.objects.get(user=user)
        assert creator.nickname == '新昵称'
        assert creator.avatar_url == '/uploads/avatars/new.png'


@pytest.mark.django_db
class TestCreatorUpload:
    """POST /api/creators/upload"""

    def test_audio_upload(self, client_for, normal_user, audio_file, media_root):
        response = client_for(normal_user).post('/api/creators/upload', {'file': audio_file()}, format='multipart')

        assert response.status_code == 201
        assert response.json()['url'].startswith('/uploads/creator/')

    def test_audio_limit(self, client_for, normal_user, audio_file, media_root):
        UploadLimit.objects.create(module='creator', audio_max_size_mb=1)

        response = client_for(normal_user).post(
            '/api/creators/upload', {'file': audio_file(size=1024 * 1024 + 10)}, format='multipart'
        )

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'FILE_TOO_LARGE'

    def test_rejects_documents(self, client_for, normal_user, image_file, media_root):
        pdf = image_file(name='cv.pdf', content_type='application/pdf')

        response = client_for(normal_user).post('/api/creators/upload', {'file': pdf}, format='multipart')

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'INVALID_FILE_TYPE'
