"""
Tests for notes, note categories and their admin endpoints.
"""

from datetime import timedelta

import pytest
from django.utils import timezone

from apps.authentication.models import UserStatus
from apps.creators.models import Creator
from apps.interactions.models import EntityType, Favorite, Like
from apps.moderation.models import SensitiveWord
from apps.notes.models import Note, NoteCategory, NoteStatus
from apps.notes.services import content_text
from apps.storage.models import UploadLimit


@pytest.fixture
def category(db):
    return NoteCategory.objects.create(name='提示词技巧', description='写好提示词')


@pytest.fixture
def make_note(category):
    def factory(user, **fields):
        defaults = {
            'category': category,
            'title': 'Midjourney 入门',
            'content': {'type': 'doc', 'text': '第一步'},
        }
        defaults.update(fields)
        return Note.objects.create(user=user, **defaults)

    return factory


def _payload(category, **extra):
    payload = {
        'title': '如何写好提示词',
        'content': '<p>先描述主体</p>',
        'categoryId': category.id,
    }
    payload.update(extra)
    return payload


class TestContentText:
    """content_text"""

    def test_string_content_is_kept(self):
        assert content_text('<p>你好</p>') == '<p>你好</p>'

    def test_json_content_keeps_chinese(self):
        assert '违禁' in content_text({'blocks': [{'text': '违禁'}]})

    def test_missing_content(self):
        assert content_text(None) == ''


@pytest.mark.django_db
class TestCreateNote:
    """POST /api/notes"""

    def test_create_html_note(self, client_for, normal_user, category):
        response = client_for(normal_user).post('/api/notes', _payload(category), format='json')

        assert response.status_code == 201
        body = response.json()
        assert body['content'] == '<p>先描述主体</p>'
        assert body['category']['name'] == '提示词技巧'
        assert body['user']['id'] == normal_user.id
        assert body['status'] == 'VISIBLE'

    def test_create_json_note(self, client_for, normal_user, category):
        content = {'type': 'doc', 'content': [{'type': 'paragraph', 'text': '步骤'}]}
        response = client_for(normal_user).post('/api/notes', _payload(category, content=content), format='json')

        assert response.status_code == 201
        assert Note.objects.get().content == content

    def test_requires_login(self, api_client, category):
        response = api_client.post('/api/notes', _payload(category), format='json')

        assert response.status_code in (401, 403)

    def test_unknown_category(self, client_for, normal_user, category):
        response = client_for(normal_user).post(
            '/api/notes', _payload(category, categoryId=category.id + 99), format='json'
        )

        assert response.status_code == 400
        assert f'ID为{category.id + 99}的分类不存在' in response.json()['error']['message']

    def test_empty_content(self, client_for, normal_user, category):
        response = client_for(normal_user).post('/api/notes', _payload(category, content=''), format='json')

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'VALIDATION_ERROR'

    def test_sensitive_word_inside_json_content(self, client_for, normal_user, category):
        SensitiveWord.objects.create(word='违禁')
        response = client_for(normal_user).post(
            '/api/notes', _payload(category, content={'text': '这里有违禁词'}), format='json'
        )

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'SENSITIVE_CONTENT'
        assert not Note.objects.exists()

    def test_muted_user_cannot_publish(self, client_for, make_user, category):
        muted = make_user(status=UserStatus.MUTED)
        response = client_for(muted).post('/api/notes', _payload(category), format='json')

        assert response.status_code == 403
        assert response.json()['error']['code'] == 'USER_MUTED'

    def test_publishing_updates_creator_score(self, client_for, normal_user, category,
                                              django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            response = client_for(normal_user).post('/api/notes', _payload(category), format='json')

        assert response.status_code == 201
        assert Creator.objects.get(user=normal_user).score == 100


@pytest.mark.django_db
class TestListNotes:
    """GET /api/notes"""

    def test_only_visible_notes(self, api_client, normal_user, make_note):
        visible = make_note(normal_user)
        make_note(normal_user, status=NoteStatus.HIDDEN_BY_ADMIN)
        make_note(normal_user, status=NoteStatus.ADMIN_DELETED)

        body = api_client.get('/api/notes').json()

        assert [note['id'] for note in body['notes']] == [visible.id]
        assert body['meta']['total'] == 1
        assert body['meta']['limit'] == 10

    def test_filter_by_category_and_user(self, api_client, make_user, make_note):
        author, other = make_user(), make_user()
        second_category = NoteCategory.objects.create(name='视频')
        wanted = make_note(author, category=second_category)
        make_note(author)
        make_note(other, category=second_category)

        body = api_client.get(f'/api/notes?categoryId={second_category.id}&userId={author.id}').json()

        assert [note['id'] for note in body['notes']] == [wanted.id]

    def test_search_title_and_author(self, api_client, make_user, make_note):
        author = make_user(nickname='光影师')
        by_title = make_note(make_user(), title='赛博朋克配色')
        by_author = make_note(author, title='随笔')
        make_note(make_user(), title='无关')

        ids = {note['id'] for note in api_client.get('/api/notes?query=赛博').json()['notes']}
        assert ids == {by_title.id}
        ids = {note['id'] for note in api_client.get('/api/notes?query=光影').json()['notes']}
        assert ids == {by_author.id}

    def test_order_by_favorites(self, api_client, normal_user, make_note):
        low = make_note(normal_user, favorites_count=1)
        high = make_note(normal_user, favorites_count=9)

        body = api_client.get('/api/notes?orderBy=favorites').json()

        assert [note['id'] for note in body['notes']] == [high.id, low.id]

    def test_time_range(self, api_client, normal_user, make_note):
        recent = make_note(normal_user)
        old = make_note(normal_user)
        Note.objects.filter(id=old.id).update(created_at=timezone.now() - timedelta(days=40))

        body = api_client.get('/api/notes?timeRange=month').json()

        assert [note['id'] for note in body['notes']] == [recent.id]

    def test_invalid_order(self, api_client):
        response = api_client.get('/api/notes?orderBy=random')

        assert response.status_code == 400


@pytest.mark.django_db
class TestNoteDetail:
    """GET /api/notes/:id"""

    def test_counts_views_and_interaction_state(self, client_for, normal_user, make_user, make_note):
        note = make_note(make_user())
        Like.objects.create(user=normal_user, entity_type=EntityType.NOTE, entity_id=note.id)

        body = client_for(normal_user).get(f'/api/notes/{note.id}').json()

        assert body['views'] == 1
        assert body['isLiked'] is True
        assert body['isFavorited'] is False

    def test_deleted_note(self, api_client, normal_user, make_note):
        note = make_note(normal_user, status=NoteStatus.ADMIN_DELETED)

        response = api_client.get(f'/api/notes/{note.id}')

        assert response.status_code == 404
        assert response.json()['error']['message'] == f'ID为{note.id}的笔记不存在'

    def test_hidden_note_visible_to_author_only(self, api_client, client_for, normal_user, make_note):
        note = make_note(normal_user, status=NoteStatus.HIDDEN_BY_ADMIN)

        assert api_client.get(f'/api/notes/{note.id}').status_code == 404
        assert client_for(normal_user).get(f'/api/notes/{note.id}').status_code == 200


@pytest.mark.django_db
class TestEditNote:
    """PATCH and DELETE /api/notes/:id"""

    def test_author_updates(self, client_for, normal_user, make_note):
        note = make_note(normal_user)

        response = client_for(normal_user).patch(
            f'/api/notes/{note.id}', {'title': '新标题', 'coverImageUrl': '/uploads/notes/c.png'}, format='json'
        )

        assert response.status_code == 200
        note.refresh_from_db()
        assert note.title == '新标题'
        assert note.cover_image_url == '/uploads/notes/c.png'

    def test_other_user_cannot_update(self, client_for, make_user, make_note):
        note = make_note(make_user())

        response = client_for(make_user()).patch(f'/api/notes/{note.id}', {'title': 'x'}, format='json')

        assert response.status_code == 403

    def test_author_cannot_change_status(self, client_for, normal_user, make_note):
        note = make_note(normal_user)

        response = client_for(normal_user).patch(
            f'/api/notes/{note.id}', {'status': 'ADMIN_DELETED'}, format='json'
        )

        assert response.status_code == 403
        note.refresh_from_db()
        assert note.status == NoteStatus.VISIBLE

    def test_author_delete_hides(self, client_for, normal_user, make_note):
        note = make_note(normal_user)

        response = client_for(normal_user).delete(f'/api/notes/{note.id}')

        assert response.status_code == 200
        note.refresh_from_db()
        assert note.status == NoteStatus.HIDDEN_BY_ADMIN

    def test_admin_delete_marks_deleted(self, admin_client, normal_user, make_note):
        note = make_note(normal_user)

        admin_client.delete(f'/api/notes/{note.id}')

        note.refresh_from_db()
        assert note.status == NoteStatus.ADMIN_DELETED


@pytest.mark.django_db
class TestNoteInteractions:
    """Likes, favorites and the viewer's lists"""

    def test_like_toggles(self, client_for, normal_user, make_user, make_note):
        note = make_note(make_user())
        client = client_for(normal_user)

        assert client.post(f'/api/notes/{note.id}/like').json() == {'liked': True}
        note.refresh_from_db()
        assert note.likes_count == 1

        assert client.post(f'/api/notes/{note.id}/like').json() == {'liked': False}
        note.refresh_from_db()
        assert note.likes_count == 0

    def test_favorite_hidden_note(self, client_for, normal_user, make_note):
        note = make_note(normal_user, status=NoteStatus.HIDDEN_BY_ADMIN)

        response = client_for(normal_user).post(f'/api/notes/{note.id}/favorite')

        assert response.status_code == 404

    def test_muted_user_can_like(self, client_for, make_user, make_note):
        note = make_note(make_user())
        muted = make_user(status=UserStatus.MUTED)

        response = client_for(muted).post(f'/api/notes/{note.id}/like')

        assert response.status_code == 200

    def test_liked_and_favorited_lists(self, client_for, normal_user, make_user, make_note):
        liked = make_note(make_user())
        favorited = make_note(make_user())
        hidden = make_note(make_user(), status=NoteStatus.HIDDEN_BY_ADMIN)
        Like.objects.create(user=normal_user, entity_type=EntityType.NOTE, entity_id=liked.id)
        Like.objects.create(user=normal_user, entity_type=EntityType.NOTE, entity_id=hidden.id)
        Favorite.objects.create(user=normal_user, entity_type=EntityType.NOTE, entity_id=favorited.id)
        client = client_for(normal_user)

        liked_body = client.get('/api/notes/user/liked').json()
        favorited_body = client.get('/api/notes/user/favorited').json()

        assert [note['id'] for note in liked_body['notes']] == [liked.id]
        assert liked_body['notes'][0]['isLiked'] is True
        assert [note['id'] for note in favorited_body['notes']] == [favorited.id]

    def test_note_likes_show_in_my_likes(self, client_for, normal_user, make_user, make_note):
        note = make_note(make_user())
        Like.objects.create(user=normal_user, entity_type=EntityType.NOTE, entity_id=note.id)

        body = client_for(normal_user).get('/api/users/me/likes?entityType=NOTE').json()

        assert body['data'][0]['entityType'] == 'NOTE'
        assert body['data'][0]['entity']['title'] == note.title


@pytest.mark.django_db
class TestNoteUpload:
    """POST /api/notes/upload"""

    @pytest.fixture
    def media_root(self, settings, tmp_path):
        settings.MEDIA_ROOT = str(tmp_path)
        return tmp_path

    def test_image_goes_to_notes_folder(self, client_for, normal_user, image_file, media_root):
        response = client_for(normal_user).post('/api/notes/upload', {'file': image_file()}, format='multipart')

        assert response.status_code == 201
        assert response.json()['url'].startswith('/uploads/notes/')

    def test_notes_limit_applies(self, client_for, normal_user, image_file, media_root):
        UploadLimit.objects.create(module='notes', image_max_size_mb=1)
        big = image_file(size=1024 * 1024 + 10)

        response = client_for(normal_user).post('/api/notes/upload', {'file': big}, format='multipart')

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'FILE_TOO_LARGE'

    def test_rejects_other_types(self, client_for, normal_user, image_file, media_root):
        pdf = image_file(name='doc.pdf', content_type='application/pdf')

        response = client_for(normal_user).post('/api/notes/upload', {'file': pdf}, format='multipart')

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'INVALID_FILE_TYPE'


@pytest.mark.django_db
class TestNoteCategories:
    """Public list and admin management"""

    def test_public_list(self, api_client, category):
        body = api_client.get('/api/note-categories').json()

        assert [item['name'] for item in body] == ['提示词技巧']

    def test_admin_creates(self, admin_client):
        response = admin_client.post('/api/admin/note-categories', {'name': '工作流'}, format='json')

        assert response.status_code == 201
        assert NoteCategory.objects.filter(name='工作流').exists()

    def test_duplicate_name(self, admin_client, category):
        response = admin_client.post('/api/admin/note-categories', {'name': category.name}, format='json')

        assert response.status_code == 409

    def test_rename_to_existing(self, admin_client, category):
        other = NoteCategory.objects.create(name='视频')

        response = admin_client.patch(
            f'/api/admin/note-categories/{other.id}', {'name': category.name}, format='json'
        )

        assert response.status_code == 409

    def test_category_in_use(self, admin_client, normal_user, category, make_note):
        make_note(normal_user)

        response = admin_client.delete(f'/api/admin/note-categories/{category.id}')

        assert response.status_code == 409
        assert response.json()['error']['code'] == 'CATEGORY_IN_USE'

    def test_delete_unused(self, admin_client, category):
        response = admin_client.delete(f'/api/admin/note-categories/{category.id}')

        assert response.status_code == 200
        assert not NoteCategory.objects.exists()

    def test_requires_admin(self, client_for, normal_user):
        response = client_for(normal_user).post('/api/admin/note-categories', {'name': 'x'}, format='json')

        assert response.status_code == 403


@pytest.mark.django_db
class TestAdminNotes:
    """/api/admin/notes"""

    def test_list_includes_hidden(self, admin_client, normal_user, make_note):
        visible = make_note(normal_user)
        hidden = make_note(normal_user, status=NoteStatus.HIDDEN_BY_ADMIN)
        make_note(normal_user, status=NoteStatus.ADMIN_DELETED)

        body = admin_client.get('/api/admin/notes').json()

        assert {note['id'] for note in body['notes']} == {visible.id, hidden.id}

    def test_admin_restores_status(self, admin_client, normal_user, make_note):
        note = make_note(normal_user, status=NoteStatus.HIDDEN_BY_ADMIN)

        response = admin_client.patch(f'/api/admin/notes/{note.id}', {'status': 'VISIBLE'}, format='json')

        assert response.status_code == 200
        note.refresh_from_db()
        assert note.status == NoteStatus.VISIBLE

    def test_detail_does_not_count_views(self, admin_client, normal_user, make_note):
        note = make_note(normal_user)

        admin_client.get(f'/api/admin/notes/{note.id}')

        note.refresh_from_db()
        assert note.views == 0
