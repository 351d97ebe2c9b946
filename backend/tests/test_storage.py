"""
Tests for uploads, upload limits, storage settings and upload cleanup.
"""

import os
import time
from unittest import mock

import oss2
import pytest

from apps.authentication.models import UserStatus
from apps.core.exceptions import ValidationError
from apps.core.utils.crypto import decrypt, encrypt
from apps.creators.models import Creator
from apps.notes.models import Note, NoteCategory
from apps.storage.models import OssConfig, StorageBackend, StorageConfig, UploadLimit
from apps.storage.services import SECRET_MASK, storage_service, upload_limit_service
from apps.storage.tasks import cleanup_old_uploads, embedded_urls


@pytest.fixture
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = str(tmp_path)
    return tmp_path


@pytest.fixture
def complete_oss(db):
    return OssConfig.objects.create(
        access_key_id='LTAI-test',
        access_key_secret=encrypt('oss-secret'),
        bucket='aifans',
        region='cn-hangzhou',
        endpoint='oss-cn-hangzhou.aliyuncs.com',
    )


class TestBuildKey:
    """storage_service.build_key"""

    def test_key_shape(self):
        key = storage_service.build_key('posts', 'Photo.PNG')

        folder, name = key.split('/')
        assert folder == 'posts'
        assert name.endswith('.png')
        assert name.split('-')[0].isdigit()

    @pytest.mark.parametrize('folder', ['../etc', 'a/b', 'notes\n', '..'])
    def test_rejects_unsafe_folder(self, folder):
        with pytest.raises(ValidationError):
            storage_service.build_key(folder, 'x.txt')

    def test_empty_folder_defaults_to_general(self):
        assert storage_service.build_key('', 'x.txt').startswith('general/')


@pytest.mark.django_db
class TestUpload:
    """POST /api/storage/upload and /api/storage/upload-avatar"""

    def test_upload_into_folder(self, client_for, normal_user, image_file, media_root):
        response = client_for(normal_user).post(
            '/api/storage/upload', {'file': image_file(), 'folder': 'notes'}, format='multipart'
        )

        assert response.status_code == 201
        body = response.json()
        assert body['url'].startswith('/uploads/notes/')
        assert body['storage'] == 'local'
        assert body['mimeType'] == 'image/png'
        assert (media_root / body['key']).is_file()

    def test_default_folder(self, client_for, normal_user, image_file, media_root):
        body = client_for(normal_user).post('/api/storage/upload', {'file': image_file()}, format='multipart').json()

        assert body['key'].startswith('general/')

    def test_invalid_folder_name(self, client_for, normal_user, image_file):
        response = client_for(normal_user).post(
            '/api/storage/upload', {'file': image_file(), 'folder': '../x'}, format='multipart'
        )

        assert response.status_code == 400

    def test_query_string_folder_is_validated(self, client_for, normal_user, image_file, media_root):
        response = client_for(normal_user).post(
            '/api/storage/upload?folder=../../evil', {'file': image_file()}, format='multipart'
        )

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'INVALID_FOLDER'
        assert not any(media_root.rglob('*.png'))

    def test_query_string_folder(self, client_for, normal_user, image_file, media_root):
        response = client_for(normal_user).post(
            '/api/storage/upload?folder=drafts', {'file': image_file()}, format='multipart'
        )

        assert response.status_code == 201
        assert response.json()['key'].startswith('drafts/')

    def test_global_size_limit(self, client_for, normal_user, image_file, media_root):
        StorageConfig.objects.create(max_file_size=1)

        response = client_for(normal_user).post(
            '/api/storage/upload', {'file': image_file(size=2 * 1024 * 1024)}, format='multipart'
        )

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'FILE_TOO_LARGE'

    def test_muted_user_cannot_upload(self, client_for, make_user, image_file):
        muted = make_user(status=UserStatus.MUTED)

        response = client_for(muted).post('/api/storage/upload', {'file': image_file()}, format='multipart')

        assert response.status_code == 403

    def test_avatar_sets_profile(self, client_for, normal_user, image_file, media_root):
        response = client_for(normal_user).post(
            '/api/storage/upload-avatar', {'file': image_file()}, format='multipart'
        )

        assert response.status_code == 201
        normal_user.refresh_from_db()
        assert normal_user.avatar_url == response.json()['url']
        assert normal_user.avatar_url.startswith('/uploads/avatar/')

    def test_avatar_must_be_image(self, client_for, normal_user, video_file):
        response = client_for(normal_user).post(
            '/api/storage/upload-avatar', {'file': video_file()}, format='multipart'
        )

        assert response.status_code == 400
        assert response.json()['error']['message'] == '头像必须是图片文件'

    def test_oss_upload(self, client_for, normal_user, image_file, complete_oss):
        StorageConfig.objects.create(default_storage=StorageBackend.OSS)
        bucket = mock.Mock()

        with mock.patch.object(storage_service, 'oss_bucket', return_value=bucket):
            response = client_for(normal_user).post(
                '/api/storage/upload', {'file': image_file(), 'folder': 'notes'}, format='multipart'
            )

        assert response.status_code == 201
        body = response.json()
        assert body['storage'] == 'oss'
        assert body['url'] == f'https://aifans.oss-cn-hangzhou.aliyuncs.com/{body["key"]}'
        bucket.put_object.assert_called_once()


@pytest.mark.django_db
class TestLocalFiles:
    """open_local, open_file and delete_file"""

    def test_path_escape_is_refused(self, media_root):
        assert storage_service.open_local('/uploads/../../etc/passwd') is None
        assert storage_service.open_local('https://cdn.example.com/a.png') is None

    def test_delete_missing_file(self, media_root):
        assert storage_service.delete_file('/uploads/posts/missing.png') is False
        assert storage_service.delete_file('') is False

    def test_delete_existing_file(self, media_root):
        (media_root / 'posts').mkdir()
        (media_root / 'posts' / 'a.png').write_bytes(b'png')

        assert storage_service.delete_file('/uploads/posts/a.png') is True
        assert not (media_root / 'posts' / 'a.png').exists()


@pytest.mark.django_db
class TestUploadLimits:
    """Per-module limits"""

    def test_defaults(self):
        assert upload_limit_service.get_limit('inspiration') == {
            'imageMaxSizeMB': 10,
            'videoMaxSizeMB': 100,
            'audioMaxSizeMB': 0,
        }

    def test_public_limits_shape(self, api_client):
        body = api_client.get('/api/public/settings/upload-limits').json()

        assert body['success'] is True
        assert body['limits']['notes'] == {'imageSize': 5, 'videoSize': 50}
        assert body['limits']['screenings'] == {'videoSize': 500}

    def test_admin_sets_limits(self, admin_client, api_client):
        response = admin_client.post('/api/admin/settings/upload-limits', {
            'limits': {'notes': {'imageSize': 8}, 'screenings': {'videoSize': 1024}},
        })

        assert response.status_code == 200
        limits = api_client.get('/api/public/settings/upload-limits').json()['limits']
        assert limits['notes'] == {'imageSize': 8, 'videoSize': 50}
        assert limits['screenings'] == {'videoSize': 1024}

    def test_module_endpoint_keeps_missing_keys(self, admin_client, api_client):
        admin_client.post('/api/admin/settings/creator', {'audioMaxSizeMB': 50})

        body = api_client.get('/api/public/settings/upload-limits/creator').json()

        assert body == {'imageMaxSizeMB': 0, 'videoMaxSizeMB': 0, 'audioMaxSizeMB': 50}
        assert UploadLimit.objects.get(module='creator').audio_max_size_mb == 50

    def test_upload_stats(self, admin_client, media_root):
        (media_root / 'posts').mkdir()
        (media_root / 'posts' / 'a.png').write_bytes(b'1234')
        (media_root / 'posts' / 'b.mp4').write_bytes(b'123456')

        stats = admin_client.get('/api/admin/settings/upload-stats').json()['stats']

        assert stats['inspiration'] == {'imageCount': 1, 'videoCount': 1, 'totalSize': 10}
        assert stats['notes'] == {'imageCount': 0, 'videoCount': 0, 'totalSize': 0}


@pytest.mark.django_db
class TestStorageSettings:
    """/api/admin/settings/storage"""

    def test_secret_is_encrypted_and_masked(self, admin_client):
        response = admin_client.post('/api/admin/settings/storage', {
            'oss': {
                'accessKeyId': 'LTAI-test',
                'accessKeySecret': 'plain-secret',
                'bucket': 'aifans',
                'region': 'cn-shanghai',
                'endpoint': 'oss-cn-shanghai.aliyuncs.com',
            },
        })

        assert response.status_code == 200
        assert response.json()['config']['oss']['accessKeySecret'] == SECRET_MASK
        stored = OssConfig.objects.get()
        assert stored.access_key_secret != 'plain-secret'
        assert decrypt(stored.access_key_secret) == 'plain-secret'

    def test_masked_secret_keeps_stored_value(self, admin_client, complete_oss):
        admin_client.post('/api/admin/settings/storage', {
            'oss': {'accessKeySecret': SECRET_MASK, 'bucket': 'renamed'},
        })

        stored = OssConfig.objects.get()
        assert stored.bucket == 'renamed'
        assert decrypt(stored.access_key_secret) == 'oss-secret'

    def test_switch_to_oss_requires_credentials(self, admin_client):
        response = admin_client.post('/api/admin/settings/storage', {'storage': {'defaultStorage': 'oss'}})

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'OSS_CONFIG_INCOMPLETE'
        assert not StorageConfig.objects.exists()

    def test_storage_options(self, admin_client):
        admin_client.post('/api/admin/settings/storage', {
            'storage': {'maxFileSize': 200, 'enableCleanup': True, 'cleanupDays': 7},
        })

        config = admin_client.get('/api/admin/settings/storage').json()['config']['storage']
        assert config == {'defaultStorage': 'local', 'maxFileSize': 200, 'enableCleanup': True, 'cleanupDays': 7}

    def test_connection_success(self, admin_client, complete_oss):
        bucket = mock.Mock()

        with mock.patch.object(storage_service, 'oss_bucket', return_value=bucket) as factory:
            response = admin_client.post('/api/admin/settings/storage/test', {})

        assert response.json()['success'] is True
        assert factory.call_args.kwargs['secret'] == 'oss-secret'
        bucket.list_objects_v2.assert_called_once_with(max_keys=1)

    def test_connection_failure(self, admin_client, complete_oss):
        bucket = mock.Mock()
        bucket.list_objects_v2.side_effect = oss2.exceptions.OssError(
            403, {}, b'', {'Code': 'AccessDenied', 'Message': 'denied'}
        )

        with mock.patch.object(storage_service, 'oss_bucket', return_value=bucket):
            response = admin_client.post('/api/admin/settings/storage/test', {})

        assert response.status_code == 400
        assert response.json()['success'] is False
        assert response.json()['message'].startswith('OSS连接测试失败')

    def test_connection_incomplete(self, admin_client):
        response = admin_client.post('/api/admin/settings/storage/test', {'bucket': 'only-bucket'})

        assert response.status_code == 400
        assert response.json() == {'success': False, 'message': 'OSS配置不完整'}

    def test_stats(self, admin_client, make_post, normal_user):
        make_post(normal_user, size=100)
        make_post(normal_user, size=50)

        data = admin_client.get('/api/admin/settings/storage/stats').json()['data']

        assert data['totalSize'] == 150
        assert data['totalFiles'] == 2
        assert data['last30DaysUploads'] == 2
        assert data['storageType'] == 'local'


@pytest.mark.django_db
class TestCleanupTask:
    """cleanup_old_uploads"""

    def _old_file(self, root, relative):
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b'data')
        old = time.time() - 10 * 24 * 3600
        os.utime(path, (old, old))
        return path

    def test_disabled_by_default(self, media_root):
        path = self._old_file(media_root, 'posts/old.png')

        assert cleanup_old_uploads() == 'Cleanup disabled'
        assert path.exists()

    def test_removes_only_unreferenced_old_files(self, media_root, make_post, normal_user):
        StorageConfig.objects.create(enable_cleanup=True, cleanup_days=7)
        orphan = self._old_file(media_root, 'posts/orphan.png')
        kept = self._old_file(media_root, 'posts/kept.png')
        make_post(normal_user, file_url='/uploads/posts/kept.png')
        fresh = media_root / 'posts' / 'fresh.png'
        fresh.write_bytes(b'new')

        assert cleanup_old_uploads() == 'Deleted 1 files'
        assert not orphan.exists()
        assert kept.exists()
        assert fresh.exists()

    def test_keeps_files_embedded_in_notes_and_creators(self, media_root, normal_user):
        StorageConfig.objects.create(enable_cleanup=True, cleanup_days=7)
        in_note = self._old_file(media_root, 'notes/figure.png')
        in_showcase = self._old_file(media_root, 'creator/demo.mp3')
        orphan = self._old_file(media_root, 'notes/orphan.png')
        category = NoteCategory.objects.create(name='教程')
        Note.objects.create(
            user=normal_user,
            category=category,
            title='图文',
            content={'html': '<p>看图</p><img src="/uploads/notes/figure.png">'},
        )
        Creator.objects.create(user=normal_user, nickname='阿光', audios=[{'url': '/uploads/creator/demo.mp3'}])

        assert cleanup_old_uploads() == 'Deleted 1 files'
        assert in_note.exists()
        assert in_showcase.exists()
        assert not orphan.exists()


class TestEmbeddedUrls:
    """embedded_urls"""

    def test_finds_urls_in_html_and_json(self):
        assert embedded_urls('<img src="/uploads/notes/a.png"> <a href="https://x.cn/uploads/b/c.mp4">') == {
            '/uploads/notes/a.png',
            '/uploads/b/c.mp4',
        }
        assert embedded_urls([{'url': '/uploads/creator/x.mp3', 'name': '小样'}]) == {'/uploads/creator/x.mp3'}

    def test_no_urls(self):
        assert embedded_urls({'text': '没有图片'}) == set()
        assert embedded_urls(None) == set()
