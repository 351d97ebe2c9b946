"""
File storage, upload limits and storage settings.

Uploaded files go to MEDIA_ROOT (served under /uploads/) or to Aliyun OSS,
depending on StorageConfig.default_storage.
"""

import logging
import os
import re
import time
import uuid
from datetime import timedelta
from pathlib import Path

import oss2
from django.apps import apps
from django.conf import settings
from django.core.files.storage import FileSystemStorage
from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from apps.core.exceptions import AppError, NotFoundError, ValidationError
from apps.core.utils.crypto import EncryptionError, decrypt, encrypt
from .models import OssConfig, StorageBackend, StorageConfig, UploadLimit

logger = logging.getLogger(__name__)

MB = 1024 * 1024
SECRET_MASK = '******'
FOLDER_PATTERN = re.compile(r'[A-Za-z0-9_-]+')

IMAGE_EXTENSIONS = ('.jpg', '.jpeg', '.png', '.gif', '.webp')
VIDEO_EXTENSIONS = ('.mp4', '.webm', '.mov')

# module -> {image, video, audio} defaults in MB
UPLOAD_LIMIT_DEFAULTS = {
    'notes': {'imageMaxSizeMB': 5, 'videoMaxSizeMB': 50, 'audioMaxSizeMB': 0},
    'inspiration': {'imageMaxSizeMB': 10, 'videoMaxSizeMB': 100, 'audioMaxSizeMB': 0},
    'screenings': {'imageMaxSizeMB': 0, 'videoMaxSizeMB': 500, 'audioMaxSizeMB': 0},
    'creator': {'imageMaxSizeMB': 0, 'videoMaxSizeMB': 0, 'audioMaxSizeMB': 20},
}

# module -> upload folder, used for upload statistics
MODULE_FOLDERS = {
    'notes': 'notes',
    'inspiration': 'posts',
    'screenings': 'screenings',
    'creator': 'creator',
}


class StorageService:
    """
    Writes and removes uploaded files on the configured backend
    """

    def get_storage_config(self) -> StorageConfig:
        """Saved config, or an unsaved instance holding the defaults"""
        return StorageConfig.objects.order_by('id').first() or StorageConfig()

    def get_oss_config(self) -> OssConfig:
        return OssConfig.objects.order_by('id').first() or OssConfig()

    def build_key(self, folder: str, original_name: str) -> str:
        """{folder}/{ms-timestamp}-{uuid4}{ext}"""
        folder = folder or 'general'
        if not FOLDER_PATTERN.fullmatch(folder):
            raise ValidationError('无效的上传目录', code='INVALID_FOLDER')
        ext = os.path.splitext(original_name or '')[1].lower()
        return f'{folder}/{int(time.time() * 1000)}-{uuid.uuid4()}{ext}'

    def _local_storage(self) -> FileSystemStorage:
        return FileSystemStorage(location=settings.MEDIA_ROOT, base_url=settings.MEDIA_URL)

    def oss_bucket(self, oss_config: OssConfig, secret: str = None) -> oss2.Bucket:
        """Build an oss2 bucket client; secret defaults to the stored one"""
        if secret is None:
            try:
                secret = decrypt(oss_config.access_key_secret)
            except EncryptionError:
                raise AppError('OSS密钥无法解密，请重新保存OSS配置', status_code=500, code='OSS_CONFIG_ERROR')
        auth = oss2.Auth(oss_config.access_key_id, secret)
        return oss2.Bucket(auth, oss_config.endpoint, oss_config.bucket)

    def _oss_public_url(self, oss_config: OssConfig, key: str) -> str:
        if oss_config.domain:
            domain = oss_config.domain
            if not domain.startswith('http'):
                domain = f'https://{domain}'
            return f'{domain.rstrip("/")}/{key}'
        endpoint = oss_config.endpoint.replace('https://', '').replace('http://', '')
        return f'https://{oss_config.bucket}.{endpoint}/{key}'

    def upload_file(self, file, folder: str) -> dict:
        """
        Store an uploaded file

        Args:
            file: Django UploadedFile
            folder: Target folder such as 'posts' or 'avatar'

        Returns:
            Dict with url, key, size, mimeType, originalName, storage

        Raises:
            ValidationError: file missing or larger than StorageConfig.max_file_size
        """
        if file is None:
            raise ValidationError('未提供文件', code='FILE_REQUIRED')

        storage_config = self.get_storage_config()
        if storage_config.max_file_size and file.size > storage_config.max_file_size * MB:
            raise ValidationError(f'文件大小超过限制（最大 {storage_config.max_file_size} MB）', code='FILE_TOO_LARGE')

        key = self.build_key(folder, file.name)
        mime_type = getattr(file, 'content_type', None) or 'application/octet-stream'

        if storage_config.default_storage == StorageBackend.OSS:
            oss_config = self.get_oss_config()
            if not oss_config.is_complete:
                raise AppError('OSS配置不完整', status_code=500, code='OSS_CONFIG_ERROR')
            try:
                file.seek(0)
                self.oss_bucket(oss_config).put_object(key, file.read(), headers={'Content-Type': mime_type})
            except oss2.exceptions.OssError as e:
                logger.error(f'OSS upload failed for {key}: {e}', exc_info=True)
                raise AppError('文件上传失败', status_code=502, code='STORAGE_ERROR', retryable=True)
            url = self._oss_public_url(oss_config, key)
            backend = StorageBackend.OSS
        else:
            key = self._local_storage().save(key, file)
            url = f'{settings.MEDIA_URL}{key}'
            backend = StorageBackend.LOCAL

        logger.info(f'Stored {file.name} ({file.size} bytes) as {key} on {backend}')
        return {
            'url': url,
            'key': key,
            'size': file.size,
            'mimeType': mime_type,
            'originalName': file.name,
            'storage': str(backend),
        }

    def open_local(self, url: str):
        """
        Map a /uploads/... URL to a path inside MEDIA_ROOT

        Returns:
            Path, or None when the URL is not local or escapes MEDIA_ROOT
        """
        if not url or not url.startswith(settings.MEDIA_URL):
            return None
        root = Path(settings.MEDIA_ROOT).resolve()
        path = (root / url[len(settings.MEDIA_URL):]).resolve()
        if root != path and root not in path.parents:
            return None
        return path

    def _oss_key(self, oss_config: OssConfig, url: str):
        prefix = self._oss_public_url(oss_config, '')
        if not oss_config.is_complete or not url.startswith(prefix):
            return None
        return url[len(prefix):]

    def open_file(self, url: str):
        """
        Open a stored file for reading

        Raises:
            NotFoundError: the file is gone or the URL is not ours
        """
        path = self.open_local(url)
        if path is not None:
            if not path.is_file():
                raise NotFoundError('文件不存在', code='FILE_NOT_FOUND')
            return open(path, 'rb')

        oss_config = self.get_oss_config()
        key = self._oss_key(oss_config, url or '')
        if key is None:
            raise NotFoundError('文件不存在', code='FILE_NOT_FOUND')
        try:
            return self.oss_bucket(oss_config).get_object(key)
        except oss2.exceptions.NoSuchKey:
            raise NotFoundError('文件不存在', code='FILE_NOT_FOUND')
        except oss2.exceptions.OssError as e:
            logger.error(f'OSS read failed for {key}: {e}', exc_info=True)
            raise AppError('文件读取失败', status_code=502, code='STORAGE_ERROR', retryable=True)

    def delete_file(self, url: str) -> bool:
        """
        Remove a stored file; a missing file is not an error

        Returns:
            True if something was deleted
        """
        if not url:
            return False

        path = self.open_local(url)
        if path is not None:
            if path.is_file():
                path.unlink()
                return True
            return False

        oss_config = self.get_oss_config()
        key = self._oss_key(oss_config, url)
        if key is None:
            return False
        try:
            self.oss_bucket(oss_config).delete_object(key)
            return True
        except oss2.exceptions.OssError as e:
            logger.warning(f'OSS delete failed for {url}: {e}')
            return False


class UploadLimitService:
    """
    Per-module size limits
    """

    def get_limit(self, module: str) -> dict:
        limit = UploadLimit.objects.filter(module=module).first()
        if limit is None:
            return dict(UPLOAD_LIMIT_DEFAULTS.get(module, {'imageMaxSizeMB': 0, 'videoMaxSizeMB': 0, 'audioMaxSizeMB': 0}))
        return {
            'imageMaxSizeMB': limit.image_max_size_mb,
            'videoMaxSizeMB': limit.video_max_size_mb,
            'audioMaxSizeMB': limit.audio_max_size_mb,
        }

    def get_all_limits(self) -> dict:
        return {module: self.get_limit(module) for module in UPLOAD_LIMIT_DEFAULTS}

    def set_limit(self, module: str, data: dict) -> dict:
        """Upsert; keys missing from data keep their current value"""
        current = self.get_limit(module)
        current.update({key: value for key, value in data.items() if value is not None})
        UploadLimit.objects.update_or_create(
            module=module,
            defaults={
                'image_max_size_mb': current['imageMaxSizeMB'],
                'video_max_size_mb': current['videoMaxSizeMB'],
                'audio_max_size_mb': current['audioMaxSizeMB'],
            },
        )
        logger.info(f'Upload limit for {module} set to {current}')
        return current

    def enforce_upload_limit(self, module: str, file) -> None:
        """
        Raises:
            ValidationError: file larger than the module limit for its media kind
        """
        if file is None:
            return
        kind = (getattr(file, 'content_type', '') or '').split('/')[0]
        field = {'image': 'imageMaxSizeMB', 'video': 'videoMaxSizeMB', 'audio': 'audioMaxSizeMB'}.get(kind)
        if field is None:
            return
        max_mb = self.get_limit(module)[field]
        if max_mb and file.size > max_mb * MB:
            raise ValidationError(f'文件大小超过限制（最大 {max_mb} MB）', code='FILE_TOO_LARGE')

    def folder_stats(self, folder: str) -> dict:
        """Image count, video count and total bytes of a local upload folder"""
        directory = Path(settings.MEDIA_ROOT) / folder
        stats = {'imageCount': 0, 'videoCount': 0, 'totalSize': 0}
        if not directory.is_dir():
            return stats
        for entry in directory.iterdir():
            if not entry.is_file():
                continue
            name = entry.name.lower()
            if name.endswith(IMAGE_EXTENSIONS):
                stats['imageCount'] += 1
            elif name.endswith(VIDEO_EXTENSIONS):
                stats['videoCount'] += 1
            stats['totalSize'] += entry.stat().st_size
        return stats

    def upload_stats(self) -> dict:
        return {module: self.folder_stats(folder) for module, folder in MODULE_FOLDERS.items()}


class StorageSettingsService:
    """
    Admin view of OssConfig/StorageConfig
    """

    def serialize_oss(self, oss_config: OssConfig) -> dict:
        return {
            'accessKeyId': oss_config.access_key_id,
            'accessKeySecret': SECRET_MASK if oss_config.access_key_secret else '',
            'bucket': oss_config.bucket,
            'region': oss_config.region,
            'endpoint': oss_config.endpoint,
            'domain': oss_config.domain,
        }

    def serialize_storage(self, storage_config: StorageConfig) -> dict:
        return {
            'defaultStorage': storage_config.default_storage,
            'maxFileSize': storage_config.max_file_size,
            'enableCleanup': storage_config.enable_cleanup,
            'cleanupDays': storage_config.cleanup_days,
        }

    def get_config(self) -> dict:
        return {
            'oss': self.serialize_oss(storage_service.get_oss_config()),
            'storage': self.serialize_storage(storage_service.get_storage_config()),
        }

    @transaction.atomic
    def save_config(self, oss: dict = None, storage: dict = None) -> dict:
        """
        Upsert both rows

        Raises:
            ValidationError: switching to OSS without complete credentials
        """
        oss_config = storage_service.get_oss_config()
        if oss:
            for field, key in (('access_key_id', 'accessKeyId'), ('bucket', 'bucket'), ('region', 'region'),
                               ('endpoint', 'endpoint'), ('domain', 'domain')):
                if key in oss:
                    setattr(oss_config, field, oss[key] or '')
            secret = oss.get('accessKeySecret')
            if secret and secret != SECRET_MASK:
                oss_config.access_key_secret = encrypt(secret)
            elif secret == '':
                oss_config.access_key_secret = ''
            oss_config.save()

        storage_config = storage_service.get_storage_config()
        if storage:
            for field, key in (('default_storage', 'defaultStorage'), ('max_file_size', 'maxFileSize'),
                               ('enable_cleanup', 'enableCleanup'), ('cleanup_days', 'cleanupDays')):
                if key in storage:
                    setattr(storage_config, field, storage[key])
            if storage_config.default_storage == StorageBackend.OSS and not oss_config.is_complete:
                raise ValidationError('OSS配置不完整，无法切换到OSS存储', code='OSS_CONFIG_INCOMPLETE')
            storage_config.save()

        logger.info('Storage settings updated')
        return self.get_config()

    def test_connection(self, oss: dict = None) -> dict:
        """
        List one object in the bucket

        Raises:
            ValidationError: missing fields or the bucket could not be listed
        """
        stored = storage_service.get_oss_config()
        oss = oss or {}
        candidate = OssConfig(
            access_key_id=oss.get('accessKeyId') or stored.access_key_id,
            bucket=oss.get('bucket') or stored.bucket,
            region=oss.get('region') or stored.region,
            endpoint=oss.get('endpoint') or stored.endpoint,
        )
        secret = oss.get('accessKeySecret')
        if not secret or secret == SECRET_MASK:
            try:
                secret = decrypt(stored.access_key_secret) if stored.access_key_secret else ''
            except EncryptionError:
                secret = ''
        candidate.access_key_secret = secret

        if not candidate.is_complete:
            raise ValidationError('OSS配置不完整', code='OSS_CONFIG_INCOMPLETE')

        try:
            storage_service.oss_bucket(candidate, secret=secret).list_objects_v2(max_keys=1)
        except oss2.exceptions.OssError as e:
            logger.warning(f'OSS connection test failed: {e}')
            raise ValidationError(f'OSS连接测试失败: {getattr(e, "message", "") or e}', code='OSS_TEST_FAILED')

        return {
            'success': True,
            'message': f'OSS连接测试成功 - Bucket: {candidate.bucket}, Region: {candidate.region}',
        }

    def stats(self) -> dict:
        """Totals over posts plus the active backend"""
        Post = apps.get_model('posts', 'Post')
        storage_config = storage_service.get_storage_config()
        since = timezone.now() - timedelta(days=30)
        return {
            'totalSize': Post.objects.aggregate(total=Sum('size'))['total'] or 0,
            'totalFiles': Post.objects.count(),
            'last30DaysUploads': Post.objects.filter(created_at__gte=since).count(),
            'storageType': storage_config.default_storage,
            'maxFileSize': storage_config.max_file_size,
        }


# Create singleton instances
storage_service = StorageService()
upload_limit_service = UploadLimitService()
storage_settings_service = StorageSettingsService()
