"""
Storage background tasks.
"""

import json
import logging
import re
from datetime import timedelta
from pathlib import Path

from celery import shared_task
from django.apps import apps
from django.conf import settings
from django.utils import timezone

from .services import storage_service

logger = logging.getLogger(__name__)

# (app_label, model, url fields) that may point at uploaded files
FILE_REFERENCES = (
    ('posts', 'Post', ('file_url',)),
    ('screenings', 'Screening', ('video_url', 'thumbnail_url')),
    ('social_media', 'SocialMedia', ('logo_url', 'qr_code_url')),
    ('authentication', 'User', ('avatar_url',)),
    ('notes', 'Note', ('cover_image_url',)),
    ('creators', 'Creator', ('avatar_url', 'background_url')),
    ('announcements', 'Announcement', ('image_url',)),
)

# (app_label, model, fields) holding HTML or JSON with upload urls inside
EMBEDDED_REFERENCES = (
    ('notes', 'Note', ('content',)),
    ('creators', 'Creator', ('images', 'videos', 'audios')),
    ('announcements', 'Announcement', ('content',)),
)


def embedded_urls(value) -> set:
    """Upload urls found anywhere inside a text or JSON value"""
    text = value if isinstance(value, str) else json.dumps(value, ensure_ascii=False)
    pattern = re.escape(settings.MEDIA_URL) + r'[A-Za-z0-9_\-./]+'
    return set(re.findall(pattern, text))


def referenced_urls() -> set:
    urls = set()
    for app_label, model_name, fields in FILE_REFERENCES:
        model = apps.get_model(app_label, model_name)
        for row in model.objects.values_list(*fields):
            urls.update(url for url in row if url)
    for app_label, model_name, fields in EMBEDDED_REFERENCES:
        model = apps.get_model(app_label, model_name)
        for row in model.objects.values_list(*fields):
            for value in row:
                urls.update(embedded_urls(value))
    return urls


@shared_task(name='apps.storage.tasks.cleanup_old_uploads')
def cleanup_old_uploads():
    """
    Delete unreferenced local uploads older than StorageConfig.cleanup_days
    Runs daily (configured in celery.py); a no-op unless enable_cleanup is set
    """
    storage_config = storage_service.get_storage_config()
    if not storage_config.enable_cleanup:
        logger.info('Upload cleanup disabled, skipping')
        return 'Cleanup disabled'

    root = Path(settings.MEDIA_ROOT)
    if not root.is_dir():
        return 'Deleted 0 files'

    cutoff = (timezone.now() - timedelta(days=storage_config.cleanup_days)).timestamp()
    in_use = referenced_urls()
    deleted_count = 0

    for path in root.rglob('*'):
        if not path.is_file() or path.stat().st_mtime >= cutoff:
            continue
        url = f'{settings.MEDIA_URL}{path.relative_to(root).as_posix()}'
        if url in in_use:
            continue
        try:
            path.unlink()
            deleted_count += 1
        except OSError as e:
            logger.warning(f'Could not delete {path}: {e}')

    logger.info(f'Cleaned up {deleted_count} unreferenced uploads')
    return f'Deleted {deleted_count} files'
