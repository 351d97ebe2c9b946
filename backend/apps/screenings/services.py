"""
Screening service: public browsing, likes, comments and admin management.
"""

import logging
from datetime import timedelta

from django.db import transaction
from django.db.models import F, Q
from django.utils import timezone

from apps.authentication.models import User
from apps.core.exceptions import NotFoundError, ValidationError
from apps.core.permissions import UserAction, check_user_status
from apps.interactions.models import EntityType
from apps.interactions.services import interaction_service
from apps.moderation.services import sensitive_word_service
from apps.storage.services import storage_service, upload_limit_service
from .models import Screening

logger = logging.getLogger(__name__)

UPLOAD_MODULE = 'screenings'
UPLOAD_FOLDER = 'screenings'

ORDERINGS = {
    'latest': ['-created_at', '-id'],
    'popular': ['-likes_count', '-created_at'],
    'views': ['-views', '-created_at'],
    'oldest': ['created_at', 'id'],
}


def time_range_start(time_range: str, now=None):
    """Lower bound of created_at for ?timeRange=, or None"""
    now = now or timezone.localtime()
    if time_range == 'today':
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    return {
        'week': now - timedelta(days=7),
        'month': now - timedelta(days=30),
        'year': now - timedelta(days=365),
    }.get(time_range)


class ScreeningService:
    """
    Screenings and their interactions
    """

    def get_queryset(self):
        return Screening.objects.select_related('creator', 'uploader')

    def list_screenings(self, filters: dict):
        queryset = self.get_queryset()

        search = (filters.get('search') or '').strip()
        if search:
            queryset = queryset.filter(
                Q(title__icontains=search)
                | Q(description__icontains=search)
                | Q(creator__nickname__icontains=search)
                | Q(creator__username__icontains=search)
            )

        start = time_range_start(filters.get('timeRange'))
        if start is not None:
            queryset = queryset.filter(created_at__gte=start)

        return queryset.order_by(*ORDERINGS.get(filters.get('orderBy') or 'latest', ORDERINGS['latest']))

    def get_screening(self, screening_id: int) -> Screening:
        try:
            return self.get_queryset().get(id=screening_id)
        except Screening.DoesNotExist:
            raise NotFoundError('放映视频不存在')

    def view_screening(self, screening_id: int) -> Screening:
        screening = self.get_screening(screening_id)
        Screening.objects.filter(id=screening.id).update(views=F('views') + 1)
        screening.refresh_from_db(fields=['views'])
        return screening

    def is_liked(self, user, screening_id: int) -> bool:
        return interaction_service.has_liked(user, EntityType.SCREENING, screening_id)

    def toggle_like(self, user, screening_id: int) -> bool:
        check_user_status(user, UserAction.LIKE)
        screening = self.get_screening(screening_id)
        return interaction_service.toggle_like(user, EntityType.SCREENING, screening)

    def add_comment(self, user, screening_id: int, content: str):
        check_user_status(user, UserAction.COMMENT)
        screening = self.get_screening(screening_id)
        sensitive_word_service.ensure_clean(content)
        return interaction_service.add_comment(user, EntityType.SCREENING, screening.id, content)

    def comments(self, screening_id: int):
        screening = self.get_screening(screening_id)
        return interaction_service.visible_comments(EntityType.SCREENING, screening.id)

    # Admin

    def _get_creator(self, creator_id):
        if not creator_id:
            return None
        try:
            return User.objects.get(id=creator_id)
        except User.DoesNotExist:
            raise ValidationError('指定的创作者不存在')

    def _check_video(self, video) -> None:
        if not (getattr(video, 'content_type', '') or '').startswith('video/'):
            raise ValidationError('请上传视频文件', code='INVALID_FILE_TYPE')
        upload_limit_service.enforce_upload_limit(UPLOAD_MODULE, video)

    def _check_thumbnail(self, thumbnail) -> None:
        if not (getattr(thumbnail, 'content_type', '') or '').startswith('image/'):
            raise ValidationError('封面必须是图片文件', code='INVALID_FILE_TYPE')

    def _store_files(self, video, thumbnail) -> dict:
        """
        Validate both uploads, then store them

        Returns:
            {'video_url': ..., 'thumbnail_url': ...} for the files that were given
        """
        if video:
            self._check_video(video)
        if thumbnail:
            self._check_thumbnail(thumbnail)

        urls = {}
        try:
            if video:
                urls['video_url'] = storage_service.upload_file(video, UPLOAD_FOLDER)['url']
            if thumbnail:
                urls['thumbnail_url'] = storage_service.upload_file(thumbnail, UPLOAD_FOLDER)['url']
        except Exception:
            self._discard(urls.values())
            raise
        return urls

    def _discard(self, urls) -> None:
        for url in urls:
            storage_service.delete_file(url)

    def create_screening(self, admin, data: dict) -> Screening:
        """
        Raises:
            ValidationError: unknown creator, sensitive words, wrong file type, size limit
        """
        creator = self._get_creator(data.get('creatorId'))
        sensitive_word_service.ensure_clean(data['title'], data.get('description', ''))

        urls = self._store_files(data['video'], data.get('thumbnail'))
        try:
            screening = Screening.objects.create(
                title=data['title'],
                description=data.get('description') or '',
                video_url=urls['video_url'],
                thumbnail_url=urls.get('thumbnail_url'),
                creator=creator,
                uploader=admin,
            )
        except Exception:
            self._discard(urls.values())
            raise
        logger.info(f'Admin {admin.id} uploaded screening {screening.id}')
        return self.get_screening(screening.id)

    def update_screening(self, screening_id: int, data: dict) -> Screening:
        screening = self.get_screening(screening_id)
        if 'creatorId' in data:
            screening.creator = self._get_creator(data['creatorId'])
        sensitive_word_service.ensure_clean(data.get('title', ''), data.get('description', ''))

        urls = self._store_files(data.get('video'), data.get('thumbnail'))
        old_files = [getattr(screening, field) for field in urls]
        for field, url in urls.items():
            setattr(screening, field, url)
        if 'title' in data:
            screening.title = data['title']
        if 'description' in data:
            screening.description = data['description']
        try:
            screening.save()
        except Exception:
            self._discard(urls.values())
            raise

        self._discard(old_files)
        return self.get_screening(screening.id)

    def delete_screening(self, screening_id: int) -> None:
        """Remove the screening with its likes, favorites and comments"""
        screening = self.get_screening(screening_id)
        files = [screening.video_url, screening.thumbnail_url]
        with transaction.atomic():
            interaction_service.delete_for_entity(EntityType.SCREENING, screening.id)
            screening.delete()
        self._discard(files)
        logger.info(f'Screening {screening_id} deleted')


# Create singleton instance
screening_service = ScreeningService()
