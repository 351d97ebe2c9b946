"""
Creator profiles and the activity score.

Score rules:
    posts        IMAGE 10, VIDEO 20, +1 per like, +2 per favorite
    notes        100 each, +2 per like, +5 per favorite
    daily login  20 per day with a login
    spirit posts 15 each (not hidden)
Only visible content counts.
"""

import logging

from django.db.models import Count, Q, Sum

from apps.authentication.models import User, UserDailyLogin
from apps.core.exceptions import NotFoundError, ValidationError
from apps.core.permissions import UserAction, check_user_status
from apps.moderation.services import sensitive_word_service
from apps.notes.models import Note, NoteStatus
from apps.posts.models import Post, PostStatus, PostType
from apps.spirit_posts.models import SpiritPost
from apps.storage.services import storage_service, upload_limit_service
from .models import Creator

logger = logging.getLogger(__name__)

UPLOAD_MODULE = 'creator'
UPLOAD_FOLDER = 'creator'
MEDIA_KINDS = ('image', 'video', 'audio')

PROFILE_FIELDS = (
    ('nickname', 'nickname'),
    ('avatar_url', 'avatarUrl'),
    ('bio', 'bio'),
    ('expertise', 'expertise'),
    ('background_url', 'backgroundUrl'),
)


def score_from_counts(image_posts=0, video_posts=0, post_likes=0, post_favorites=0,
                      notes=0, note_likes=0, note_favorites=0, login_days=0, spirit_posts=0) -> int:
    return (
        image_posts * 10 + video_posts * 20 + post_likes + post_favorites * 2
        + notes * 100 + note_likes * 2 + note_favorites * 5
        + login_days * 20
        + spirit_posts * 15
    )


def _media_items(items) -> list:
    """Keep only entries that carry a url"""
    return [item for item in items or [] if isinstance(item, dict) and item.get('url')]


class CreatorService:
    """
    Creator profiles, score bookkeeping and media uploads
    """

    def list_creators(self):
        return Creator.objects.order_by('-score', 'id')

    def get_creator(self, creator_id: int) -> Creator:
        try:
            return Creator.objects.get(id=creator_id)
        except Creator.DoesNotExist:
            raise NotFoundError('创作者不存在')

    def get_by_user(self, user_id: int) -> Creator:
        try:
            return Creator.objects.get(user_id=user_id)
        except Creator.DoesNotExist:
            raise NotFoundError('创作者不存在')

    def save_profile(self, user, data: dict) -> Creator:
        """
        Create or update the caller's creator profile

        Raises:
            PermissionDeniedError: muted or banned
            ValidationError: sensitive words
        """
        check_user_status(user, UserAction.EDIT_PROFILE)
        sensitive_word_service.ensure_clean(data['nickname'], data.get('bio', ''), data.get('expertise', ''))

        defaults = {field: data[key] for field, key in PROFILE_FIELDS if key in data}
        for kind in ('images', 'videos', 'audios'):
            if kind in data:
                defaults[kind] = _media_items(data[kind])

        creator, created = Creator.objects.update_or_create(user=user, defaults=defaults)
        logger.info(f'Creator profile {"created" if created else "updated"} for user {user.id}')
        self.update_score(user.id)
        creator.refresh_from_db()
        return creator

    def upload_media(self, user, upload) -> dict:
        """
        Store an image, video or audio file for the creator showcase

        Raises:
            ValidationError: unsupported type or over the creator upload limit
        """
        check_user_status(user, UserAction.EDIT_PROFILE)
        kind = (getattr(upload, 'content_type', '') or '').split('/')[0]
        if kind not in MEDIA_KINDS:
            raise ValidationError('只能上传图片、视频或音频文件', code='INVALID_FILE_TYPE')
        upload_limit_service.enforce_upload_limit(UPLOAD_MODULE, upload)
        return storage_service.upload_file(upload, UPLOAD_FOLDER)

    # Score

    def calculate_score(self, user_id: int) -> int:
        posts = Post.objects.filter(user_id=user_id, status=PostStatus.VISIBLE).aggregate(
            image_posts=Count('id', filter=Q(type=PostType.IMAGE)),
            video_posts=Count('id', filter=Q(type=PostType.VIDEO)),
            post_likes=Sum('likes_count'),
            post_favorites=Sum('favorites_count'),
        )
        notes = Note.objects.filter(user_id=user_id, status=NoteStatus.VISIBLE).aggregate(
            notes=Count('id'),
            note_likes=Sum('likes_count'),
            note_favorites=Sum('favorites_count'),
        )
        counts = {key: value or 0 for key, value in {**posts, **notes}.items()}
        return score_from_counts(
            login_days=UserDailyLogin.objects.filter(user_id=user_id).count(),
            spirit_posts=SpiritPost.objects.filter(user_id=user_id, is_hidden=False).count(),
            **counts,
        )

    def update_score(self, user_id: int):
        """
        Store the recomputed score, creating the profile on first activity

        Returns:
            The creator, or None when the user no longer exists
        """
        score = self.calculate_score(user_id)
        updated = Creator.objects.filter(user_id=user_id).update(score=score)
        if updated:
            return Creator.objects.get(user_id=user_id)

        user = User.objects.filter(id=user_id).first()
        if user is None:
            return None
        creator, _ = Creator.objects.update_or_create(
            user=user,
            defaults={
                'nickname': user.nickname or f'创作者_{user.id}',
                'avatar_url': user.avatar_url,
                'score': score,
            },
        )
        return creator

    def update_all_scores(self) -> int:
        """Recompute every creator and every user with visible content"""
        user_ids = set(Creator.objects.values_list('user_id', flat=True))
        user_ids.update(Note.objects.filter(status=NoteStatus.VISIBLE).values_list('user_id', flat=True))
        user_ids.update(Post.objects.filter(status=PostStatus.VISIBLE).values_list('user_id', flat=True))
        user_ids.update(SpiritPost.objects.filter(is_hidden=False).values_list('user_id', flat=True))

        for user_id in sorted(user_ids):
            self.update_score(user_id)
        logger.info(f'Recomputed scores for {len(user_ids)} creators')
        return len(user_ids)

    def sync_with_users(self) -> dict:
        """Copy the account nickname and avatar onto every creator profile"""
        creators = list(Creator.objects.select_related('user'))
        updated = 0
        for creator in creators:
            nickname = creator.user.nickname or creator.nickname
            avatar_url = creator.user.avatar_url or creator.avatar_url
            if (nickname, avatar_url) != (creator.nickname, creator.avatar_url):
                creator.nickname = nickname
                creator.avatar_url = avatar_url
                creator.save(update_fields=['nickname', 'avatar_url', 'updated_at'])
                updated += 1
        return {'total': len(creators), 'updated': updated}


# Create singleton instance
creator_service = CreatorService()
