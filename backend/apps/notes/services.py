"""
Note service: categories, publishing, browsing and interactions.
"""

import json
import logging

from django.db import IntegrityError, transaction
from django.db.models import F, Q

from apps.core.exceptions import ConflictError, NotFoundError, PermissionDeniedError, ValidationError
from apps.core.permissions import UserAction, check_user_status, is_admin
from apps.creators.tasks import schedule_score_update
from apps.interactions.models import EntityType, Favorite, Like
from apps.interactions.services import interaction_service
from apps.moderation.services import sensitive_word_service
from apps.screenings.services import time_range_start
from apps.storage.services import storage_service, upload_limit_service
from .models import Note, NoteCategory, NoteStatus

logger = logging.getLogger(__name__)

UPLOAD_MODULE = 'notes'
UPLOAD_FOLDER = 'notes'

ORDERINGS = {
    'latest': ['-created_at', '-id'],
    'oldest': ['created_at', 'id'],
    'popular': ['-likes_count', '-created_at'],
    'views': ['-views', '-created_at'],
    'favorites': ['-favorites_count', '-created_at'],
}


def content_text(content) -> str:
    """Text form of note content for sensitive word checks"""
    if content is None:
        return ''
    if isinstance(content, str):
        return content
    return json.dumps(content, ensure_ascii=False)


class NoteCategoryService:
    """
    Admin-managed categories
    """

    def list_categories(self):
        return NoteCategory.objects.order_by('id')

    def get_category(self, category_id: int) -> NoteCategory:
        try:
            return NoteCategory.objects.get(id=category_id)
        except NoteCategory.DoesNotExist:
            raise NotFoundError(f'ID为{category_id}的分类不存在')

    def _check_unique(self, name: str, exclude_id=None) -> None:
        queryset = NoteCategory.objects.filter(name=name)
        if exclude_id is not None:
            queryset = queryset.exclude(id=exclude_id)
        if queryset.exists():
            raise ConflictError(f'名为 "{name}" 的分类已存在')

    def create_category(self, data: dict) -> NoteCategory:
        name = data['name'].strip()
        self._check_unique(name)
        try:
            with transaction.atomic():
                return NoteCategory.objects.create(name=name, description=data.get('description', ''))
        except IntegrityError:
            raise ConflictError(f'名为 "{name}" 的分类已存在')

    def update_category(self, category_id: int, data: dict) -> NoteCategory:
        category = self.get_category(category_id)
        if 'name' in data:
            category.name = data['name'].strip()
            self._check_unique(category.name, exclude_id=category.id)
        if 'description' in data:
            category.description = data['description']
        category.save()
        return category

    def delete_category(self, category_id: int) -> None:
        """
        Raises:
            ConflictError: notes still use the category
        """
        category = self.get_category(category_id)
        if Note.objects.filter(category=category).exclude(status=NoteStatus.ADMIN_DELETED).exists():
            raise ConflictError('该分类下还有笔记，无法删除', code='CATEGORY_IN_USE')
        category.delete()
        logger.info(f'Note category {category_id} deleted')


class NoteService:
    """
    Notes and their likes/favorites
    """

    def get_queryset(self):
        return Note.objects.select_related('user', 'category')

    def serializer_context(self, viewer, notes) -> dict:
        ids = [note.id for note in notes]
        return {
            'liked_ids': interaction_service.liked_ids(viewer, EntityType.NOTE, ids),
            'favorited_ids': interaction_service.favorited_ids(viewer, EntityType.NOTE, ids),
        }

    def _get_category(self, category_id: int) -> NoteCategory:
        try:
            return NoteCategory.objects.get(id=category_id)
        except NoteCategory.DoesNotExist:
            raise ValidationError(f'ID为{category_id}的分类不存在')

    def create_note(self, user, data: dict) -> Note:
        """
        Raises:
            PermissionDeniedError: muted or banned
            ValidationError: unknown category or sensitive words
        """
        check_user_status(user, UserAction.CREATE_NOTE)
        category = self._get_category(data['categoryId'])
        sensitive_word_service.ensure_clean(data['title'], content_text(data['content']))

        note = Note.objects.create(
            user=user,
            category=category,
            title=data['title'],
            content=data['content'],
            cover_image_url=data.get('coverImageUrl') or '',
        )
        logger.info(f'User {user.id} created note {note.id}')
        schedule_score_update(user.id)
        return self.get_queryset().get(id=note.id)

    def list_notes(self, filters: dict, include_hidden: bool = False):
        statuses = [NoteStatus.VISIBLE, NoteStatus.HIDDEN_BY_ADMIN] if include_hidden else [NoteStatus.VISIBLE]
        queryset = self.get_queryset().filter(status__in=statuses)

        if filters.get('userId'):
            queryset = queryset.filter(user_id=filters['userId'])
        if filters.get('categoryId'):
            queryset = queryset.filter(category_id=filters['categoryId'])

        search = (filters.get('query') or '').strip()
        if search:
            queryset = queryset.filter(
                Q(title__icontains=search)
                | Q(user__nickname__icontains=search)
                | Q(user__username__icontains=search)
            )

        start = time_range_start(filters.get('timeRange'))
        if start is not None:
            queryset = queryset.filter(created_at__gte=start)

        return queryset.order_by(*ORDERINGS.get(filters.get('orderBy') or 'latest', ORDERINGS['latest']))

    def get_note(self, note_id: int) -> Note:
        """Any note except ADMIN_DELETED"""
        try:
            return self.get_queryset().exclude(status=NoteStatus.ADMIN_DELETED).get(id=note_id)
        except Note.DoesNotExist:
            raise NotFoundError(f'ID为{note_id}的笔记不存在')

    def get_visible_note(self, note_id: int) -> Note:
        try:
            return self.get_queryset().get(id=note_id, status=NoteStatus.VISIBLE)
        except Note.DoesNotExist:
            raise NotFoundError(f'ID为{note_id}的笔记不存在')

    def view_note(self, viewer, note_id: int) -> Note:
        """Visible note with its view counter bumped; authors and admins also see hidden ones"""
        note = self.get_note(note_id)
        if note.status != NoteStatus.VISIBLE:
            owner = bool(viewer and viewer.is_authenticated and viewer.id == note.user_id)
            if not owner and not is_admin(viewer):
                raise NotFoundError(f'ID为{note_id}的笔记不存在')
        Note.objects.filter(id=note.id).update(views=F('views') + 1)
        note.refresh_from_db(fields=['views'])
        return note

    def _check_owner(self, user, note: Note, message: str) -> None:
        if note.user_id != user.id and not is_admin(user):
            raise PermissionDeniedError(message)

    def update_note(self, user, note_id: int, data: dict) -> Note:
        """
        Raises:
            NotFoundError: note missing or deleted
            PermissionDeniedError: not author/admin, or a non-admin changing status
            ValidationError: unknown category or sensitive words
        """
        note = self.get_note(note_id)
        self._check_owner(user, note, '您没有权限更新此笔记')
        check_user_status(user, UserAction.CREATE_NOTE)
        if 'status' in data and not is_admin(user):
            raise PermissionDeniedError('只有管理员可以修改笔记状态')

        if 'categoryId' in data:
            note.category = self._get_category(data['categoryId'])
        sensitive_word_service.ensure_clean(data.get('title', ''), content_text(data.get('content')))

        for field, key in (('title', 'title'), ('content', 'content'),
                           ('cover_image_url', 'coverImageUrl'), ('status', 'status')):
            if key in data:
                setattr(note, field, data[key])
        note.save()
        if 'status' in data:
            schedule_score_update(note.user_id)
        return self.get_note(note.id)

    def delete_note(self, user, note_id: int) -> None:
        """Soft delete: ADMIN_DELETED for admins, hidden for authors"""
        note = self.get_note(note_id)
        self._check_owner(user, note, '您没有权限删除此笔记')
        note.status = NoteStatus.ADMIN_DELETED if is_admin(user) else NoteStatus.HIDDEN_BY_ADMIN
        note.save(update_fields=['status', 'updated_at'])
        logger.info(f'Note {note.id} soft-deleted by {user.id} ({note.status})')
        schedule_score_update(note.user_id)

    def toggle_like(self, user, note_id: int) -> bool:
        check_user_status(user, UserAction.LIKE)
        note = self.get_visible_note(note_id)
        liked = interaction_service.toggle_like(user, EntityType.NOTE, note)
        schedule_score_update(note.user_id)
        return liked

    def toggle_favorite(self, user, note_id: int) -> bool:
        check_user_status(user, UserAction.FAVORITE)
        note = self.get_visible_note(note_id)
        favorited = interaction_service.toggle_favorite(user, EntityType.NOTE, note)
        schedule_score_update(note.user_id)
        return favorited

    def _interacted_notes(self, model, user):
        ids = model.objects.filter(user=user, entity_type=EntityType.NOTE).values('entity_id')
        return self.get_queryset().filter(id__in=ids, status=NoteStatus.VISIBLE).order_by('-created_at', '-id')

    def liked_notes(self, user):
        return self._interacted_notes(Like, user)

    def favorited_notes(self, user):
        return self._interacted_notes(Favorite, user)

    def upload_media(self, user, upload) -> dict:
        """
        Store an image or video embedded in a note

        Raises:
            ValidationError: not an image/video or over the notes upload limit
        """
        check_user_status(user, UserAction.CREATE_NOTE)
        kind = (getattr(upload, 'content_type', '') or '').split('/')[0]
        if kind not in ('image', 'video'):
            raise ValidationError('只能上传图片或视频文件', code='INVALID_FILE_TYPE')
        upload_limit_service.enforce_upload_limit(UPLOAD_MODULE, upload)
        return storage_service.upload_file(upload, UPLOAD_FOLDER)


# Create singleton instances
note_category_service = NoteCategoryService()
note_service = NoteService()
