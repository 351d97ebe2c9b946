"""
Post service: upload, listing, editing and admin moderation of posts.
"""

import logging

from django.db import transaction
from django.db.models import F, Q

from apps.ai_platforms.models import AIPlatform
from apps.core.exceptions import AuthenticationError, NotFoundError, PermissionDeniedError, ValidationError
from apps.core.permissions import UserAction, can_upload_post, check_user_status, is_admin
from apps.creators.tasks import schedule_score_update
from apps.interactions.models import EntityType, Favorite
from apps.interactions.services import interaction_service
from apps.moderation.services import sensitive_word_service
from apps.storage.services import storage_service, upload_limit_service
from .models import Post, PostStatus, PostType

logger = logging.getLogger(__name__)

UPLOAD_MODULE = 'inspiration'
UPLOAD_FOLDER = 'posts'

ORDERINGS = {
    'newest': ['-created_at', '-id'],
    'oldest': ['created_at', 'id'],
    'popular': ['-likes_count', '-created_at'],
    'views': ['-views', '-created_at'],
    'favorites': ['-favorites_count', '-created_at'],
}


def _search_filter(search: str) -> Q:
    return (
        Q(prompt__icontains=search)
        | Q(title__icontains=search)
        | Q(user__nickname__icontains=search)
        | Q(user__username__icontains=search)
        | Q(ai_platform__name__icontains=search)
    )


class PostService:
    """
    Posts and their interactions
    """

    def _get_platform(self, platform_id: int) -> AIPlatform:
        try:
            return AIPlatform.objects.get(id=platform_id)
        except AIPlatform.DoesNotExist:
            raise NotFoundError('AI平台不存在')

    def _check_video_category(self, post_type: str, video_category) -> None:
        if post_type == PostType.VIDEO and not video_category:
            raise ValidationError('视频作品必须选择视频分类')
        if post_type == PostType.IMAGE and video_category:
            raise ValidationError('图片作品不能设置视频分类')

    def _check_mimetype(self, post_type: str, file) -> None:
        expected = 'image/' if post_type == PostType.IMAGE else 'video/'
        if not (getattr(file, 'content_type', '') or '').startswith(expected):
            kind = '图片' if post_type == PostType.IMAGE else '视频'
            raise ValidationError(f'文件类型与作品类型不匹配，请上传{kind}文件', code='INVALID_FILE_TYPE')

    def get_queryset(self):
        return Post.objects.select_related('user', 'ai_platform')

    def serializer_context(self, viewer, posts) -> dict:
        """Context for PostSerializer with the viewer's like/favorite state"""
        ids = [post.id for post in posts]
        return {
            'viewer': viewer,
            'liked_ids': interaction_service.liked_ids(viewer, EntityType.POST, ids),
            'favorited_ids': interaction_service.favorited_ids(viewer, EntityType.POST, ids),
        }

    def create_post(self, user, data: dict) -> Post:
        """
        Upload a file and create the post

        Raises:
            PermissionDeniedError: not premium, muted or banned
            NotFoundError: unknown AI platform
            ValidationError: type/file mismatch, video category, sensitive words, size limit
        """
        if not can_upload_post(user):
            raise PermissionDeniedError('只有高级用户和终身会员可以上传作品')
        check_user_status(user, UserAction.UPLOAD_POST)

        platform = self._get_platform(data['aiPlatformId'])
        upload = data['file']
        self._check_mimetype(data['type'], upload)
        video_category = data.get('videoCategory') or None
        self._check_video_category(data['type'], video_category)
        sensitive_word_service.ensure_clean(data['prompt'], data.get('title', ''))
        upload_limit_service.enforce_upload_limit(UPLOAD_MODULE, upload)

        stored = storage_service.upload_file(upload, UPLOAD_FOLDER)
        try:
            post = Post.objects.create(
                user=user,
                type=data['type'],
                title=data.get('title') or '',
                prompt=data['prompt'],
                model_used=data.get('modelUsed') or '',
                ai_platform=platform,
                video_category=video_category,
                file_url=stored['url'],
                original_filename=stored['originalName'],
                mime_type=stored['mimeType'],
                size=stored['size'],
                allow_download=data.get('allowDownload', False),
            )
        except Exception:
            storage_service.delete_file(stored['url'])
            raise
        logger.info(f'User {user.id} created post {post.id}')
        schedule_score_update(user.id)
        return self.get_queryset().get(id=post.id)

    def list_posts(self, viewer, filters: dict):
        """
        Visible posts matching the filters, ordered

        Raises:
            AuthenticationError: onlyMyPosts/onlyFavorites without a login
        """
        queryset = self.get_queryset().filter(status=PostStatus.VISIBLE)
        authenticated = bool(viewer and viewer.is_authenticated)

        if filters.get('type'):
            queryset = queryset.filter(type=filters['type'])
        if filters.get('aiPlatformIds'):
            queryset = queryset.filter(ai_platform_id__in=[int(i) for i in filters['aiPlatformIds'].split(',')])
        elif filters.get('aiPlatformId'):
            queryset = queryset.filter(ai_platform_id=filters['aiPlatformId'])
        if filters.get('userId'):
            queryset = queryset.filter(user_id=filters['userId'])

        if filters.get('onlyMyPosts'):
            if not authenticated:
                raise AuthenticationError('请先登录')
            queryset = queryset.filter(user=viewer)

        if filters.get('onlyFavorites'):
            if not authenticated:
                raise AuthenticationError('请先登录')
            favorite_ids = Favorite.objects.filter(user=viewer, entity_type=EntityType.POST).values('entity_id')
            queryset = queryset.filter(id__in=favorite_ids)

        search = (filters.get('search') or '').strip()
        if search:
            queryset = queryset.filter(_search_filter(search))

        return queryset.order_by(*ORDERINGS.get(filters.get('orderBy') or 'newest', ORDERINGS['newest']))

    def get_visible_post(self, post_id: int) -> Post:
        try:
            return self.get_queryset().get(id=post_id, status=PostStatus.VISIBLE)
        except Post.DoesNotExist:
            raise NotFoundError('作品不存在')

    def get_post(self, post_id: int) -> Post:
        try:
            return self.get_queryset().get(id=post_id)
        except Post.DoesNotExist:
            raise NotFoundError('作品不存在')

    def view_post(self, post_id: int) -> Post:
        """Visible post with its view counter bumped"""
        post = self.get_visible_post(post_id)
        Post.objects.filter(id=post.id).update(views=F('views') + 1)
        post.refresh_from_db(fields=['views'])
        return post

    def _check_owner(self, user, post: Post, message: str) -> None:
        if post.user_id != user.id and not is_admin(user):
            raise PermissionDeniedError(message)

    def update_post(self, user, post_id: int, data: dict) -> Post:
        """
        Raises:
            PermissionDeniedError: not owner/admin
            NotFoundError: post or platform missing
            ValidationError: video category or sensitive words
        """
        post = self.get_post(post_id)
        self._check_owner(user, post, '无权编辑此作品')
        check_user_status(user, UserAction.CREATE_CONTENT)

        if 'aiPlatformId' in data:
            post.ai_platform = self._get_platform(data['aiPlatformId'])
        if 'videoCategory' in data:
            video_category = data['videoCategory'] or None
            if post.type == PostType.IMAGE and video_category:
                raise ValidationError('图片作品不能设置视频分类')
            if post.type == PostType.VIDEO and video_category:
                post.video_category = video_category

        sensitive_word_service.ensure_clean(data.get('prompt', ''), data.get('title', ''))

        for field, key in (('title', 'title'), ('prompt', 'prompt'), ('model_used', 'modelUsed'),
                           ('allow_download', 'allowDownload')):
            if key in data:
                setattr(post, field, data[key])
        post.save()
        return self.get_post(post.id)

    def delete_post(self, user, post_id: int) -> None:
        """Soft delete: ADMIN_DELETED for admins, HIDDEN for owners"""
        post = self.get_post(post_id)
        self._check_owner(user, post, '无权删除此作品')
        post.status = PostStatus.ADMIN_DELETED if is_admin(user) else PostStatus.HIDDEN
        post.save(update_fields=['status', 'updated_at'])
        logger.info(f'Post {post.id} soft-deleted by {user.id} ({post.status})')
        schedule_score_update(post.user_id)

    def toggle_like(self, user, post_id: int) -> bool:
        check_user_status(user, UserAction.LIKE)
        post = self.get_visible_post(post_id)
        liked = interaction_service.toggle_like(user, EntityType.POST, post)
        schedule_score_update(post.user_id)
        return liked

    def toggle_favorite(self, user, post_id: int) -> bool:
        check_user_status(user, UserAction.FAVORITE)
        post = self.get_visible_post(post_id)
        favorited = interaction_service.toggle_favorite(user, EntityType.POST, post)
        schedule_score_update(post.user_id)
        return favorited

    def open_download(self, user, post_id: int) -> tuple[Post, object]:
        """
        Returns:
            Tuple of (post, readable file)

        Raises:
            PermissionDeniedError: downloads disabled and viewer is not author/admin
            NotFoundError: post or stored file missing
        """
        post = self.get_visible_post(post_id)
        if not post.allow_download and post.user_id != user.id and not is_admin(user):
            raise PermissionDeniedError('作者未开放下载')
        return post, storage_service.open_file(post.file_url)

    # Admin

    def admin_list_posts(self, filters: dict):
        queryset = self.get_queryset()
        if filters.get('status'):
            queryset = queryset.filter(status=filters['status'])
        if filters.get('type'):
            queryset = queryset.filter(type=filters['type'])
        search = (filters.get('search') or '').strip()
        if search:
            queryset = queryset.filter(_search_filter(search))
        return queryset.order_by('-created_at', '-id')

    def set_status(self, post_id: int, status: str) -> Post:
        post = self.get_post(post_id)
        post.status = status
        post.save(update_fields=['status', 'updated_at'])
        logger.info(f'Post {post.id} status set to {status}')
        return post

    def hard_delete(self, post_id: int) -> None:
        """Remove the row, its interactions and the stored file"""
        post = self.get_post(post_id)
        file_url = post.file_url
        with transaction.atomic():
            interaction_service.delete_for_entity(EntityType.POST, post.id)
            post.delete()
        storage_service.delete_file(file_url)
        logger.info(f'Post {post_id} permanently deleted')


# Create singleton instance
post_service = PostService()
