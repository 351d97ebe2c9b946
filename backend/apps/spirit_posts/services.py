"""
Spirit post workflow.

An owner (premium or above) publishes a post, other premium members claim it,
claimers and the owner exchange private messages, and the owner finally marks
the claimers with a two-way conversation as completed. Posts with a completed
claim, hidden posts and posts older than a month drop out of the public list.
"""

import logging
from datetime import timedelta

from django.db import IntegrityError, transaction
from django.db.models import Count, Q
from django.utils import timezone

from apps.authentication.models import User
from apps.core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from apps.core.permissions import UserAction, check_user_status, is_admin, is_premium_or_above
from apps.moderation.services import sensitive_word_service
from .models import SpiritPost, SpiritPostClaim, SpiritPostMessage

logger = logging.getLogger(__name__)

LIST_MAX_AGE = timedelta(days=30)
MESSAGE_PREFIX = '消息包含敏感词'


class SpiritPostService:
    """
    Spirit posts, claims and messages
    """

    def _get(self, post_id: int) -> SpiritPost:
        try:
            return SpiritPost.objects.select_related('user').get(id=post_id)
        except SpiritPost.DoesNotExist:
            raise NotFoundError('灵贴不存在')

    def _claim_of(self, post_id: int, user_id: int):
        return SpiritPostClaim.objects.filter(post_id=post_id, user_id=user_id).first()

    def _unread_count(self, post_id: int, user) -> int:
        return SpiritPostMessage.objects.filter(post_id=post_id, receiver=user, is_read=False).count()

    def _conversation(self, post_id: int, owner_id: int, other_id: int):
        return (
            SpiritPostMessage.objects.filter(post_id=post_id)
            .filter(
                Q(sender_id=owner_id, receiver_id=other_id)
                | Q(sender_id=other_id, receiver_id=owner_id)
            )
            .select_related('sender', 'receiver')
            .order_by('created_at', 'id')
        )

    def create(self, user, title: str, content: str) -> SpiritPost:
        """
        Raises:
            PermissionDeniedError: status guard or not premium
            ValidationError: sensitive words
        """
        check_user_status(user, UserAction.CREATE_SPIRIT_POST)
        if not is_premium_or_above(user):
            raise PermissionDeniedError('只有高级用户和终身会员可以发布灵贴')
        sensitive_word_service.ensure_clean(title, content)

        post = SpiritPost.objects.create(user=user, title=title, content=content)
        logger.info(f'User {user.id} published spirit post {post.id}')
        return post

    def list_open(self, user) -> list:
        """
        Public list: visible, younger than a month and not completed

        Returns:
            List of (post, claims_count, unread_count)
        """
        completed_ids = SpiritPostClaim.objects.filter(is_completed=True).values('post_id')
        posts = (
            SpiritPost.objects.filter(is_hidden=False, created_at__gte=timezone.now() - LIST_MAX_AGE)
            .exclude(id__in=completed_ids)
            .select_related('user')
            .annotate(claims_count=Count('claims', distinct=True))
            .order_by('-created_at')
        )

        claimed_ids = set(
            SpiritPostClaim.objects.filter(user=user).values_list('post_id', flat=True)
        )
        result = []
        for post in posts:
            unread = 0
            if post.user_id == user.id or post.id in claimed_ids:
                unread = self._unread_count(post.id, user)
            result.append((post, post.claims_count, unread))
        return result

    def my_posts(self, user) -> list:
        """
        Returns:
            List of (post, claims_count, messages_count, completed_claimer_ids, unread_count)
        """
        posts = (
            SpiritPost.objects.filter(user=user)
            .select_related('user')
            .annotate(
                claims_count=Count('claims', distinct=True),
                messages_count=Count('messages', distinct=True),
            )
            .order_by('-created_at')
        )
        result = []
        for post in posts:
            completed = list(
                post.claims.filter(is_completed=True).values_list('user_id', flat=True)
            )
            result.append((post, post.claims_count, post.messages_count, completed, self._unread_count(post.id, user)))
        return result

    def my_claims(self, user) -> list:
        """
        Returns:
            List of (claim, messages_count, unread_count), newest claim first
        """
        claims = (
            SpiritPostClaim.objects.filter(user=user)
            .select_related('post', 'post__user')
            .annotate(messages_count=Count('post__messages', distinct=True))
            .order_by('-created_at')
        )
        return [(claim, claim.messages_count, self._unread_count(claim.post_id, user)) for claim in claims]

    def unread_counts(self, user) -> dict:
        unread = SpiritPostMessage.objects.filter(receiver=user, is_read=False)
        my_posts = unread.filter(post__user=user).count()
        my_claims = unread.filter(post__claims__user=user).distinct().count()
        return {
            'total': my_posts + my_claims,
            'myPosts': my_posts,
            'myClaims': my_claims,
        }

    def detail(self, user, post_id: int) -> tuple[SpiritPost, list, bool, bool]:
        """
        Returns:
            Tuple of (post, claims, is_claimed, is_owner)

        Raises:
            PermissionDeniedError: not premium
            NotFoundError: missing post
        """
        if not is_premium_or_above(user):
            raise PermissionDeniedError('只有高级用户和终身会员可以查看灵贴详情')
        post = self._get(post_id)
        claims = list(post.claims.select_related('user').order_by('created_at'))
        is_claimed = any(claim.user_id == user.id for claim in claims)
        return post, claims, is_claimed, post.user_id == user.id

    def update(self, user, post_id: int, data: dict) -> SpiritPost:
        post = self._get(post_id)
        if post.user_id != user.id and not is_admin(user):
            raise PermissionDeniedError('只能编辑自己的灵贴')

        texts = [data[key] for key in ('title', 'content') if data.get(key)]
        if texts:
            sensitive_word_service.ensure_clean(*texts)

        for field, key in (('title', 'title'), ('content', 'content'), ('is_hidden', 'isHidden')):
            if key in data:
                setattr(post, field, data[key])
        post.save()
        return post

    def claim(self, user, post_id: int) -> SpiritPostClaim:
        """
        Raises:
            PermissionDeniedError: status guard or not premium
            NotFoundError: missing post
            ValidationError: own post or already claimed
        """
        check_user_status(user, UserAction.CLAIM_SPIRIT_POST)
        if not is_premium_or_above(user):
            raise PermissionDeniedError('只有高级用户和终身会员可以认领灵贴')

        post = self._get(post_id)
        if post.user_id == user.id:
            raise ValidationError('不能认领自己的灵贴')
        if self._claim_of(post.id, user.id):
            raise ValidationError('您已经认领过这个灵贴')

        try:
            with transaction.atomic():
                claim = SpiritPostClaim.objects.create(post=post, user=user)
        except IntegrityError:
            raise ValidationError('您已经认领过这个灵贴')
        logger.info(f'User {user.id} claimed spirit post {post.id}')
        return claim

    def messages(self, user, post_id: int) -> dict:
        """
        Owner: every conversation grouped by claimer. Claimer: the exchange with the owner.

        Returns:
            {'isOwner': True, 'conversations': [(other_user, [messages]), ...]}
            or {'isOwner': False, 'messages': [messages]}
        """
        post = self._get(post_id)

        if post.user_id == user.id:
            grouped = {}
            messages = (
                SpiritPostMessage.objects.filter(post=post)
                .select_related('sender', 'receiver')
                .order_by('created_at', 'id')
            )
            for message in messages:
                other_id = message.receiver_id if message.sender_id == user.id else message.sender_id
                grouped.setdefault(other_id, []).append(message)
            users = User.objects.in_bulk(list(grouped))
            return {
                'isOwner': True,
                'conversations': [(users[uid], grouped[uid]) for uid in grouped if uid in users],
            }

        if not self._claim_of(post.id, user.id):
            raise PermissionDeniedError('您还没有认领这个灵贴')
        return {
            'isOwner': False,
            'messages': list(self._conversation(post.id, post.user_id, user.id)),
        }

    def send_message(self, user, post_id: int, content: str) -> SpiritPostMessage:
        """
        Claimer to owner

        Raises:
            ValidationError: sender is the owner, or sensitive words
            PermissionDeniedError: sender has not claimed the post
        """
        check_user_status(user, UserAction.COMMENT)
        post = self._get(post_id)
        if post.user_id == user.id:
            raise ValidationError('请使用回复接口回复特定用户')
        if not self._claim_of(post.id, user.id):
            raise PermissionDeniedError('您还没有认领这个灵贴')

        sensitive_word_service.ensure_clean(content, prefix=MESSAGE_PREFIX)
        return SpiritPostMessage.objects.create(post=post, sender=user, receiver_id=post.user_id, content=content)

    def reply(self, user, post_id: int, receiver_id: int, content: str) -> SpiritPostMessage:
        """
        Owner to one claimer

        Raises:
            PermissionDeniedError: sender is not the owner
            ValidationError: receiver has not claimed, or sensitive words
        """
        check_user_status(user, UserAction.COMMENT)
        post = self._get(post_id)
        if post.user_id != user.id:
            raise PermissionDeniedError('只有发布者可以使用回复功能')
        if not self._claim_of(post.id, receiver_id):
            raise ValidationError('该用户没有认领这个灵贴')

        sensitive_word_service.ensure_clean(content, prefix=MESSAGE_PREFIX)
        return SpiritPostMessage.objects.create(post=post, sender=user, receiver_id=receiver_id, content=content)

    def mark_completed(self, user, post_id: int, claimer_ids) -> dict:
        """
        Raises:
            PermissionDeniedError: not the owner
            ValidationError: a claimer without at least two messages with the owner
        """
        post = self._get(post_id)
        if post.user_id != user.id:
            raise PermissionDeniedError('只有发布者可以标记已认领')

        for claimer_id in claimer_ids:
            if self._conversation(post.id, user.id, claimer_id).count() < 2:
                raise ValidationError(f'用户 {claimer_id} 还没有与您产生双向对话')

        updated = SpiritPostClaim.objects.filter(post=post, user_id__in=claimer_ids).update(is_completed=True)
        logger.info(f'Spirit post {post.id}: {updated} claims marked completed')
        return {'success': True, 'message': '已成功标记为已认领'}

    def mark_read(self, user, post_id: int) -> dict:
        post = self._get(post_id)
        if post.user_id != user.id and not self._claim_of(post.id, user.id):
            raise PermissionDeniedError('您没有权限访问此灵贴的消息')

        SpiritPostMessage.objects.filter(post=post, receiver=user, is_read=False).update(
            is_read=True,
            read_at=timezone.now(),
        )
        return {'success': True, 'message': '消息已标记为已读'}


# Create singleton instance
spirit_post_service = SpiritPostService()
