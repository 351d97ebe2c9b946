"""
Like/favorite toggles and comment helpers.

Counters live on the entity row (likes_count, favorites_count) and are
adjusted with F() expressions inside the same transaction as the toggle.
"""

import logging

from django.db import IntegrityError, transaction
from django.db.models import F

from .models import Like, Favorite, Comment, CommentStatus

logger = logging.getLogger(__name__)


class InteractionService:
    """
    Generic interactions keyed by (entity_type, entity_id)
    """

    def _toggle(self, model, user, entity_type: str, entity, counter_field: str) -> bool:
        """
        Create or remove the interaction row and move the counter

        Returns:
            True if the interaction now exists
        """
        entity_model = type(entity)
        lookup = {'user': user, 'entity_type': entity_type, 'entity_id': entity.pk}

        with transaction.atomic():
            deleted, _ = model.objects.filter(**lookup).delete()
            if deleted:
                # Never let the counter drop below zero
                entity_model.objects.filter(pk=entity.pk, **{f'{counter_field}__gt': 0}).update(
                    **{counter_field: F(counter_field) - 1}
                )
                active = False
            else:
                try:
                    with transaction.atomic():
                        model.objects.create(**lookup)
                except IntegrityError:
                    # A concurrent request created it first
                    logger.info(f'Duplicate {model.__name__} for {entity_type}:{entity.pk} by {user.id}')
                    return True
                entity_model.objects.filter(pk=entity.pk).update(**{counter_field: F(counter_field) + 1})
                active = True

        entity.refresh_from_db(fields=[counter_field])
        return active

    def toggle_like(self, user, entity_type: str, entity, counter_field: str = 'likes_count') -> bool:
        return self._toggle(Like, user, entity_type, entity, counter_field)

    def toggle_favorite(self, user, entity_type: str, entity, counter_field: str = 'favorites_count') -> bool:
        return self._toggle(Favorite, user, entity_type, entity, counter_field)

    def liked_ids(self, user, entity_type: str, entity_ids) -> set:
        """Subset of entity_ids the user has liked"""
        if not user or not user.is_authenticated:
            return set()
        return set(
            Like.objects.filter(user=user, entity_type=entity_type, entity_id__in=list(entity_ids))
            .values_list('entity_id', flat=True)
        )

    def favorited_ids(self, user, entity_type: str, entity_ids) -> set:
        """Subset of entity_ids the user has favorited"""
        if not user or not user.is_authenticated:
            return set()
        return set(
            Favorite.objects.filter(user=user, entity_type=entity_type, entity_id__in=list(entity_ids))
            .values_list('entity_id', flat=True)
        )

    def has_liked(self, user, entity_type: str, entity_id) -> bool:
        return entity_id in self.liked_ids(user, entity_type, [entity_id])

    def add_comment(self, user, entity_type: str, entity_id, content: str) -> Comment:
        return Comment.objects.create(
            user=user,
            entity_type=entity_type,
            entity_id=entity_id,
            content=content,
        )

    def visible_comments(self, entity_type: str, entity_id):
        return (
            Comment.objects.filter(entity_type=entity_type, entity_id=entity_id, status=CommentStatus.VISIBLE)
            .select_related('user')
            .order_by('created_at')
        )

    def delete_for_entity(self, entity_type: str, entity_id) -> None:
        """Remove every like, favorite and comment attached to an entity"""
        Like.objects.filter(entity_type=entity_type, entity_id=entity_id).delete()
        Favorite.objects.filter(entity_type=entity_type, entity_id=entity_id).delete()
        Comment.objects.filter(entity_type=entity_type, entity_id=entity_id).delete()


# Create singleton instance
interaction_service = InteractionService()
