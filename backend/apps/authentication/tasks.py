"""
Periodic housekeeping for login sessions.
"""

import logging
from datetime import timedelta

from celery import shared_task
from django.db.models import Q
from django.utils import timezone

from .models import RefreshToken

logger = logging.getLogger(__name__)

# Revoked rows are kept this long so reuse of a rotated token still reports TOKEN_REVOKED
REVOKED_RETENTION = timedelta(days=7)


@shared_task(name='apps.authentication.tasks.cleanup_expired_tokens')
def cleanup_expired_tokens():
    """
    Drop refresh tokens that expired, and revoked ones past the retention window.

    Scheduled daily from config/celery.py.
    """
    now = timezone.now()
    stale = RefreshToken.objects.filter(
        Q(expires_at__lt=now) | Q(revoked_at__lt=now - REVOKED_RETENTION)
    )
    deleted, _ = stale.delete()
    logger.info(f'Removed {deleted} stale refresh tokens')
    return f'Deleted {deleted} expired tokens'
