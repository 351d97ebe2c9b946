"""
Membership background tasks.
"""

import logging

from celery import shared_task

from .services import membership_service

logger = logging.getLogger(__name__)


@shared_task(name='apps.membership.tasks.expire_memberships')
def expire_memberships():
    """
    Downgrade expired PREMIUM members to NORMAL
    Runs hourly (configured in celery.py)
    """
    expired_count = membership_service.expire_premium_members()
    logger.info(f'Expired {expired_count} premium memberships')
    return f'Expired {expired_count} memberships'
