"""
Creator score background tasks.
"""

import logging

from celery import shared_task
from django.db import transaction

from .services import creator_service

logger = logging.getLogger(__name__)


@shared_task(name='apps.creators.tasks.update_creator_score')
def update_creator_score(user_id):
    creator = creator_service.update_score(user_id)
    return creator.score if creator else None


@shared_task(name='apps.creators.tasks.update_all_creator_scores')
def update_all_creator_scores():
    """
    Recompute every creator score
    Runs daily (configured in celery.py)
    """
    count = creator_service.update_all_scores()
    logger.info(f'Updated {count} creator scores')
    return f'Updated {count} creators'


def schedule_score_update(user_id) -> None:
    """Queue a score refresh once the current transaction commits"""
    transaction.on_commit(lambda: update_creator_score.delay(user_id))
