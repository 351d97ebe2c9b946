"""
Celery application for the AI灵感社 backend.

Beat runs the maintenance jobs: refresh token cleanup, membership expiry,
removal of orphaned uploads and the daily creator score recount.
"""

import os

from celery import Celery
from celery.schedules import crontab

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

app = Celery('aifans')

# CELERY_* keys in Django settings
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()

app.conf.beat_schedule = {
    'refresh-token-cleanup': {
        'task': 'apps.authentication.tasks.cleanup_expired_tokens',
        'schedule': crontab(hour=2, minute=0),
    },
    'membership-expiry': {
        'task': 'apps.membership.tasks.expire_memberships',
        'schedule': crontab(minute=5),
    },
    'upload-cleanup': {
        'task': 'apps.storage.tasks.cleanup_old_uploads',
        'schedule': crontab(hour=3, minute=30),
    },
    'creator-scores': {
        'task': 'apps.creators.tasks.update_all_creator_scores',
        'schedule': crontab(hour=4, minute=0),
    },
}

app.conf.update(
    enable_utc=True,
    task_soft_time_limit=10 * 60,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    worker_prefetch_multiplier=1,
)
