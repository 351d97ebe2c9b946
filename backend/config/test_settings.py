"""
Settings used by the pytest suite: SQLite, in-memory cache, no captcha.
"""

import tempfile

from .settings import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'aifans-tests',
    }
}

MEDIA_ROOT = tempfile.mkdtemp(prefix='aifans-uploads-')

BCRYPT_ROUNDS = 4
CAPTCHA_ENABLED = False
RATE_LIMIT_ENABLED = False

CELERY_TASK_ALWAYS_EAGER = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

JWT_SECRET_KEY = 'test-access-secret-with-at-least-32-bytes'
JWT_REFRESH_SECRET_KEY = 'test-refresh-secret-with-at-least-32-bytes'
ENCRYPTION_KEY = 'test-encryption-key'
