"""
URL configuration for the AI灵感社 backend.

Every API route is mounted under /api/.
"""

import logging

from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse
from django.db import connection
from django.core.cache import cache
from django.conf import settings
from django.conf.urls.static import static

logger = logging.getLogger(__name__)


def health_check(request):
    """
    Health check endpoint

    GET /health
    """
    services = {}
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        services['database'] = 'connected'

        cache.set('health:ping', 'pong', timeout=5)
        services['cache'] = 'connected' if cache.get('health:ping') == 'pong' else 'degraded'

        return JsonResponse({
            'status': 'ok',
            'services': services,
        })
    except Exception as e:
        logger.error(f'Health check failed: {e}', exc_info=True)
        return JsonResponse({
            'status': 'error',
            'error': 'Service unavailable',
            'services': services,
        }, status=503)


urlpatterns = [
    path('admin/', admin.site.urls),

    # Health check
    path('health', health_check, name='health_check'),

    # Public API
    path('api/auth/', include('apps.authentication.urls')),
    path('api/', include('apps.users.urls')),
    path('api/', include('apps.user_messages.urls')),
    path('api/', include('apps.ai_platforms.urls')),
    path('api/', include('apps.posts.urls')),
    path('api/', include('apps.spirit_posts.urls')),
    path('api/', include('apps.screenings.urls')),
    path('api/', include('apps.social_media.urls')),
    path('api/', include('apps.membership.urls')),
    path('api/', include('apps.moderation.urls')),
    path('api/', include('apps.storage.urls')),
    path('api/', include('apps.notes.urls')),
    path('api/', include('apps.creators.urls')),
    path('api/', include('apps.announcements.urls')),
]

# Local uploads
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
