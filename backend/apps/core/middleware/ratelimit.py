"""
Rate limiting middleware backed by the Django cache (Redis).

Sliding window per authenticated user.
"""

import logging
import time
from datetime import datetime

from django.conf import settings
from django.core.cache import cache
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)


class RateLimitMiddleware(MiddlewareMixin):
    """
    Rate limiting middleware

    Default: 100 requests per minute per user. Anonymous traffic is not limited.
    """

    key_prefix = 'ratelimit:api'
    exempt_paths = [
        '/health',
        '/api/auth/',
        '/admin/',
        '/uploads/',
    ]

    def __init__(self, get_response):
        super().__init__(get_response)
        self.window_ms = settings.RATE_LIMIT_WINDOW * 1000
        self.max_requests = settings.RATE_LIMIT_MAX_REQUESTS

    def process_request(self, request):
        """
        Check rate limit before processing request
        """
        if not getattr(settings, 'RATE_LIMIT_ENABLED', True):
            return None

        if any(request.path.startswith(path) for path in self.exempt_paths):
            return None

        user_jwt = getattr(request, 'user_jwt', None)
        if not user_jwt or not user_jwt.get('user_id'):
            return None

        key = f'{self.key_prefix}:{user_jwt["user_id"]}'
        now = int(time.time() * 1000)
        window_start = now - self.window_ms

        try:
            requests_data = cache.get(key, [])
        except Exception as e:
            # Fail open when the cache is unreachable
            logger.warning(f'Rate limiter cache error: {e}')
            return None

        requests_data = [ts for ts in requests_data if ts > window_start]
        request_count = len(requests_data)

        if request_count >= self.max_requests:
            oldest_request = min(requests_data)
            retry_after = max(1, int((oldest_request + self.window_ms - now) / 1000))

            response = JsonResponse({
                'error': {
                    'code': 'RATE_LIMIT_EXCEEDED',
                    'message': '请求过于频繁，请稍后再试',
                    'retryable': True,
                    'details': {
                        'limit': self.max_requests,
                        'windowMs': self.window_ms,
                        'retryAfter': retry_after,
                    }
                }
            }, status=429)

            response['X-RateLimit-Limit'] = str(self.max_requests)
            response['X-RateLimit-Remaining'] = '0'
            response['X-RateLimit-Reset'] = datetime.fromtimestamp((now + retry_after * 1000) / 1000).isoformat()
            response['Retry-After'] = str(retry_after)
            return response

        requests_data.append(now)
        try:
            cache.set(key, requests_data, timeout=int(self.window_ms / 1000) + 1)
        except Exception as e:
            logger.warning(f'Rate limiter cache error: {e}')
            return None

        request.rate_limit_remaining = self.max_requests - request_count - 1
        request.rate_limit_limit = self.max_requests
        return None

    def process_response(self, request, response):
        """
        Add rate limit headers to response
        """
        if hasattr(request, 'rate_limit_remaining'):
            response['X-RateLimit-Limit'] = str(request.rate_limit_limit)
            response['X-RateLimit-Remaining'] = str(request.rate_limit_remaining)
            response['X-RateLimit-Reset'] = datetime.fromtimestamp(
                (int(time.time() * 1000) + self.window_ms) / 1000
            ).isoformat()

        return response
