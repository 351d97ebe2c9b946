"""
JWT Authentication middleware.

Attaches the decoded token to request.user_jwt for the rate limiter and
non-DRF code. Optional: a missing token is fine, a bad one is rejected.
"""

import jwt
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin

from apps.core.authentication import decode_access_token, get_bearer_token


class JWTAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware to authenticate JWT tokens
    """

    # Endpoints that accept credentials in the body and ignore stale headers
    public_paths = [
        '/health',
        '/api/auth/register',
        '/api/auth/login',
        '/api/auth/captcha',
        '/api/auth/refresh',
        '/api/auth/logout',
        '/admin/',
        '/uploads/',
    ]

    def process_request(self, request):
        """
        Extract and verify JWT token from Authorization header
        Attaches user info to request if token is valid
        """
        request.user_jwt = None

        if any(request.path.startswith(path) for path in self.public_paths):
            return None

        token = get_bearer_token(request)

        if token is None:
            # Allow request to continue (will be caught by DRF permissions)
            return None

        if not token:
            return self._reject('INVALID_TOKEN_FORMAT', 'Authorization header must be in format: Bearer <token>')

        try:
            payload = decode_access_token(token)
        except jwt.ExpiredSignatureError:
            return self._reject('TOKEN_EXPIRED', 'Access token has expired')
        except jwt.InvalidTokenError:
            return self._reject('INVALID_TOKEN', 'Invalid access token')

        request.user_jwt = {
            'user_id': payload.get('sub'),
            'email': payload.get('email'),
            'role': payload.get('role'),
        }
        return None

    @staticmethod
    def _reject(code, message):
        return JsonResponse({
            'error': {
                'code': code,
                'message': message,
                'retryable': False,
            }
        }, status=401)
