"""
DRF JWT Authentication class.

Resolves the bearer token to a User row so views get request.user.
"""

from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed
import jwt
from django.conf import settings


def decode_access_token(token: str) -> dict:
    """
    Verify an access token and return its payload

    Raises:
        jwt.ExpiredSignatureError, jwt.InvalidTokenError
    """
    return jwt.decode(
        token,
        settings.JWT_SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM]
    )


def get_bearer_token(request):
    """
    Extract the token from an Authorization header

    Returns:
        The token, None when no header is sent, or '' when the header is malformed
    """
    auth_header = request.META.get('HTTP_AUTHORIZATION', '')
    if not auth_header:
        return None

    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != 'bearer':
        return ''
    return parts[1]


class JWTAuthentication(BaseAuthentication):
    """
    JWT Authentication for Django Rest Framework

    This class integrates with DRF's permission system.
    """

    def authenticate(self, request):
        """
        Authenticate the request using JWT token

        Returns:
            Tuple of (User, payload) if authenticated
            None if no authentication attempted

        Raises:
            AuthenticationFailed if authentication fails
        """
        from apps.authentication.models import User

        token = get_bearer_token(request)
        if token is None:
            return None  # No authentication attempted

        if not token:
            raise AuthenticationFailed('Authorization header must be in format: Bearer <token>')

        try:
            payload = decode_access_token(token)
        except jwt.ExpiredSignatureError:
            raise AuthenticationFailed('Access token has expired')
        except jwt.InvalidTokenError:
            raise AuthenticationFailed('Invalid access token')

        try:
            user = User.objects.get(id=int(payload.get('sub')))
        except (User.DoesNotExist, TypeError, ValueError):
            raise AuthenticationFailed('用户不存在')

        return (user, payload)

    def authenticate_header(self, request):
        """
        Return the authentication header to use for 401 responses
        """
        return 'Bearer realm="api"'
