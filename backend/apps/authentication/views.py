"""
Authentication views (controllers).
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny

from apps.core.exceptions import validation_error_response
from apps.core.permissions import IsAuthenticatedUser, membership_display_name
from apps.core.services.captcha import captcha_service
from .services import auth_service
from .serializers import (
    RegisterSerializer,
    LoginSerializer,
    RefreshTokenSerializer,
    UserSerializer,
)


def _auth_payload(user, tokens):
    """`token` mirrors tokens.accessToken for clients that only read one field"""
    return {
        'user': UserSerializer(user).data,
        'token': tokens['accessToken'],
        'tokens': tokens,
    }


class CaptchaView(APIView):
    """
    Issue a login captcha

    GET /api/auth/captcha
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        return Response(captcha_service.generate())


class RegisterView(APIView):
    """
    Register a new user

    POST /api/auth/register
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        data = serializer.validated_data
        user = auth_service.register(
            data['username'],
            data['email'],
            data['password'],
            data.get('nickname'),
        )
        tokens = auth_service.generate_tokens(user)

        return Response(_auth_payload(user, tokens), status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """
    Login user

    POST /api/auth/login
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        data = serializer.validated_data
        user, tokens = auth_service.login(
            data['login'],
            data['password'],
            data.get('captchaId'),
            data.get('captcha'),
        )

        return Response(_auth_payload(user, tokens), status=status.HTTP_200_OK)


class RefreshTokenView(APIView):
    """
    Refresh access token

    POST /api/auth/refresh
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = RefreshTokenSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        tokens = auth_service.refresh_access_token(serializer.validated_data['refreshToken'])
        return Response({'tokens': tokens}, status=status.HTTP_200_OK)


class LogoutView(APIView):
    """
    Logout user

    POST /api/auth/logout
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = RefreshTokenSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        auth_service.logout(serializer.validated_data['refreshToken'])
        return Response({'message': '已退出登录'}, status=status.HTTP_200_OK)


class ProfileView(APIView):
    """
    Current user with membership label

    GET /api/auth/profile
    """
    permission_classes = [IsAuthenticatedUser]

    def get(self, request):
        data = UserSerializer(request.user).data
        data['membershipName'] = membership_display_name(request.user)
        return Response(data)
