"""
Upload endpoints and storage/upload-limit settings.
"""

import logging

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny

from apps.core.exceptions import AppError, ValidationError, validation_error_response
from apps.core.permissions import IsAdmin, IsAuthenticatedUser, UserAction, check_user_status
from .serializers import (
    AllUploadLimitsSerializer,
    OssConfigSerializer,
    StorageSettingsSerializer,
    UploadLimitSerializer,
    UploadSerializer,
)
from .services import storage_service, storage_settings_service, upload_limit_service

logger = logging.getLogger(__name__)


class UploadView(APIView):
    """
    Upload a file into a folder

    POST /api/storage/upload
    """
    permission_classes = [IsAuthenticatedUser]

    def post(self, request):
        serializer = UploadSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        check_user_status(request.user, UserAction.CREATE_CONTENT)
        folder = serializer.validated_data.get('folder') or request.query_params.get('folder') or 'general'
        result = storage_service.upload_file(serializer.validated_data['file'], folder)
        return Response(result, status=status.HTTP_201_CREATED)


class AvatarUploadView(APIView):
    """
    Upload an avatar and attach it to the current user

    POST /api/storage/upload-avatar
    """
    permission_classes = [IsAuthenticatedUser]

    def post(self, request):
        serializer = UploadSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        check_user_status(request.user, UserAction.EDIT_PROFILE)
        upload = serializer.validated_data['file']
        if not (upload.content_type or '').startswith('image/'):
            raise ValidationError('头像必须是图片文件', code='INVALID_FILE_TYPE')

        result = storage_service.upload_file(upload, 'avatar')
        request.user.avatar_url = result['url']
        request.user.save(update_fields=['avatar_url', 'updated_at'])
        return Response(result, status=status.HTTP_201_CREATED)


def _public_limits(limits):
    return {
        'notes': {
            'imageSize': limits['notes']['imageMaxSizeMB'],
            'videoSize': limits['notes']['videoMaxSizeMB'],
        },
        'inspiration': {
            'imageSize': limits['inspiration']['imageMaxSizeMB'],
            'videoSize': limits['inspiration']['videoMaxSizeMB'],
        },
        'screenings': {
            'videoSize': limits['screenings']['videoMaxSizeMB'],
        },
        'creator': limits['creator'],
    }


class PublicUploadLimitsView(APIView):
    """
    GET /api/public/settings/upload-limits
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        return Response({
            'success': True,
            'limits': _public_limits(upload_limit_service.get_all_limits()),
        })


class PublicModuleUploadLimitView(APIView):
    """
    GET /api/public/settings/upload-limits/:module
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request, module):
        return Response(upload_limit_service.get_limit(module))


class AdminUploadLimitsView(APIView):
    """
    GET  /api/admin/settings/upload-limits
    POST /api/admin/settings/upload-limits
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        return Response({
            'success': True,
            'limits': _public_limits(upload_limit_service.get_all_limits()),
        })

    def post(self, request):
        serializer = AllUploadLimitsSerializer(data=request.data.get('limits', request.data))
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        for module, sizes in serializer.validated_data.items():
            upload_limit_service.set_limit(module, {
                'imageMaxSizeMB': sizes.get('imageSize'),
                'videoMaxSizeMB': sizes.get('videoSize'),
            })
        return Response({'success': True, 'message': '上传限制已更新'})


class AdminUploadStatsView(APIView):
    """
    GET /api/admin/settings/upload-stats
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        return Response({'success': True, 'stats': upload_limit_service.upload_stats()})


class AdminModuleUploadLimitView(APIView):
    """
    GET  /api/admin/settings/:module
    POST /api/admin/settings/:module
    """
    permission_classes = [IsAdmin]

    def get(self, request, module):
        return Response(upload_limit_service.get_limit(module))

    def post(self, request, module):
        serializer = UploadLimitSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        return Response(upload_limit_service.set_limit(module, dict(serializer.validated_data)))


class StorageSettingsView(APIView):
    """
    GET  /api/admin/settings/storage
    POST /api/admin/settings/storage
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        return Response({'success': True, 'config': storage_settings_service.get_config()})

    def post(self, request):
        serializer = StorageSettingsSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        config = storage_settings_service.save_config(
            oss=serializer.validated_data.get('oss'),
            storage=serializer.validated_data.get('storage'),
        )
        return Response({'success': True, 'message': '存储配置已更新', 'config': config})


class StorageTestView(APIView):
    """
    Try the OSS credentials (body, falling back to the saved ones)

    POST /api/admin/settings/storage/test
    """
    permission_classes = [IsAdmin]

    def post(self, request):
        serializer = OssConfigSerializer(data=request.data.get('oss', request.data))
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        try:
            result = storage_settings_service.test_connection(serializer.validated_data)
        except AppError as e:
            return Response({'success': False, 'message': e.message}, status=e.status_code)
        return Response(result)


class StorageStatsView(APIView):
    """
    GET /api/admin/settings/storage/stats
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        return Response({'success': True, 'data': storage_settings_service.stats()})
