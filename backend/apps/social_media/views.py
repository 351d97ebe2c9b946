"""
Social media views.
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny

from apps.core.exceptions import validation_error_response
from apps.core.permissions import IsAdmin
from .serializers import (
    SocialMediaCreateSerializer,
    SocialMediaSerializer,
    SocialMediaUpdateSerializer,
    SortItemSerializer,
)
from .services import social_media_service


class ActiveSocialMediaView(APIView):
    """
    GET /api/social-media/active
    """
    permission_classes = [AllowAny]

    def get(self, request):
        return Response(SocialMediaSerializer(social_media_service.list_active(), many=True).data)


class AdminSocialMediaListView(APIView):
    """
    GET /api/social-media/admin
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        return Response(SocialMediaSerializer(social_media_service.list_all(), many=True).data)


class SocialMediaCreateView(APIView):
    """
    POST /api/social-media (multipart: name, logo, qrCode, sortOrder, isActive)
    """
    permission_classes = [IsAdmin]

    def post(self, request):
        serializer = SocialMediaCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        item = social_media_service.create(serializer.validated_data)
        return Response(SocialMediaSerializer(item).data, status=status.HTTP_201_CREATED)


class SocialMediaDetailView(APIView):
    """
    GET    /api/social-media/:id
    PATCH  /api/social-media/:id
    DELETE /api/social-media/:id
    """
    permission_classes = [IsAdmin]

    def get(self, request, item_id):
        return Response(SocialMediaSerializer(social_media_service.get(item_id)).data)

    def patch(self, request, item_id):
        serializer = SocialMediaUpdateSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        item = social_media_service.update(item_id, serializer.validated_data)
        return Response(SocialMediaSerializer(item).data)

    def delete(self, request, item_id):
        social_media_service.delete(item_id)
        return Response({'success': True, 'message': '社交媒体已删除'})


class SocialMediaSortView(APIView):
    """
    POST /api/social-media/sort [{id, sortOrder}]
    """
    permission_classes = [IsAdmin]

    def post(self, request):
        items = request.data.get('items') if isinstance(request.data, dict) else request.data
        serializer = SortItemSerializer(data=items, many=True)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        social_media_service.sort(serializer.validated_data)
        return Response({'success': True, 'message': '排序已更新'})
