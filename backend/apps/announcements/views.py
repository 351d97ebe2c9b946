"""
Announcement views, public and admin.
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny

from apps.core.exceptions import validation_error_response
from apps.core.permissions import IsAdmin, IsAuthenticatedUser
from apps.core.utils.pagination import paginate, parse_pagination
from .serializers import (
    AdminAnnouncementSerializer,
    AnnouncementQuerySerializer,
    AnnouncementSerializer,
    AnnouncementWriteSerializer,
)
from .services import announcement_service

DEFAULT_LIMIT = 20


class ActiveAnnouncementsView(APIView):
    """
    GET /api/announcements/active
    """
    permission_classes = [AllowAny]

    def get(self, request):
        announcements = announcement_service.active_announcements(request.user)
        return Response(AnnouncementSerializer(announcements, many=True).data)


class AnnouncementViewedView(APIView):
    """
    POST /api/announcements/view/:id
    """
    permission_classes = [IsAuthenticatedUser]

    def post(self, request, announcement_id):
        announcement_service.mark_viewed(request.user, announcement_id)
        return Response({'success': True})


class AnnouncementDetailView(APIView):
    """
    GET /api/announcements/:id
    """
    permission_classes = [AllowAny]

    def get(self, request, announcement_id):
        return Response(AnnouncementSerializer(announcement_service.get_public(announcement_id)).data)


class AdminAnnouncementListView(APIView):
    """
    GET  /api/admin/announcements
    POST /api/admin/announcements
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        query = AnnouncementQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return validation_error_response(query.errors)

        page, limit = parse_pagination(request.query_params, default_limit=DEFAULT_LIMIT)
        items, meta = paginate(announcement_service.list_announcements(query.validated_data), page, limit)
        return Response({'items': AdminAnnouncementSerializer(items, many=True).data, 'meta': meta})

    def post(self, request):
        serializer = AnnouncementWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        announcement = announcement_service.create_announcement(serializer.validated_data)
        return Response(AdminAnnouncementSerializer(announcement).data, status=status.HTTP_201_CREATED)


class AdminAnnouncementStatsView(APIView):
    """
    GET /api/admin/announcements/stats/overview
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        return Response(announcement_service.stats())


class AdminAnnouncementDetailView(APIView):
    """
    GET    /api/admin/announcements/:id
    PATCH  /api/admin/announcements/:id
    DELETE /api/admin/announcements/:id
    """
    permission_classes = [IsAdmin]

    def get(self, request, announcement_id):
        return Response(AdminAnnouncementSerializer(announcement_service.get_announcement(announcement_id)).data)

    def patch(self, request, announcement_id):
        serializer = AnnouncementWriteSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        announcement = announcement_service.update_announcement(announcement_id, serializer.validated_data)
        return Response(AdminAnnouncementSerializer(announcement).data)

    def delete(self, request, announcement_id):
        announcement_service.delete_announcement(announcement_id)
        return Response({'id': announcement_id, 'message': '公告已删除'})
