"""
Screening views, public and admin.
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny

from apps.core.exceptions import validation_error_response
from apps.core.permissions import IsAdmin, IsAuthenticatedUser
from apps.core.utils.pagination import paginate, parse_pagination
from apps.interactions.serializers import CommentCreateSerializer, CommentSerializer
from .serializers import (
    ScreeningCreateSerializer,
    ScreeningQuerySerializer,
    ScreeningSerializer,
    ScreeningUpdateSerializer,
)
from .services import screening_service

DEFAULT_LIMIT = 10


def _list_response(request):
    query = ScreeningQuerySerializer(data=request.query_params)
    if not query.is_valid():
        return validation_error_response(query.errors)

    page, limit = parse_pagination(request.query_params, default_limit=DEFAULT_LIMIT)
    screenings, meta = paginate(screening_service.list_screenings(query.validated_data), page, limit)
    return Response({
        'screenings': ScreeningSerializer(screenings, many=True).data,
        'meta': meta,
    })


class ScreeningListView(APIView):
    """
    GET /api/screenings
    """
    permission_classes = [AllowAny]

    def get(self, request):
        return _list_response(request)


class ScreeningDetailView(APIView):
    """
    GET /api/screenings/:id
    """
    permission_classes = [AllowAny]

    def get(self, request, screening_id):
        screening = screening_service.view_screening(screening_id)
        data = ScreeningSerializer(screening).data
        data['isLiked'] = screening_service.is_liked(request.user, screening.id)
        return Response(data)


class ScreeningLikeView(APIView):
    """
    POST /api/screenings/:id/like
    """
    permission_classes = [IsAuthenticatedUser]

    def post(self, request, screening_id):
        return Response({'liked': screening_service.toggle_like(request.user, screening_id)})


class ScreeningCommentsView(APIView):
    """
    GET  /api/screenings/:id/comments
    POST /api/screenings/:id/comments
    """

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsAuthenticatedUser()]
        return [AllowAny()]

    def get(self, request, screening_id):
        comments = screening_service.comments(screening_id)
        return Response(CommentSerializer(comments, many=True).data)

    def post(self, request, screening_id):
        serializer = CommentCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        comment = screening_service.add_comment(request.user, screening_id, serializer.validated_data['content'])
        return Response(CommentSerializer(comment).data, status=status.HTTP_201_CREATED)


class AdminScreeningListView(APIView):
    """
    GET  /api/admin/screenings
    POST /api/admin/screenings (multipart)
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        return _list_response(request)

    def post(self, request):
        serializer = ScreeningCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        screening = screening_service.create_screening(request.user, serializer.validated_data)
        return Response(ScreeningSerializer(screening).data, status=status.HTTP_201_CREATED)


class AdminScreeningDetailView(APIView):
    """
    GET    /api/admin/screenings/:id
    POST   /api/admin/screenings/:id (multipart update)
    DELETE /api/admin/screenings/:id
    """
    permission_classes = [IsAdmin]

    def get(self, request, screening_id):
        return Response(ScreeningSerializer(screening_service.get_screening(screening_id)).data)

    def post(self, request, screening_id):
        serializer = ScreeningUpdateSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        screening = screening_service.update_screening(screening_id, serializer.validated_data)
        return Response(ScreeningSerializer(screening).data)

    def delete(self, request, screening_id):
        screening_service.delete_screening(screening_id)
        return Response({'success': True, 'message': '放映视频已删除'})
