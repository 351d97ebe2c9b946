"""
Note and note category views, public and admin.
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny

from apps.core.exceptions import validation_error_response
from apps.core.permissions import IsAdmin, IsAuthenticatedUser
from apps.core.utils.pagination import paginate, parse_pagination
from .serializers import (
    NoteCategorySerializer,
    NoteCategoryWriteSerializer,
    NoteCreateSerializer,
    NoteQuerySerializer,
    NoteSerializer,
    NoteUpdateSerializer,
    NoteUploadSerializer,
)
from .services import note_category_service, note_service

DEFAULT_LIMIT = 10


def _serialize(viewer, notes, many=True):
    items = notes if many else [notes]
    context = note_service.serializer_context(viewer, items)
    return NoteSerializer(notes, many=many, context=context).data


def _list_response(request, include_hidden=False):
    query = NoteQuerySerializer(data=request.query_params)
    if not query.is_valid():
        return validation_error_response(query.errors)

    page, limit = parse_pagination(request.query_params, default_limit=DEFAULT_LIMIT)
    queryset = note_service.list_notes(query.validated_data, include_hidden=include_hidden)
    notes, meta = paginate(queryset, page, limit)
    return Response({'notes': _serialize(request.user, notes), 'meta': meta})


def _page_response(request, queryset):
    page, limit = parse_pagination(request.query_params, default_limit=DEFAULT_LIMIT)
    notes, meta = paginate(queryset, page, limit)
    return Response({'notes': _serialize(request.user, notes), 'meta': meta})


class NoteListView(APIView):
    """
    GET  /api/notes
    POST /api/notes
    """

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsAuthenticatedUser()]
        return [AllowAny()]

    def get(self, request):
        return _list_response(request)

    def post(self, request):
        serializer = NoteCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        note = note_service.create_note(request.user, serializer.validated_data)
        return Response(_serialize(request.user, note, many=False), status=status.HTTP_201_CREATED)


class NoteDetailView(APIView):
    """
    GET    /api/notes/:id
    PATCH  /api/notes/:id
    DELETE /api/notes/:id
    """

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAuthenticatedUser()]

    def get(self, request, note_id):
        note = note_service.view_note(request.user, note_id)
        return Response(_serialize(request.user, note, many=False))

    def patch(self, request, note_id):
        serializer = NoteUpdateSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        note = note_service.update_note(request.user, note_id, serializer.validated_data)
        return Response(_serialize(request.user, note, many=False))

    def delete(self, request, note_id):
        note_service.delete_note(request.user, note_id)
        return Response({'success': True, 'message': '笔记已删除'})


class NoteLikeView(APIView):
    """
    POST /api/notes/:id/like
    """
    permission_classes = [IsAuthenticatedUser]

    def post(self, request, note_id):
        return Response({'liked': note_service.toggle_like(request.user, note_id)})


class NoteFavoriteView(APIView):
    """
    POST /api/notes/:id/favorite
    """
    permission_classes = [IsAuthenticatedUser]

    def post(self, request, note_id):
        return Response({'favorited': note_service.toggle_favorite(request.user, note_id)})


class LikedNotesView(APIView):
    """
    GET /api/notes/user/liked
    """
    permission_classes = [IsAuthenticatedUser]

    def get(self, request):
        return _page_response(request, note_service.liked_notes(request.user))


class FavoritedNotesView(APIView):
    """
    GET /api/notes/user/favorited
    """
    permission_classes = [IsAuthenticatedUser]

    def get(self, request):
        return _page_response(request, note_service.favorited_notes(request.user))


class NoteUploadView(APIView):
    """
    POST /api/notes/upload (multipart)
    """
    permission_classes = [IsAuthenticatedUser]

    def post(self, request):
        serializer = NoteUploadSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = note_service.upload_media(request.user, serializer.validated_data['file'])
        return Response(result, status=status.HTTP_201_CREATED)


class NoteCategoryListView(APIView):
    """
    GET /api/note-categories
    """
    permission_classes = [AllowAny]

    def get(self, request):
        return Response(NoteCategorySerializer(note_category_service.list_categories(), many=True).data)


class AdminNoteListView(APIView):
    """
    GET /api/admin/notes
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        return _list_response(request, include_hidden=True)


class AdminNoteDetailView(APIView):
    """
    GET    /api/admin/notes/:id
    PATCH  /api/admin/notes/:id
    DELETE /api/admin/notes/:id
    """
    permission_classes = [IsAdmin]

    def get(self, request, note_id):
        return Response(_serialize(request.user, note_service.get_note(note_id), many=False))

    def patch(self, request, note_id):
        serializer = NoteUpdateSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        note = note_service.update_note(request.user, note_id, serializer.validated_data)
        return Response(_serialize(request.user, note, many=False))

    def delete(self, request, note_id):
        note_service.delete_note(request.user, note_id)
        return Response({'success': True, 'message': '笔记已删除'})


class AdminNoteCategoryListView(APIView):
    """
    GET  /api/admin/note-categories
    POST /api/admin/note-categories
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        return Response(NoteCategorySerializer(note_category_service.list_categories(), many=True).data)

    def post(self, request):
        serializer = NoteCategoryWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        category = note_category_service.create_category(serializer.validated_data)
        return Response(NoteCategorySerializer(category).data, status=status.HTTP_201_CREATED)


class AdminNoteCategoryDetailView(APIView):
    """
    GET    /api/admin/note-categories/:id
    PATCH  /api/admin/note-categories/:id
    DELETE /api/admin/note-categories/:id
    """
    permission_classes = [IsAdmin]

    def get(self, request, category_id):
        return Response(NoteCategorySerializer(note_category_service.get_category(category_id)).data)

    def patch(self, request, category_id):
        serializer = NoteCategoryWriteSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        category = note_category_service.update_category(category_id, serializer.validated_data)
        return Response(NoteCategorySerializer(category).data)

    def delete(self, request, category_id):
        note_category_service.delete_category(category_id)
        return Response({'success': True, 'message': '分类已删除'})
