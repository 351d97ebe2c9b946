"""
User views: the current user's profile and the admin user management.
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from apps.authentication.serializers import UserSerializer
from apps.core.exceptions import validation_error_response
from apps.core.permissions import IsAdmin, IsAuthenticatedUser, membership_display_name
from apps.core.utils.pagination import paginate, parse_pagination
from apps.interactions.models import EntityType
from apps.notes.serializers import NoteSerializer
from apps.notes.services import note_service
from apps.posts.serializers import PostSerializer
from apps.posts.services import post_service
from apps.screenings.serializers import ScreeningSerializer
from .serializers import (
    AdminUserCreateSerializer,
    AdminUserQuerySerializer,
    ChangePasswordSerializer,
    InteractionListQuerySerializer,
    ProfileUpdateSerializer,
    UserRoleSerializer,
    UserStatusSerializer,
)
from .services import admin_user_service, user_service


def _profile(user):
    data = UserSerializer(user).data
    data['membershipName'] = membership_display_name(user)
    return data


class MeView(APIView):
    """
    GET   /api/users/me
    PATCH /api/users/me
    """
    permission_classes = [IsAuthenticatedUser]

    def get(self, request):
        return Response(_profile(request.user))

    def patch(self, request):
        serializer = ProfileUpdateSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        user = user_service.update_profile(request.user, serializer.validated_data)
        return Response(_profile(user))


class ChangePasswordView(APIView):
    """
    POST /api/users/change-password
    """
    permission_classes = [IsAuthenticatedUser]

    def post(self, request):
        serializer = ChangePasswordSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        user_service.change_password(
            request.user,
            serializer.validated_data['currentPassword'],
            serializer.validated_data['newPassword'],
        )
        return Response({'success': True, 'message': '密码修改成功'})


class _InteractionListView(APIView):
    permission_classes = [IsAuthenticatedUser]
    kind = None

    def get(self, request):
        query = InteractionListQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return validation_error_response(query.errors)

        page, limit = parse_pagination(request.query_params)
        loader = user_service.likes if self.kind == 'likes' else user_service.favorites
        rows, meta = paginate(loader(request.user, query.validated_data.get('entityType')), page, limit)

        entities = user_service.load_entities(rows)
        posts = [entity for (entity_type, _), entity in entities.items() if entity_type == EntityType.POST]
        post_context = post_service.serializer_context(request.user, posts)
        notes = [entity for (entity_type, _), entity in entities.items() if entity_type == EntityType.NOTE]
        note_context = note_service.serializer_context(request.user, notes)

        data = []
        for row in rows:
            entity = entities.get((row.entity_type, row.entity_id))
            if entity is None:
                serialized = None
            elif row.entity_type == EntityType.POST:
                serialized = PostSerializer(entity, context=post_context).data
            elif row.entity_type == EntityType.NOTE:
                serialized = NoteSerializer(entity, context=note_context).data
            else:
                serialized = ScreeningSerializer(entity).data
            data.append({
                'id': row.id,
                'entityType': row.entity_type,
                'entityId': row.entity_id,
                'createdAt': row.created_at,
                'entity': serialized,
            })
        return Response({'data': data, 'meta': meta})


class MyLikesView(_InteractionListView):
    """
    GET /api/users/me/likes
    """
    kind = 'likes'


class MyFavoritesView(_InteractionListView):
    """
    GET /api/users/me/favorites
    """
    kind = 'favorites'


class AdminUserListView(APIView):
    """
    GET  /api/admin/users
    POST /api/admin/users
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        query = AdminUserQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return validation_error_response(query.errors)

        page, limit = parse_pagination(request.query_params)
        params = {**query.validated_data, 'page': page, 'limit': limit}
        cached = admin_user_service.get_cached_list(params)
        if cached is not None:
            return Response(cached)

        users, meta = paginate(admin_user_service.list_users(query.validated_data), page, limit)
        payload = {'data': UserSerializer(users, many=True).data, 'meta': meta}
        admin_user_service.set_cached_list(params, payload)
        return Response(payload)

    def post(self, request):
        serializer = AdminUserCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        user = admin_user_service.create_user(serializer.validated_data)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class AdminUserDetailView(APIView):
    """
    GET /api/admin/users/:id
    """
    permission_classes = [IsAdmin]

    def get(self, request, user_id):
        return Response(_profile(admin_user_service.get_user(user_id)))


class AdminUserStatusView(APIView):
    """
    PATCH /api/admin/users/:id/status
    """
    permission_classes = [IsAdmin]

    def patch(self, request, user_id):
        serializer = UserStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        user = admin_user_service.set_status(user_id, serializer.validated_data['status'])
        return Response(UserSerializer(user).data)


class AdminUserRoleView(APIView):
    """
    PATCH /api/admin/users/:id/role
    """
    permission_classes = [IsAdmin]

    def patch(self, request, user_id):
        serializer = UserRoleSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        user = admin_user_service.set_role(
            user_id,
            serializer.validated_data['role'],
            serializer.validated_data.get('premiumExpiryDate'),
        )
        return Response(UserSerializer(user).data)


class AdminResetPasswordView(APIView):
    """
    POST /api/admin/users/:id/reset-password
    """
    permission_classes = [IsAdmin]

    def post(self, request, user_id):
        admin_user_service.reset_password(user_id)
        return Response({'success': True, 'message': '密码已重置为 123456'})
