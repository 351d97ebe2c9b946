"""
Private message views.
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from apps.core.exceptions import validation_error_response
from apps.core.permissions import IsAuthenticatedUser
from .serializers import (
    ContactSerializer,
    ThreadQuerySerializer,
    UserMessageCreateSerializer,
    UserMessageSerializer,
)
from .services import user_message_service


class UserMessageCreateView(APIView):
    """
    POST /api/users/messages
    """
    permission_classes = [IsAuthenticatedUser]

    def post(self, request):
        serializer = UserMessageCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        message = user_message_service.send(
            request.user,
            serializer.validated_data['receiverId'],
            serializer.validated_data['content'],
        )
        return Response(UserMessageSerializer(message).data, status=status.HTTP_201_CREATED)


class ContactListView(APIView):
    """
    GET /api/users/messages/contacts
    """
    permission_classes = [IsAuthenticatedUser]

    def get(self, request):
        return Response(ContactSerializer(user_message_service.contacts(request.user), many=True).data)


class UnreadCountView(APIView):
    """
    GET /api/users/messages/unread-count
    """
    permission_classes = [IsAuthenticatedUser]

    def get(self, request):
        return Response({'count': user_message_service.unread_count(request.user)})


class ThreadView(APIView):
    """
    GET /api/users/messages/with/:userId?limit=&offset=
    """
    permission_classes = [IsAuthenticatedUser]

    def get(self, request, user_id):
        query = ThreadQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return validation_error_response(query.errors)

        messages = user_message_service.thread(
            request.user,
            user_id,
            limit=query.validated_data['limit'],
            offset=query.validated_data['offset'],
        )
        return Response(UserMessageSerializer(messages, many=True).data)


class MarkReadView(APIView):
    """
    PATCH /api/users/messages/read/:userId
    """
    permission_classes = [IsAuthenticatedUser]

    def patch(self, request, user_id):
        user_message_service.mark_read(request.user, user_id)
        return Response({'success': True})
