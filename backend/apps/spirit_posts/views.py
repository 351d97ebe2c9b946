"""
Spirit post views. Every endpoint requires a login.
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from apps.authentication.serializers import UserBriefSerializer
from apps.core.exceptions import validation_error_response
from apps.core.permissions import IsAuthenticatedUser
from .serializers import (
    MarkCompletedSerializer,
    MessageCreateSerializer,
    SpiritPostClaimSerializer,
    SpiritPostCreateSerializer,
    SpiritPostMessageSerializer,
    SpiritPostSerializer,
    SpiritPostUpdateSerializer,
)
from .services import spirit_post_service


class SpiritPostListView(APIView):
    """
    GET  /api/spirit-posts
    POST /api/spirit-posts
    """
    permission_classes = [IsAuthenticatedUser]

    def get(self, request):
        data = []
        for post, claims_count, unread in spirit_post_service.list_open(request.user):
            item = SpiritPostSerializer(post).data
            item['claimsCount'] = claims_count
            item['unreadCount'] = unread
            data.append(item)
        return Response(data)

    def post(self, request):
        serializer = SpiritPostCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        post = spirit_post_service.create(
            request.user,
            serializer.validated_data['title'],
            serializer.validated_data['content'],
        )
        return Response(SpiritPostSerializer(post).data, status=status.HTTP_201_CREATED)


class MySpiritPostsView(APIView):
    """
    GET /api/spirit-posts/my-posts
    """
    permission_classes = [IsAuthenticatedUser]

    def get(self, request):
        data = []
        for post, claims_count, messages_count, completed, unread in spirit_post_service.my_posts(request.user):
            item = SpiritPostSerializer(post).data
            item.update({
                'claimsCount': claims_count,
                'messagesCount': messages_count,
                'completedClaimerIds': completed,
                'unreadCount': unread,
            })
            data.append(item)
        return Response(data)


class MyClaimsView(APIView):
    """
    GET /api/spirit-posts/my-claims
    """
    permission_classes = [IsAuthenticatedUser]

    def get(self, request):
        data = []
        for claim, messages_count, unread in spirit_post_service.my_claims(request.user):
            item = SpiritPostSerializer(claim.post).data
            item.update({
                'messagesCount': messages_count,
                'unreadCount': unread,
                'claimInfo': {
                    'claimedAt': SpiritPostClaimSerializer(claim).data['createdAt'],
                    'isCompleted': claim.is_completed,
                },
            })
            data.append(item)
        return Response(data)


class UnreadCountView(APIView):
    """
    GET /api/spirit-posts/unread-count
    """
    permission_classes = [IsAuthenticatedUser]

    def get(self, request):
        return Response(spirit_post_service.unread_counts(request.user))


class SpiritPostDetailView(APIView):
    """
    GET   /api/spirit-posts/:id
    PATCH /api/spirit-posts/:id
    """
    permission_classes = [IsAuthenticatedUser]

    def get(self, request, post_id):
        post, claims, is_claimed, is_owner = spirit_post_service.detail(request.user, post_id)
        data = SpiritPostSerializer(post).data
        data.update({
            'claims': SpiritPostClaimSerializer(claims, many=True).data,
            'isClaimed': is_claimed,
            'isOwner': is_owner,
        })
        return Response(data)

    def patch(self, request, post_id):
        serializer = SpiritPostUpdateSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        post = spirit_post_service.update(request.user, post_id, serializer.validated_data)
        return Response(SpiritPostSerializer(post).data)


class ClaimView(APIView):
    """
    POST /api/spirit-posts/:id/claim
    """
    permission_classes = [IsAuthenticatedUser]

    def post(self, request, post_id):
        claim = spirit_post_service.claim(request.user, post_id)
        return Response(SpiritPostClaimSerializer(claim).data, status=status.HTTP_201_CREATED)


class MessagesView(APIView):
    """
    GET  /api/spirit-posts/:id/messages
    POST /api/spirit-posts/:id/messages
    """
    permission_classes = [IsAuthenticatedUser]

    def get(self, request, post_id):
        result = spirit_post_service.messages(request.user, post_id)
        if not result['isOwner']:
            return Response({
                'isOwner': False,
                'messages': SpiritPostMessageSerializer(result['messages'], many=True).data,
            })

        return Response({
            'isOwner': True,
            'conversations': [
                {
                    'user': UserBriefSerializer(other).data,
                    'messages': SpiritPostMessageSerializer(messages, many=True).data,
                    'hasConversation': len(messages) >= 2,
                }
                for other, messages in result['conversations']
            ],
        })

    def post(self, request, post_id):
        serializer = MessageCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        message = spirit_post_service.send_message(request.user, post_id, serializer.validated_data['content'])
        return Response(SpiritPostMessageSerializer(message).data, status=status.HTTP_201_CREATED)


class ReplyView(APIView):
    """
    POST /api/spirit-posts/:id/messages/reply/:receiverId
    """
    permission_classes = [IsAuthenticatedUser]

    def post(self, request, post_id, receiver_id):
        serializer = MessageCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        message = spirit_post_service.reply(
            request.user,
            post_id,
            receiver_id,
            serializer.validated_data['content'],
        )
        return Response(SpiritPostMessageSerializer(message).data, status=status.HTTP_201_CREATED)


class MarkCompletedView(APIView):
    """
    POST /api/spirit-posts/:id/mark-completed
    """
    permission_classes = [IsAuthenticatedUser]

    def post(self, request, post_id):
        serializer = MarkCompletedSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        return Response(spirit_post_service.mark_completed(
            request.user,
            post_id,
            serializer.validated_data['claimerIds'],
        ))


class MarkReadView(APIView):
    """
    POST /api/spirit-posts/:id/mark-read
    """
    permission_classes = [IsAuthenticatedUser]

    def post(self, request, post_id):
        return Response(spirit_post_service.mark_read(request.user, post_id))
