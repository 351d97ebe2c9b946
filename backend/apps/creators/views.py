"""
Creator views.
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny

from apps.core.exceptions import PermissionDeniedError, validation_error_response
from apps.core.permissions import IsAdmin, IsAuthenticatedUser, is_admin
from .serializers import CreatorProfileSerializer, CreatorSerializer, CreatorUploadSerializer
from .services import creator_service


class CreatorListView(APIView):
    """
    GET  /api/creators
    POST /api/creators
    """

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsAuthenticatedUser()]
        return [AllowAny()]

    def get(self, request):
        return Response(CreatorSerializer(creator_service.list_creators(), many=True).data)

    def post(self, request):
        serializer = CreatorProfileSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        creator = creator_service.save_profile(request.user, serializer.validated_data)
        return Response(CreatorSerializer(creator).data)


class CreatorDetailView(APIView):
    """
    GET /api/creators/:id
    """
    permission_classes = [AllowAny]

    def get(self, request, creator_id):
        return Response(CreatorSerializer(creator_service.get_creator(creator_id)).data)


class CreatorByUserView(APIView):
    """
    GET /api/creators/user/:userId
    """
    permission_classes = [AllowAny]

    def get(self, request, user_id):
        return Response(CreatorSerializer(creator_service.get_by_user(user_id)).data)


class CreatorUploadView(APIView):
    """
    POST /api/creators/upload (multipart)
    """
    permission_classes = [IsAuthenticatedUser]

    def post(self, request):
        serializer = CreatorUploadSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = creator_service.upload_media(request.user, serializer.validated_data['file'])
        return Response(result, status=status.HTTP_201_CREATED)


class CreatorScoreView(APIView):
    """
    POST /api/creators/score/update/:userId
    """
    permission_classes = [IsAuthenticatedUser]

    def post(self, request, user_id):
        if request.user.id != user_id and not is_admin(request.user):
            raise PermissionDeniedError('无权更新他人的创作者积分')

        creator = creator_service.update_score(user_id)
        return Response({'message': '积分更新成功', 'score': creator.score if creator else 0})


class CreatorScoreAllView(APIView):
    """
    POST /api/creators/score/update-all
    """
    permission_classes = [IsAdmin]

    def post(self, request):
        count = creator_service.update_all_scores()
        return Response({'message': '所有创作者积分更新成功', 'updated': count})


class CreatorSyncView(APIView):
    """
    POST /api/creators/sync-all
    """
    permission_classes = [IsAdmin]

    def post(self, request):
        result = creator_service.sync_with_users()
        return Response({
            'message': f'同步完成，共更新了 {result["updated"]}/{result["total"]} 个创作者信息',
            **result,
        })
