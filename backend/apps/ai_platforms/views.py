"""
AI platform views, public and admin.
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny

from apps.core.exceptions import validation_error_response
from apps.core.permissions import IsAdmin
from .serializers import (
    AIModelSerializer,
    AIModelWriteSerializer,
    AIPlatformSerializer,
    AIPlatformWriteSerializer,
    PlatformQuerySerializer,
)
from .services import ai_platform_service


class AIPlatformListView(APIView):
    """
    GET /api/ai-platforms?type=IMAGE|VIDEO
    """
    permission_classes = [AllowAny]

    def get(self, request):
        query = PlatformQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return validation_error_response(query.errors)

        platforms = ai_platform_service.list_platforms(query.validated_data.get('type'))
        return Response(AIPlatformSerializer(platforms, many=True).data)


class AIPlatformDetailView(APIView):
    """
    GET /api/ai-platforms/:id
    """
    permission_classes = [AllowAny]

    def get(self, request, platform_id):
        return Response(AIPlatformSerializer(ai_platform_service.get_platform(platform_id)).data)


class AIPlatformModelsView(APIView):
    """
    GET /api/ai-platforms/:id/models
    """
    permission_classes = [AllowAny]

    def get(self, request, platform_id):
        models = ai_platform_service.list_models(platform_id)
        return Response(AIModelSerializer(models, many=True).data)


class AdminAIPlatformListView(APIView):
    """
    GET  /api/admin/ai-platforms
    POST /api/admin/ai-platforms
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        platforms = ai_platform_service.list_platforms(request.query_params.get('type'))
        return Response(AIPlatformSerializer(platforms, many=True).data)

    def post(self, request):
        serializer = AIPlatformWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        platform = ai_platform_service.create_platform(serializer.validated_data)
        return Response(AIPlatformSerializer(platform).data, status=status.HTTP_201_CREATED)


class AdminAIPlatformDetailView(APIView):
    """
    GET    /api/admin/ai-platforms/:id
    PATCH  /api/admin/ai-platforms/:id
    DELETE /api/admin/ai-platforms/:id
    """
    permission_classes = [IsAdmin]

    def get(self, request, platform_id):
        return Response(AIPlatformSerializer(ai_platform_service.get_platform(platform_id)).data)

    def patch(self, request, platform_id):
        serializer = AIPlatformWriteSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        platform = ai_platform_service.update_platform(platform_id, serializer.validated_data)
        return Response(AIPlatformSerializer(platform).data)

    def delete(self, request, platform_id):
        ai_platform_service.delete_platform(platform_id)
        return Response({'success': True, 'message': 'AI平台已删除'})


class AdminAIModelListView(APIView):
    """
    GET  /api/admin/ai-platforms/:id/models
    POST /api/admin/ai-platforms/:id/models
    """
    permission_classes = [IsAdmin]

    def get(self, request, platform_id):
        models = ai_platform_service.list_models(platform_id)
        return Response(AIModelSerializer(models, many=True).data)

    def post(self, request, platform_id):
        serializer = AIModelWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        model = ai_platform_service.create_model(platform_id, serializer.validated_data['name'])
        return Response(AIModelSerializer(model).data, status=status.HTTP_201_CREATED)


class AdminAIModelDetailView(APIView):
    """
    PATCH  /api/admin/ai-platforms/models/:modelId
    DELETE /api/admin/ai-platforms/models/:modelId
    """
    permission_classes = [IsAdmin]

    def patch(self, request, model_id):
        serializer = AIModelWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        model = ai_platform_service.update_model(model_id, serializer.validated_data['name'])
        return Response(AIModelSerializer(model).data)

    def delete(self, request, model_id):
        ai_platform_service.delete_model(model_id)
        return Response({'success': True, 'message': '模型已删除'})
