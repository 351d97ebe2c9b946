"""
Sensitive word admin views.
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from apps.core.exceptions import validation_error_response
from apps.core.permissions import IsAdmin
from .serializers import SensitiveWordSerializer, SensitiveWordCreateSerializer
from .services import sensitive_word_service


class SensitiveWordListView(APIView):
    """
    GET  /api/admin/sensitive-words
    POST /api/admin/sensitive-words
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        words = sensitive_word_service.list_words()
        return Response(SensitiveWordSerializer(words, many=True).data)

    def post(self, request):
        serializer = SensitiveWordCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        word = sensitive_word_service.create_word(serializer.validated_data['word'])
        return Response(SensitiveWordSerializer(word).data, status=status.HTTP_201_CREATED)


class SensitiveWordDetailView(APIView):
    """
    DELETE /api/admin/sensitive-words/:id
    """
    permission_classes = [IsAdmin]

    def delete(self, request, word_id):
        sensitive_word_service.delete_word(word_id)
        return Response({'success': True, 'message': '敏感词已删除'})
