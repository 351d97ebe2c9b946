"""
Sensitive word serializers.
"""

from rest_framework import serializers

from .models import SensitiveWord


class SensitiveWordSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = SensitiveWord
        fields = ['id', 'word', 'createdAt']


class SensitiveWordCreateSerializer(serializers.Serializer):
    word = serializers.CharField(max_length=100)
