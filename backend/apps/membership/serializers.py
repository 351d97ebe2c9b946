"""
Membership serializers.
"""

from rest_framework import serializers

from apps.authentication.models import Role, User
from .models import MembershipProduct, MembershipType, RedemptionCode


class MembershipProductSerializer(serializers.ModelSerializer):
    durationDays = serializers.IntegerField(source='duration_days', read_only=True)
    isActive = serializers.BooleanField(source='is_active', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = MembershipProduct
        fields = ['id', 'title', 'description', 'price', 'durationDays', 'type', 'isActive', 'createdAt', 'updatedAt']


class MembershipProductWriteSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=100)
    description = serializers.CharField(required=False, allow_blank=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    durationDays = serializers.IntegerField(min_value=1)
    type = serializers.ChoiceField(choices=MembershipType.values)
    isActive = serializers.BooleanField(required=False)


class RedeemSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=32)


class UsedByUserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'username', 'nickname']


class RedemptionCodeSerializer(serializers.ModelSerializer):
    durationDays = serializers.IntegerField(source='duration_days', read_only=True)
    isUsed = serializers.BooleanField(source='is_used', read_only=True)
    usedByUser = UsedByUserSerializer(source='used_by_user', read_only=True)
    usedAt = serializers.DateTimeField(source='used_at', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = RedemptionCode
        fields = ['id', 'code', 'durationDays', 'isUsed', 'usedByUser', 'usedAt', 'createdAt']


class RedemptionCodeCreateSerializer(serializers.Serializer):
    durationDays = serializers.IntegerField(min_value=1, max_value=36500)
    count = serializers.IntegerField(min_value=1, max_value=100, required=False, default=1)


class RedemptionCodeQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True, max_length=32)
    isUsed = serializers.BooleanField(required=False, allow_null=True, default=None)


class MemberQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True, max_length=100)
    role = serializers.ChoiceField(choices=[Role.PREMIUM, Role.LIFETIME, 'all'], required=False)


class MemberSerializer(serializers.ModelSerializer):
    premiumExpiryDate = serializers.DateTimeField(source='premium_expiry_date', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'nickname', 'email', 'role', 'status', 'premiumExpiryDate', 'createdAt']
