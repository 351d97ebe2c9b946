"""
Membership views, public and admin.
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny

from apps.core.exceptions import validation_error_response
from apps.core.permissions import IsAdmin, IsAuthenticatedUser
from apps.core.utils.pagination import paginate, parse_pagination
from .serializers import (
    MemberQuerySerializer,
    MemberSerializer,
    MembershipProductSerializer,
    MembershipProductWriteSerializer,
    RedeemSerializer,
    RedemptionCodeCreateSerializer,
    RedemptionCodeQuerySerializer,
    RedemptionCodeSerializer,
)
from .services import membership_service

ADMIN_DEFAULT_LIMIT = 10


class ProductListView(APIView):
    """
    GET /api/membership/products
    """
    permission_classes = [AllowAny]

    def get(self, request):
        products = membership_service.list_products(active_only=True)
        return Response(MembershipProductSerializer(products, many=True).data)


class RedeemView(APIView):
    """
    POST /api/membership/redeem
    """
    permission_classes = [IsAuthenticatedUser]

    def post(self, request):
        serializer = RedeemSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        return Response(membership_service.redeem(request.user, serializer.validated_data['code']))


class AdminProductListView(APIView):
    """
    GET  /api/admin/membership/products
    POST /api/admin/membership/products
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        return Response(MembershipProductSerializer(membership_service.list_products(), many=True).data)

    def post(self, request):
        serializer = MembershipProductWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        product = membership_service.create_product(serializer.validated_data)
        return Response(MembershipProductSerializer(product).data, status=status.HTTP_201_CREATED)


class AdminProductDetailView(APIView):
    """
    GET          /api/admin/membership/products/:id
    PUT, PATCH   /api/admin/membership/products/:id
    DELETE       /api/admin/membership/products/:id
    """
    permission_classes = [IsAdmin]

    def get(self, request, product_id):
        return Response(MembershipProductSerializer(membership_service.get_product(product_id)).data)

    def _update(self, request, product_id, partial):
        serializer = MembershipProductWriteSerializer(data=request.data, partial=partial)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        product = membership_service.update_product(product_id, serializer.validated_data)
        return Response(MembershipProductSerializer(product).data)

    def put(self, request, product_id):
        return self._update(request, product_id, partial=False)

    def patch(self, request, product_id):
        return self._update(request, product_id, partial=True)

    def delete(self, request, product_id):
        membership_service.delete_product(product_id)
        return Response({'success': True, 'message': '会员产品已删除'})


class AdminRedemptionCodeView(APIView):
    """
    GET  /api/admin/membership/redemption-codes
    POST /api/admin/membership/redemption-codes
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        query = RedemptionCodeQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return validation_error_response(query.errors)

        page, limit = parse_pagination(request.query_params, default_limit=ADMIN_DEFAULT_LIMIT)
        codes, meta = paginate(membership_service.list_codes(query.validated_data), page, limit)
        return Response({'data': RedemptionCodeSerializer(codes, many=True).data, 'meta': meta})

    def post(self, request):
        serializer = RedemptionCodeCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        codes = membership_service.create_codes(
            serializer.validated_data['durationDays'],
            serializer.validated_data['count'],
        )
        return Response(RedemptionCodeSerializer(codes, many=True).data, status=status.HTTP_201_CREATED)


class AdminMemberListView(APIView):
    """
    GET /api/admin/membership/members
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        query = MemberQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return validation_error_response(query.errors)

        page, limit = parse_pagination(request.query_params, default_limit=ADMIN_DEFAULT_LIMIT)
        members, meta = paginate(membership_service.list_members(query.validated_data), page, limit)
        return Response({'data': MemberSerializer(members, many=True).data, 'meta': meta})
