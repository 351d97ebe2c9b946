"""
Membership URL configuration.
"""

from django.urls import path
from .views import (
    ProductListView,
    RedeemView,
    AdminProductListView,
    AdminProductDetailView,
    AdminRedemptionCodeView,
    AdminMemberListView,
)

app_name = 'membership'

urlpatterns = [
    # GET /api/membership/products
    # Active products (public)
    path('membership/products', ProductListView.as_view(), name='products'),

    # POST /api/membership/redeem
    # Redeem a code for premium time
    path('membership/redeem', RedeemView.as_view(), name='redeem'),

    # GET, POST /api/admin/membership/products
    path('admin/membership/products', AdminProductListView.as_view(), name='admin_products'),

    # GET, PUT, PATCH, DELETE /api/admin/membership/products/:id
    path('admin/membership/products/<int:product_id>', AdminProductDetailView.as_view(), name='admin_product_detail'),

    # GET, POST /api/admin/membership/redemption-codes
    path('admin/membership/redemption-codes', AdminRedemptionCodeView.as_view(), name='admin_codes'),

    # GET /api/admin/membership/members
    path('admin/membership/members', AdminMemberListView.as_view(), name='admin_members'),
]
