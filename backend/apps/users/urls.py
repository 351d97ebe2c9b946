"""
Users URL configuration.
"""

from django.urls import path
from .views import (
    MeView,
    ChangePasswordView,
    MyLikesView,
    MyFavoritesView,
    AdminUserListView,
    AdminUserDetailView,
    AdminUserStatusView,
    AdminUserRoleView,
    AdminResetPasswordView,
)

app_name = 'users'

urlpatterns = [
    # GET, PATCH /api/users/me
    # Current user's profile
    path('users/me', MeView.as_view(), name='me'),

    # POST /api/users/change-password
    path('users/change-password', ChangePasswordView.as_view(), name='change_password'),

    # GET /api/users/me/likes
    path('users/me/likes', MyLikesView.as_view(), name='my_likes'),

    # GET /api/users/me/favorites
    path('users/me/favorites', MyFavoritesView.as_view(), name='my_favorites'),

    # GET, POST /api/admin/users
    # Cached user listing; create a user (admin)
    path('admin/users', AdminUserListView.as_view(), name='admin_list'),

    # GET /api/admin/users/:id
    path('admin/users/<int:user_id>', AdminUserDetailView.as_view(), name='admin_detail'),

    # PATCH /api/admin/users/:id/status
    path('admin/users/<int:user_id>/status', AdminUserStatusView.as_view(), name='admin_status'),

    # PATCH /api/admin/users/:id/role
    path('admin/users/<int:user_id>/role', AdminUserRoleView.as_view(), name='admin_role'),

    # POST /api/admin/users/:id/reset-password
    path('admin/users/<int:user_id>/reset-password', AdminResetPasswordView.as_view(), name='admin_reset_password'),
]
