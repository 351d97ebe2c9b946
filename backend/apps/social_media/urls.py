"""
Social media URL configuration.
"""

from django.urls import path
from .views import (
    ActiveSocialMediaView,
    AdminSocialMediaListView,
    SocialMediaCreateView,
    SocialMediaDetailView,
    SocialMediaSortView,
)

app_name = 'social_media'

urlpatterns = [
    # POST /api/social-media
    # Create an entry with logo and QR code (admin, multipart)
    path('social-media', SocialMediaCreateView.as_view(), name='create'),

    # GET /api/social-media/active
    # Active entries for the site footer (public)
    path('social-media/active', ActiveSocialMediaView.as_view(), name='active'),

    # GET /api/social-media/admin
    # Every entry (admin)
    path('social-media/admin', AdminSocialMediaListView.as_view(), name='admin_list'),

    # POST /api/social-media/sort
    # Bulk reorder (admin)
    path('social-media/sort', SocialMediaSortView.as_view(), name='sort'),

    # GET, PATCH, DELETE /api/social-media/:id
    path('social-media/<int:item_id>', SocialMediaDetailView.as_view(), name='detail'),
]
