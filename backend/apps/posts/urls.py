"""
Posts URL configuration.
"""

from django.urls import path
from .views import (
    PostListView,
    PostDetailView,
    PostLikeView,
    PostFavoriteView,
    PostDownloadView,
    AdminPostListView,
    AdminPostDetailView,
    AdminPostStatusView,
)

app_name = 'posts'

urlpatterns = [
    # GET, POST /api/posts
    # List visible posts; upload a new one (multipart)
    path('posts', PostListView.as_view(), name='list'),

    # GET, PATCH, DELETE /api/posts/:id
    path('posts/<int:post_id>', PostDetailView.as_view(), name='detail'),

    # POST /api/posts/:id/like
    # Toggle like
    path('posts/<int:post_id>/like', PostLikeView.as_view(), name='like'),

    # POST /api/posts/:id/favorite
    # Toggle favorite
    path('posts/<int:post_id>/favorite', PostFavoriteView.as_view(), name='favorite'),

    # GET /api/posts/:id/download
    # Download the original file
    path('posts/<int:post_id>/download', PostDownloadView.as_view(), name='download'),

    # GET /api/admin/posts
    # All posts, any status (admin)
    path('admin/posts', AdminPostListView.as_view(), name='admin_list'),

    # GET, DELETE /api/admin/posts/:id
    path('admin/posts/<int:post_id>', AdminPostDetailView.as_view(), name='admin_detail'),

    # PATCH /api/admin/posts/:id/status
    path('admin/posts/<int:post_id>/status', AdminPostStatusView.as_view(), name='admin_status'),
]
