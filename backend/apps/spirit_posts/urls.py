"""
Spirit posts URL configuration.
"""

from django.urls import path
from .views import (
    SpiritPostListView,
    MySpiritPostsView,
    MyClaimsView,
    UnreadCountView,
    SpiritPostDetailView,
    ClaimView,
    MessagesView,
    ReplyView,
    MarkCompletedView,
    MarkReadView,
)

app_name = 'spirit_posts'

urlpatterns = [
    # GET, POST /api/spirit-posts
    path('spirit-posts', SpiritPostListView.as_view(), name='list'),

    # GET /api/spirit-posts/my-posts
    path('spirit-posts/my-posts', MySpiritPostsView.as_view(), name='my_posts'),

    # GET /api/spirit-posts/my-claims
    path('spirit-posts/my-claims', MyClaimsView.as_view(), name='my_claims'),

    # GET /api/spirit-posts/unread-count
    path('spirit-posts/unread-count', UnreadCountView.as_view(), name='unread_count'),

    # GET, PATCH /api/spirit-posts/:id
    path('spirit-posts/<int:post_id>', SpiritPostDetailView.as_view(), name='detail'),

    # POST /api/spirit-posts/:id/claim
    path('spirit-posts/<int:post_id>/claim', ClaimView.as_view(), name='claim'),

    # GET, POST /api/spirit-posts/:id/messages
    path('spirit-posts/<int:post_id>/messages', MessagesView.as_view(), name='messages'),

    # POST /api/spirit-posts/:id/messages/reply/:receiverId
    path('spirit-posts/<int:post_id>/messages/reply/<int:receiver_id>', ReplyView.as_view(), name='reply'),

    # POST /api/spirit-posts/:id/mark-completed
    path('spirit-posts/<int:post_id>/mark-completed', MarkCompletedView.as_view(), name='mark_completed'),

    # POST /api/spirit-posts/:id/mark-read
    path('spirit-posts/<int:post_id>/mark-read', MarkReadView.as_view(), name='mark_read'),
]
