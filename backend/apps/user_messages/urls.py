"""
Private messages URL configuration.
"""

from django.urls import path
from .views import (
    UserMessageCreateView,
    ContactListView,
    UnreadCountView,
    ThreadView,
    MarkReadView,
)

app_name = 'user_messages'

urlpatterns = [
    # POST /api/users/messages
    # Send a private message
    path('users/messages', UserMessageCreateView.as_view(), name='send'),

    # GET /api/users/messages/contacts
    # Conversations with last message and unread count
    path('users/messages/contacts', ContactListView.as_view(), name='contacts'),

    # GET /api/users/messages/unread-count
    path('users/messages/unread-count', UnreadCountView.as_view(), name='unread_count'),

    # GET /api/users/messages/with/:userId
    # Thread with one user; marks incoming messages read
    path('users/messages/with/<int:user_id>', ThreadView.as_view(), name='thread'),

    # PATCH /api/users/messages/read/:userId
    path('users/messages/read/<int:user_id>', MarkReadView.as_view(), name='mark_read'),
]
