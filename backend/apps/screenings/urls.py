"""
Screenings URL configuration.
"""

from django.urls import path
from .views import (
    ScreeningListView,
    ScreeningDetailView,
    ScreeningLikeView,
    ScreeningCommentsView,
    AdminScreeningListView,
    AdminScreeningDetailView,
)

app_name = 'screenings'

urlpatterns = [
    # GET /api/screenings
    path('screenings', ScreeningListView.as_view(), name='list'),

    # GET /api/screenings/:id
    path('screenings/<int:screening_id>', ScreeningDetailView.as_view(), name='detail'),

    # POST /api/screenings/:id/like
    path('screenings/<int:screening_id>/like', ScreeningLikeView.as_view(), name='like'),

    # GET, POST /api/screenings/:id/comments
    path('screenings/<int:screening_id>/comments', ScreeningCommentsView.as_view(), name='comments'),

    # GET, POST /api/admin/screenings
    path('admin/screenings', AdminScreeningListView.as_view(), name='admin_list'),

    # GET, POST, DELETE /api/admin/screenings/:id
    path('admin/screenings/<int:screening_id>', AdminScreeningDetailView.as_view(), name='admin_detail'),
]
