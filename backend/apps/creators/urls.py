"""
Creators URL configuration.
"""

from django.urls import path
from .views import (
    CreatorListView,
    CreatorDetailView,
    CreatorByUserView,
    CreatorUploadView,
    CreatorScoreView,
    CreatorScoreAllView,
    CreatorSyncView,
)

app_name = 'creators'

urlpatterns = [
    # GET, POST /api/creators
    # Creators by score (public); create or update my profile
    path('creators', CreatorListView.as_view(), name='list'),

    # POST /api/creators/upload
    # Showcase image, video or audio (multipart)
    path('creators/upload', CreatorUploadView.as_view(), name='upload'),

    # POST /api/creators/score/update-all (admin)
    path('creators/score/update-all', CreatorScoreAllView.as_view(), name='score_all'),

    # POST /api/creators/score/update/:userId
    path('creators/score/update/<int:user_id>', CreatorScoreView.as_view(), name='score'),

    # POST /api/creators/sync-all
    # Copy nickname and avatar from the accounts (admin)
    path('creators/sync-all', CreatorSyncView.as_view(), name='sync_all'),

    # GET /api/creators/user/:userId
    path('creators/user/<int:user_id>', CreatorByUserView.as_view(), name='by_user'),

    # GET /api/creators/:id
    path('creators/<int:creator_id>', CreatorDetailView.as_view(), name='detail'),
]
