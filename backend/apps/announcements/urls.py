"""
Announcements URL configuration.
"""

from django.urls import path
from .views import (
    ActiveAnnouncementsView,
    AnnouncementViewedView,
    AnnouncementDetailView,
    AdminAnnouncementListView,
    AdminAnnouncementStatsView,
    AdminAnnouncementDetailView,
)

app_name = 'announcements'

urlpatterns = [
    # GET /api/announcements/active
    # Live announcements not yet viewed today (public)
    path('announcements/active', ActiveAnnouncementsView.as_view(), name='active'),

    # POST /api/announcements/view/:id
    # Hide an announcement for the rest of the day
    path('announcements/view/<int:announcement_id>', AnnouncementViewedView.as_view(), name='viewed'),

    # GET /api/announcements/:id
    path('announcements/<int:announcement_id>', AnnouncementDetailView.as_view(), name='detail'),

    # GET, POST /api/admin/announcements
    path('admin/announcements', AdminAnnouncementListView.as_view(), name='admin_list'),

    # GET /api/admin/announcements/stats/overview
    path('admin/announcements/stats/overview', AdminAnnouncementStatsView.as_view(), name='admin_stats'),

    # GET, PATCH, DELETE /api/admin/announcements/:id
    path('admin/announcements/<int:announcement_id>', AdminAnnouncementDetailView.as_view(), name='admin_detail'),
]
