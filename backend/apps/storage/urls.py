"""
Storage URL configuration.
"""

from django.urls import path
from .views import (
    UploadView,
    AvatarUploadView,
    PublicUploadLimitsView,
    PublicModuleUploadLimitView,
    AdminUploadLimitsView,
    AdminUploadStatsView,
    AdminModuleUploadLimitView,
    StorageSettingsView,
    StorageTestView,
    StorageStatsView,
)

app_name = 'storage'

urlpatterns = [
    # POST /api/storage/upload
    # Upload a file (multipart: file, folder)
    path('storage/upload', UploadView.as_view(), name='upload'),

    # POST /api/storage/upload-avatar
    # Upload and set the current user's avatar
    path('storage/upload-avatar', AvatarUploadView.as_view(), name='upload_avatar'),

    # GET /api/public/settings/upload-limits
    # All module upload limits (public)
    path('public/settings/upload-limits', PublicUploadLimitsView.as_view(), name='public_upload_limits'),

    # GET /api/public/settings/upload-limits/:module
    # One module's upload limit (public)
    path('public/settings/upload-limits/<slug:module>', PublicModuleUploadLimitView.as_view(),
         name='public_module_upload_limit'),

    # GET, POST /api/admin/settings/storage
    # Read or save OSS and storage configuration (admin)
    path('admin/settings/storage', StorageSettingsView.as_view(), name='storage_settings'),

    # POST /api/admin/settings/storage/test
    # Test an OSS connection (admin)
    path('admin/settings/storage/test', StorageTestView.as_view(), name='storage_test'),

    # GET /api/admin/settings/storage/stats
    # Storage usage statistics (admin)
    path('admin/settings/storage/stats', StorageStatsView.as_view(), name='storage_stats'),

    # GET, POST /api/admin/settings/upload-limits
    # All module upload limits (admin)
    path('admin/settings/upload-limits', AdminUploadLimitsView.as_view(), name='upload_limits'),

    # GET /api/admin/settings/upload-stats
    # File counts and sizes per upload folder (admin)
    path('admin/settings/upload-stats', AdminUploadStatsView.as_view(), name='upload_stats'),

    # GET, POST /api/admin/settings/:module
    # Read or set one module's upload limit (admin); keep last
    path('admin/settings/<slug:module>', AdminModuleUploadLimitView.as_view(), name='module_upload_limit'),
]
