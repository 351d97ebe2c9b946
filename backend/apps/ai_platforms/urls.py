"""
AI platform URL configuration.
"""

from django.urls import path
from .views import (
    AIPlatformListView,
    AIPlatformDetailView,
    AIPlatformModelsView,
    AdminAIPlatformListView,
    AdminAIPlatformDetailView,
    AdminAIModelListView,
    AdminAIModelDetailView,
)

app_name = 'ai_platforms'

urlpatterns = [
    # GET /api/ai-platforms
    # List platforms, optionally by type
    path('ai-platforms', AIPlatformListView.as_view(), name='list'),

    # GET /api/ai-platforms/:id
    path('ai-platforms/<int:platform_id>', AIPlatformDetailView.as_view(), name='detail'),

    # GET /api/ai-platforms/:id/models
    path('ai-platforms/<int:platform_id>/models', AIPlatformModelsView.as_view(), name='models'),

    # GET, POST /api/admin/ai-platforms
    path('admin/ai-platforms', AdminAIPlatformListView.as_view(), name='admin_list'),

    # PATCH, DELETE /api/admin/ai-platforms/models/:modelId
    path('admin/ai-platforms/models/<int:model_id>', AdminAIModelDetailView.as_view(), name='admin_model_detail'),

    # GET, PATCH, DELETE /api/admin/ai-platforms/:id
    path('admin/ai-platforms/<int:platform_id>', AdminAIPlatformDetailView.as_view(), name='admin_detail'),

    # GET, POST /api/admin/ai-platforms/:id/models
    path('admin/ai-platforms/<int:platform_id>/models', AdminAIModelListView.as_view(), name='admin_models'),
]
