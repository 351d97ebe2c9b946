"""
Sensitive word URL configuration.
"""

from django.urls import path
from .views import SensitiveWordListView, SensitiveWordDetailView

app_name = 'moderation'

urlpatterns = [
    # GET, POST /api/admin/sensitive-words
    # List or add sensitive words (admin)
    path('admin/sensitive-words', SensitiveWordListView.as_view(), name='sensitive_words'),

    # DELETE /api/admin/sensitive-words/:id
    # Remove a sensitive word (admin)
    path('admin/sensitive-words/<int:word_id>', SensitiveWordDetailView.as_view(), name='sensitive_word_detail'),
]
