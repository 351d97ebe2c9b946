"""
Notes URL configuration.
"""

from django.urls import path
from .views import (
    NoteListView,
    NoteDetailView,
    NoteLikeView,
    NoteFavoriteView,
    LikedNotesView,
    FavoritedNotesView,
    NoteUploadView,
    NoteCategoryListView,
    AdminNoteListView,
    AdminNoteDetailView,
    AdminNoteCategoryListView,
    AdminNoteCategoryDetailView,
)

app_name = 'notes'

urlpatterns = [
    # GET, POST /api/notes
    # Visible notes (public); publish a note
    path('notes', NoteListView.as_view(), name='list'),

    # POST /api/notes/upload
    # Image or video for the note editor (multipart)
    path('notes/upload', NoteUploadView.as_view(), name='upload'),

    # GET /api/notes/user/liked
    path('notes/user/liked', LikedNotesView.as_view(), name='liked'),

    # GET /api/notes/user/favorited
    path('notes/user/favorited', FavoritedNotesView.as_view(), name='favorited'),

    # GET, PATCH, DELETE /api/notes/:id
    path('notes/<int:note_id>', NoteDetailView.as_view(), name='detail'),

    # POST /api/notes/:id/like
    path('notes/<int:note_id>/like', NoteLikeView.as_view(), name='like'),

    # POST /api/notes/:id/favorite
    path('notes/<int:note_id>/favorite', NoteFavoriteView.as_view(), name='favorite'),

    # GET /api/note-categories
    path('note-categories', NoteCategoryListView.as_view(), name='categories'),

    # GET /api/admin/notes
    # Visible and hidden notes (admin)
    path('admin/notes', AdminNoteListView.as_view(), name='admin_list'),

    # GET, PATCH, DELETE /api/admin/notes/:id
    path('admin/notes/<int:note_id>', AdminNoteDetailView.as_view(), name='admin_detail'),

    # GET, POST /api/admin/note-categories
    path('admin/note-categories', AdminNoteCategoryListView.as_view(), name='admin_categories'),

    # GET, PATCH, DELETE /api/admin/note-categories/:id
    path('admin/note-categories/<int:category_id>', AdminNoteCategoryDetailView.as_view(), name='admin_category_detail'),
]
