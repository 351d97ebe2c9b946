"""
Notes: long-form tutorials and write-ups grouped into categories.

Tables: note_categories, notes
"""

from django.db import models

from apps.authentication.models import User


class NoteStatus(models.TextChoices):
    VISIBLE = 'VISIBLE', '可见'
    HIDDEN_BY_ADMIN = 'HIDDEN_BY_ADMIN', '隐藏'
    ADMIN_DELETED = 'ADMIN_DELETED', '管理员删除'


class NoteCategory(models.Model):
    """
    Admin-managed note category
    """
    name = models.CharField(unique=True, max_length=50)
    description = models.CharField(max_length=500, blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'note_categories'
        ordering = ['id']

    def __str__(self):
        return self.name


class Note(models.Model):
    """
    A note written by a user

    content holds either an HTML string or the editor's JSON document.
    """
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='notes')
    category = models.ForeignKey(NoteCategory, on_delete=models.PROTECT, related_name='notes')
    title = models.CharField(max_length=200)
    content = models.JSONField()
    cover_image_url = models.CharField(max_length=500, blank=True, default='')
    status = models.CharField(max_length=20, choices=NoteStatus.choices, default=NoteStatus.VISIBLE)
    views = models.PositiveIntegerField(default=0)
    likes_count = models.PositiveIntegerField(default=0)
    favorites_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'notes'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'created_at'], name='notes_status_created_idx'),
            models.Index(fields=['user', 'status'], name='notes_user_status_idx'),
            models.Index(fields=['category'], name='notes_category_idx'),
        ]

    def __str__(self):
        return f'Note {self.id} by {self.user_id}'
