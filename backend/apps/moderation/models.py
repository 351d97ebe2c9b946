"""
Moderation models.

Tables: sensitive_words
"""

from django.db import models


class SensitiveWord(models.Model):
    """
    A word that user-submitted text must not contain
    """
    word = models.CharField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'sensitive_words'
        ordering = ['-created_at']

    def __str__(self):
        return self.word
