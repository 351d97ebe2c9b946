"""
Sensitive word checking.

The word list is cached for an hour; admin writes drop the cache.
"""

import logging

from django.core.cache import cache
from django.db import IntegrityError

from apps.core.exceptions import ConflictError, NotFoundError, ValidationError
from .models import SensitiveWord

logger = logging.getLogger(__name__)

CACHE_KEY = 'sensitive_words:all'
CACHE_TTL = 60 * 60  # 1 hour


def find_matches(text: str, words) -> list[str]:
    """Words contained in text, case-insensitive, in word-list order"""
    if not text:
        return []
    haystack = text.lower()
    return [word for word in words if word and word.lower() in haystack]


class SensitiveWordService:
    """
    Word list management and text checks
    """

    def get_words(self) -> list[str]:
        words = cache.get(CACHE_KEY)
        if words is None:
            words = list(SensitiveWord.objects.order_by('id').values_list('word', flat=True))
            cache.set(CACHE_KEY, words, timeout=CACHE_TTL)
        return words

    def refresh_cache(self) -> None:
        cache.delete(CACHE_KEY)

    def check_sensitive_words(self, text: str) -> tuple[bool, list[str]]:
        """
        Returns:
            Tuple of (is_sensitive, matched_words)
        """
        matched = find_matches(text, self.get_words())
        return bool(matched), matched

    def check_multiple_texts(self, texts) -> tuple[bool, list[str]]:
        """Check several fields at once; matches are de-duplicated"""
        matched = []
        for text in texts:
            for word in self.check_sensitive_words(text)[1]:
                if word not in matched:
                    matched.append(word)
        return bool(matched), matched

    def ensure_clean(self, *texts, prefix: str = '内容包含敏感词') -> None:
        """
        Raises:
            ValidationError: 400 listing every matched word
        """
        is_sensitive, matched = self.check_multiple_texts(texts)
        if is_sensitive:
            logger.info(f'Rejected text containing sensitive words: {matched}')
            raise ValidationError(
                f'{prefix}：{", ".join(matched)}',
                code='SENSITIVE_CONTENT',
                details={'matchedWords': matched},
            )

    def list_words(self):
        return SensitiveWord.objects.all()

    def create_word(self, word: str) -> SensitiveWord:
        word = word.strip()
        if not word:
            raise ValidationError('敏感词不能为空')
        if SensitiveWord.objects.filter(word=word).exists():
            raise ConflictError(f'敏感词 "{word}" 已存在')
        try:
            created = SensitiveWord.objects.create(word=word)
        except IntegrityError:
            raise ConflictError(f'敏感词 "{word}" 已存在')
        self.refresh_cache()
        return created

    def delete_word(self, word_id: int) -> None:
        deleted, _ = SensitiveWord.objects.filter(id=word_id).delete()
        if not deleted:
            raise NotFoundError('敏感词不存在')
        self.refresh_cache()


# Create singleton instance
sensitive_word_service = SensitiveWordService()
