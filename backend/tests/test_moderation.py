"""
Tests for the sensitive word list and text checks.
"""

import pytest
from hypothesis import given, strategies as st, settings

from apps.core.exceptions import ValidationError
from apps.moderation.models import SensitiveWord
from apps.moderation.services import find_matches, sensitive_word_service

ASCII = 'abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789 '


class TestFindMatches:
    """Pure matching logic"""

    def test_case_insensitive(self):
        assert find_matches('Buy CHEAP pills', ['cheap']) == ['cheap']

    def test_keeps_word_list_order(self):
        assert find_matches('b then a', ['a', 'b']) == ['a', 'b']

    def test_empty_text(self):
        assert find_matches('', ['a']) == []
        assert find_matches(None, ['a']) == []

    @given(
        st.text(alphabet=ASCII, min_size=1, max_size=10),
        st.text(alphabet=ASCII, max_size=20),
        st.text(alphabet=ASCII, max_size=20),
    )
    @settings(max_examples=100)
    def test_embedded_word_is_always_found(self, word, before, after):
        assert word in find_matches(before + word + after, [word])

    @given(st.lists(st.text(min_size=1, max_size=5), max_size=10), st.text(max_size=30))
    @settings(max_examples=100)
    def test_matches_are_a_subset_of_words(self, words, text):
        assert set(find_matches(text, words)) <= set(words)


@pytest.mark.django_db
class TestSensitiveWordService:
    """Cached word list"""

    def test_ensure_clean_lists_every_match(self):
        SensitiveWord.objects.create(word='广告')
        SensitiveWord.objects.create(word='spam')

        with pytest.raises(ValidationError) as exc:
            sensitive_word_service.ensure_clean('标题有广告', 'and SPAM here')

        assert exc.value.code == 'SENSITIVE_CONTENT'
        assert exc.value.message == '内容包含敏感词：广告, spam'
        assert exc.value.details == {'matchedWords': ['广告', 'spam']}

    def test_clean_text_passes(self):
        SensitiveWord.objects.create(word='广告')
        sensitive_word_service.ensure_clean('一张好看的图')

    def test_create_refreshes_cache(self):
        assert sensitive_word_service.get_words() == []

        sensitive_word_service.create_word('  违禁  ')

        assert sensitive_word_service.get_words() == ['违禁']

    def test_delete_refreshes_cache(self):
        word = sensitive_word_service.create_word('违禁')
        sensitive_word_service.get_words()

        sensitive_word_service.delete_word(word.id)

        assert sensitive_word_service.get_words() == []


@pytest.mark.django_db
class TestSensitiveWordViews:
    """/api/admin/sensitive-words"""

    def test_admin_crud(self, admin_client):
        created = admin_client.post('/api/admin/sensitive-words', {'word': '广告'})
        assert created.status_code == 201

        listed = admin_client.get('/api/admin/sensitive-words')
        assert [item['word'] for item in listed.json()] == ['广告']

        deleted = admin_client.delete(f'/api/admin/sensitive-words/{created.json()["id"]}')
        assert deleted.status_code == 200
        assert not SensitiveWord.objects.exists()

    def test_duplicate_word(self, admin_client):
        admin_client.post('/api/admin/sensitive-words', {'word': '广告'})
        response = admin_client.post('/api/admin/sensitive-words', {'word': '广告'})

        assert response.status_code == 409

    def test_missing_word(self, admin_client):
        assert admin_client.delete('/api/admin/sensitive-words/999').status_code == 404

    def test_requires_admin(self, client_for, premium_user):
        response = client_for(premium_user).get('/api/admin/sensitive-words')

        assert response.status_code == 403
        assert response.json()['error']['code'] == 'FORBIDDEN'
