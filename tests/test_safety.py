"""Unit tests for the safety module."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from interprete.config import DEFAULT_DENYLIST, DEFAULT_SUSPICIOUS_PATTERNS
from interprete.safety import ContentFilter, DenylistContentFilter, FilterVerdict


class TestContentFilterInterface:
    """Tests for the abstract ContentFilter interface."""

    def test_filter_is_abstract(self):
        """Test that ContentFilter cannot be instantiated directly."""
        with pytest.raises(TypeError):
            ContentFilter()  # type: ignore


class TestDenylistContentFilter:
    """Tests for DenylistContentFilter."""

    @pytest.fixture
    def content_filter(self):
        return DenylistContentFilter(denylist=DEFAULT_DENYLIST)

    def test_allows_ordinary_text(self, content_filter):
        """Test that a legal question passes."""
        assert content_filter.classify("¿Qué es un contrato de arrendamiento?") == FilterVerdict.ALLOWED

    def test_blocks_denylisted_word(self, content_filter):
        """Test that a denylisted word is blocked."""
        assert content_filter.classify("spam spam spam") == FilterVerdict.BLOCKED

    def test_match_is_case_insensitive(self, content_filter):
        """Test that matching ignores case."""
        assert content_filter.classify("Esto es SPAM") == FilterVerdict.BLOCKED
        assert content_filter.classify("un Test Repetitivo") == FilterVerdict.BLOCKED

    def test_match_is_substring(self, content_filter):
        """Test that denylisted words embedded in other words are blocked."""
        assert content_filter.is_blocked("antispambot")

    def test_empty_text_is_not_blocked(self, content_filter):
        """Test that empty text is left to the admission layer."""
        assert content_filter.classify("") == FilterVerdict.ALLOWED
        assert content_filter.classify("   ") == FilterVerdict.ALLOWED

    def test_blank_denylist_entries_are_ignored(self):
        """Test that a blank entry does not block everything."""
        content_filter = DenylistContentFilter(denylist=["", "  ", "spam"])
        assert content_filter.denylist == ("spam",)
        assert content_filter.classify("hola") == FilterVerdict.ALLOWED

    def test_patterns_disabled_by_default(self, content_filter):
        """Test that URLs pass when no patterns are configured."""
        assert content_filter.classify("ver https://example.com/ley") == FilterVerdict.ALLOWED

    def test_url_pattern(self):
        """Test that the URL pattern blocks raw links."""
        content_filter = DenylistContentFilter(patterns=DEFAULT_SUSPICIOUS_PATTERNS)
        assert content_filter.classify("ver https://example.com/ley") == FilterVerdict.BLOCKED

    def test_repetition_pattern(self):
        """Test that excessive character repetition is blocked."""
        content_filter = DenylistContentFilter(patterns=DEFAULT_SUSPICIOUS_PATTERNS)
        assert content_filter.classify("ja" * 12) == FilterVerdict.BLOCKED
        assert content_filter.classify("jajaja") == FilterVerdict.ALLOWED

    @given(st.text())
    def test_classify_is_pure(self, text: str):
        """Property test: classifying twice gives the same verdict."""
        content_filter = DenylistContentFilter(
            denylist=DEFAULT_DENYLIST, patterns=DEFAULT_SUSPICIOUS_PATTERNS
        )
        assert content_filter.classify(text) == content_filter.classify(text)

    @given(
        st.text(),
        st.sampled_from(DEFAULT_DENYLIST),
        st.text(),
        st.booleans(),
    )
    def test_text_with_denylisted_word_is_blocked(self, prefix: str, word: str, suffix: str, upper: bool):
        """Property test: any text containing a denylisted word is blocked."""
        content_filter = DenylistContentFilter(denylist=DEFAULT_DENYLIST)
        word = word.upper() if upper else word
        assert content_filter.classify(prefix + word + suffix) == FilterVerdict.BLOCKED

    @given(st.text())
    def test_text_without_denylisted_word_is_allowed(self, text: str):
        """Property test: text is blocked exactly when it contains a denylisted word."""
        content_filter = DenylistContentFilter(denylist=DEFAULT_DENYLIST)
        expected = any(word in text.lower() for word in DEFAULT_DENYLIST)
        assert content_filter.classify(text).is_blocked == expected
