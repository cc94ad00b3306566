"""Tests for slug and namespace-segment helpers."""

from __future__ import annotations

import pytest

from i18n_harvest.store.slugs import (
    FALLBACK_SLUG,
    humanize_slug,
    is_pascal_case,
    slugify_for_key,
    to_pascal_case,
)


class TestSlugifyForKey:
    """Base slug derivation."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Save changes", "save_changes"),
            ("Café au lait", "cafe_au_lait"),
            ("Hello {name}, welcome back", "hello_name_welcome_back"),
            ("One two three four five six", "one_two_three_four"),
            ("  Spaces   everywhere  ", "spaces_everywhere"),
        ],
    )
    def test_slugs(self, text: str, expected: str) -> None:
        """Test normalization, word splitting and the default word limit."""
        assert slugify_for_key(text) == expected

    def test_fallback_for_no_words(self) -> None:
        """Test that text without ASCII alphanumerics gets the fallback slug."""
        assert slugify_for_key("¡¿…!?") == FALLBACK_SLUG
        assert slugify_for_key("日本語") == "text"

    def test_max_words(self) -> None:
        """Test the configurable word limit."""
        assert slugify_for_key("Welcome back friend", max_words=1) == "welcome"

    def test_max_length_strips_trailing_separator(self) -> None:
        """Test that truncation never leaves a dangling underscore."""
        assert slugify_for_key("abcdef ghijkl", max_length=7) == "abcdef"


class TestSegments:
    """Namespace segment casing."""

    @pytest.mark.parametrize(
        ("segment", "expected"),
        [
            ("user-settings", "UserSettings"),
            ("userProfile", "UserProfile"),
            ("my_page", "MyPage"),
            ("billing", "Billing"),
            ("Already", "Already"),
        ],
    )
    def test_to_pascal_case(self, segment: str, expected: str) -> None:
        """Test that separators and camel boundaries start new words."""
        assert to_pascal_case(segment) == expected

    def test_is_pascal_case(self) -> None:
        """Test PascalCase detection for file names."""
        assert is_pascal_case("InvoiceList") is True
        assert is_pascal_case("invoiceList") is False
        assert is_pascal_case("Invoice-list") is False
        assert is_pascal_case("") is False

    def test_humanize_slug(self) -> None:
        """Test that slugs turn back into text with only the first letter raised."""
        assert humanize_slug("save_changes") == "Save changes"
        assert humanize_slug("SIGN-UP_now") == "SIGN UP now"

    def test_humanize_slug_keeps_acronyms(self) -> None:
        """Test that acronyms inside the slug keep their capitals."""
        assert humanize_slug("download_PDF_report") == "Download PDF report"
        assert humanize_slug("API_keys") == "API keys"
