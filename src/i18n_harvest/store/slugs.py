"""Slug and namespace-segment derivation."""

from __future__ import annotations

import re
import unicodedata

FALLBACK_SLUG = "text"
DEFAULT_MAX_WORDS = 4
DEFAULT_MAX_LENGTH = 48

_WORD = re.compile(r"[a-z0-9]+")
_PASCAL_WORD = re.compile(r"[A-Za-z0-9]+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def slugify_for_key(
    text: str,
    max_words: int = DEFAULT_MAX_WORDS,
    max_length: int = DEFAULT_MAX_LENGTH,
) -> str:
    """
    Derive the base slug for a text value.

    The text is NFKD-normalized and stripped of combining marks, so
    ``Café`` becomes ``cafe``. The first ``max_words`` ASCII alphanumeric
    words are lower-cased and joined with underscores, then the result is
    truncated to ``max_length``.

    Args:
        text: Source text
        max_words: Maximum number of words kept
        max_length: Maximum slug length

    Returns:
        str: Slug, or ``text`` when the input has no alphanumeric words
    """
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    words = _WORD.findall(stripped.lower())[:max_words]
    slug = "_".join(words)[:max_length].rstrip("_")
    return slug or FALLBACK_SLUG


def to_pascal_case(segment: str) -> str:
    """Convert a path segment such as ``user-settings`` to ``UserSettings``."""
    spaced = _CAMEL_BOUNDARY.sub(" ", segment)
    return "".join(word[:1].upper() + word[1:] for word in _PASCAL_WORD.findall(spaced))


def is_pascal_case(segment: str) -> bool:
    return bool(segment) and segment[0].isupper() and bool(re.fullmatch(r"[A-Za-z0-9]+", segment))


def humanize_slug(slug: str) -> str:
    """Turn ``save_changes`` into ``Save changes``, keeping the case of later letters."""
    words = [word for word in re.split(r"[_\-\s]+", slug) if word]
    if not words:
        return slug
    sentence = " ".join(words)
    return sentence[:1].upper() + sentence[1:]
