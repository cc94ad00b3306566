"""Typographic normalization applied to every string before classification."""

from __future__ import annotations

import re
import unicodedata

_SINGLE_QUOTES = re.compile("[\\u2018\\u2019\\u201a\\u201b]")
_DOUBLE_QUOTES = re.compile("[\\u201c\\u201d\\u201e\\u201f]")
_DASHES = re.compile("[\\u2013\\u2014\\u2015]")
_SPACES = re.compile("[\\u00a0\\u2000-\\u200a\\u202f\\u205f\\u3000]")
_ZERO_WIDTH = re.compile("[\\u200b-\\u200d\\ufeff]")
_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_special_chars(text: str) -> str:
    """
    Replace typographic variants with their plain ASCII counterparts.

    Curly quotes become straight quotes, long dashes become hyphens, exotic
    spaces become a regular space, zero-width characters are dropped and the
    ellipsis character becomes three dots. The result is NFC-normalized.

    Args:
        text: Raw candidate text

    Returns:
        str: Normalized text (not trimmed)
    """
    normalized = _SINGLE_QUOTES.sub("'", text)
    normalized = _DOUBLE_QUOTES.sub('"', normalized)
    normalized = _DASHES.sub("-", normalized)
    normalized = _SPACES.sub(" ", normalized)
    normalized = _ZERO_WIDTH.sub("", normalized)
    normalized = normalized.replace("\u2026", "...")
    return unicodedata.normalize("NFC", normalized)


def collapse_whitespace(text: str) -> str:
    """Collapse internal whitespace runs to single spaces and trim."""
    return _WHITESPACE_RUN.sub(" ", text).strip()
