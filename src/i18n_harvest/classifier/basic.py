"""
Shape checks that bracket the classification pipeline.

The first three checks (basic requirements, balanced delimiters and
placeholder-only) run before anything else and reject obviously unusable
input. The common-UI allowlist grants an early accept for frequent UI
phrasing, and the human-text heuristic is the final acceptance gate.
"""

from __future__ import annotations

import re
import unicodedata

MIN_TRANSLATABLE_LENGTH = 2
PLACEHOLDER_FRACTION_LIMIT = 0.7

NEVER_TRANSLATE_WORDS: frozenset[str] = frozenset(
    {
        # Boolean/null values
        "true", "false", "null", "undefined", "nan", "infinity",
        # Common technical terms
        "ok", "id", "url", "uri", "api", "css", "html", "xml", "json", "svg",
        # Size abbreviations
        "xs", "sm", "md", "lg", "xl", "2xl", "3xl", "4xl", "5xl",
        # Common component props
        "primary", "secondary", "tertiary", "success", "warning", "danger",
        "error", "info", "default", "outline", "ghost", "link", "solid", "subtle",
        # HTML elements used as values
        "div", "span", "input", "button", "form", "select", "option", "textarea",
        "table", "tr", "td", "th", "thead", "tbody", "tfoot",
        "ul", "ol", "li", "dl", "dt", "dd",
        "header", "footer", "nav", "main", "aside", "section", "article",
        "h1", "h2", "h3", "h4", "h5", "h6", "p", "a", "img", "video", "audio",
    }
)

COMMON_UI_WORDS: frozenset[str] = frozenset(
    {
        "back", "next", "cancel", "done", "close", "save", "delete", "edit",
        "view", "add", "create", "update", "remove", "search", "filter", "sort",
        "export", "import", "upload", "download", "share", "copy", "paste",
        "cut", "undo", "redo", "refresh", "reload", "reset", "clear", "submit",
        "send", "continue", "skip", "finish", "start", "stop", "pause", "play",
        "resume", "retry", "confirm", "ok", "yes", "no", "all", "none", "any",
        "other", "more", "less",
    }
)

# Placeholder syntaxes: {{ expr }}, {name}, ${expr}, :name, %s
PLACEHOLDER_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\{\{\s*[^}]+\s*\}\}"),
    re.compile(r"\{[a-zA-Z_][a-zA-Z0-9_.]*\}"),
    re.compile(r"\$\{[^}]+\}"),
    re.compile(r":[a-zA-Z_][a-zA-Z0-9_]*"),
    re.compile(r"%[sdifboOcj%]"),
)

_ASCII_LETTER = re.compile(r"[a-zA-Z]")
_WHITESPACE = re.compile(r"\s")
_APOSTROPHE = re.compile(r"[A-Za-z]'[A-Za-z]")

_COMMON_UI_PATTERNS: tuple[re.Pattern[str], ...] = (
    # Action words, optionally followed by parameters: "Delete {count} items"
    re.compile(
        r"^(cancel|delete|edit|view|add|create|update|remove|search|filter|sort|"
        r"export|import|upload|download|share|copy|paste|cut|undo|redo|refresh|"
        r"reload|reset|clear|submit|send|continue|skip|finish|start|stop|pause|"
        r"play|resume|retry|confirm|select|choose|pick|open|close|save|load|back|"
        r"next|previous|forward|done|ok|yes|no)",
        re.IGNORECASE,
    ),
    # Labels: "Found {total} matches", "Total: {count}"
    re.compile(
        r"^(found|extracted|uploaded|downloaded|processed|selected|total|valid|"
        r"invalid|detected|configured|showing|displaying|loading|saving)\s+",
        re.IGNORECASE,
    ),
    # Status messages: "Import completed successfully"
    re.compile(
        r"(successfully|failed|completed|started|finished|resumed|cancelled|"
        r"paused|stopped|pending|processing|loading|ready)",
        re.IGNORECASE,
    ),
    # Prompts: "Enter your password"
    re.compile(
        r"^(select|choose|enter|type|provide|upload|download|connect|configure|"
        r"setup|install)\s+(a|an|the|your)\s+",
        re.IGNORECASE,
    ),
    # Durations: "Last 2 years"
    re.compile(
        r"^(last|past|next|in|within|after|before)\s+\d+\s+"
        r"(second|minute|hour|day|week|month|year)s?\b",
        re.IGNORECASE,
    ),
    # Hints: "or drag and drop", "Click to upload"
    re.compile(
        r"^(or|and|to|for|with|from|into|onto|click|tap|press|drag|drop)\s+",
        re.IGNORECASE,
    ),
    re.compile(r"\(recommended\)$", re.IGNORECASE),
)

_TRAILING_PUNCTUATION = re.compile(r"[.,:;!?]+$")
_CAPITALIZED_WORD = re.compile(r"^[A-Z][a-zA-Z0-9'&]*$")
_ALL_CAPS_WORD = re.compile(r"^[A-Z0-9_]+$")
_NON_WORD = re.compile(r"[^A-Za-z0-9_]")
_VOWEL = re.compile(r"[aeiou]", re.IGNORECASE)


def _has_letter(text: str) -> bool:
    return any(unicodedata.category(char).startswith("L") for char in text)


def has_basic_requirements(text: str) -> bool:
    """
    Check the minimum shape every translatable string must have.

    Args:
        text: Trimmed, normalized candidate

    Returns:
        bool: False when the text is too short, has no letter, or is a
        single word from the never-translate vocabulary
    """
    if len(text) < MIN_TRANSLATABLE_LENGTH:
        return False
    if not _has_letter(text):
        return False
    if not _WHITESPACE.search(text) and text.lower() in NEVER_TRANSLATE_WORDS:
        return False
    return True


def has_balanced_delimiters(text: str) -> bool:
    """
    Check that brackets and quotes are balanced.

    Apostrophes between two letters ("don't") are not counted as quotes.
    """
    for opening, closing in (("(", ")"), ("[", "]"), ("{", "}")):
        if text.count(opening) != text.count(closing):
            return False

    single_quotes = text.count("'") - len(_APOSTROPHE.findall(text))
    if single_quotes % 2 != 0 or text.count('"') % 2 != 0:
        return False
    return True


def strip_placeholders(text: str) -> str:
    """Remove every recognized placeholder syntax from the text."""
    stripped = text
    for pattern in PLACEHOLDER_PATTERNS:
        stripped = pattern.sub("", stripped)
    return stripped.strip()


def is_placeholder_only(text: str) -> bool:
    """
    Check whether placeholders dominate the text.

    The text is placeholder-only when placeholder syntax covers more than
    70% of its characters, or when nothing with a letter remains once the
    placeholders, punctuation and whitespace are stripped.
    """
    if not text:
        return True

    placeholder_length = sum(
        len(match) for pattern in PLACEHOLDER_PATTERNS for match in pattern.findall(text)
    )
    if placeholder_length > len(text) * PLACEHOLDER_FRACTION_LIMIT:
        return True

    remainder = "".join(
        char
        for char in strip_placeholders(text)
        if not char.isspace() and not unicodedata.category(char).startswith("P")
    )
    return not remainder or not _ASCII_LETTER.search(remainder)


def is_common_ui_string(text: str) -> bool:
    """Check the text against the frequent UI phrasing allowlist."""
    if not text:
        return False
    return any(pattern.search(text) for pattern in _COMMON_UI_PATTERNS)


def looks_like_human_text(text: str) -> bool:
    """
    Final acceptance gate.

    Multi-word input passes when at least half of its words contain a vowel
    and are two characters or longer. A single word passes when it is
    capitalized, ALL-CAPS, or a known short UI action word.
    """
    words = text.split()
    if not words:
        return False

    if len(words) == 1:
        word = _TRAILING_PUNCTUATION.sub("", words[0])
        if _CAPITALIZED_WORD.match(word):
            return True
        if _ALL_CAPS_WORD.match(word) and any(char.isupper() for char in word):
            return True
        # camelCase, snake_case and kebab-case identifiers fall through here
        return word.lower() in COMMON_UI_WORDS

    valid_words = 0
    for word in words:
        cleaned = _NON_WORD.sub("", word)
        if cleaned and len(cleaned) >= 2 and _VOWEL.search(cleaned):
            valid_words += 1
    return valid_words >= len(words) * 0.5
