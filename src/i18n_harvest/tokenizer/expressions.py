"""
Quote-aware expression and container helpers.

Expressions embedded in templates legitimately contain string literals
with their own braces (``{{ ok ? '}' : 'x' }}``), so the end of an
expression is found by counting braces outside of string literals rather
than by searching for the next closing delimiter.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import NamedTuple

EXPRESSION_OPEN = "{{"
EXPRESSION_CLOSE = "}}"
STRING_QUOTES = frozenset({"'", '"', "`"})


class ExpressionSpan(NamedTuple):
    """Half-open ``[start, end)`` range of an expression, delimiters included."""

    start: int
    end: int

    def inner(self, text: str) -> str:
        """Return the expression source without delimiters or outer whitespace."""
        return text[self.start + len(EXPRESSION_OPEN) : self.end - len(EXPRESSION_CLOSE)].strip()


class ContainerSpan(NamedTuple):
    """Half-open range of a container tag's inner content."""

    start: int
    end: int


def find_expression_end(text: str, start: int) -> int | None:
    """
    Find the end of the expression opening at ``start``.

    Depth starts at the width of the opening delimiter; ``{`` increments
    and ``}`` decrements it, except inside a quoted string. A quote closes
    its string unless the previous character is a backslash.

    Args:
        text: Text containing the expression
        start: Index of the opening ``{{``

    Returns:
        int | None: Index just past the closing ``}}``, or None when the
        expression is unterminated
    """
    depth = len(EXPRESSION_OPEN)
    quote: str | None = None
    pos = start + len(EXPRESSION_OPEN)

    while pos < len(text):
        char = text[pos]
        if quote is not None:
            if char == quote and text[pos - 1] != "\\":
                quote = None
        elif char in STRING_QUOTES:
            quote = char
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return pos + 1
        pos += 1

    return None


def expression_spans(text: str) -> list[ExpressionSpan]:
    """
    List every embedded expression in ``text``.

    Scanning stops at the first unterminated expression; the spans found
    before it are still returned.
    """
    spans: list[ExpressionSpan] = []
    pos = text.find(EXPRESSION_OPEN)
    while pos != -1:
        end = find_expression_end(text, pos)
        if end is None:
            break
        spans.append(ExpressionSpan(pos, end))
        pos = text.find(EXPRESSION_OPEN, end)
    return spans


def replace_expressions(
    text: str,
    replacement: Callable[[str], str],
    spans: list[ExpressionSpan] | tuple[ExpressionSpan, ...] | None = None,
) -> str:
    """
    Replace each embedded expression with ``replacement(inner_source)``.

    Args:
        text: Text containing expressions
        replacement: Maps an expression's source to its substitute
        spans: Precomputed spans for ``text``; computed when omitted

    Returns:
        str: Text with every expression substituted
    """
    if spans is None:
        spans = expression_spans(text)

    parts: list[str] = []
    cursor = 0
    for span in spans:
        parts.append(text[cursor : span.start])
        parts.append(replacement(span.inner(text)))
        cursor = span.end
    parts.append(text[cursor:])
    return "".join(parts)


def find_container(document: str, tag: str = "template") -> ContainerSpan | None:
    """
    Locate the inner content of the first ``<tag>`` container.

    Nested occurrences of the same tag are depth-tracked. An opening tag
    only counts when ``<tag`` is followed by whitespace, ``>`` or ``/`` so
    that longer tag names sharing the prefix are ignored. Without a
    balancing close tag, falls back to a greedy match against the last
    close tag in the document.

    Args:
        document: Full single-file component or page
        tag: Container tag name

    Returns:
        ContainerSpan | None: Inner content range, or None if no container
    """
    opening = re.compile(rf"<{re.escape(tag)}(?=[\s>/])[^>]*>", re.IGNORECASE)
    first = opening.search(document)
    if first is None:
        return None

    open_marker = re.compile(rf"<{re.escape(tag)}(?=[\s>/]|$)", re.IGNORECASE)
    close_marker = re.compile(rf"</{re.escape(tag)}\s*>", re.IGNORECASE)
    content_start = first.end()
    depth = 1
    pos = content_start

    while pos < len(document):
        next_close = close_marker.search(document, pos)
        if next_close is None:
            break

        next_open = open_marker.search(document, pos)
        if next_open is not None and next_open.start() < next_close.start():
            depth += 1
            pos = next_open.end()
            continue

        depth -= 1
        if depth == 0:
            return ContainerSpan(content_start, next_close.start())
        pos = next_close.end()

    greedy = re.compile(
        rf"<{re.escape(tag)}[^>]*>([\s\S]*)</{re.escape(tag)}>", re.IGNORECASE
    ).search(document)
    if greedy is None:
        return None
    return ContainerSpan(greedy.start(1), greedy.end(1))


def extract_container(document: str, tag: str = "template") -> str | None:
    """Return the inner content of the first ``<tag>`` container, if any."""
    span = find_container(document, tag)
    if span is None:
        return None
    return document[span.start : span.end]
