"""Structural events emitted by the template scanner."""

from __future__ import annotations

from dataclasses import dataclass, field

from .expressions import ExpressionSpan


@dataclass(frozen=True)
class TagOpen:
    """An opening tag; emitted once its attributes have been read."""

    name: str
    position: int
    self_closing: bool = False


@dataclass(frozen=True)
class TagClose:
    """A closing tag."""

    name: str
    position: int


@dataclass(frozen=True)
class Attribute:
    """
    One attribute of the tag currently being scanned.

    ``value`` is None for boolean attributes. ``quote`` holds the quote
    character of a quoted value and is empty otherwise.
    """

    tag: str
    name: str
    value: str | None
    position: int
    quote: str = ""


@dataclass(frozen=True)
class TextRun:
    """
    Raw text between tags.

    ``expressions`` lists the embedded ``{{ }}`` regions, relative to
    ``text``, so callers can strip or replace them safely.
    """

    text: str
    parent: str | None
    position: int
    expressions: tuple[ExpressionSpan, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Expression:
    """An embedded expression; ``source`` excludes delimiters and outer whitespace."""

    source: str
    parent: str | None
    start: int
    end: int


TemplateEvent = TagOpen | TagClose | Attribute | TextRun | Expression
