"""
Character-level template scanner.

An explicit finite-state machine over the raw character stream that turns
a bracket/mustache template into structural events. It never backtracks;
at most it leaves the current character unconsumed for the next state.
Malformed input never raises: scanning stops at the failure point and the
events determined so far are returned.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import final

from .events import Attribute, Expression, TagClose, TagOpen, TemplateEvent, TextRun
from .expressions import EXPRESSION_OPEN, ExpressionSpan, find_expression_end

logger = logging.getLogger(__name__)

# Regions whose contents are skipped rather than tokenized as text
VERBATIM_TAGS: frozenset[str] = frozenset({"script", "style"})

# Elements that never hold children and so never enter the tag stack
VOID_ELEMENTS: frozenset[str] = frozenset(
    {
        "area", "base", "br", "col", "embed", "hr", "img", "input", "link",
        "meta", "param", "source", "track", "wbr",
    }
)

_TAG_NAME_EXTRA = frozenset("_:-.")
_ATTR_NAME_EXTRA = frozenset("_:@#.-[]()*$")
_ATTR_START_EXTRA = frozenset("_:@#[(*")


class ScanState(Enum):
    """States of the template scanner."""

    TEXT = auto()
    TAG_NAME = auto()
    TAG_SPACE = auto()
    ATTR_NAME = auto()
    ATTR_VALUE = auto()
    TAG_CLOSE = auto()
    COMMENT = auto()
    VERBATIM_BLOCK = auto()


def _is_tag_name_char(char: str) -> bool:
    return char.isalnum() or char in _TAG_NAME_EXTRA


def _is_attr_name_char(char: str) -> bool:
    return char.isalnum() or char in _ATTR_NAME_EXTRA


@final
class TemplateScanner:
    """
    Scanner for one template document.

    Each call to :meth:`scan` starts from a clean state, so an instance can
    be reused for several documents (but not concurrently).
    """

    def __init__(self) -> None:
        self._reset("")

    def _reset(self, template: str) -> None:
        self.template: str = template
        self.events: list[TemplateEvent] = []
        self.stack: list[str] = []
        self.state: ScanState = ScanState.TEXT
        self.pos: int = 0
        self.text_start: int = 0
        self.text_spans: list[ExpressionSpan] = []
        self.tag_name: str = ""
        self.tag_position: int = 0
        self.attr_name: str = ""
        self.attr_position: int = 0
        self.attr_name_done: bool = False
        self.value_start: int | None = None
        self.value_quote: str = ""
        self.verbatim_tag: str = ""
        self.stopped: bool = False

    @property
    def parent(self) -> str | None:
        """Nearest enclosing open tag, if any."""
        return self.stack[-1] if self.stack else None

    def scan(self, template: str) -> list[TemplateEvent]:
        """
        Tokenize a template into structural events.

        Args:
            template: Raw template text

        Returns:
            list[TemplateEvent]: Events in document order
        """
        self._reset(template)
        handlers = {
            ScanState.TEXT: self._scan_text,
            ScanState.TAG_NAME: self._scan_tag_name,
            ScanState.TAG_SPACE: self._scan_tag_space,
            ScanState.ATTR_NAME: self._scan_attr_name,
            ScanState.ATTR_VALUE: self._scan_attr_value,
            ScanState.TAG_CLOSE: self._scan_tag_close,
            ScanState.COMMENT: self._scan_comment,
            ScanState.VERBATIM_BLOCK: self._scan_verbatim,
        }

        while self.pos < len(template) and not self.stopped:
            handlers[self.state](template[self.pos])

        if self.state is ScanState.TEXT and not self.stopped:
            self._flush_text(len(template))
        elif self.state is not ScanState.TEXT:
            logger.debug(f"Template ended inside {self.state.name} at offset {self.pos}")

        return self.events

    def _stop(self, reason: str) -> None:
        logger.debug(f"Stopping scan at offset {self.pos}: {reason}")
        self.stopped = True

    def _flush_text(self, end: int) -> None:
        raw = self.template[self.text_start : end]
        if raw.strip():
            parent = self.parent
            spans = tuple(self.text_spans)
            self.events.append(TextRun(raw, parent, self.text_start, spans))
            for span in spans:
                self.events.append(
                    Expression(
                        span.inner(raw),
                        parent,
                        self.text_start + span.start,
                        self.text_start + span.end,
                    )
                )
        self.text_spans = []

    def _resume_text(self, pos: int) -> None:
        self.state = ScanState.TEXT
        self.pos = pos
        self.text_start = pos

    def _open_tag(self, self_closing: bool, next_pos: int) -> None:
        name = self.tag_name
        self.events.append(TagOpen(name, self.tag_position, self_closing))
        lowered = name.lower()

        if not self_closing and lowered in VERBATIM_TAGS:
            self.verbatim_tag = lowered
            self.state = ScanState.VERBATIM_BLOCK
            self.pos = next_pos
            return

        if not self_closing and lowered not in VOID_ELEMENTS:
            self.stack.append(name)
        self._resume_text(next_pos)

    def _end_tag_at_slash(self) -> None:
        if self.template.startswith("/>", self.pos):
            self._open_tag(True, self.pos + 2)
        else:
            self.pos += 1

    def _emit_attribute(self, value: str | None) -> None:
        self.events.append(
            Attribute(self.tag_name, self.attr_name, value, self.attr_position, self.value_quote)
        )
        self.attr_name = ""
        self.attr_name_done = False
        self.value_start = None
        self.value_quote = ""

    def _scan_text(self, char: str) -> None:
        template = self.template
        if char == "{" and template.startswith(EXPRESSION_OPEN, self.pos):
            end = find_expression_end(template, self.pos)
            if end is None:
                self._flush_text(self.pos)
                self._stop("unterminated expression")
                return
            self.text_spans.append(
                ExpressionSpan(self.pos - self.text_start, end - self.text_start)
            )
            self.pos = end
            return

        if char != "<":
            self.pos += 1
            return

        if template.startswith("<!--", self.pos):
            self._flush_text(self.pos)
            self.state = ScanState.COMMENT
            self.pos += 4
            return

        following = template[self.pos + 1 : self.pos + 2]
        if following == "/":
            self._flush_text(self.pos)
            self.state = ScanState.TAG_CLOSE
            self.tag_name = ""
            self.tag_position = self.pos
            self.pos += 2
        elif following.isalpha():
            self._flush_text(self.pos)
            self.state = ScanState.TAG_NAME
            self.tag_name = ""
            self.tag_position = self.pos
            self.pos += 1
        else:
            # A stray "<" is ordinary text
            self.pos += 1

    def _scan_comment(self, char: str) -> None:
        if char == "-" and self.template.startswith("-->", self.pos):
            self._resume_text(self.pos + 3)
        else:
            self.pos += 1

    def _scan_tag_name(self, char: str) -> None:
        if _is_tag_name_char(char):
            self.tag_name += char
            self.pos += 1
        elif char == ">":
            self._open_tag(False, self.pos + 1)
        elif char == "/":
            self._end_tag_at_slash()
        elif char.isspace():
            self.state = ScanState.TAG_SPACE
            self.pos += 1
        else:
            self.pos += 1

    def _scan_tag_space(self, char: str) -> None:
        if char == ">":
            self._open_tag(False, self.pos + 1)
        elif char == "/":
            self._end_tag_at_slash()
        elif char.isalpha() or char in _ATTR_START_EXTRA:
            self.state = ScanState.ATTR_NAME
            self.attr_name = char
            self.attr_position = self.pos
            self.attr_name_done = False
            self.pos += 1
        else:
            self.pos += 1

    def _scan_attr_name(self, char: str) -> None:
        if char == "=":
            self.state = ScanState.ATTR_VALUE
            self.value_start = None
            self.pos += 1
        elif char.isspace():
            self.attr_name_done = True
            self.pos += 1
        elif _is_attr_name_char(char) and not self.attr_name_done:
            self.attr_name += char
            self.pos += 1
        else:
            # Boolean attribute; the current character belongs to the tag
            self._emit_attribute(None)
            self.state = ScanState.TAG_SPACE

    def _scan_attr_value(self, char: str) -> None:
        if self.value_start is None:
            if char.isspace():
                self.pos += 1
            elif char in ("'", '"'):
                self.value_quote = char
                self.value_start = self.pos + 1
                self.pos += 1
            elif char == ">":
                self._emit_attribute("")
                self._open_tag(False, self.pos + 1)
            else:
                self.value_quote = ""
                self.value_start = self.pos
                self.pos += 1
            return

        if self.value_quote:
            if char == self.value_quote:
                self._emit_attribute(self.template[self.value_start : self.pos])
                self.state = ScanState.TAG_SPACE
                self.pos += 1
            elif char == "{" and self.template.startswith(EXPRESSION_OPEN, self.pos):
                end = find_expression_end(self.template, self.pos)
                if end is None:
                    self._stop("unterminated expression in attribute value")
                    return
                self.pos = end
            else:
                self.pos += 1
            return

        if char.isspace() or char == ">" or self.template.startswith("/>", self.pos):
            self._emit_attribute(self.template[self.value_start : self.pos])
            self.state = ScanState.TAG_SPACE
        else:
            self.pos += 1

    def _scan_tag_close(self, char: str) -> None:
        if char == ">":
            closing = self.tag_name.lower()
            if any(open_tag.lower() == closing for open_tag in self.stack):
                while self.stack:
                    if self.stack.pop().lower() == closing:
                        break
            self.events.append(TagClose(self.tag_name, self.tag_position))
            self._resume_text(self.pos + 1)
        else:
            if _is_tag_name_char(char):
                self.tag_name += char
            self.pos += 1

    def _scan_verbatim(self, char: str) -> None:
        closing = self.template.lower().find(f"</{self.verbatim_tag}", self.pos)
        if closing == -1:
            self._stop(f"unterminated <{self.verbatim_tag}> block")
            return
        self.state = ScanState.TAG_CLOSE
        self.tag_name = ""
        self.tag_position = closing
        self.pos = closing + 2


def scan(template: str) -> list[TemplateEvent]:
    """Tokenize a template with a fresh scanner."""
    return TemplateScanner().scan(template)
