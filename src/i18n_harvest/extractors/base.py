"""
Extractor interface and the records it produces.

Every dialect extractor drives a tokenizer (or a syntax walker for plain
script) over one file's text, hands each candidate span to the shared
classifier and returns the accepted candidates together with per-reason
rejection counts.
"""

from __future__ import annotations

import bisect
import logging
import re
from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from ..classifier import ContentClassifier, RejectionReason
from ..classifier.normalize import collapse_whitespace, normalize_special_chars

logger = logging.getLogger(__name__)


class CandidateKind(Enum):
    """Semantic kind of an extracted string; becomes the second-to-last key segment."""

    TEXT = "text"
    HEADING = "heading"
    BUTTON = "button"
    LABEL = "label"
    PLACEHOLDER = "placeholder"
    TITLE = "title"
    ALT = "alt"
    ARIA_LABEL = "aria_label"
    TOAST = "toast"
    LINK = "link"


@dataclass(frozen=True)
class SourceLocation:
    """File and 1-based line a candidate was found on."""

    file: str
    line: int


@dataclass(frozen=True)
class ExtractedCandidate:
    """One accepted string, tagged with its inferred kind and context."""

    text: str
    kind: CandidateKind
    parent_context: str | None = None
    attribute_name: str | None = None
    source_location: SourceLocation | None = None


@dataclass
class ExtractionResult:
    """Accepted candidates plus rejection counts for one file."""

    candidates: list[ExtractedCandidate] = field(default_factory=list)
    rejections: Counter[RejectionReason] = field(default_factory=Counter)

    @property
    def accepted_count(self) -> int:
        return len(self.candidates)

    @property
    def rejected_count(self) -> int:
        return sum(self.rejections.values())

    def merge(self, other: ExtractionResult) -> None:
        """Fold another result (e.g. an embedded script block) into this one."""
        self.candidates.extend(other.candidates)
        self.rejections.update(other.rejections)


class LineIndex:
    """Maps character offsets to 1-based line numbers."""

    def __init__(self, text: str, first_line: int = 1) -> None:
        self._starts: list[int] = [0]
        self._starts.extend(index + 1 for index, char in enumerate(text) if char == "\n")
        self._first_line: int = first_line

    def line_of(self, offset: int) -> int:
        return bisect.bisect_right(self._starts, offset) - 1 + self._first_line


class Extractor(ABC):
    """
    Base class for dialect extractors.

    Subclasses declare the file suffixes they handle and implement
    :meth:`extract`. The registry picks the first extractor, in priority
    order, whose :meth:`can_handle` accepts a file.
    """

    name: ClassVar[str] = "base"
    suffixes: ClassVar[tuple[str, ...]] = ()

    def __init__(
        self,
        classifier: ContentClassifier,
        ignore_attributes: frozenset[str] = frozenset(),
    ) -> None:
        """
        Initialize the extractor.

        Args:
            classifier: Shared classifier applied to every candidate span
            ignore_attributes: Attribute names whose values are never extracted
        """
        self.classifier: ContentClassifier = classifier
        self.ignore_attributes: frozenset[str] = frozenset(
            name.lower() for name in ignore_attributes
        )

    def can_handle(self, file_hint: str) -> bool:
        """Check whether this extractor handles a file, judged by its name."""
        lowered = file_hint.lower()
        return any(lowered.endswith(f".{suffix}") for suffix in self.suffixes)

    @abstractmethod
    def extract(self, source_text: str, file_hint: str = "") -> ExtractionResult:
        """
        Extract translatable candidates from one file's text.

        Args:
            source_text: Raw file content
            file_hint: File name or relative path, used for the dialect and
                for source locations

        Returns:
            ExtractionResult: Accepted candidates and rejection counts
        """

    def offer(
        self,
        result: ExtractionResult,
        text: str,
        kind: CandidateKind,
        *,
        parent_context: str | None = None,
        attribute_name: str | None = None,
        location: SourceLocation | None = None,
    ) -> bool:
        """
        Classify one candidate span and record the outcome.

        Returns:
            bool: True when the span was accepted
        """
        cleaned = collapse_whitespace(normalize_special_chars(text))
        if not cleaned:
            return False

        verdict = self.classifier.classify(cleaned)
        if not verdict.accepted:
            if verdict.reason is not None:
                result.rejections[verdict.reason] += 1
            logger.debug(f"Rejected {cleaned!r} ({verdict.reason.value if verdict.reason else 'unknown'})")
            return False

        result.candidates.append(
            ExtractedCandidate(
                text=cleaned,
                kind=kind,
                parent_context=parent_context,
                attribute_name=attribute_name,
                source_location=location,
            )
        )
        return True


_SIMPLE_PATH = re.compile(r"^\$?[A-Za-z_][\w$]*(?:(?:\?\.|\.|->|::)\$?[A-Za-z_][\w$]*)*$")
_IDENTIFIER = re.compile(r"[A-Za-z_][\w]*")
_ESCAPE = re.compile(r"\\(.)")


def placeholder_for(expression: str) -> str:
    """
    Render an interpolated expression as a normalized ``{name}`` token.

    Simple property paths keep their last segment (``user.name`` becomes
    ``{name}``); anything more complex becomes ``{value}``.
    """
    source = expression.strip()
    if _SIMPLE_PATH.match(source):
        return "{" + _IDENTIFIER.findall(source)[-1] + "}"
    return "{value}"


def unescape_literal(content: str) -> str:
    """Resolve backslash escapes in a string literal body; line breaks become spaces."""
    return _ESCAPE.sub(lambda match: " " if match.group(1) in "nrt" else match.group(1), content)
