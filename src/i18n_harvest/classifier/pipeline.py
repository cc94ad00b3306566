"""
Fixed-order classification pipeline.

Each step is an independent pure predicate; the first step that rejects
short-circuits the pipeline and supplies the rejection reason. The order
decides which reason is reported, not whether well-formed input is
accepted.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, NamedTuple, final

from .basic import (
    has_balanced_delimiters,
    has_basic_requirements,
    is_common_ui_string,
    is_placeholder_only,
    looks_like_human_text,
)
from .code import is_code_content, is_event_handler_value
from .css import is_css_content, is_spreadsheet_reference
from .markup import contains_binding_syntax, is_html_content
from .normalize import collapse_whitespace, normalize_special_chars
from .technical import is_technical_content, is_url

if TYPE_CHECKING:
    from ..config.schema import IgnorePatternSet


class RejectionReason(Enum):
    """Diagnostic label attached to every rejected candidate."""

    BASIC_REQUIREMENTS = "basic_requirements"
    UNBALANCED_DELIMITERS = "unbalanced_delimiters"
    PLACEHOLDER_ONLY = "placeholder_only"
    CSS_CONTENT = "css_content"
    SPREADSHEET_REFERENCE = "spreadsheet_reference"
    CODE_CONTENT = "code_content"
    EVENT_HANDLER = "event_handler"
    HTML_CONTENT = "html_content"
    TEMPLATE_BINDING = "template_binding"
    TECHNICAL_CONTENT = "technical_content"
    IGNORED_PATTERN = "ignored_pattern"
    NOT_HUMAN_TEXT = "not_human_text"


class ClassificationResult(NamedTuple):
    """Outcome of classifying one string; ``reason`` is set iff rejected."""

    accepted: bool
    reason: RejectionReason | None = None


class PipelineStep(NamedTuple):
    """A rejecting predicate paired with the reason it reports."""

    reason: RejectionReason
    rejects: Callable[[str], bool]


ACCEPTED = ClassificationResult(accepted=True)

PRELIMINARY_STEPS: tuple[PipelineStep, ...] = (
    PipelineStep(RejectionReason.BASIC_REQUIREMENTS, lambda text: not has_basic_requirements(text)),
    PipelineStep(RejectionReason.UNBALANCED_DELIMITERS, lambda text: not has_balanced_delimiters(text)),
    PipelineStep(RejectionReason.PLACEHOLDER_ONLY, is_placeholder_only),
)

STRUCTURAL_STEPS: tuple[PipelineStep, ...] = (
    PipelineStep(RejectionReason.CSS_CONTENT, is_css_content),
    PipelineStep(RejectionReason.SPREADSHEET_REFERENCE, is_spreadsheet_reference),
    PipelineStep(RejectionReason.CODE_CONTENT, is_code_content),
    PipelineStep(RejectionReason.EVENT_HANDLER, is_event_handler_value),
    PipelineStep(RejectionReason.HTML_CONTENT, is_html_content),
    PipelineStep(RejectionReason.TEMPLATE_BINDING, contains_binding_syntax),
    PipelineStep(RejectionReason.TECHNICAL_CONTENT, is_technical_content),
)


def _looks_unambiguously_technical(text: str) -> bool:
    return (
        is_code_content(text)
        or is_html_content(text)
        or contains_binding_syntax(text)
        or is_url(text)
    )


def matches_ignore_patterns(text: str, ignore_patterns: IgnorePatternSet) -> bool:
    """
    Check the caller-supplied ignore set.

    Matching happens on the whitespace-collapsed text: ``exact`` compares
    verbatim, ``exact_insensitive`` compares case-folded and ``contains``
    looks for a substring.
    """
    collapsed = collapse_whitespace(text)
    if collapsed in ignore_patterns.exact:
        return True

    folded = collapsed.casefold()
    if any(folded == value.casefold() for value in ignore_patterns.exact_insensitive):
        return True
    return any(part and part in collapsed for part in ignore_patterns.contains)


@final
class ContentClassifier:
    """
    Decides whether a string is prose that needs translation.

    The classifier holds only the read-only ignore set, so one instance can
    be shared freely between worker threads.
    """

    def __init__(self, ignore_patterns: IgnorePatternSet | None = None) -> None:
        self.ignore_patterns: IgnorePatternSet | None = ignore_patterns

    def classify(self, text: str) -> ClassificationResult:
        """
        Run the pipeline over one candidate string.

        Args:
            text: Candidate text as extracted from source

        Returns:
            ClassificationResult: Acceptance flag plus the rejection reason
        """
        candidate = normalize_special_chars(text).strip()

        for step in PRELIMINARY_STEPS:
            if step.rejects(candidate):
                return ClassificationResult(False, step.reason)

        if is_common_ui_string(candidate) and not _looks_unambiguously_technical(candidate):
            return ACCEPTED

        for step in STRUCTURAL_STEPS:
            if step.rejects(candidate):
                return ClassificationResult(False, step.reason)

        if self.ignore_patterns is not None and matches_ignore_patterns(
            candidate, self.ignore_patterns
        ):
            return ClassificationResult(False, RejectionReason.IGNORED_PATTERN)

        if not looks_like_human_text(candidate):
            return ClassificationResult(False, RejectionReason.NOT_HUMAN_TEXT)

        return ACCEPTED


def classify(
    text: str, ignore_patterns: IgnorePatternSet | None = None
) -> ClassificationResult:
    """Classify a single string without keeping a classifier around."""
    return ContentClassifier(ignore_patterns).classify(text)
