"""Static, priority-ordered registry of dialect extractors."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from ..classifier import ContentClassifier
from .base import ExtractedCandidate, ExtractionResult, Extractor
from .script import GenericExtractor, PythonExtractor, ScriptExtractor
from .template import BladeExtractor, TemplateExtractor

if TYPE_CHECKING:
    from ..config.schema import IgnorePatternSet

logger = logging.getLogger(__name__)


class ExtractorRegistry:
    """
    Selects the extractor for a file by first match in priority order.

    The order is fixed at construction time. Blade comes before the
    generic extractor so ``.blade.php`` views are not scanned as plain PHP.
    """

    def __init__(self, extractors: Sequence[Extractor]) -> None:
        self.extractors: tuple[Extractor, ...] = tuple(extractors)

    @classmethod
    def default(cls, ignore_patterns: IgnorePatternSet | None = None) -> ExtractorRegistry:
        """
        Build the standard registry sharing one classifier.

        Args:
            ignore_patterns: Optional ignore set, also supplying ignored attributes

        Returns:
            ExtractorRegistry: Registry in priority order
        """
        classifier = ContentClassifier(ignore_patterns)
        ignore_attributes = (
            frozenset(ignore_patterns.ignore_attributes) if ignore_patterns else frozenset()
        )
        script = ScriptExtractor(classifier, ignore_attributes)
        return cls(
            [
                BladeExtractor(classifier, ignore_attributes, script),
                TemplateExtractor(classifier, ignore_attributes, script),
                PythonExtractor(classifier, ignore_attributes),
                script,
                GenericExtractor(classifier, ignore_attributes),
            ]
        )

    @property
    def suffixes(self) -> frozenset[str]:
        """Every file suffix some extractor handles."""
        return frozenset(suffix for extractor in self.extractors for suffix in extractor.suffixes)

    def extractor_for(self, file_hint: str) -> Extractor | None:
        """Return the first extractor that handles ``file_hint``, if any."""
        for extractor in self.extractors:
            if extractor.can_handle(file_hint):
                return extractor
        return None

    def can_handle(self, file_hint: str) -> bool:
        return self.extractor_for(file_hint) is not None

    def extract(self, source_text: str, file_hint: str) -> ExtractionResult:
        """
        Extract from one file with the matching extractor.

        Files no extractor handles yield an empty result.
        """
        extractor = self.extractor_for(file_hint)
        if extractor is None:
            logger.debug(f"No extractor for {file_hint}")
            return ExtractionResult()
        return extractor.extract(source_text, file_hint)


def _file_hint(dialect_hint: str) -> str:
    if "." not in dialect_hint:
        return f"source.{dialect_hint}"
    if dialect_hint.startswith("."):
        return f"source{dialect_hint}"
    return dialect_hint


def extract(
    source_text: str,
    dialect_hint: str,
    ignore_patterns: IgnorePatternSet | None = None,
) -> list[ExtractedCandidate]:
    """
    Extract accepted candidates from source text.

    Args:
        source_text: Raw file content
        dialect_hint: A dialect (``vue``), a suffix (``.tsx``) or a file name
        ignore_patterns: Optional caller-supplied ignore set

    Returns:
        list[ExtractedCandidate]: Accepted candidates in source order
    """
    registry = ExtractorRegistry.default(ignore_patterns)
    return registry.extract(source_text, _file_hint(dialect_hint)).candidates
