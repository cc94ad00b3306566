"""Dialect extractors turning source text into classified, kind-tagged candidates."""

from .base import (
    CandidateKind,
    ExtractedCandidate,
    ExtractionResult,
    Extractor,
    SourceLocation,
)
from .registry import ExtractorRegistry, extract
from .script import GenericExtractor, PythonExtractor, ScriptExtractor
from .template import BladeExtractor, TemplateExtractor

__all__ = [
    "BladeExtractor",
    "CandidateKind",
    "ExtractedCandidate",
    "ExtractionResult",
    "Extractor",
    "ExtractorRegistry",
    "GenericExtractor",
    "PythonExtractor",
    "ScriptExtractor",
    "SourceLocation",
    "TemplateExtractor",
    "extract",
]
