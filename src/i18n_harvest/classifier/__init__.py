"""Layered content classifier deciding which strings are translatable prose."""

from .normalize import normalize_special_chars
from .pipeline import (
    ClassificationResult,
    ContentClassifier,
    RejectionReason,
    classify,
)

__all__ = [
    "ClassificationResult",
    "ContentClassifier",
    "RejectionReason",
    "classify",
    "normalize_special_chars",
]
