"""
Basic exception classes for i18n-harvest.

This module contains the error taxonomy shared by the tokenizer, the
extractors, the key store and the run pipeline. It has no intra-package
imports so every layer can raise these without creating import cycles.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class ErrorSeverity(Enum):
    """Error severity levels for classification and handling."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors for appropriate handling strategies."""

    PARSE = "parse"
    IO = "io"
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    UNKNOWN = "unknown"


class HarvestError(Exception):
    """Base exception class for i18n-harvest specific errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: object | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message)
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.context: object | None = context
        self.recoverable: bool = recoverable


class StructuralParseError(HarvestError):
    """
    A locale store could not be parsed or is not a tree of strings.

    Fatal: the run aborts before any output is written so that no
    partially-merged tree ever reaches disk.
    """

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.PARSE,
            severity=ErrorSeverity.CRITICAL,
            context=context,
            recoverable=False,
        )
        self.path: Path | None = path


class SourceReadError(HarvestError):
    """A single source file could not be read; the run skips it."""

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.IO,
            severity=ErrorSeverity.LOW,
            context=context,
            recoverable=True,
        )
        self.path: Path | None = path


class ConfigurationError(HarvestError):
    """Configuration errors, including malformed ignore-pattern files."""

    def __init__(
        self,
        message: str,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            context=context,
            recoverable=False,
        )


class KeyPathConflictError(HarvestError):
    """A key path needs a branch where the locale tree already holds a leaf, or vice versa."""

    def __init__(
        self,
        message: str,
        key: str,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.HIGH,
            context=context,
            recoverable=False,
        )
        self.key: str = key
