"""
Global test configuration fixtures for i18n-harvest tests.

Provides classifier, extractor and project fixtures shared by the unit and
integration suites. All fixtures build fresh objects, so tests never share
mutable state.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from i18n_harvest.classifier import ContentClassifier
from i18n_harvest.config.schema import HarvestConfig, IgnorePatternSet
from i18n_harvest.extractors import ExtractorRegistry
from i18n_harvest.store import KeyStore

from tests.utils.test_helpers import create_test_config


@pytest.fixture
def classifier() -> ContentClassifier:
    """Classifier without ignore patterns."""
    return ContentClassifier()


@pytest.fixture
def registry() -> ExtractorRegistry:
    """Default extractor registry without ignore patterns."""
    return ExtractorRegistry.default()


@pytest.fixture
def key_store() -> KeyStore:
    """Empty key store with default slug limits."""
    return KeyStore()


@pytest.fixture
def ignore_patterns() -> IgnorePatternSet:
    """A small ignore set exercising every list."""
    return IgnorePatternSet(
        exact=["Lorem ipsum dolor"],
        exact_insensitive=["acme corporation"],
        contains=["INTERNAL"],
        ignore_attributes=["data-testid", "title"],
    )


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Project root with an empty source directory and locale directory."""
    (tmp_path / "src").mkdir()
    (tmp_path / "i18n" / "locales").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def harvest_config() -> HarvestConfig:
    """Configuration with one target locale in the single-file layout."""
    return create_test_config(
        locales={"base": "en", "targets": ["de"], "layout": "single"},
        extraction={"concurrency": 2},
    )


@pytest.fixture
def restore_root_logger() -> Generator[None, None, None]:
    """Restore the root logger after tests that reconfigure logging."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
