"""Configuration loading and validation."""

from .manager import DEFAULT_CONFIG_FILENAME, ConfigManager
from .schema import (
    ExtractionConfig,
    HarvestConfig,
    IgnorePatternSet,
    LocalesConfig,
    PathsConfig,
)

__all__ = [
    "DEFAULT_CONFIG_FILENAME",
    "ConfigManager",
    "ExtractionConfig",
    "HarvestConfig",
    "IgnorePatternSet",
    "LocalesConfig",
    "PathsConfig",
]
