"""Configuration manager for i18n-harvest.

This module loads the YAML project configuration with Pydantic validation,
applies environment overrides, and loads and merges ignore-pattern files.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..utils.exceptions import ConfigurationError
from .schema import HarvestConfig, IgnorePatternSet

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "i18n-harvest.yml"

# Environment variable -> (section, field)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "I18N_HARVEST_CONCURRENCY": ("extraction", "concurrency"),
    "I18N_HARVEST_MAX_FILE_SIZE": ("extraction", "max_file_size_bytes"),
}


class ConfigManager:
    """
    Loads project configuration and ignore patterns.

    All methods are static; the class only groups the loading logic.
    """

    @staticmethod
    def load_config(config_path: Path) -> HarvestConfig:
        """
        Load and validate configuration from a YAML file.

        A missing file yields the defaults. Environment overrides are applied
        on top of whatever the file provides.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            HarvestConfig: Validated configuration object

        Raises:
            ConfigurationError: If the file is unreadable, is not a YAML
                mapping, or fails validation
        """
        if not config_path.exists():
            logger.debug(f"No configuration file at {config_path}, using defaults")
            config_data: dict[str, object] = {}
        else:
            try:
                with config_path.open("r", encoding="utf-8") as f:
                    raw_config_data: object = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                raise ConfigurationError(
                    f"Invalid configuration file {config_path}: {e}",
                    context={"path": str(config_path)},
                ) from e

            if raw_config_data is None:
                config_data = {}
            elif isinstance(raw_config_data, dict):
                config_data = {str(key): value for key, value in raw_config_data.items()}  # pyright: ignore[reportUnknownVariableType]
            else:
                raise ConfigurationError(
                    f"Configuration file must contain a YAML dictionary, got {type(raw_config_data).__name__}",
                    context={"path": str(config_path)},
                )

        parsed_data = ConfigManager._apply_env_overrides(config_data)

        try:
            return HarvestConfig.model_validate(parsed_data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Configuration validation failed for {config_path}: {e}",
                context={"path": str(config_path), "errors": e.error_count()},
            ) from e

    @staticmethod
    def _apply_env_overrides(config_data: dict[str, object]) -> dict[str, object]:
        """
        Overlay environment variables onto raw configuration data.

        Args:
            config_data: Raw configuration data from YAML

        Returns:
            dict[str, object]: Configuration data with overrides applied
        """
        parsed_data = dict(config_data)

        for env_name, (section, field) in ENV_OVERRIDES.items():
            raw_value = os.environ.get(env_name)
            if raw_value is None or not raw_value.strip():
                continue

            match raw_value.strip():
                case value if value.isdigit():
                    override_value: object = int(value)
                case value:
                    raise ConfigurationError(
                        f"{env_name} must be a positive integer, got {value!r}",
                        context={"variable": env_name},
                    )

            existing = parsed_data.get(section)
            section_data: dict[str, object] = (
                {str(key): value for key, value in existing.items()}  # pyright: ignore[reportUnknownVariableType]
                if isinstance(existing, dict)
                else {}
            )
            section_data[field] = override_value
            parsed_data[section] = section_data
            logger.debug(f"Applied {env_name}={override_value} to {section}.{field}")

        return parsed_data

    @staticmethod
    def load_ignore_patterns(paths: list[Path]) -> IgnorePatternSet:
        """
        Load and merge ignore-pattern JSON files in order.

        Missing files are skipped, so an optional auto-generated file can be
        listed next to the hand-written one.

        Args:
            paths: Ignore-pattern files to merge

        Returns:
            IgnorePatternSet: Concatenation of every existing file's lists

        Raises:
            ConfigurationError: If a file is not valid JSON or has the wrong shape
        """
        merged = IgnorePatternSet()

        for path in paths:
            if not path.exists():
                logger.debug(f"Ignore-pattern file not found, skipping: {path}")
                continue

            try:
                raw_data: object = json.loads(path.read_text(encoding="utf-8"))
                patterns = IgnorePatternSet.model_validate(raw_data)
            except (OSError, json.JSONDecodeError, ValidationError) as e:
                raise ConfigurationError(
                    f"Invalid ignore-pattern file {path}: {e}",
                    context={"path": str(path)},
                ) from e

            merged = merged.merged_with(patterns)
            logger.debug(f"Loaded ignore patterns from {path}")

        return merged

    @staticmethod
    def get_default_config() -> HarvestConfig:
        """
        Get a configuration object with default values.

        Returns:
            HarvestConfig: Configuration with default values
        """
        return HarvestConfig()
