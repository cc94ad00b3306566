"""Configuration schema for i18n-harvest using nested Pydantic models."""

import re
from typing import Annotated, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_EXCLUDE_DIRS: list[str] = [
    "__pycache__",
    ".git",
    ".pytest_cache",
    "htmlcov",
    "node_modules",
    "vendor",
    "venv",
    "env",
    ".venv",
    ".env",
    "dist",
    "build",
    "coverage",
    ".nuxt",
    ".next",
    "storage",
]


class IgnorePatternSet(BaseModel):
    """
    Caller-supplied strings the classifier must reject.

    Accepts the camelCase keys of the ignore-pattern JSON files as well as
    the snake_case field names.
    """

    exact: list[str] = Field(
        default_factory=list,
        description="Strings rejected when they match verbatim",
    )
    exact_insensitive: list[str] = Field(
        default_factory=list,
        alias="exactInsensitive",
        description="Strings rejected when they match ignoring case",
    )
    contains: list[str] = Field(
        default_factory=list,
        description="Substrings that cause a string to be rejected",
    )
    ignore_attributes: list[str] = Field(
        default_factory=list,
        alias="ignoreAttributes",
        description="Attribute names whose values are never extracted",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    def merged_with(self, other: "IgnorePatternSet") -> "IgnorePatternSet":
        """Concatenate the lists of two sets, dropping duplicates but keeping order."""
        return IgnorePatternSet(
            exact=list(dict.fromkeys([*self.exact, *other.exact])),
            exact_insensitive=list(
                dict.fromkeys([*self.exact_insensitive, *other.exact_insensitive])
            ),
            contains=list(dict.fromkeys([*self.contains, *other.contains])),
            ignore_attributes=list(
                dict.fromkeys([*self.ignore_attributes, *other.ignore_attributes])
            ),
        )


class PathsConfig(BaseModel):
    """Source and locale locations, relative to the project root."""

    source_roots: list[str] = Field(
        default_factory=lambda: ["src"],
        description="Directories scanned for source files",
        min_length=1,
    )
    locale_dir: str = Field(
        default="i18n/locales",
        description="Directory holding the locale JSON stores",
        min_length=1,
    )
    ignore_pattern_files: list[str] = Field(
        default_factory=lambda: ["i18n-ignore-patterns.json", ".i18n-auto-ignore.json"],
        description="Ignore-pattern JSON files merged in order; missing files are skipped",
    )


class LocalesConfig(BaseModel):
    """Base and target locale settings."""

    base: str = Field(
        default="en",
        description="Base locale whose tree receives new keys",
    )
    targets: list[str] = Field(
        default_factory=list,
        description="Target locales; empty means discover them from the locale directory",
    )
    layout: Literal["auto", "single", "grouped"] = Field(
        default="auto",
        description="Locale file layout: one file per locale, or one file per namespace group",
    )
    group_split_threshold: Annotated[int, Field(ge=1)] = Field(
        default=400,
        description="Leaf count above which a namespace group is split by second segment",
    )

    @field_validator("base")
    @classmethod
    def validate_locale_code(cls, v: str) -> str:
        """Validate locale code format (e.g. en, pt-BR, zh_Hant)."""
        if not re.match(r"^[A-Za-z]{2,3}(?:[-_][A-Za-z0-9]{2,8})*$", v):
            raise ValueError(f"Invalid locale code: {v}")
        return v

    @field_validator("targets")
    @classmethod
    def validate_target_codes(cls, v: list[str]) -> list[str]:
        """Validate every target locale code."""
        for code in v:
            _ = cls.validate_locale_code(code)
        return v


class ExtractionConfig(BaseModel):
    """Extraction pass settings."""

    concurrency: Annotated[int, Field(ge=1, le=64)] = Field(
        default=8,
        description="Number of files extracted concurrently",
    )
    max_file_size_bytes: Annotated[int, Field(ge=1)] = Field(
        default=2 * 1024 * 1024,
        description="Files larger than this are skipped",
    )
    exclude_dirs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_DIRS),
        description="Directory names never descended into",
    )
    namespace_roots: list[str] = Field(
        default_factory=lambda: ["pages", "views", "components", "resources/js", "src"],
        description="Root directories tried, in preference order, when deriving namespaces",
    )
    slug_max_words: Annotated[int, Field(ge=1, le=16)] = Field(
        default=4,
        description="Maximum number of words in a derived slug",
    )
    slug_max_length: Annotated[int, Field(ge=8, le=128)] = Field(
        default=48,
        description="Maximum length of a derived slug",
    )

    @field_validator("namespace_roots")
    @classmethod
    def normalize_roots(cls, v: list[str]) -> list[str]:
        """Strip surrounding slashes from namespace roots."""
        return [root.strip("/") for root in v if root.strip("/")]


class HarvestConfig(BaseModel):
    """
    Top-level configuration for i18n-harvest.

    Every section has defaults, so an empty or missing configuration file
    is valid.
    """

    paths: PathsConfig = Field(default_factory=PathsConfig)
    locales: LocalesConfig = Field(default_factory=LocalesConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)

    model_config: ClassVar[ConfigDict] = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="forbid",
    )
