"""
Reading and writing locale stores.

Two layouts are supported and round-trip through the same tree model:

- ``single``: ``<locale_dir>/<locale>.json`` holds the whole tree.
- ``grouped``: ``<locale_dir>/<locale>/<group>.json`` holds one top-level
  namespace group. A group with more leaves than the split threshold is
  written as ``<locale>/<group>/<second>.json`` instead. Every file keeps
  the full key path from the root, so a deep merge of all files
  reconstructs the tree.

All writes are planned first as ``{path: content}`` and committed as a
batch with atomic file replacement.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path
from typing import Literal

from ..utils.exceptions import StructuralParseError
from .tree import LocaleTree, count_leaves, deep_merge, sort_tree, validate_tree

logger = logging.getLogger(__name__)

Layout = Literal["single", "grouped"]

ROOT_LEAVES_GROUP = "_root"


def serialize_tree(tree: LocaleTree) -> str:
    """Render a tree as sorted, 2-space indented JSON with a trailing newline."""
    return json.dumps(sort_tree(tree), indent=2, ensure_ascii=False) + "\n"


def read_tree_file(path: Path) -> LocaleTree:
    """
    Read and validate one locale JSON file.

    Raises:
        StructuralParseError: If the file cannot be read or is not a locale tree
    """
    try:
        raw_data: object = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise StructuralParseError(f"Failed to parse locale file {path}: {e}", path=path) from e
    return validate_tree(raw_data, path)


class LocaleStorage:
    """
    Locale stores below one directory.

    Args:
        locale_dir: Directory holding the stores
        layout: ``single``, ``grouped`` or ``auto`` (grouped when the base
            locale has a directory)
        group_split_threshold: Leaf count above which a group is split
    """

    def __init__(
        self,
        locale_dir: Path,
        layout: Literal["auto", "single", "grouped"] = "auto",
        group_split_threshold: int = 400,
    ) -> None:
        self.locale_dir: Path = locale_dir
        self.layout_setting: Literal["auto", "single", "grouped"] = layout
        self.group_split_threshold: int = group_split_threshold

    def layout_for(self, base_locale: str) -> Layout:
        """Resolve the effective layout."""
        if self.layout_setting != "auto":
            return self.layout_setting
        return "grouped" if (self.locale_dir / base_locale).is_dir() else "single"

    def single_file(self, locale: str) -> Path:
        return self.locale_dir / f"{locale}.json"

    def locale_directory(self, locale: str) -> Path:
        return self.locale_dir / locale

    def discover_locales(self) -> list[str]:
        """List locales present on disk, as directories or ``<locale>.json`` files."""
        if not self.locale_dir.is_dir():
            return []
        locales: set[str] = set()
        for entry in self.locale_dir.iterdir():
            if entry.name.startswith("."):
                continue
            if entry.is_dir():
                locales.add(entry.name)
            elif entry.is_file() and entry.suffix.lower() == ".json":
                locales.add(entry.stem)
        return sorted(locales)

    def read(self, locale: str, layout: Layout) -> LocaleTree:
        """
        Read a locale's tree in the given layout; a missing store is empty.

        Raises:
            StructuralParseError: If any file of the store fails to parse
        """
        if layout == "single":
            path = self.single_file(locale)
            return read_tree_file(path) if path.exists() else {}

        directory = self.locale_directory(locale)
        tree: LocaleTree = {}
        if not directory.is_dir():
            return tree
        for path in sorted(directory.rglob("*.json")):
            _ = deep_merge(tree, read_tree_file(path))
        return tree

    def read_legacy(self, locale: str, layout: Layout) -> LocaleTree | None:
        """Return the single-file store that coexists with a grouped directory, if any."""
        if layout != "grouped":
            return None
        path = self.single_file(locale)
        if not path.exists():
            return None
        logger.debug(f"Found legacy locale file {path}")
        return read_tree_file(path)

    def plan(self, locale: str, tree: LocaleTree, layout: Layout) -> dict[Path, str]:
        """
        Compute the files that represent ``tree`` and their content.

        Args:
            locale: Locale code
            tree: Complete tree for the locale
            layout: Target layout

        Returns:
            dict[Path, str]: File contents keyed by path
        """
        if layout == "single":
            return {self.single_file(locale): serialize_tree(tree)}

        directory = self.locale_directory(locale)
        files: dict[Path, LocaleTree] = {}

        def add(path: Path, content: LocaleTree) -> None:
            _ = deep_merge(files.setdefault(path, {}), content)

        for group, value in tree.items():
            if isinstance(value, str):
                add(directory / f"{ROOT_LEAVES_GROUP}.json", {group: value})
                continue

            group_file = directory / f"{group.lower()}.json"
            if count_leaves(value) <= self.group_split_threshold:
                add(group_file, {group: value})
                continue

            direct_leaves: LocaleTree = {}
            for second, child in value.items():
                if isinstance(child, str):
                    direct_leaves[second] = child
                else:
                    add(directory / group.lower() / f"{second.lower()}.json", {group: {second: child}})
            if direct_leaves or group_file.exists():
                add(group_file, {group: direct_leaves})

        return {path: serialize_tree(content) for path, content in sorted(files.items())}

    @staticmethod
    def pending_changes(planned: dict[Path, str]) -> list[Path]:
        """List planned files whose content differs from what is on disk."""
        changed: list[Path] = []
        for path, content in planned.items():
            try:
                current = path.read_text(encoding="utf-8") if path.exists() else None
            except OSError:
                current = None
            if current != content:
                changed.append(path)
        return changed

    @staticmethod
    def commit(planned: dict[Path, str]) -> list[Path]:
        """
        Write every changed file atomically.

        Args:
            planned: File contents keyed by path

        Returns:
            list[Path]: Files actually written

        Raises:
            OSError: If a file cannot be written
        """
        written: list[Path] = []
        for path in LocaleStorage.pending_changes(planned):
            path.parent.mkdir(parents=True, exist_ok=True)
            temp_file = None
            try:
                with tempfile.NamedTemporaryFile(
                    mode="w",
                    encoding="utf-8",
                    dir=path.parent,
                    prefix=f".{path.name}.",
                    suffix=".tmp",
                    delete=False,
                ) as temp_file:
                    _ = temp_file.write(planned[path])
                    temp_file.flush()
                    temp_path = Path(temp_file.name)

                # Atomic move
                _ = temp_path.replace(path)
            except Exception as e:
                if temp_file and Path(temp_file.name).exists():
                    Path(temp_file.name).unlink(missing_ok=True)
                raise OSError(f"Failed to write locale file {path}: {e}") from e

            written.append(path)
            logger.debug(f"Wrote {path}")
        return written
