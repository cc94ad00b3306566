"""
Namespace resolution for source files.

A file's namespace is derived from its directory path below one of a
fixed, ordered list of root directories (``pages``, ``views``,
``components``, ...). When several roots apply to the same logical group,
the root whose namespace already holds the most base-locale strings wins,
and the decision is cached for the rest of the run.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import PurePosixPath

from .slugs import is_pascal_case, to_pascal_case
from .tree import LocaleTree, count_leaves, get_node

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE_ROOTS: tuple[str, ...] = ("pages", "views", "components", "resources/js", "src")
FALLBACK_NAMESPACE = "Common"

# Namespace used for files sitting directly inside a root
ROOT_LABELS: dict[str, str] = {
    "pages": "Pages",
    "views": "Views",
    "components": "Components",
    "resources/js": "Common",
    "src": "Common",
}

# File names that stand for their directory
INDEX_NAMES = frozenset({"index", "main", "app", "page", "layout", "+page", "+layout"})


def grouping_parts(relative_path: str | PurePosixPath) -> tuple[str, ...]:
    """
    Return the path segments that identify a file's logical group.

    The extension (including compound ones like ``.blade.php``) is dropped,
    and so is a PascalCase or index-like file name, so every component in
    one directory shares a group.
    """
    parts = PurePosixPath(str(relative_path).replace("\\", "/")).parts
    if not parts:
        return ()
    stem = parts[-1].split(".", 1)[0]
    directories = tuple(part for part in parts[:-1] if part not in ("", "."))
    if not stem or is_pascal_case(stem) or stem.lower() in INDEX_NAMES:
        return directories
    return (*directories, stem)


def _find_root(parts: tuple[str, ...], root: str) -> int | None:
    """Index just past the first occurrence of ``root``'s segments in ``parts``."""
    root_parts = tuple(segment for segment in root.split("/") if segment)
    width = len(root_parts)
    if not width:
        return None
    for index in range(len(parts) - width + 1):
        if parts[index : index + width] == root_parts:
            return index + width
    return None


def _namespace_from(segments: Sequence[str]) -> str:
    return ".".join(name for name in (to_pascal_case(segment) for segment in segments) if name)


class NamespaceResolver:
    """
    Maps source files to namespaces, stable for the lifetime of one run.

    Args:
        base_tree: Base-locale tree as persisted before the run; used to
            break ties between candidate roots by existing leaf count
        roots: Root directories in preference order
    """

    def __init__(
        self,
        base_tree: LocaleTree,
        roots: Sequence[str] = DEFAULT_NAMESPACE_ROOTS,
    ) -> None:
        self.base_tree: LocaleTree = base_tree
        self.roots: tuple[str, ...] = tuple(roots)
        self._cache: dict[tuple[str, ...], str] = {}

    def candidates(self, parts: tuple[str, ...]) -> list[str]:
        """Candidate namespaces for a group, in root preference order."""
        found: list[str] = []
        for root in self.roots:
            end = _find_root(parts, root)
            if end is None:
                continue
            rest = parts[end:]
            label = ROOT_LABELS.get(root, to_pascal_case(root.split("/")[-1]))
            namespace = _namespace_from(rest) if rest else label
            if namespace and namespace not in found:
                found.append(namespace)

        catch_all = _namespace_from(parts) or FALLBACK_NAMESPACE
        if catch_all not in found:
            found.append(catch_all)
        return found

    def existing_leaf_count(self, namespace: str) -> int:
        return count_leaves(get_node(self.base_tree, namespace.split(".")))

    def resolve(self, relative_path: str | PurePosixPath) -> str:
        """
        Resolve the namespace for a file path relative to the project root.

        Args:
            relative_path: Source file path

        Returns:
            str: Dot-separated PascalCase namespace
        """
        parts = grouping_parts(relative_path)
        cached = self._cache.get(parts)
        if cached is not None:
            return cached

        options = self.candidates(parts)
        # max() keeps the first of equal counts, i.e. the preferred root
        namespace = max(options, key=self.existing_leaf_count)
        self._cache[parts] = namespace
        logger.debug(f"Namespace for {'/'.join(parts) or '<root>'}: {namespace} (from {options})")
        return namespace
