"""Helpers for nested locale trees (string leaves, mapping branches)."""

from __future__ import annotations

import copy
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import TypeAlias

from ..utils.exceptions import StructuralParseError

LocaleTree: TypeAlias = dict[str, "LocaleTree | str"]


def validate_tree(raw: object, path: Path | None = None, trail: tuple[str, ...] = ()) -> LocaleTree:
    """
    Check that decoded JSON is a locale tree.

    Args:
        raw: Decoded JSON value
        path: File the value came from, for error reporting
        trail: Key path of ``raw`` within the file

    Returns:
        LocaleTree: The same data, typed

    Raises:
        StructuralParseError: If the value is not an object of objects and strings
    """
    where = ".".join(trail) or "<root>"
    if not isinstance(raw, dict):
        raise StructuralParseError(
            f"Expected a JSON object at {where}, got {type(raw).__name__}", path=path
        )

    tree: LocaleTree = {}
    for key, value in raw.items():  # pyright: ignore[reportUnknownVariableType]
        name = str(key)  # pyright: ignore[reportUnknownArgumentType]
        if isinstance(value, str):
            tree[name] = value
        elif isinstance(value, dict):
            tree[name] = validate_tree(value, path, (*trail, name))
        else:
            raise StructuralParseError(
                f"Expected a string or object at {where}.{name}, got {type(value).__name__}",  # pyright: ignore[reportUnknownArgumentType]
                path=path,
            )
    return tree


def iter_leaves(
    tree: LocaleTree, prefix: tuple[str, ...] = ()
) -> Iterator[tuple[tuple[str, ...], str]]:
    """Yield ``(path, value)`` for every leaf, in sorted key order."""
    for key in sorted(tree):
        value = tree[key]
        if isinstance(value, str):
            yield (*prefix, key), value
        else:
            yield from iter_leaves(value, (*prefix, key))


def count_leaves(node: LocaleTree | str | None) -> int:
    if node is None:
        return 0
    if isinstance(node, str):
        return 1
    return sum(count_leaves(value) for value in node.values())


def get_node(tree: LocaleTree, path: Sequence[str]) -> LocaleTree | str | None:
    """Return the node at ``path``, or None when any segment is missing."""
    node: LocaleTree | str = tree
    for segment in path:
        if not isinstance(node, dict) or segment not in node:
            return None
        node = node[segment]
    return node


def sort_tree(tree: LocaleTree) -> LocaleTree:
    """Deep copy with keys in lexicographic order at every level."""
    return {
        key: value if isinstance(value, str) else sort_tree(value)
        for key, value in sorted(tree.items())
    }


def deep_merge(into: LocaleTree, other: LocaleTree) -> LocaleTree:
    """
    Merge ``other`` into ``into`` in place; ``other`` wins on leaf clashes.

    Returns:
        LocaleTree: ``into``, for chaining
    """
    for key, value in other.items():
        existing = into.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            _ = deep_merge(existing, value)
        else:
            into[key] = copy.deepcopy(value)
    return into


def mask_tree(tree: LocaleTree, structure: LocaleTree) -> LocaleTree:
    """Keep only the leaves of ``tree`` whose path is also a leaf in ``structure``."""
    masked: LocaleTree = {}
    for key, value in tree.items():
        shape = structure.get(key)
        if isinstance(value, str) and isinstance(shape, str):
            masked[key] = value
        elif isinstance(value, dict) and isinstance(shape, dict):
            child = mask_tree(value, shape)
            if child:
                masked[key] = child
    return masked
