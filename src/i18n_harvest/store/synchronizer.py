"""Non-destructive propagation of the base tree's structure to other locales."""

from __future__ import annotations

import copy
import logging
from typing import NamedTuple

from .tree import LocaleTree, count_leaves, mask_tree, sort_tree

logger = logging.getLogger(__name__)


class FillResult(NamedTuple):
    """A filled tree plus the number of leaves copied into it."""

    tree: LocaleTree
    added: int


def _fill_into(base: LocaleTree, target: LocaleTree) -> int:
    added = 0
    for key, value in base.items():
        if key not in target:
            target[key] = copy.deepcopy(value)
            added += count_leaves(value)
        else:
            existing = target[key]
            if isinstance(value, dict) and isinstance(existing, dict):
                added += _fill_into(value, existing)
            # Anything else already present in the target stays as it is
    return added


def fill(base: LocaleTree, target: LocaleTree) -> LocaleTree:
    """
    Copy every key of ``base`` missing from ``target``.

    Existing target leaves are left untouched whatever their value, and
    nothing is ever removed. Neither input is modified.

    Args:
        base: Authoritative tree
        target: Locale tree to complete

    Returns:
        LocaleTree: New tree with keys sorted at every level
    """
    return Synchronizer().fill(base, target).tree


class Synchronizer:
    """Fills target locale trees from the base tree."""

    def fill(self, base: LocaleTree, target: LocaleTree) -> FillResult:
        merged = copy.deepcopy(target)
        added = _fill_into(base, merged)
        return FillResult(sort_tree(merged), added)

    def synchronize(
        self,
        base: LocaleTree,
        target: LocaleTree,
        seed: LocaleTree | None = None,
    ) -> FillResult:
        """
        Complete one target tree, optionally seeding it from a legacy store first.

        Seed values only fill leaves the base tree also has, so stale keys in
        a legacy file never resurface.

        Args:
            base: Authoritative tree
            target: Locale tree to complete
            seed: Legacy tree for the same locale

        Returns:
            FillResult: Completed tree and number of leaves added
        """
        added = 0
        if seed:
            seeded = self.fill(mask_tree(seed, base), target)
            target = seeded.tree
            added += seeded.added
        filled = self.fill(base, target)
        return FillResult(filled.tree, added + filled.added)

    def synchronize_all(
        self,
        base: LocaleTree,
        targets: dict[str, LocaleTree],
        seeds: dict[str, LocaleTree] | None = None,
    ) -> dict[str, LocaleTree]:
        """Complete every target locale; returns trees keyed by locale."""
        completed: dict[str, LocaleTree] = {}
        for locale in sorted(targets):
            result = self.synchronize(base, targets[locale], (seeds or {}).get(locale))
            completed[locale] = result.tree
            if result.added:
                logger.info(f"Added {result.added} missing keys to locale '{locale}'")
            else:
                logger.debug(f"Locale '{locale}' already complete")
        return completed
