"""
Content-addressed key registry backed by the base locale tree.

A key is ``<Namespace>.<kind>.<slug>``. The same (namespace, kind, text)
triple always yields the same key: within a run through the content-id
map, and across runs because the map is primed from the persisted base
tree before anything is registered.
"""

from __future__ import annotations

import copy
import logging
import threading
from typing import NamedTuple

from ..classifier.normalize import collapse_whitespace
from ..extractors.base import CandidateKind
from ..utils.exceptions import KeyPathConflictError
from .slugs import DEFAULT_MAX_LENGTH, DEFAULT_MAX_WORDS, humanize_slug, slugify_for_key
from .tree import LocaleTree, count_leaves, deep_merge, get_node, iter_leaves, sort_tree

logger = logging.getLogger(__name__)

MIN_KEY_SEGMENTS = 3


class TranslationKey(NamedTuple):
    """A parsed ``namespace.kind.slug`` key."""

    namespace: str
    kind: str
    slug: str

    @property
    def full_key(self) -> str:
        return f"{self.namespace}.{self.kind}.{self.slug}"

    @property
    def segments(self) -> list[str]:
        return [*self.namespace.split("."), self.kind, self.slug]

    @classmethod
    def parse(cls, full_key: str) -> TranslationKey | None:
        """Split a full key; returns None for keys with fewer than three segments."""
        segments = [segment for segment in full_key.split(".") if segment]
        if len(segments) < MIN_KEY_SEGMENTS:
            return None
        return cls(".".join(segments[:-2]), segments[-2], segments[-1])


def content_id(namespace: str, kind: str, text: str) -> str:
    """Identity of a text in one bucket; whitespace runs count as a single space."""
    return f"{namespace}|{kind}|{collapse_whitespace(text)}"


class KeyStore:
    """
    In-memory hierarchical registry of base-locale strings.

    Registration is serialized by an internal lock, so the store can be
    shared by handle; the run pipeline additionally funnels every
    registration through a single coordinator so slug assignment follows a
    deterministic order.
    """

    def __init__(
        self,
        tree: LocaleTree | None = None,
        *,
        max_slug_words: int = DEFAULT_MAX_WORDS,
        max_slug_length: int = DEFAULT_MAX_LENGTH,
    ) -> None:
        """
        Initialize the key store.

        Args:
            tree: Existing base-locale tree to prime from
            max_slug_words: Maximum words in a derived slug
            max_slug_length: Maximum length of a derived slug
        """
        self.max_slug_words: int = max_slug_words
        self.max_slug_length: int = max_slug_length
        self.created_keys: list[str] = []
        self.fallback_keys: list[str] = []
        self._tree: LocaleTree = {}
        self._content_ids: dict[str, str] = {}
        self._lock: threading.RLock = threading.RLock()
        if tree:
            self.prime(tree)

    def prime(self, tree: LocaleTree) -> None:
        """
        Load an existing tree and index its leaves by content id.

        Leaves at depth three or more are indexed. When the same text is
        stored under several slugs in one bucket, the first in sorted key
        order wins.
        """
        with self._lock:
            _ = deep_merge(self._tree, copy.deepcopy(tree))
            primed = 0
            for path, value in iter_leaves(self._tree):
                if len(path) < MIN_KEY_SEGMENTS or not value.strip():
                    continue
                identifier = content_id(".".join(path[:-2]), path[-2], value)
                if identifier not in self._content_ids:
                    self._content_ids[identifier] = ".".join(path)
                    primed += 1
            logger.debug(f"Primed key store with {primed} content ids")

    def register(self, namespace: str, kind: CandidateKind | str, text: str) -> str:
        """
        Return the key for a text, creating it on first sight.

        Args:
            namespace: Dot-separated namespace such as ``Settings.Billing``
            kind: Candidate kind (second-to-last key segment)
            text: Text value

        Returns:
            str: Full key ``namespace.kind.slug``

        Raises:
            ValueError: If the text is blank or the namespace is empty
            KeyPathConflictError: If the key path runs through an existing leaf
        """
        kind_name = kind.value if isinstance(kind, CandidateKind) else kind
        trimmed = text.strip()
        if not trimmed:
            raise ValueError("Cannot register blank text")
        if not namespace.strip("."):
            raise ValueError("Namespace must not be empty")

        with self._lock:
            identifier = content_id(namespace, kind_name, trimmed)
            existing = self._content_ids.get(identifier)
            if existing is not None:
                return existing

            bucket = self._bucket(namespace, kind_name)
            base_slug = slugify_for_key(trimmed, self.max_slug_words, self.max_slug_length)
            slug = base_slug
            index = 2
            while slug in bucket and bucket[slug] != trimmed:
                slug = f"{base_slug}_{index}"
                index += 1

            if slug not in bucket:
                bucket[slug] = trimmed
                self.created_keys.append(f"{namespace}.{kind_name}.{slug}")
                logger.debug(f"Created key {namespace}.{kind_name}.{slug}")

            full_key = f"{namespace}.{kind_name}.{slug}"
            self._content_ids[identifier] = full_key
            return full_key

    def ensure_key(self, full_key: str) -> bool:
        """
        Make sure a referenced key has a base value.

        A missing leaf gets the humanized slug (``save_changes`` becomes
        ``Save changes``); an existing value is never overwritten.

        Returns:
            bool: True when a fallback value was created
        """
        parsed = TranslationKey.parse(full_key)
        if parsed is None:
            logger.debug(f"Ignoring short key reference {full_key!r}")
            return False

        with self._lock:
            bucket = self._bucket(parsed.namespace, parsed.kind)
            if isinstance(bucket.get(parsed.slug), str):
                return False
            if parsed.slug in bucket:
                raise KeyPathConflictError(
                    f"Key {parsed.full_key} is a branch, not a leaf", key=parsed.full_key
                )
            fallback = humanize_slug(parsed.slug) or parsed.full_key
            bucket[parsed.slug] = fallback
            self._content_ids.setdefault(
                content_id(parsed.namespace, parsed.kind, fallback), parsed.full_key
            )
            self.fallback_keys.append(parsed.full_key)
            logger.debug(f"Created fallback value for {parsed.full_key}")
            return True

    def lookup(self, namespace: str, kind: CandidateKind | str, text: str) -> str | None:
        """Return the key already assigned to a text, without creating one."""
        kind_name = kind.value if isinstance(kind, CandidateKind) else kind
        with self._lock:
            return self._content_ids.get(content_id(namespace, kind_name, text))

    def get(self, full_key: str) -> str | None:
        """Return the stored value of a key, if it is a leaf."""
        with self._lock:
            node = get_node(self._tree, [segment for segment in full_key.split(".") if segment])
        return node if isinstance(node, str) else None

    def leaf_count(self, path: str = "") -> int:
        """Count the leaves stored under a dot-separated path."""
        segments = [segment for segment in path.split(".") if segment]
        with self._lock:
            return count_leaves(get_node(self._tree, segments))

    def tree(self) -> LocaleTree:
        """Snapshot of the stored tree with keys sorted at every level."""
        with self._lock:
            return sort_tree(self._tree)

    def _bucket(self, namespace: str, kind: str) -> LocaleTree:
        node = self._tree
        walked: list[str] = []
        for segment in [*namespace.split("."), kind]:
            if not segment:
                continue
            walked.append(segment)
            child = node.setdefault(segment, {})
            if isinstance(child, str):
                raise KeyPathConflictError(
                    f"Cannot nest keys under leaf {'.'.join(walked)}", key=".".join(walked)
                )
            node = child
        return node
