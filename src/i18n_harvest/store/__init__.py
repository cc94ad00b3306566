"""Key registry, namespace resolution, locale synchronization and locale file IO."""

from .key_store import KeyStore, TranslationKey
from .locale_io import LocaleStorage, serialize_tree
from .namespaces import NamespaceResolver
from .slugs import slugify_for_key, to_pascal_case
from .synchronizer import Synchronizer, fill
from .tree import LocaleTree

__all__ = [
    "KeyStore",
    "LocaleStorage",
    "LocaleTree",
    "NamespaceResolver",
    "Synchronizer",
    "TranslationKey",
    "fill",
    "serialize_tree",
    "slugify_for_key",
    "to_pascal_case",
]
