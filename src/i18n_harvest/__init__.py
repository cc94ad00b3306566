"""
i18n-harvest: harvest translatable UI strings into locale stores.

Source files are scanned for human-facing text, each accepted string is
assigned a stable, human-readable translation key, and every configured
locale tree is filled with the keys the base locale gained.
"""

from __future__ import annotations

__version__ = "1.0.0"
__author__ = "i18n-harvest contributors"
