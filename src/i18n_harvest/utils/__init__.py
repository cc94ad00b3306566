"""Shared utilities for i18n-harvest."""
