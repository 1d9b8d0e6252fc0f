"""
Internationalization (i18n) catalog.

Message catalogs are JSON files:
1. Shared files from resources/i18n/*.json (language-agnostic, e.g. log texts)
2. Locale-specific files from resources/i18n/{locale}/*.json (labels)

Keys use dot notation (``logs.collection.add_error``); values are
``str.format`` templates.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

__all__ = ["I18n", "get_language", "init_i18n", "t"]

logger = logging.getLogger("gamegrinding.i18n")


class I18n:
    """Loaded message catalog for one locale, with English as fallback."""

    def __init__(self, locale: str = "en", i18n_root: Path | None = None) -> None:
        """Initialize I18n with a specific locale code.

        Args:
            locale: Locale directory name under resources/i18n/.
            i18n_root: Override for the catalog root (tests).
        """
        self.locale = locale

        if i18n_root is None:
            from gamegrinding.utils.paths import get_i18n_dir

            i18n_root = get_i18n_dir()
        self.i18n_root = i18n_root

        fallback = self._deep_merge(self._load_json_directory(self.i18n_root), self._load_locale("en"))
        if locale != "en":
            self.translations = self._deep_merge(fallback, self._load_locale(locale))
        else:
            self.translations = fallback

    def _load_locale(self, locale_code: str) -> dict[str, Any]:
        return self._load_json_directory(self.i18n_root / locale_code)

    @staticmethod
    def _load_json_directory(directory: Path) -> dict[str, Any]:
        """Loads and deep-merges all ``*.json`` files of a directory (sorted by name)."""
        merged: dict[str, Any] = {}
        if not directory.exists():
            return merged
        for file_path in sorted(directory.glob("*.json")):
            try:
                with open(file_path, "r", encoding="utf-8") as f:
                    merged = I18n._deep_merge(merged, json.load(f))
            except (OSError, json.JSONDecodeError) as e:
                logger.error("Error loading i18n file %s: %s", file_path.name, e)
        return merged

    @staticmethod
    def _deep_merge(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
        """Recursive merge; values from ``update`` win."""
        result = base.copy()
        for key, value in update.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = I18n._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def t(self, key: str, **kwargs: Any) -> str:
        """Retrieve a translated string by dot-notation key.

        Args:
            key: Dot-separated key path (e.g. 'logs.db.schema_created').
            **kwargs: Format arguments for string interpolation.

        Returns:
            Translated string, or '[key]' if not found.
        """
        value: Any = self.translations
        for part in key.split("."):
            if not isinstance(value, dict):
                return f"[{key}]"
            value = value.get(part)

        if not isinstance(value, str):
            return f"[{key}]"

        if kwargs:
            try:
                return value.format(**kwargs)
            except (ValueError, KeyError, IndexError):
                return value
        return value


_i18n_instance: I18n | None = None


def init_i18n(locale: str = "en") -> I18n:
    """Initialize (or replace) the global catalog."""
    global _i18n_instance
    _i18n_instance = I18n(locale)
    return _i18n_instance


def get_language() -> str:
    """Return the locale code of the global catalog."""
    if _i18n_instance is None:
        init_i18n()
    return _i18n_instance.locale


def t(key: str, **kwargs: Any) -> str:
    """Retrieve a translated string using the global catalog."""
    if _i18n_instance is None:
        init_i18n()
    return _i18n_instance.t(key, **kwargs)
