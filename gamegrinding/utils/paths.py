"""Locations of the data files shipped inside the package."""

from __future__ import annotations

from pathlib import Path

__all__ = ["PACKAGE_DIR", "get_i18n_dir", "get_resources_dir"]

PACKAGE_DIR = Path(__file__).resolve().parent.parent


def get_resources_dir() -> Path:
    """The packaged ``gamegrinding/resources`` directory.

    Raises:
        FileNotFoundError: If the package was installed without its data files.
    """
    resources = PACKAGE_DIR / "resources"
    if not resources.is_dir():
        raise FileNotFoundError(f"Resources directory missing: {resources}")
    return resources


def get_i18n_dir() -> Path:
    """Root of the message catalogs (shared files plus one directory per locale)."""
    return get_resources_dir() / "i18n"
