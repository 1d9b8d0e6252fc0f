"""Release-date helpers.

Release dates are persisted as ``YYYY-MM-DD`` text. Anything read back from
the store or handed in by a caller is parsed strictly and never raises:
irregular values simply become "no date".
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime

__all__ = ["ISO_DATE_FORMAT", "format_release_date", "normalize_release_date", "parse_release_date"]

logger = logging.getLogger("gamegrinding.date_utils")

ISO_DATE_FORMAT = "%Y-%m-%d"

_ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_release_date(value: str | None) -> date | None:
    """Parses a stored release date.

    Only the exact ``YYYY-MM-DD`` shape is accepted, and the date must exist
    on the calendar ("2023-02-30" is rejected).

    Args:
        value: Raw text from the store or from a caller.

    Returns:
        The parsed date, or None for None, blank, or malformed input.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        logger.debug("Ignoring non-text release date %r", value)
        return None

    text = value.strip()
    if not text:
        return None

    if not _ISO_DATE_PATTERN.match(text):
        logger.debug("Release date %r is not YYYY-MM-DD", value)
        return None

    try:
        return datetime.strptime(text, ISO_DATE_FORMAT).date()
    except ValueError:
        logger.debug("Release date %r is not a calendar date", value)
        return None


def normalize_release_date(value: date | str | None) -> str | None:
    """Converts caller input to the persisted text form.

    Args:
        value: A date, an ISO string, or None/garbage.

    Returns:
        ``YYYY-MM-DD`` text, or None when the input carries no valid date.
    """
    if isinstance(value, datetime):
        return value.date().strftime(ISO_DATE_FORMAT)
    if isinstance(value, date):
        return value.strftime(ISO_DATE_FORMAT)

    parsed = parse_release_date(value)
    return parsed.strftime(ISO_DATE_FORMAT) if parsed else None


def format_release_date(value: date | None) -> str:
    """Display text for a release date; empty string when absent."""
    if value is None:
        return ""
    return value.strftime(ISO_DATE_FORMAT)
