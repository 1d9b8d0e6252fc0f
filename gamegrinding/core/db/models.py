"""Database data models and row conversion.

Contains the insert-side metadata structure and the single place where raw
``Game`` rows become ``GameRecord`` objects.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

from gamegrinding.core.game import CompletionStatus, GameRecord
from gamegrinding.utils.date_utils import parse_release_date

logger = logging.getLogger("gamegrinding.database")

__all__ = [
    "GAME_COLUMNS",
    "GameMetadata",
    "UNKNOWN_GAME_ID",
    "map_row_to_record",
]

# Sentinel game id for manual entries: the store assigns the real id
UNKNOWN_GAME_ID = 0

# Column order used for every SELECT G.<...> so rows map by name
GAME_COLUMNS: tuple[str, ...] = (
    "GameID",
    "Title",
    "Developer",
    "Publisher",
    "ReleaseDate",
    "Genre",
    "Platform",
    "CompletionStatus",
    "Notes",
    "CoverArt",
)


@dataclass
class GameMetadata:
    """Game attributes supplied by a caller when adding a game.

    ``release_date`` may be a date, ISO text, or None; anything that is not
    a valid ``YYYY-MM-DD`` date is stored as NULL.
    """

    title: str
    developer: str = ""
    publisher: str = ""
    release_date: date | str | None = None
    genre: str = ""
    platform: str = ""
    completion_status: str = CompletionStatus.NOT_STARTED.value
    notes: str = ""
    cover_art: str = ""

    @classmethod
    def from_record(cls, record: GameRecord) -> GameMetadata:
        """Builds insert metadata from an existing record (e.g. an external catalog hit)."""
        return cls(
            title=record.title,
            developer=record.developer,
            publisher=record.publisher,
            release_date=record.release_date,
            genre=record.genre,
            platform=record.platform,
            completion_status=record.completion_status,
            notes=record.notes,
            cover_art=record.cover_art,
        )


def _text(row: Mapping[str, Any] | sqlite3.Row, column: str) -> str:
    value = row[column]
    return "" if value is None else str(value)


def map_row_to_record(row: Mapping[str, Any] | sqlite3.Row) -> GameRecord:
    """Converts a raw ``Game`` row into a GameRecord.

    The release date goes through ``parse_release_date``: null, empty, or
    malformed text yields ``release_date=None`` and never an exception.
    Other NULL text columns become empty strings.

    Args:
        row: A ``sqlite3.Row`` or mapping keyed by the ``Game`` column names.

    Returns:
        The populated record.
    """
    raw_date = row["ReleaseDate"]
    release_date = parse_release_date(raw_date)
    if release_date is None and raw_date not in (None, ""):
        logger.warning("Error parsing date %r for game %s", raw_date, row["GameID"])

    return GameRecord(
        game_id=int(row["GameID"]),
        title=_text(row, "Title"),
        developer=_text(row, "Developer"),
        publisher=_text(row, "Publisher"),
        release_date=release_date,
        genre=_text(row, "Genre"),
        platform=_text(row, "Platform"),
        completion_status=_text(row, "CompletionStatus"),
        notes=_text(row, "Notes"),
        cover_art=_text(row, "CoverArt"),
    )
