"""Game metadata operations.

Handles insert, existence checks, single-row fetch, and the targeted
per-field updates on the shared ``Game`` table. This layer never decides
which users reference a game; updates are merely gated on the caller
holding a membership.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import date

from gamegrinding.core.db.models import GameMetadata, map_row_to_record
from gamegrinding.core.game import CompletionStatus, GameRecord
from gamegrinding.utils.date_utils import normalize_release_date
from gamegrinding.utils.i18n import t

logger = logging.getLogger("gamegrinding.database")

__all__ = ["GameQueryMixin"]

# Updatable columns -> i18n field name used in log messages
_UPDATABLE_FIELDS: dict[str, str] = {
    "Title": "title",
    "Developer": "developer",
    "Publisher": "publisher",
    "ReleaseDate": "release_date",
    "Genre": "genre",
    "Platform": "platform",
    "CompletionStatus": "completion_status",
    "Notes": "notes",
    "CoverArt": "cover_art",
}


class GameQueryMixin:
    """Mixin providing operations on the ``Game`` table.

    Requires ConnectionBase attributes: conn.
    """

    def insert_game(self, metadata: GameMetadata, game_id: int | None = None) -> int | None:
        """Insert a new metadata row.

        Does NOT commit: it runs inside the caller's transaction, and the
        caller decides what a failure means.

        Args:
            metadata: Attributes of the new game.
            game_id: Explicit id to store the row under (ids that come from
                an external catalog); None lets the store assign one.

        Returns:
            The id of the new row, or None if the insert did not take effect
            (validation failure, store error, or no id obtainable).
        """
        if not metadata.title or not metadata.title.strip():
            logger.warning(t("logs.collection.missing_title"))
            return None

        status = CompletionStatus.from_label(metadata.completion_status or CompletionStatus.NOT_STARTED.value)
        if status is None:
            logger.warning(t("logs.game_store.invalid_status", status=metadata.completion_status))
            return None

        release_date = normalize_release_date(metadata.release_date)
        if release_date is None and metadata.release_date not in (None, ""):
            logger.warning(t("logs.game_store.invalid_date", value=metadata.release_date))

        values = (
            metadata.title.strip(),
            metadata.developer,
            metadata.publisher,
            release_date,
            metadata.genre,
            metadata.platform,
            status.value,
            metadata.notes,
            metadata.cover_art,
        )
        columns = "Title, Developer, Publisher, ReleaseDate, Genre, Platform, CompletionStatus, Notes, CoverArt"

        try:
            if game_id is None:
                cursor = self.conn.execute(f"INSERT INTO Game ({columns}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)", values)
            else:
                cursor = self.conn.execute(
                    f"INSERT INTO Game (GameID, {columns}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                    (game_id, *values),
                )
        except sqlite3.Error as e:
            logger.error(t("logs.game_store.insert_error", error=e))
            return None

        if cursor.rowcount < 1 or cursor.lastrowid is None:
            logger.error(t("logs.game_store.insert_no_id"))
            return None

        new_id = game_id if game_id is not None else cursor.lastrowid
        logger.debug("Inserted game %d (%s)", new_id, metadata.title)
        return new_id

    def game_exists(self, game_id: int) -> bool:
        """Check whether a metadata row exists.

        Store failures count as "does not exist".

        Args:
            game_id: Game id to look up.

        Returns:
            True if the row exists.
        """
        try:
            cursor = self.conn.execute("SELECT 1 FROM Game WHERE GameID = ?", (game_id,))
            return cursor.fetchone() is not None
        except sqlite3.Error as e:
            logger.error(t("logs.game_store.exists_error", error=e))
            return False

    def get_game(self, game_id: int) -> GameRecord | None:
        """Get a single game by id.

        Returns:
            The record, or None if missing or the store failed.
        """
        try:
            row = self.conn.execute("SELECT * FROM Game WHERE GameID = ?", (game_id,)).fetchone()
        except sqlite3.Error as e:
            logger.error(t("logs.game_store.fetch_error", error=e))
            return None
        return map_row_to_record(row) if row else None

    def get_game_count(self) -> int:
        """Number of metadata rows, 0 on failure."""
        try:
            return self.conn.execute("SELECT COUNT(*) FROM Game").fetchone()[0]
        except sqlite3.Error as e:
            logger.error(t("logs.game_store.fetch_error", error=e))
            return 0

    def get_cover_art(self, user_id: int, game_id: int) -> str | None:
        """Cover art path/URL of a game in the user's collection.

        Returns:
            The stored value, or None if the user does not hold the game.
        """
        if user_id <= 0:
            logger.warning(t("logs.collection.invalid_user", user_id=user_id))
            return None
        try:
            row = self.conn.execute(
                """
                SELECT G.CoverArt FROM UserGameCollection UGC
                JOIN Game G ON UGC.GameID = G.GameID
                WHERE UGC.UserID = ? AND UGC.GameID = ?
                """,
                (user_id, game_id),
            ).fetchone()
        except sqlite3.Error as e:
            logger.error(t("logs.game_store.fetch_error", error=e))
            return None
        return row[0] if row else None

    # -- Targeted per-field updates --

    def _update_field(self, user_id: int, game_id: int, column: str, value: str | None) -> bool:
        """UPDATE one column of a game the user holds.

        Returns:
            True if a row changed.
        """
        if user_id <= 0:
            logger.warning(t("logs.collection.invalid_user", user_id=user_id))
            return False

        try:
            cursor = self.conn.execute(
                f"""
                UPDATE Game SET {column} = ?
                WHERE GameID = (
                    SELECT GameID FROM UserGameCollection WHERE UserID = ? AND GameID = ?
                )
                """,
                (value, user_id, game_id),
            )
            return cursor.rowcount > 0
        except sqlite3.Error as e:
            logger.error(t("logs.game_store.update_error", field=_UPDATABLE_FIELDS[column], error=e))
            return False

    def update_title(self, user_id: int, game_id: int, title: str) -> bool:
        if not title or not title.strip():
            logger.warning(t("logs.collection.missing_title"))
            return False
        return self._update_field(user_id, game_id, "Title", title.strip())

    def update_developer(self, user_id: int, game_id: int, developer: str) -> bool:
        return self._update_field(user_id, game_id, "Developer", developer)

    def update_publisher(self, user_id: int, game_id: int, publisher: str) -> bool:
        return self._update_field(user_id, game_id, "Publisher", publisher)

    def update_release_date(self, user_id: int, game_id: int, release_date: date | str | None) -> bool:
        """Set or clear the release date.

        None or an empty string clears it; any other value must be a valid
        ``YYYY-MM-DD`` date.
        """
        if release_date is None or release_date == "":
            return self._update_field(user_id, game_id, "ReleaseDate", None)

        normalized = normalize_release_date(release_date)
        if normalized is None:
            logger.warning(t("logs.game_store.invalid_date", value=release_date))
            return False
        return self._update_field(user_id, game_id, "ReleaseDate", normalized)

    def update_genre(self, user_id: int, game_id: int, genre: str) -> bool:
        return self._update_field(user_id, game_id, "Genre", genre)

    def update_platform(self, user_id: int, game_id: int, platform: str) -> bool:
        return self._update_field(user_id, game_id, "Platform", platform)

    def update_completion_status(self, user_id: int, game_id: int, completion_status: str | CompletionStatus) -> bool:
        status = (
            completion_status
            if isinstance(completion_status, CompletionStatus)
            else CompletionStatus.from_label(completion_status)
        )
        if status is None:
            logger.warning(t("logs.game_store.invalid_status", status=completion_status))
            return False
        return self._update_field(user_id, game_id, "CompletionStatus", status.value)

    def update_notes(self, user_id: int, game_id: int, notes: str) -> bool:
        return self._update_field(user_id, game_id, "Notes", notes)

    def update_cover_art(self, user_id: int, game_id: int, cover_art: str) -> bool:
        return self._update_field(user_id, game_id, "CoverArt", cover_art)
