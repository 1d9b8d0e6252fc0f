"""User collection operations.

Handles the ``UserGameCollection`` membership table: transactional
add/remove, filtering, search, server-side sort, distinct-value lookups,
and existence checks. Every public method is fail-soft: store errors are
logged and turned into ``False`` or an empty list.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable

from gamegrinding.core.db.models import UNKNOWN_GAME_ID, GameMetadata, map_row_to_record
from gamegrinding.core.db.query_builder import CollectionQuery
from gamegrinding.core.game import CompletionStatus, GameRecord
from gamegrinding.core.sorting import SortChoice
from gamegrinding.utils.i18n import t

logger = logging.getLogger("gamegrinding.collection")

__all__ = ["CollectionMixin"]

# Server-side ORDER BY column per sort choice, and whether it sorts ignoring case
_SORT_COLUMNS: dict[SortChoice, tuple[str, bool]] = {
    SortChoice.TITLE: ("Title", True),
    SortChoice.RELEASE_DATE: ("ReleaseDate", False),
    SortChoice.PLATFORM: ("Platform", True),
}


def _stored_status_labels(values: Iterable[str] | None) -> list[str] | None:
    """Maps caller status labels ("NotStarted") to the stored ones ("Not Started").

    Unknown labels pass through unchanged and simply match nothing.
    """
    if values is None:
        return None
    if isinstance(values, str):
        values = [values]
    labels = []
    for value in values:
        status = CompletionStatus.from_label(value) if isinstance(value, str) else None
        labels.append(status.value if status else value)
    return labels


class CollectionMixin:
    """Mixin providing collection membership operations.

    Requires ConnectionBase: conn, begin(), commit(), rollback().
    Requires GameQueryMixin: insert_game(), game_exists().
    """

    # ------------------------------------------------------------------
    # Transactional writes
    # ------------------------------------------------------------------

    def add_to_collection(self, user_id: int, known_game_id: int | None, metadata: GameMetadata | None) -> bool:
        """Adds a game to a user's collection.

        Manual entries (``known_game_id`` is None or ``<= UNKNOWN_GAME_ID``)
        get a new metadata row. Entries with a real id (from an external
        catalog lookup) reuse the existing metadata row, or store it under
        that id if the catalog game is not known yet; a user who already
        holds the id is rejected before anything is written.

        Metadata insert and membership insert share one transaction that
        commits once at the end; any failure rolls everything back.

        Args:
            user_id: Collection owner.
            known_game_id: External id, or the unknown sentinel for manual entries.
            metadata: Game attributes (may be None only when reusing an existing row).

        Returns:
            True if exactly one membership row was added.
        """
        if user_id <= 0:
            logger.warning(t("logs.collection.invalid_user", user_id=user_id))
            return False

        manual_entry = known_game_id is None or known_game_id <= UNKNOWN_GAME_ID
        if manual_entry and (metadata is None or not metadata.title or not metadata.title.strip()):
            logger.warning(t("logs.collection.missing_title"))
            return False

        try:
            self.begin()
        except sqlite3.Error as e:
            logger.error(t("logs.collection.begin_error", error=e))
            return False

        try:
            if manual_entry:
                game_id = self.insert_game(metadata)
            else:
                if self.user_already_has_game(user_id, known_game_id):
                    logger.info(t("logs.collection.duplicate", user_id=user_id, game_id=known_game_id))
                    self._rollback_quietly()
                    return False

                if self.game_exists(known_game_id):
                    game_id = known_game_id
                elif metadata is not None:
                    game_id = self.insert_game(metadata, game_id=known_game_id)
                else:
                    logger.warning(t("logs.collection.missing_title"))
                    game_id = None

            if game_id is None:
                self._rollback_quietly()
                return False

            self.conn.execute(
                "INSERT INTO UserGameCollection (UserID, GameID) VALUES (?, ?)",
                (user_id, game_id),
            )
            self.commit()
        except sqlite3.Error as e:
            logger.error(t("logs.collection.add_error", error=e))
            self._rollback_quietly()
            return False

        logger.info("Added game %d to collection of user %d", game_id, user_id)
        return True

    def remove_from_collection(self, user_id: int, game_id: int) -> bool:
        """Removes a game from a user's collection and deletes its metadata row.

        The metadata row is deleted even if other users still reference it.

        Both deletes run in one explicit transaction. If both execute, the
        transaction is committed no matter how many rows they touched, and
        the result reports whether the metadata delete removed a row: a
        committed removal can therefore still return False.

        Args:
            user_id: Collection owner.
            game_id: Game to remove.

        Returns:
            True if the metadata row was deleted.
        """
        if user_id <= 0:
            logger.warning(t("logs.collection.invalid_user", user_id=user_id))
            return False

        try:
            self.begin()
        except sqlite3.Error as e:
            logger.error(t("logs.collection.begin_error", error=e))
            return False

        try:
            self.conn.execute(
                "DELETE FROM UserGameCollection WHERE UserID = ? AND GameID = ?",
                (user_id, game_id),
            )
        except sqlite3.Error as e:
            logger.error(t("logs.collection.remove_error", error=e))
            self._rollback_quietly()
            return False

        try:
            cursor = self.conn.execute("DELETE FROM Game WHERE GameID = ?", (game_id,))
        except sqlite3.Error as e:
            logger.error(t("logs.collection.remove_error", error=e))
            self._rollback_quietly()
            return False

        try:
            self.commit()
        except sqlite3.Error as e:
            logger.error(t("logs.collection.remove_error", error=e))
            self._rollback_quietly()
            return False

        return cursor.rowcount > 0

    def delete_games_by_title(self, user_id: int, title: str) -> bool:
        """Drops the user's memberships for every game with this exact title.

        Afterwards any metadata row that no membership references is deleted.

        Returns:
            True if at least one membership was removed.
        """
        if user_id <= 0:
            logger.warning(t("logs.collection.invalid_user", user_id=user_id))
            return False

        try:
            self.begin()
            cursor = self.conn.execute(
                """
                DELETE FROM UserGameCollection
                WHERE UserID = ? AND GameID IN (SELECT GameID FROM Game WHERE Title = ?)
                """,
                (user_id, title),
            )
            affected = cursor.rowcount
            self.conn.execute(
                "DELETE FROM Game WHERE GameID NOT IN (SELECT DISTINCT GameID FROM UserGameCollection)"
            )
            self.commit()
        except sqlite3.Error as e:
            logger.error(t("logs.collection.delete_by_title_error", error=e))
            self._rollback_quietly()
            return False

        return affected > 0

    def _rollback_quietly(self) -> None:
        try:
            self.rollback()
        except sqlite3.Error as e:
            logger.error(t("logs.collection.rollback_error", error=e))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _fetch_records(self, query: CollectionQuery, error_key: str) -> list[GameRecord]:
        try:
            rows = self.conn.execute(query.sql(), query.params()).fetchall()
        except sqlite3.Error as e:
            logger.error(t(error_key, error=e))
            return []
        return [map_row_to_record(row) for row in rows]

    def get_all_games_in_collection(self, user_id: int) -> list[GameRecord]:
        """All games in the user's collection, in store order."""
        if user_id <= 0:
            logger.warning(t("logs.collection.invalid_user", user_id=user_id))
            return []
        return self._fetch_records(CollectionQuery(user_id), "logs.collection.list_error")

    def filter_collection(
        self,
        user_id: int,
        genres: Iterable[str] | None = None,
        platforms: Iterable[str] | None = None,
        completion_statuses: Iterable[str] | None = None,
    ) -> list[GameRecord]:
        """Filters the user's collection.

        Within one dimension a game matches if its value equals any of the
        given values; across dimensions all given dimensions must match.
        None or empty lists put no restriction on their dimension.

        Returns:
            Matching records; empty on invalid user or store failure.
        """
        if user_id <= 0:
            logger.warning(t("logs.collection.invalid_user", user_id=user_id))
            return []

        query = (
            CollectionQuery(user_id)
            .where_in("Genre", genres)
            .where_in("Platform", platforms)
            .where_in("CompletionStatus", _stored_status_labels(completion_statuses))
        )
        logger.debug("Filter query: %s params=%s", query.sql(), query.params())

        games = self._fetch_records(query, "logs.collection.filter_error")
        if not games:
            logger.info("No games found for the selected filters")
        return games

    def search_collection(self, user_id: int, title: str | None) -> list[GameRecord]:
        """Case-insensitive title substring search within the user's collection.

        A blank search returns the whole collection.
        """
        if user_id <= 0:
            logger.warning(t("logs.collection.invalid_user", user_id=user_id))
            return []

        query = CollectionQuery(user_id).where_contains("Title", title)
        return self._fetch_records(query, "logs.collection.search_error")

    def sort_collection(
        self,
        user_id: int,
        sort_choice: str | SortChoice | None,
        search_query: str | None = None,
    ) -> list[GameRecord]:
        """Returns the user's collection ordered by the store.

        Args:
            user_id: Collection owner.
            sort_choice: "Title"/"Alphabetical", "Release Date", or "Platform".
            search_query: Optional case-insensitive title substring.

        Returns:
            Ordered records. An unsupported sort choice yields an empty
            list, never an unsorted default.
        """
        if user_id <= 0:
            logger.warning(t("logs.collection.invalid_user", user_id=user_id))
            return []

        choice = SortChoice.resolve(sort_choice)
        if choice is None:
            logger.warning(t("logs.collection.unsupported_sort", choice=sort_choice))
            return []

        column, casefold = _SORT_COLUMNS[choice]
        query = CollectionQuery(user_id).where_contains("Title", search_query).order_by(column, casefold=casefold)
        return self._fetch_records(query, "logs.collection.sort_error")

    def _distinct_values(self, user_id: int, column: str, exact: str | None) -> list[str]:
        if user_id <= 0:
            logger.warning(t("logs.collection.invalid_user", user_id=user_id))
            return []

        query = CollectionQuery(user_id, select=f"G.{column}", distinct=True).where_equals(column, exact)
        try:
            rows = self.conn.execute(query.sql(), query.params()).fetchall()
        except sqlite3.Error as e:
            logger.error(t("logs.collection.distinct_error", column=column, error=e))
            return []
        return [row[0] for row in rows if row[0] is not None]

    def distinct_platforms(self, user_id: int, exact: str | None = None) -> list[str]:
        """Distinct platform values in the user's collection.

        With ``exact`` the result is narrowed to that value, so it is either
        ``[exact]`` or empty.
        """
        return self._distinct_values(user_id, "Platform", exact)

    def distinct_genres(self, user_id: int, exact: str | None = None) -> list[str]:
        """Distinct genre values in the user's collection (see distinct_platforms)."""
        return self._distinct_values(user_id, "Genre", exact)

    # ------------------------------------------------------------------
    # Existence checks
    # ------------------------------------------------------------------

    def user_already_has_game(self, user_id: int, game_id: int) -> bool:
        """True if a membership row for (user_id, game_id) exists. Failures count as False."""
        if user_id <= 0:
            return False
        try:
            cursor = self.conn.execute(
                "SELECT 1 FROM UserGameCollection WHERE UserID = ? AND GameID = ?",
                (user_id, game_id),
            )
            return cursor.fetchone() is not None
        except sqlite3.Error as e:
            logger.error(t("logs.collection.lookup_error", error=e))
            return False

    def membership_exists_by_title(self, user_id: int, title: str) -> bool:
        """True if the user holds a game with exactly this title.

        Only reports existence; it never returns the game id.
        """
        if user_id <= 0 or not title:
            return False
        try:
            cursor = self.conn.execute(
                """
                SELECT 1 FROM UserGameCollection UGC
                JOIN Game G ON UGC.GameID = G.GameID
                WHERE UGC.UserID = ? AND G.Title = ?
                LIMIT 1
                """,
                (user_id, title),
            )
            return cursor.fetchone() is not None
        except sqlite3.Error as e:
            logger.error(t("logs.collection.lookup_error", error=e))
            return False

    def count_memberships(self, user_id: int) -> int:
        """Number of membership rows the user has (duplicates included)."""
        if user_id <= 0:
            return 0
        try:
            return self.conn.execute(
                "SELECT COUNT(*) FROM UserGameCollection WHERE UserID = ?", (user_id,)
            ).fetchone()[0]
        except sqlite3.Error as e:
            logger.error(t("logs.collection.lookup_error", error=e))
            return 0
