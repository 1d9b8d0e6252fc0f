# gamegrinding/services/collection_service.py

"""Collection service used by UI controllers.

Sits between screens and the store: remembers the logged-in user,
validates ids before any store access, fills defaults for new games, and
delegates the actual work to ``Database``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace
from typing import TYPE_CHECKING

from gamegrinding.core.db.models import UNKNOWN_GAME_ID, GameMetadata
from gamegrinding.core.game import CompletionStatus, GameRecord
from gamegrinding.core.sorting import SortChoice, sort_in_memory
from gamegrinding.utils.i18n import t

if TYPE_CHECKING:
    from gamegrinding.core.db import Database

logger = logging.getLogger("gamegrinding.collection_service")

__all__ = ["CollectionService", "NO_USER"]

# Current-user value while nobody is logged in
NO_USER = -1


class CollectionService:
    """User-facing facade over the collection store.

    Every operation takes an optional trailing ``user_id``; without it the
    operation acts on ``current_user_id``.

    Attributes:
        database: The store handle all operations run against.
        current_user_id: Id of the logged-in user, ``NO_USER`` if none.
    """

    def __init__(self, database: Database, current_user_id: int = NO_USER) -> None:
        """Initializes the CollectionService.

        Args:
            database: Store handle (injected, never a global).
            current_user_id: Logged-in user, if already known.
        """
        self.database = database
        self.current_user_id = current_user_id

    def set_current_user(self, user_id: int) -> None:
        self.current_user_id = user_id

    def clear_current_user(self) -> None:
        self.current_user_id = NO_USER

    def _resolve_user(self, user_id: int | None) -> int | None:
        """The explicit user, or the current one; None (logged) if it is not a valid id."""
        resolved = self.current_user_id if user_id is None else user_id
        if resolved <= 0:
            logger.warning(t("logs.collection.invalid_user", user_id=resolved))
            return None
        return resolved

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add_game_to_collection(self, game: GameRecord, user_id: int | None = None) -> bool:
        """Adds a game picked from an external catalog or a manual entry form.

        New entries always start as "Not Started" with empty notes, whatever
        the incoming record says. ``game.game_id <= 0`` marks a manual entry.

        Args:
            game: The game to add.
            user_id: Collection owner; defaults to the current user.

        Returns:
            True if the game was added.
        """
        owner = self._resolve_user(user_id)
        if owner is None:
            return False

        metadata = replace(
            GameMetadata.from_record(game),
            completion_status=CompletionStatus.NOT_STARTED.value,
            notes="",
        )
        known_game_id = game.game_id if game.game_id > 0 else UNKNOWN_GAME_ID
        return self.database.add_to_collection(owner, known_game_id, metadata)

    def add_manual_game(self, metadata: GameMetadata, user_id: int | None = None) -> bool:
        """Adds a manually entered game exactly as entered (status and notes included)."""
        owner = self._resolve_user(user_id)
        if owner is None:
            return False
        return self.database.add_to_collection(owner, UNKNOWN_GAME_ID, metadata)

    def remove_game_from_collection(self, game_id: int, user_id: int | None = None) -> bool:
        owner = self._resolve_user(user_id)
        if owner is None:
            return False
        return self.database.remove_from_collection(owner, game_id)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_user_collection(self, user_id: int | None = None) -> list[GameRecord]:
        """All games of the user, or an empty list for an invalid id."""
        owner = self._resolve_user(user_id)
        if owner is None:
            return []
        logger.debug("Fetching collection for user %d", owner)
        return self.database.get_all_games_in_collection(owner)

    def filter_collection(
        self,
        genres: Iterable[str] | None = None,
        platforms: Iterable[str] | None = None,
        completion_statuses: Iterable[str] | None = None,
        user_id: int | None = None,
    ) -> list[GameRecord]:
        owner = self._resolve_user(user_id)
        if owner is None:
            return []
        return self.database.filter_collection(owner, genres, platforms, completion_statuses)

    def search_collection(self, title: str | None, user_id: int | None = None) -> list[GameRecord]:
        owner = self._resolve_user(user_id)
        if owner is None:
            return []
        logger.debug("Searching collection of user %d for %r", owner, title)
        return self.database.search_collection(owner, title)

    def sort_collection(
        self,
        sort_by: str | SortChoice | None,
        search_query: str | None = None,
        user_id: int | None = None,
    ) -> list[GameRecord]:
        """Store-side sort; unsupported choices give an empty list."""
        owner = self._resolve_user(user_id)
        if owner is None:
            return []
        return self.database.sort_collection(owner, sort_by, search_query)

    @staticmethod
    def sort_filtered_collection(games: list[GameRecord] | None, sort_choice: str | SortChoice | None) -> list[GameRecord]:
        """Re-sorts an already filtered list; unsupported choices keep the order."""
        return sort_in_memory(games, sort_choice)

    def filter_choices(self, user_id: int | None = None) -> dict[str, list[str]]:
        """Values for the filter menus of the collection screen.

        Genres and platforms are the stored values exactly as the filter
        matches them, blanks dropped, sorted case-insensitively.

        Returns:
            Dict with ``genres``, ``platforms`` and ``completion_statuses``.
        """
        owner = self._resolve_user(user_id)
        if owner is None:
            return {"genres": [], "platforms": [], "completion_statuses": []}

        def menu(values: list[str]) -> list[str]:
            return sorted((v for v in values if v.strip()), key=str.casefold)

        return {
            "genres": menu(self.database.distinct_genres(owner)),
            "platforms": menu(self.database.distinct_platforms(owner)),
            "completion_statuses": CompletionStatus.labels(),
        }

    def has_game_titled(self, title: str, user_id: int | None = None) -> bool:
        """Existence check used by the add-game screens to warn about duplicates."""
        owner = self._resolve_user(user_id)
        if owner is None:
            return False
        return self.database.membership_exists_by_title(owner, title)
