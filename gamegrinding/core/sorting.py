"""Sort choices and in-memory ordering of collection results.

Two sort paths exist on purpose:

- ``Database.sort_collection`` orders in SQL and returns an empty list for
  an unsupported choice.
- ``sort_in_memory`` orders an already-materialized list and leaves it in
  its original order for an unsupported choice.
"""

from __future__ import annotations

import functools
import logging
from enum import Enum
from typing import TYPE_CHECKING

from gamegrinding.utils.i18n import t

if TYPE_CHECKING:
    from gamegrinding.core.game import GameRecord

logger = logging.getLogger("gamegrinding.sorting")

__all__ = ["SortChoice", "casefold_compare", "sort_in_memory"]


class SortChoice(Enum):
    """Sort dimensions offered by the collection screen.

    Attributes:
        TITLE: Case-insensitive title order.
        RELEASE_DATE: Oldest first; games without a date last.
        PLATFORM: Case-insensitive platform order.
    """

    TITLE = "Title"
    RELEASE_DATE = "Release Date"
    PLATFORM = "Platform"

    @property
    def display_name(self) -> str:
        """Localized menu label."""
        return t(f"collection.sort.{self.name.lower()}")

    @classmethod
    def resolve(cls, choice: str | SortChoice | None) -> SortChoice | None:
        """Maps a menu label to a SortChoice.

        "Alphabetical" is an alias for TITLE and "ReleaseDate" for
        RELEASE_DATE. Matching is exact otherwise.

        Returns:
            The SortChoice, or None for an unsupported value.
        """
        if isinstance(choice, SortChoice):
            return choice
        if choice is None:
            return None
        return _ALIASES.get(choice)


_ALIASES: dict[str, SortChoice] = {
    "Title": SortChoice.TITLE,
    "Alphabetical": SortChoice.TITLE,
    "Release Date": SortChoice.RELEASE_DATE,
    "ReleaseDate": SortChoice.RELEASE_DATE,
    "Platform": SortChoice.PLATFORM,
}


def casefold_compare(a: str | None, b: str | None) -> int:
    """Three-way, Unicode case-insensitive text comparison (None sorts as "").

    Also registered as the ``CASEFOLD`` collation on every store connection,
    so SQL and in-memory title/platform orders agree.
    """
    left = (a or "").casefold()
    right = (b or "").casefold()
    return (left > right) - (left < right)


def _compare(choice: SortChoice | None, g1: GameRecord, g2: GameRecord) -> int:
    if choice is SortChoice.TITLE:
        return casefold_compare(g1.title, g2.title)
    if choice is SortChoice.PLATFORM:
        return casefold_compare(g1.platform, g2.platform)
    if choice is SortChoice.RELEASE_DATE:
        d1, d2 = g1.release_date, g2.release_date
        if d1 is None and d2 is None:
            return 0
        if d1 is None:
            return 1
        if d2 is None:
            return -1
        return (d1 > d2) - (d1 < d2)
    # Unsupported choice: every pair compares equal, order is kept
    return 0


def sort_in_memory(games: list[GameRecord] | None, sort_choice: str | SortChoice | None) -> list[GameRecord]:
    """Sorts an already-loaded list of games without touching the store.

    The sort is stable, so ties (and every pair under an unsupported choice)
    keep their incoming order.

    Args:
        games: Records to order; None is treated as an empty list.
        sort_choice: "Title"/"Alphabetical", "Release Date", "Platform".

    Returns:
        A new list; the input list is not modified.
    """
    if not games:
        return []

    choice = SortChoice.resolve(sort_choice)
    if choice is None:
        logger.debug("Unsupported in-memory sort choice %r, keeping order", sort_choice)

    return sorted(games, key=functools.cmp_to_key(lambda a, b: _compare(choice, a, b)))
