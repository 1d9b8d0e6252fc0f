"""GameRecord dataclass and completion-status vocabulary for GameGrinding.

``GameRecord`` is the plain result record every collection query returns;
callers never see raw rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from gamegrinding.utils.i18n import t

__all__ = [
    "CompletionStatus",
    "GameRecord",
    "split_multi_value",
]


class CompletionStatus(Enum):
    """Completion states a game in a collection can be in.

    The value is the label persisted in the ``CompletionStatus`` column.
    """

    NOT_STARTED = "Not Started"
    PLAYING = "Playing"
    COMPLETED = "Completed"

    @classmethod
    def from_label(cls, label: str | None) -> CompletionStatus | None:
        """Resolves a stored label ("Not Started") or a compact name ("NotStarted").

        Returns:
            The matching status, or None if the label is unknown.
        """
        if label is None:
            return None
        text = label.strip()
        for status in cls:
            if text == status.value or text.replace(" ", "").lower() == status.value.replace(" ", "").lower():
                return status
        return None

    @classmethod
    def labels(cls) -> list[str]:
        """All persisted labels, in workflow order."""
        return [status.value for status in cls]

    @property
    def display_name(self) -> str:
        """Localized label for menus; the persisted value stays English."""
        return t(f"collection.status.{self.name.lower()}")


def split_multi_value(value: str | None) -> list[str]:
    """Splits a comma-joined field ("Wii, Wii U") into trimmed, non-empty parts."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass
class GameRecord:
    """One stored game as seen by a collection owner.

    ``genre`` and ``platform`` are free text and may hold several
    comma-joined values. ``release_date`` is None whenever the stored text
    is missing or not a strict ``YYYY-MM-DD`` date.
    """

    game_id: int
    title: str
    developer: str = ""
    publisher: str = ""
    release_date: date | None = None
    genre: str = ""
    platform: str = ""
    completion_status: str = CompletionStatus.NOT_STARTED.value
    notes: str = ""
    cover_art: str = ""

    @property
    def genres(self) -> list[str]:
        return split_multi_value(self.genre)

    @property
    def platforms(self) -> list[str]:
        return split_multi_value(self.platform)

    @property
    def status(self) -> CompletionStatus | None:
        """The completion status as an enum member (None for legacy/unknown labels)."""
        return CompletionStatus.from_label(self.completion_status)
