"""Tests for sort choices and the in-memory sort."""

from __future__ import annotations

from datetime import date

import pytest

from gamegrinding.core.game import GameRecord
from gamegrinding.core.sorting import SortChoice, casefold_compare, sort_in_memory


def _game(game_id: int, title: str, platform: str = "", release_date: date | None = None) -> GameRecord:
    return GameRecord(game_id=game_id, title=title, platform=platform, release_date=release_date)


@pytest.fixture
def games() -> list[GameRecord]:
    return [
        _game(1, "zelda", "Switch", date(2017, 3, 3)),
        _game(2, "Celeste", "PC", None),
        _game(3, "Bloodborne", "playstation 4", date(2015, 3, 24)),
        _game(4, "Animal Well", "PC", date(2024, 5, 9)),
    ]


class TestSortChoice:
    """Tests for SortChoice.resolve."""

    @pytest.mark.parametrize(
        "label, expected",
        [
            ("Title", SortChoice.TITLE),
            ("Alphabetical", SortChoice.TITLE),
            ("Release Date", SortChoice.RELEASE_DATE),
            ("ReleaseDate", SortChoice.RELEASE_DATE),
            ("Platform", SortChoice.PLATFORM),
            (SortChoice.PLATFORM, SortChoice.PLATFORM),
        ],
    )
    def test_supported_labels(self, label, expected) -> None:
        assert SortChoice.resolve(label) is expected

    @pytest.mark.parametrize("label", ["Unsupported", "title", "", None])
    def test_unsupported_labels(self, label) -> None:
        assert SortChoice.resolve(label) is None

    def test_display_name(self) -> None:
        assert SortChoice.RELEASE_DATE.display_name == "Release Date"


class TestSortInMemory:
    """Tests for sort_in_memory."""

    def test_title_ignores_case(self, games) -> None:
        assert [g.game_id for g in sort_in_memory(games, "Title")] == [4, 3, 2, 1]

    def test_release_date_puts_missing_last(self, games) -> None:
        assert [g.game_id for g in sort_in_memory(games, "Release Date")] == [3, 1, 4, 2]

    def test_platform_is_stable_for_ties(self, games) -> None:
        assert [g.game_id for g in sort_in_memory(games, "Platform")] == [2, 4, 3, 1]

    def test_unsupported_choice_keeps_order(self, games) -> None:
        assert sort_in_memory(games, "Unsupported") == games

    def test_input_is_not_modified(self, games) -> None:
        original = list(games)
        sort_in_memory(games, "Title")
        assert games == original

    @pytest.mark.parametrize("empty", [None, []])
    def test_empty_input(self, empty) -> None:
        assert sort_in_memory(empty, "Title") == []

    def test_title_folds_non_ascii_case(self) -> None:
        greek = [_game(1, "Ωmega"), _game(2, "αlpha"), _game(3, "Éclair"), _game(4, "eclipse")]
        assert [g.game_id for g in sort_in_memory(greek, "Title")] == [4, 3, 2, 1]


class TestCasefoldCompare:
    """Tests for the shared text comparison."""

    @pytest.mark.parametrize(
        "a, b, expected",
        [
            ("halo", "HALO", 0),
            ("Straße", "STRASSE", 0),
            ("Éclair", "éclair", 0),
            ("αlpha", "Ωmega", -1),
            ("Zelda", "celeste", 1),
            (None, "", 0),
            (None, "a", -1),
        ],
    )
    def test_compare(self, a, b, expected) -> None:
        assert casefold_compare(a, b) == expected
