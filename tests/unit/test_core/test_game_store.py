"""Unit tests for the Game table operations and schema setup.

Tests cover:
- Schema creation and versioning (memory and file stores)
- insert_game / game_exists / get_game
- Row -> GameRecord conversion
- Per-field updates gated on membership
- Cover art lookup
"""

from __future__ import annotations

import sqlite3
from datetime import date

import pytest

from gamegrinding.core.db import Database, GameMetadata, map_row_to_record

# ========================================================================
# Schema and connection
# ========================================================================


class TestDatabaseSchema:
    """Tests for schema creation and versioning."""

    def test_schema_creation_succeeds(self, db: Database) -> None:
        assert db._get_schema_version() == Database.SCHEMA_VERSION

    def test_empty_store(self, db: Database) -> None:
        assert db.get_game_count() == 0
        assert db.is_memory

    def test_file_store_uses_wal(self, file_db: Database) -> None:
        mode = file_db.conn.execute("PRAGMA journal_mode").fetchone()[0]
        assert mode.lower() == "wal"
        assert file_db.db_path.exists()

    def test_reopen_keeps_data(self, tmp_path) -> None:
        path = tmp_path / "collection.db"
        with Database(path) as first:
            first.add_to_collection(1, 0, GameMetadata(title="Halo"))

        with Database(path) as second:
            assert second._get_schema_version() == Database.SCHEMA_VERSION
            assert [g.title for g in second.get_all_games_in_collection(1)] == ["Halo"]

    def test_status_check_constraint(self, db: Database) -> None:
        with pytest.raises(sqlite3.IntegrityError):
            db.conn.execute("INSERT INTO Game (Title, CompletionStatus) VALUES ('X', 'Abandoned')")


class TestTransactions:
    """Tests for explicit transaction control."""

    def test_rollback_discards_writes(self, db: Database) -> None:
        db.begin()
        db.insert_game(GameMetadata(title="Halo"))
        assert db.in_transaction
        db.rollback()

        assert db.get_game_count() == 0
        assert not db.in_transaction

    def test_commit_and_rollback_without_transaction_are_noops(self, db: Database) -> None:
        db.commit()
        db.rollback()
        assert not db.in_transaction

    def test_nested_begin_raises(self, db: Database) -> None:
        db.begin()
        with pytest.raises(sqlite3.OperationalError):
            db.begin()
        db.rollback()


# ========================================================================
# Game rows
# ========================================================================


class TestInsertGame:
    """Tests for insert_game."""

    def test_insert_returns_new_id(self, db: Database) -> None:
        game_id = db.insert_game(
            GameMetadata(
                title="  Hollow Knight ",
                developer="Team Cherry",
                release_date="2017-02-24",
                genre="Metroidvania",
                platform="PC",
                completion_status="Playing",
            )
        )

        assert game_id is not None
        game = db.get_game(game_id)
        assert game.title == "Hollow Knight"
        assert game.developer == "Team Cherry"
        assert game.release_date == date(2017, 2, 24)
        assert game.completion_status == "Playing"

    def test_insert_with_explicit_id(self, db: Database) -> None:
        assert db.insert_game(GameMetadata(title="Halo"), game_id=42) == 42
        assert db.game_exists(42)

    def test_duplicate_explicit_id_returns_none(self, db: Database) -> None:
        db.insert_game(GameMetadata(title="Halo"), game_id=42)
        assert db.insert_game(GameMetadata(title="Halo 2"), game_id=42) is None
        assert db.get_game(42).title == "Halo"

    def test_compact_status_label_is_normalized(self, db: Database) -> None:
        game_id = db.insert_game(GameMetadata(title="Halo", completion_status="NotStarted"))
        assert db.get_game(game_id).completion_status == "Not Started"

    def test_blank_status_defaults_to_not_started(self, db: Database) -> None:
        game_id = db.insert_game(GameMetadata(title="Halo", completion_status=""))
        assert db.get_game(game_id).completion_status == "Not Started"

    def test_rejects_blank_title_and_unknown_status(self, db: Database) -> None:
        assert db.insert_game(GameMetadata(title="")) is None
        assert db.insert_game(GameMetadata(title="Halo", completion_status="Dropped")) is None
        assert db.get_game_count() == 0

    def test_invalid_date_stored_as_null(self, db: Database) -> None:
        game_id = db.insert_game(GameMetadata(title="Halo", release_date="Nov 2001"))
        raw = db.conn.execute("SELECT ReleaseDate FROM Game WHERE GameID = ?", (game_id,)).fetchone()[0]
        assert raw is None


class TestLookups:
    """Tests for game_exists / get_game."""

    def test_missing_game(self, db: Database) -> None:
        assert db.game_exists(123) is False
        assert db.get_game(123) is None

    def test_lookup_failure_is_soft(self, db: Database) -> None:
        db.conn.execute("DROP TABLE Game")
        assert db.game_exists(1) is False
        assert db.get_game(1) is None
        assert db.get_game_count() == 0


class TestMapRowToRecord:
    """Tests for map_row_to_record."""

    def test_maps_every_column(self) -> None:
        row = {
            "GameID": 3,
            "Title": "Celeste",
            "Developer": "Maddy Makes Games",
            "Publisher": None,
            "ReleaseDate": "2018-01-25",
            "Genre": "Platformer",
            "Platform": "Switch, PC",
            "CompletionStatus": "Completed",
            "Notes": None,
            "CoverArt": "covers/celeste.png",
        }

        record = map_row_to_record(row)

        assert record.game_id == 3
        assert record.publisher == ""
        assert record.notes == ""
        assert record.release_date == date(2018, 1, 25)
        assert record.platforms == ["Switch", "PC"]

    @pytest.mark.parametrize("raw", [None, "", "2023-02-30", "2018/01/25"])
    def test_bad_dates_become_none(self, raw) -> None:
        row = dict.fromkeys(
            ["Developer", "Publisher", "Genre", "Platform", "CompletionStatus", "Notes", "CoverArt"], None
        )
        row.update({"GameID": 1, "Title": "X", "ReleaseDate": raw})

        assert map_row_to_record(row).release_date is None


# ========================================================================
# Per-field updates
# ========================================================================


@pytest.fixture
def owned_game(db: Database) -> int:
    """Id of a game user 1 holds."""
    db.add_to_collection(1, 0, GameMetadata(title="Halo", platform="Xbox"))
    return db.get_all_games_in_collection(1)[0].game_id


class TestFieldUpdates:
    """Tests for the update_* operations."""

    @pytest.mark.parametrize(
        "method, value, attribute",
        [
            ("update_developer", "Bungie", "developer"),
            ("update_publisher", "Microsoft", "publisher"),
            ("update_genre", "Shooter", "genre"),
            ("update_platform", "PC", "platform"),
            ("update_notes", "Legendary run", "notes"),
            ("update_cover_art", "covers/halo.jpg", "cover_art"),
        ],
    )
    def test_text_fields(self, db: Database, owned_game: int, method: str, value: str, attribute: str) -> None:
        assert getattr(db, method)(1, owned_game, value) is True
        assert getattr(db.get_game(owned_game), attribute) == value

    def test_update_title(self, db: Database, owned_game: int) -> None:
        assert db.update_title(1, owned_game, " Halo: Combat Evolved ") is True
        assert db.get_game(owned_game).title == "Halo: Combat Evolved"
        assert db.update_title(1, owned_game, "  ") is False

    def test_update_release_date(self, db: Database, owned_game: int) -> None:
        assert db.update_release_date(1, owned_game, "2001-11-15") is True
        assert db.get_game(owned_game).release_date == date(2001, 11, 15)

        assert db.update_release_date(1, owned_game, date(2003, 10, 21)) is True
        assert db.get_game(owned_game).release_date == date(2003, 10, 21)

        assert db.update_release_date(1, owned_game, "2001-02-30") is False
        assert db.get_game(owned_game).release_date == date(2003, 10, 21)

        assert db.update_release_date(1, owned_game, "") is True
        assert db.get_game(owned_game).release_date is None

    def test_update_completion_status(self, db: Database, owned_game: int) -> None:
        assert db.update_completion_status(1, owned_game, "Completed") is True
        assert db.get_game(owned_game).completion_status == "Completed"
        assert db.update_completion_status(1, owned_game, "Dropped") is False

    def test_update_requires_membership(self, db: Database, owned_game: int) -> None:
        assert db.update_notes(2, owned_game, "not mine") is False
        assert db.update_notes(0, owned_game, "invalid user") is False
        assert db.get_game(owned_game).notes == ""

    def test_update_failure_is_soft(self, db: Database, owned_game: int) -> None:
        db.conn.execute("DROP TABLE UserGameCollection")
        assert db.update_genre(1, owned_game, "Shooter") is False


class TestCoverArt:
    """Tests for get_cover_art."""

    def test_cover_art_for_owned_game(self, db: Database, owned_game: int) -> None:
        db.update_cover_art(1, owned_game, "covers/halo.jpg")
        assert db.get_cover_art(1, owned_game) == "covers/halo.jpg"

    def test_cover_art_requires_membership(self, db: Database, owned_game: int) -> None:
        assert db.get_cover_art(2, owned_game) is None
        assert db.get_cover_art(-1, owned_game) is None
