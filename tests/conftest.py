# tests/conftest.py
import os
from typing import Generator

# Ensure Qt can run headless (CI runners have no display server)
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication
from pytestqt.qtbot import QtBot

from gamegrinding.core.db import MEMORY_DATABASE, Database, GameMetadata


@pytest.fixture(scope="session")
def qapp():
    """QApplication instance for all Qt tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def qtbot(qapp, request):
    """Provide qtbot fixture with automatic cleanup."""
    bot = QtBot(request)
    yield bot
    if hasattr(bot, "cleanup"):
        bot.cleanup()


@pytest.fixture
def db() -> Generator[Database, None, None]:
    """Fresh in-memory collection store with the schema loaded."""
    database = Database(MEMORY_DATABASE)
    yield database
    database.close()


@pytest.fixture
def file_db(tmp_path) -> Generator[Database, None, None]:
    """Collection store backed by a temp file (WAL mode)."""
    database = Database(tmp_path / "data" / "collection.db")
    yield database
    database.close()


@pytest.fixture
def halo() -> GameMetadata:
    return GameMetadata(title="Halo", platform="Xbox", completion_status="Not Started")


@pytest.fixture
def sample_metadata() -> list[GameMetadata]:
    """A small mixed collection used by filter/sort tests."""
    return [
        GameMetadata(
            title="The Legend of Zelda: Breath of the Wild",
            developer="Nintendo EPD",
            publisher="Nintendo",
            release_date="2017-03-03",
            genre="Adventure",
            platform="Switch",
            completion_status="Completed",
        ),
        GameMetadata(
            title="halo infinite",
            developer="343 Industries",
            publisher="Xbox Game Studios",
            release_date="2021-12-08",
            genre="Shooter",
            platform="Xbox",
            completion_status="Playing",
        ),
        GameMetadata(
            title="Celeste",
            developer="Maddy Makes Games",
            publisher="Maddy Makes Games",
            release_date=None,
            genre="Platformer",
            platform="PC",
            completion_status="Not Started",
        ),
        GameMetadata(
            title="Bloodborne",
            developer="FromSoftware",
            publisher="Sony",
            release_date="2015-03-24",
            genre="Action RPG",
            platform="PlayStation 4",
            completion_status="Playing",
        ),
    ]


@pytest.fixture
def populated_db(db: Database, sample_metadata: list[GameMetadata]) -> Database:
    """Store where user 1 owns every sample game and user 2 owns one Switch copy of Celeste."""
    for metadata in sample_metadata:
        assert db.add_to_collection(1, 0, metadata)
    assert db.add_to_collection(2, 0, GameMetadata(title="Celeste", platform="Switch", genre="Platformer"))
    return db

