"""
Configuration - paths, logging and database location.
Settings come from defaults, then data/settings.json, then environment
variables (a local .env file is honoured).
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from gamegrinding.core.db import MEMORY_DATABASE, Database
from gamegrinding.utils.i18n import t

logger = logging.getLogger("gamegrinding.config")


__all__ = ["Config", "config"]


@dataclass
class Config:
    """
    Central configuration handling for the application.
    Manages paths, UI language, logging, and where the collection store lives.
    """

    APP_DIR: Path = Path(__file__).parent.parent
    DATA_DIR: Path = APP_DIR / "data"
    DB_FILE: Path = DATA_DIR / "GameGrinding.db"
    SETTINGS_FILE: Path = DATA_DIR / "settings.json"

    UI_LANGUAGE: str = "en"
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Path | None = None

    def __post_init__(self):
        """Load settings file and environment overrides after instantiation."""
        self._load_settings()

        load_dotenv()
        env_db = os.getenv("GAMEGRINDING_DB_PATH")
        if env_db:
            self.DB_FILE = Path(env_db)
        env_level = os.getenv("GAMEGRINDING_LOG_LEVEL")
        if env_level:
            self.LOG_LEVEL = env_level

    def _load_settings(self) -> None:
        """Load settings from JSON file."""
        if not self.SETTINGS_FILE.exists():
            return

        try:
            with open(self.SETTINGS_FILE, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(t("logs.config.load_error", error=e))
            return

        self.UI_LANGUAGE = data.get("ui_language", self.UI_LANGUAGE)
        self.LOG_LEVEL = data.get("log_level", self.LOG_LEVEL)

        db_file = data.get("db_file")
        if db_file:
            self.DB_FILE = Path(db_file)
        log_file = data.get("log_file")
        if log_file:
            self.LOG_FILE = Path(log_file)

    def save(self) -> None:
        """Save current configuration to JSON file."""
        data = {
            "ui_language": self.UI_LANGUAGE,
            "log_level": self.LOG_LEVEL,
            "db_file": str(self.DB_FILE),
            "log_file": str(self.LOG_FILE) if self.LOG_FILE else "",
        }

        try:
            self.SETTINGS_FILE.parent.mkdir(parents=True, exist_ok=True)
            with open(self.SETTINGS_FILE, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.error(t("logs.config.save_error", error=e))

    def database_path(self, test_mode: bool = False) -> Path | str:
        """Where Database() should connect: the store file, or ``":memory:"`` in test mode."""
        return MEMORY_DATABASE if test_mode else self.DB_FILE

    def open_database(self, test_mode: bool = False) -> Database:
        """Opens the collection store at ``database_path(test_mode)``."""
        return Database(self.database_path(test_mode))


# Global instance
config = Config()
