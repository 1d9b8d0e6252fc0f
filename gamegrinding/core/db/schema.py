"""Database schema creation and versioning.

Creates the schema from the packaged ``schema.sql`` on first open and
records the applied version in ``schema_version``.
"""

from __future__ import annotations

import logging
import sqlite3
import time
from pathlib import Path

from gamegrinding.utils.i18n import t

logger = logging.getLogger("gamegrinding.database")

__all__ = ["SchemaMixin"]

_SCHEMA_FILE = Path(__file__).parent / "schema.sql"


class SchemaMixin:
    """Mixin providing schema creation logic.

    Requires ConnectionBase attributes: conn, SCHEMA_VERSION.
    """

    def _ensure_schema(self) -> None:
        """Create the schema if the store is empty."""
        current_version = self._get_schema_version()

        if current_version == 0:
            self._create_schema()
            self._set_schema_version(self.SCHEMA_VERSION)
        elif current_version > self.SCHEMA_VERSION:
            logger.warning(
                "Database schema v%d is newer than this build (v%d)",
                current_version,
                self.SCHEMA_VERSION,
            )

    def _get_schema_version(self) -> int:
        """Get current database schema version (0 = no schema yet)."""
        try:
            cursor = self.conn.execute("SELECT MAX(version) FROM schema_version")
            result = cursor.fetchone()
            return result[0] if result[0] is not None else 0
        except sqlite3.OperationalError:
            return 0

    def _set_schema_version(self, version: int) -> None:
        self.conn.execute(
            "INSERT OR REPLACE INTO schema_version (version, applied_at, description) VALUES (?, ?, ?)",
            (version, int(time.time()), t("logs.db.schema_created")),
        )

    def _create_schema(self) -> None:
        """Create the schema from schema.sql.

        Raises:
            FileNotFoundError: If schema.sql is missing from the package.
            sqlite3.Error: If the script fails.
        """
        try:
            schema_sql = _SCHEMA_FILE.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.error(t("logs.db.schema_not_found", path=str(_SCHEMA_FILE)))
            raise

        try:
            self.conn.executescript(schema_sql)
            logger.info(t("logs.db.schema_created"))
        except sqlite3.Error as e:
            logger.error(t("logs.db.schema_error", error=str(e)))
            raise
