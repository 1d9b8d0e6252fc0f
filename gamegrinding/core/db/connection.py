"""Database connection management.

Handles SQLite connection setup, PRAGMA configuration, explicit
transaction control, and the context manager protocol.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any

from gamegrinding.core.sorting import casefold_compare

logger = logging.getLogger("gamegrinding.database")

__all__ = ["CASEFOLD_COLLATION", "ConnectionBase", "MEMORY_DATABASE"]

MEMORY_DATABASE = ":memory:"

# Unicode case-insensitive collation registered on every connection
CASEFOLD_COLLATION = "CASEFOLD"


class ConnectionBase:
    """Base class providing SQLite connection setup and lifecycle.

    The connection runs with ``isolation_level=None``: statements outside an
    explicit ``BEGIN`` commit immediately, and multi-step writes open and
    close their own transaction. Calls _ensure_schema() which is provided
    by SchemaMixin via multiple inheritance.
    """

    SCHEMA_VERSION = 1

    conn: sqlite3.Connection
    db_path: Path | str

    def __init__(self, db_path: Path | str) -> None:
        """Initialize database connection.

        Args:
            db_path: Path to the SQLite database file, or ``":memory:"``
                for a private in-memory store.
        """
        self.db_path = db_path

        if self.is_memory:
            self.conn = sqlite3.connect(MEMORY_DATABASE, isolation_level=None)
        else:
            self.db_path = Path(db_path)
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self.conn = sqlite3.connect(str(self.db_path), isolation_level=None)
            self.conn.execute("PRAGMA journal_mode = WAL")

        self.conn.row_factory = sqlite3.Row
        self.conn.create_collation(CASEFOLD_COLLATION, casefold_compare)
        self._ensure_schema()

    @property
    def is_memory(self) -> bool:
        """True for an in-memory store."""
        return str(self.db_path) == MEMORY_DATABASE

    @property
    def in_transaction(self) -> bool:
        """True while an explicit transaction is open on the connection."""
        return self.conn.in_transaction

    def begin(self) -> None:
        """Opens an explicit transaction (turns auto-commit off).

        Raises:
            sqlite3.Error: If a transaction is already open or the store is unusable.
        """
        self.conn.execute("BEGIN")

    def commit(self) -> None:
        """Commit the open transaction, if any."""
        if self.conn.in_transaction:
            self.conn.execute("COMMIT")

    def rollback(self) -> None:
        """Roll back the open transaction, if any."""
        if self.conn.in_transaction:
            self.conn.execute("ROLLBACK")

    def close(self) -> None:
        """Close database connection."""
        self.conn.close()

    def __enter__(self) -> ConnectionBase:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, *args: Any) -> None:
        """Context manager exit: commit on success, roll back on error, then close."""
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            self.close()
