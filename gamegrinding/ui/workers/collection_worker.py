"""Worker thread for running collection operations in the background.

The store itself is synchronous. Screens hand one CollectionService
operation to a CollectionWorker and react to its signals, so the UI
thread never blocks on SQLite.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from PyQt6.QtCore import QThread, pyqtSignal

from gamegrinding.config import config
from gamegrinding.services.collection_service import NO_USER, CollectionService
from gamegrinding.utils.i18n import t

if TYPE_CHECKING:
    from gamegrinding.core.db import Database

logger = logging.getLogger("gamegrinding.collection_worker")

__all__ = ["CollectionTaskResult", "CollectionWorker", "WORKER_OPERATIONS"]

# CollectionService methods a worker may dispatch
WORKER_OPERATIONS: frozenset[str] = frozenset(
    {
        "add_game_to_collection",
        "add_manual_game",
        "remove_game_from_collection",
        "get_user_collection",
        "filter_collection",
        "search_collection",
        "sort_collection",
        "filter_choices",
        "has_game_titled",
    }
)


@dataclass(frozen=True)
class CollectionTaskResult:
    """Outcome of one background collection operation.

    Attributes:
        operation: The CollectionService method that ran.
        value: Whatever it returned (bool, list of records, dict).
    """

    operation: str
    value: Any


class CollectionWorker(QThread):
    """Background thread running a single CollectionService operation.

    The database comes from a factory called inside ``run()``, so in
    production every operation gets its own connection on the worker
    thread (SQLite connections stay on the thread that created them).
    Without a factory the store configured in ``config`` is opened.

    Signals:
        finished_with_result: Emitted with a CollectionTaskResult on completion.
        failed: Emitted with (operation, message) if the operation could not
            be dispatched or raised.
    """

    finished_with_result = pyqtSignal(object)
    failed = pyqtSignal(str, str)

    def __init__(
        self,
        database_factory: Callable[[], Database] | None,
        operation: str,
        *args: Any,
        user_id: int = NO_USER,
        close_when_done: bool = True,
    ) -> None:
        """Initializes the collection worker.

        Args:
            database_factory: Returns the Database to run against; None uses
                ``config.open_database``.
            operation: Name of the CollectionService method to call.
            *args: Positional arguments for that method.
            user_id: Current user of the service; operations called without
                an explicit user act on it.
            close_when_done: Close the database after the operation (set
                False when the factory hands out a shared connection).
        """
        super().__init__()
        self.database_factory = database_factory or config.open_database
        self.operation = operation
        self.args = args
        self.user_id = user_id
        self.close_when_done = close_when_done

    def run(self) -> None:
        """Opens the database, runs the operation and emits its result."""
        if self.operation not in WORKER_OPERATIONS:
            logger.error(t("logs.worker.unknown_operation", operation=self.operation))
            self.failed.emit(self.operation, t("logs.worker.unknown_operation", operation=self.operation))
            return

        database = None
        try:
            database = self.database_factory()
            service = CollectionService(database, current_user_id=self.user_id)
            value = getattr(service, self.operation)(*self.args)
        except Exception as e:
            # Every failure is reported through failed()
            logger.error(t("logs.worker.operation_error", operation=self.operation, error=e))
            self.failed.emit(self.operation, str(e))
            return
        finally:
            if database is not None and self.close_when_done:
                database.close()

        self.finished_with_result.emit(CollectionTaskResult(self.operation, value))
