"""GameGrinding - command line entry point.

Usage: ``gamegrinding USER_ID [SEARCH]`` prints the user's collection in
title order, optionally narrowed to titles containing SEARCH.
"""

from __future__ import annotations

import logging
import sys

from PyQt6.QtCore import QCoreApplication, QEventLoop

from gamegrinding.config import config
from gamegrinding.core.game import GameRecord
from gamegrinding.core.logging import setup_logging
from gamegrinding.core.sorting import SortChoice
from gamegrinding.ui.workers.collection_worker import CollectionTaskResult, CollectionWorker
from gamegrinding.utils.date_utils import format_release_date
from gamegrinding.utils.i18n import init_i18n, t
from gamegrinding.version import __app_name__, __version__

logger = logging.getLogger("gamegrinding.main")

__all__ = ["bootstrap", "main"]


def bootstrap() -> None:
    """Applies the configuration: UI language first, then logging."""
    init_i18n(config.UI_LANGUAGE)
    setup_logging(config.LOG_LEVEL, config.LOG_FILE)
    logger.info("%s %s (store: %s)", __app_name__, __version__, config.database_path())


def _format_game(game: GameRecord) -> str:
    return t(
        "cli.row",
        title=game.title,
        platform=game.platform or "-",
        release_date=format_release_date(game.release_date) or "-",
        status=game.status.display_name if game.status else game.completion_status,
    )


def main(argv: list[str] | None = None) -> int:
    """Main application execution flow.

    Returns:
        Exit code (0 = success, 1 = bad arguments or failed query).
    """
    args = sys.argv[1:] if argv is None else argv
    bootstrap()

    try:
        user_id = int(args[0])
    except (IndexError, ValueError):
        print(t("cli.usage"))
        return 1
    search = args[1] if len(args) > 1 else None

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    outcome: dict[str, object] = {}

    worker = CollectionWorker(None, "sort_collection", SortChoice.TITLE.value, search, user_id=user_id)
    worker.finished_with_result.connect(lambda result: outcome.setdefault("result", result))
    worker.failed.connect(lambda operation, message: outcome.setdefault("error", message))

    loop = QEventLoop()
    worker.finished.connect(loop.quit)
    worker.start()
    loop.exec()
    worker.wait()
    del app

    if "error" in outcome:
        print(t("cli.failed", error=outcome["error"]))
        return 1

    result: CollectionTaskResult = outcome["result"]
    if not result.value:
        print(t("cli.empty", user_id=user_id))
    for game in result.value:
        print(_format_game(game))
    return 0


if __name__ == "__main__":
    sys.exit(main())
