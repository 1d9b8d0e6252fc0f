"""UI worker threads package.

Contains background worker threads that keep store calls off the UI thread.
"""

from __future__ import annotations

from gamegrinding.ui.workers.collection_worker import CollectionWorker

__all__ = [
    "CollectionWorker",
]
