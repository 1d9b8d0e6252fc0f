from __future__ import annotations

from gamegrinding.services.collection_service import CollectionService

__all__: list[str] = [
    "CollectionService",
]
