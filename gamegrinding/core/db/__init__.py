"""Collection store package.

All mixins compose into the Database class via multiple inheritance.
ConnectionBase is the only class with an __init__; its call to
SchemaMixin._ensure_schema() creates the schema on first open.
"""

from __future__ import annotations

from gamegrinding.core.db.collection_queries import CollectionMixin
from gamegrinding.core.db.connection import MEMORY_DATABASE, ConnectionBase
from gamegrinding.core.db.game_queries import GameQueryMixin
from gamegrinding.core.db.models import UNKNOWN_GAME_ID, GameMetadata, map_row_to_record
from gamegrinding.core.db.schema import SchemaMixin

__all__ = [
    "Database",
    "GameMetadata",
    "MEMORY_DATABASE",
    "UNKNOWN_GAME_ID",
    "map_row_to_record",
]


class Database(
    SchemaMixin,
    CollectionMixin,
    GameQueryMixin,
    ConnectionBase,
):
    """Collection store handle.

    Owns one SQLite connection. Inherits connection management from
    ConnectionBase, schema handling from SchemaMixin, metadata operations
    from GameQueryMixin and membership operations from CollectionMixin.
    Pass it explicitly to whatever needs store access.
    """

    pass
