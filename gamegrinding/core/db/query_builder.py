"""Composable SELECT builder for collection queries.

A query is a fixed base (memberships joined to metadata, scoped to one
user) plus optional conjunctive clauses. Each clause carries its own bound
parameters, so values never end up in the SQL text.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from gamegrinding.core.db.connection import CASEFOLD_COLLATION
from gamegrinding.core.db.models import GAME_COLUMNS

__all__ = ["CollectionQuery", "LIKE_ESCAPE", "clean_values", "escape_like"]

# Only these column names may be interpolated into SQL text
_ALLOWED_COLUMNS: frozenset[str] = frozenset(GAME_COLUMNS)

LIKE_ESCAPE = "\\"


def escape_like(text: str) -> str:
    """Escapes LIKE wildcards so ``text`` matches literally (use with ``ESCAPE '\\'``)."""
    return text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2).replace("%", LIKE_ESCAPE + "%").replace("_", LIKE_ESCAPE + "_")


def clean_values(values: Iterable[Any] | str | None) -> list[str]:
    """Normalizes a caller-supplied filter list.

    None entries and blank strings are dropped, surrounding whitespace is
    stripped, and duplicates are removed while keeping first-seen order. A
    single string is treated as a one-element list.

    Returns:
        The cleaned values; empty means "no restriction".
    """
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]

    cleaned: list[str] = []
    for value in values:
        if value is None:
            continue
        text = str(value).strip()
        if text and text not in cleaned:
            cleaned.append(text)
    return cleaned


def _column(name: str) -> str:
    if name not in _ALLOWED_COLUMNS:
        raise ValueError(f"Unknown Game column: {name}")
    return f"G.{name}"


@dataclass
class CollectionQuery:
    """SELECT over one user's collection, built up clause by clause.

    Example::

        q = CollectionQuery(user_id=1).where_in("Genre", ["RPG"]).order_by("Title", casefold=True)
        db.conn.execute(q.sql(), q.params())
    """

    user_id: int
    select: str = "G.*"
    distinct: bool = False
    _clauses: list[str] = field(default_factory=list, init=False, repr=False)
    _params: list[Any] = field(default_factory=list, init=False, repr=False)
    _order: str = field(default="", init=False, repr=False)

    def where_in(self, column: str, values: Iterable[Any] | str | None) -> CollectionQuery:
        """Adds ``column IN (...)``; a None/empty value list adds nothing."""
        cleaned = clean_values(values)
        if cleaned:
            placeholders = ",".join("?" * len(cleaned))
            self._clauses.append(f"{_column(column)} IN ({placeholders})")
            self._params.extend(cleaned)
        return self

    def where_equals(self, column: str, value: str | None) -> CollectionQuery:
        """Adds ``column = ?`` unless the value is None or empty."""
        if value:
            self._clauses.append(f"{_column(column)} = ?")
            self._params.append(value)
        return self

    def where_contains(self, column: str, substring: str | None) -> CollectionQuery:
        """Adds a case-insensitive substring match unless the substring is None or blank.

        SQLite's LIKE ignores ASCII case. ``%`` and ``_`` in the substring
        match literally.
        """
        if substring is not None and substring.strip():
            self._clauses.append(f"{_column(column)} LIKE ? ESCAPE '{LIKE_ESCAPE}'")
            self._params.append(f"%{escape_like(substring)}%")
        return self

    def order_by(self, column: str, casefold: bool = False) -> CollectionQuery:
        """Ascending order; ``casefold`` compares text ignoring case (Unicode-aware)."""
        collate = f" COLLATE {CASEFOLD_COLLATION}" if casefold else ""
        self._order = f" ORDER BY {_column(column)}{collate} ASC"
        return self

    def sql(self) -> str:
        keyword = "SELECT DISTINCT" if self.distinct else "SELECT"
        query = f"{keyword} {self.select} FROM UserGameCollection UGC JOIN Game G ON UGC.GameID = G.GameID WHERE UGC.UserID = ?"
        for clause in self._clauses:
            query += f" AND {clause}"
        return query + self._order

    def params(self) -> tuple[Any, ...]:
        """Bound parameters in placeholder order (user id first)."""
        return (self.user_id, *self._params)
