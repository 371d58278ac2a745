"""Outbound adapters - implementations of outbound ports."""

from slugstore.adapters.outbound.sqlite_engine import (
    SQLiteCursor,
    SQLiteEngine,
    SQLiteStatement,
    coerce_value,
)

__all__ = [
    "SQLiteEngine",
    "SQLiteStatement",
    "SQLiteCursor",
    "coerce_value",
]
