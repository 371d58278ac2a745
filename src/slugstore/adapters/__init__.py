"""Adapters layer - concrete implementations of ports.

Outbound adapters:
    - SQLiteEngine: StorageEngine backed by the stdlib sqlite3 driver
"""

from slugstore.adapters.outbound import SQLiteCursor, SQLiteEngine, SQLiteStatement

__all__ = [
    "SQLiteEngine",
    "SQLiteStatement",
    "SQLiteCursor",
]
