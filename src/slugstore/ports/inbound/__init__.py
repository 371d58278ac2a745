"""Inbound ports - APIs offered to callers."""

from slugstore.ports.inbound.table_store import (
    ColumnAddResult,
    ColumnDeleteResult,
    TableAddResult,
    TableDeleteResult,
    TableStore,
)

__all__ = [
    "TableStore",
    "TableAddResult",
    "TableDeleteResult",
    "ColumnAddResult",
    "ColumnDeleteResult",
]
