"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Inbound ports: APIs offered to clients (TableStore)
- Outbound ports: Dependencies on external systems (StorageEngine)

Adapters implement these ports with concrete functionality.
"""

from slugstore.ports.inbound import (
    ColumnAddResult,
    ColumnDeleteResult,
    TableAddResult,
    TableDeleteResult,
    TableStore,
)
from slugstore.ports.outbound import PreparedStatement, ResultCursor, StorageEngine

__all__ = [
    # Inbound ports
    "TableStore",
    "TableAddResult",
    "TableDeleteResult",
    "ColumnAddResult",
    "ColumnDeleteResult",
    # Outbound ports
    "StorageEngine",
    "PreparedStatement",
    "ResultCursor",
]
