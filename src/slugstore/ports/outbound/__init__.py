"""Outbound ports - interfaces for external dependencies.

The only outbound dependency is the embedded relational engine.
"""

from slugstore.ports.outbound.storage_engine import (
    PreparedStatement,
    ResultCursor,
    StorageEngine,
)

__all__ = [
    "StorageEngine",
    "PreparedStatement",
    "ResultCursor",
]
