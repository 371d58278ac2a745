"""Schema inspection for one table.

The catalog is read from the engine on every call. Nothing is cached:
another connection may add or drop columns at any time, and a stale
catalog would pick the wrong bind types or accept writes to dropped
columns.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from slugstore.domain.value_objects import Identifier, quote_identifier, validate_identifier
from slugstore.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from slugstore.ports.outbound import StorageEngine

logger = get_logger(__name__)


class SchemaInspector:
    """Reads the column catalog of a single table."""

    def __init__(self, engine: StorageEngine, table_name: Identifier) -> None:
        self._engine = engine
        self._table = table_name

    def columns(self) -> dict[str, str]:
        """Return the column name -> declared type mapping.

        An empty mapping means the table does not exist or the metadata
        query failed; callers treat both as "absent".
        """
        cursor = self._engine.query(f"PRAGMA table_info({quote_identifier(self._table)})")
        if cursor is None:
            logger.warning("catalog_unavailable", table=self._table)
            return {}

        catalog: dict[str, str] = {}
        for row in cursor:
            name = row.get("name")
            declared = row.get("type")
            if name is not None and declared is not None:
                catalog[name] = declared
        return catalog

    def table_exists(self) -> bool:
        return bool(self.columns())

    def column_exists(self, name: str) -> bool:
        """Check whether ``name`` is a column of the table.

        Raises:
            InvalidIdentifierError: If ``name`` is not a valid column name.
        """
        column = validate_identifier(name)
        return column in self.columns()
