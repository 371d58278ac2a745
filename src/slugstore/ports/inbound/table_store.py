"""Table store port.

The inbound contract offered to callers: idempotent schema management
and slug-keyed row access for one table.

Result codes are stable integers: 0 is a query error, 1 means the
operation changed the schema, 2 means it was already in the requested
state.
"""

from __future__ import annotations

from abc import abstractmethod
from enum import IntEnum
from typing import Any, Mapping, Protocol, Sequence, runtime_checkable

from slugstore.domain.entities.predicate import Predicate
from slugstore.domain.entities.row import OrderBy, Row
from slugstore.domain.value_objects import ColumnType


class TableAddResult(IntEnum):
    """Outcome of ``table_add_ignore``."""

    QUERY_ERROR = 0
    CREATED = 1
    ALREADY_EXISTS = 2


class TableDeleteResult(IntEnum):
    """Outcome of ``table_delete_ignore``."""

    QUERY_ERROR = 0
    REMOVED = 1
    DID_NOT_EXIST = 2


class ColumnAddResult(IntEnum):
    """Outcome of ``column_add_ignore``."""

    QUERY_ERROR = 0
    ADDED = 1
    ALREADY_EXISTS = 2


class ColumnDeleteResult(IntEnum):
    """Outcome of ``column_delete_ignore``."""

    QUERY_ERROR = 0
    REMOVED = 1
    DID_NOT_EXIST = 2


@runtime_checkable
class TableStore(Protocol):
    """Protocol for a single-table, slug-keyed store.

    Every method is one autocommitted statement (plus catalog lookups).
    Contract violations raise ``ContractError`` subclasses before any
    SQL runs; engine failures are reported through return values.
    """

    @property
    @abstractmethod
    def table_name(self) -> str:
        """Return the validated table name."""
        ...

    # Catalog

    @abstractmethod
    def columns(self) -> dict[str, str]:
        """Return the current column name -> declared type mapping.

        Empty if the table does not exist or the lookup failed.
        """
        ...

    @abstractmethod
    def table_exists(self) -> bool:
        ...

    @abstractmethod
    def column_exists(self, name: str) -> bool:
        ...

    # Schema

    @abstractmethod
    def table_add_ignore(self) -> TableAddResult:
        """Create the table with its reserved columns unless it exists."""
        ...

    @abstractmethod
    def table_delete_ignore(self) -> TableDeleteResult:
        """Drop the table if it exists."""
        ...

    @abstractmethod
    def column_add_ignore(self, name: str, column_type: ColumnType | str) -> ColumnAddResult:
        """Add a column unless it exists."""
        ...

    @abstractmethod
    def column_delete_ignore(self, name: str) -> ColumnDeleteResult:
        """Drop a column if it exists."""
        ...

    @abstractmethod
    def table_column_add_ignore(self, columns: Mapping[str, ColumnType | str]) -> bool:
        """Ensure the table and every listed column exist."""
        ...

    # Rows

    @abstractmethod
    def row_exists(self, slug: str) -> bool:
        ...

    @abstractmethod
    def row_upsert(self, slug: str, payload: Mapping[str, Any]) -> bool:
        """Insert the row or update the row with the same slug."""
        ...

    @abstractmethod
    def row_remove(self, slug: str) -> bool:
        ...

    @abstractmethod
    def row_get(self, slug: str) -> Row | None:
        ...

    @abstractmethod
    def select(
        self,
        where: Predicate | None = None,
        columns: Sequence[str] = (),
        order_by: Sequence[OrderBy | str] = (),
        limit: int | None = None,
        offset: int | None = None,
        distinct: bool = False,
    ) -> list[Row] | None:
        """Run a filtered read and materialize every row."""
        ...
