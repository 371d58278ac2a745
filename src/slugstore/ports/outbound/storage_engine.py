"""Storage engine port.

This outbound port defines what slugstore needs from the embedded
relational engine underneath it: prepared statements with typed,
named-parameter binding, forward-only cursors, a metadata query call and
a DDL exec call.

Failures at this boundary are values, not exceptions. Implementations
return ``None`` or ``False`` when the engine rejects a statement, and
log the engine's own error.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Iterator, Protocol

from slugstore.domain.entities.row import Row
from slugstore.domain.value_objects import BindType


class ResultCursor(Protocol):
    """Forward-only cursor over the rows a statement produced.

    The consumer must drain or close it before the next statement runs
    on the same connection.
    """

    @abstractmethod
    def next(self) -> Row | None:
        """Return the next row or None if exhausted."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the cursor."""
        ...

    def __iter__(self) -> Iterator[Row]:
        ...


class PreparedStatement(Protocol):
    """A SQL template with named ``:placeholder`` parameters."""

    @property
    @abstractmethod
    def sql(self) -> str:
        """Return the template text."""
        ...

    @abstractmethod
    def bind(self, placeholder: str, value: Any, bind_type: BindType) -> bool:
        """Bind ``value`` to ``placeholder`` through ``bind_type``.

        Args:
            placeholder: Placeholder name including the leading colon.
            value: Raw value.
            bind_type: Channel the value must be sent through.

        Returns:
            True if the engine accepted the value, False otherwise.
        """
        ...

    @abstractmethod
    def execute(self) -> ResultCursor | None:
        """Run the statement with the bound values.

        Returns:
            An open cursor, or None if the engine rejected the statement.
        """
        ...


class StorageEngine(Protocol):
    """Protocol for one exclusively owned engine connection.

    Thread Safety:
        Not thread-safe. The engine processes one statement at a time;
        callers serialize access externally.
    """

    @abstractmethod
    def prepare(self, sql: str) -> PreparedStatement | None:
        """Prepare a parameterized statement, or None if rejected."""
        ...

    @abstractmethod
    def query(self, sql: str) -> ResultCursor | None:
        """Run a parameterless read (metadata lookups), or None on failure."""
        ...

    @abstractmethod
    def exec(self, sql: str) -> bool:
        """Run a parameterless statement (DDL). Returns success."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the connection. Further calls are invalid."""
        ...
