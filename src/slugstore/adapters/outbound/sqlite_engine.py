"""SQLite storage engine adapter.

This adapter implements the StorageEngine protocol on top of the
standard library ``sqlite3`` driver. The connection runs in autocommit
mode, so every statement commits on its own.

``sqlite3`` has no separate bind step, so ``SQLiteStatement`` collects
coerced values per placeholder and hands them to the driver on
``execute``. Coercion follows the requested bind type: a value that
cannot travel through that channel (``"abc"`` as INTEGER, a dict as
TEXT) is refused at bind time and the statement never runs.

Thread Safety:
    One connection, one caller. The driver's same-thread check stays on.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any, Iterator

from slugstore.domain.entities.row import Row
from slugstore.domain.services.predicate_compiler import template_placeholders
from slugstore.domain.value_objects import BindType
from slugstore.infrastructure.config import get_config
from slugstore.infrastructure.logging import get_logger

logger = get_logger(__name__)

MEMORY_DATABASE = ":memory:"
JOURNAL_MODES = frozenset({"DELETE", "TRUNCATE", "PERSIST", "MEMORY", "WAL", "OFF"})
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1


def coerce_value(value: Any, bind_type: BindType) -> Any:
    """Convert ``value`` for the ``bind_type`` channel.

    Raises:
        TypeError: If the value has no representation in that channel.
        ValueError: If a string cannot be parsed for a numeric channel, or an
            integer is outside the signed 64-bit range.
        OverflowError: If a number is too large for the FLOAT channel.
    """
    if bind_type == BindType.NULL:
        return None

    if bind_type == BindType.INTEGER:
        if isinstance(value, int):
            number = int(value)
        elif isinstance(value, float):
            if not value.is_integer():
                raise ValueError(f"{value!r} is not an integral number")
            number = int(value)
        elif isinstance(value, str):
            number = int(value.strip())
        else:
            raise TypeError(f"Cannot bind {type(value).__name__} as INTEGER")
        if not SQLITE_INT_MIN <= number <= SQLITE_INT_MAX:
            raise ValueError("Integer out of the 64-bit range SQLite can store")
        return number

    if bind_type == BindType.FLOAT:
        if isinstance(value, (bool, int, float)):
            return float(value)
        if isinstance(value, str):
            return float(value.strip())
        raise TypeError(f"Cannot bind {type(value).__name__} as FLOAT")

    if bind_type == BindType.BLOB:
        if isinstance(value, (bytes, bytearray, memoryview)):
            return bytes(value)
        if isinstance(value, str):
            return value.encode("utf-8")
        raise TypeError(f"Cannot bind {type(value).__name__} as BLOB")

    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    if isinstance(value, (bool, int, float)):
        return str(value)
    raise TypeError(f"Cannot bind {type(value).__name__} as TEXT")


class SQLiteCursor:
    """Forward-only cursor wrapping a ``sqlite3.Cursor``."""

    def __init__(self, cursor: sqlite3.Cursor) -> None:
        self._cursor = cursor
        self._columns = [d[0] for d in cursor.description] if cursor.description else []
        self._closed = False

    @property
    def columns(self) -> list[str]:
        return list(self._columns)

    def next(self) -> Row | None:
        if self._closed:
            return None
        try:
            raw = self._cursor.fetchone()
        except sqlite3.Error as e:
            logger.error("engine_fetch_error", error=str(e))
            self.close()
            return None
        if raw is None:
            self.close()
            return None
        return Row(columns=list(self._columns), values=list(raw))

    def close(self) -> None:
        if not self._closed:
            self._cursor.close()
            self._closed = True

    def __iter__(self) -> Iterator[Row]:
        try:
            while True:
                row = self.next()
                if row is None:
                    break
                yield row
        finally:
            self.close()


class SQLiteStatement:
    """A statement template plus the values bound to it so far."""

    def __init__(self, connection: sqlite3.Connection, sql: str) -> None:
        self._connection = connection
        self._sql = sql
        self._placeholders = template_placeholders(sql)
        self._params: dict[str, Any] = {}

    @property
    def sql(self) -> str:
        return self._sql

    def bind(self, placeholder: str, value: Any, bind_type: BindType) -> bool:
        name = placeholder[1:] if placeholder.startswith(":") else placeholder
        if f":{name}" not in self._placeholders:
            logger.warning("bind_unknown_placeholder", placeholder=placeholder)
            return False
        try:
            self._params[name] = coerce_value(value, bind_type)
        except (TypeError, ValueError, OverflowError) as e:
            logger.warning(
                "bind_rejected",
                placeholder=placeholder,
                bind_type=bind_type.name,
                value_type=type(value).__name__,
                error=str(e),
            )
            return False
        return True

    def execute(self) -> SQLiteCursor | None:
        try:
            cursor = self._connection.execute(self._sql, self._params)
        except (sqlite3.Error, OverflowError) as e:
            logger.error("engine_error", sql=self._sql, error=str(e))
            return None
        return SQLiteCursor(cursor)


class SQLiteEngine:
    """StorageEngine implementation backed by a single SQLite file.

    Attributes:
        file_path: Path of the database file, or ``":memory:"``.
    """

    def __init__(
        self,
        file_path: str | Path,
        timeout_seconds: float | None = None,
        journal_mode: str | None = None,
    ) -> None:
        """Open the database file.

        Args:
            file_path: Database file; created if missing.
            timeout_seconds: How long to wait on a locked file (default from config).
            journal_mode: SQLite journal mode (default from config).

        Raises:
            sqlite3.Error: If the file cannot be opened.
        """
        engine_config = get_config().engine
        self._file_path = str(file_path)
        self._timeout = timeout_seconds or engine_config.timeout_seconds
        self._journal_mode = (journal_mode or engine_config.journal_mode).upper()
        if self._journal_mode not in JOURNAL_MODES:
            raise ValueError(f"Unknown journal mode: {journal_mode!r}")

        self._connection: sqlite3.Connection | None = sqlite3.connect(
            self._file_path,
            timeout=self._timeout,
            isolation_level=None,
        )
        if self._file_path != MEMORY_DATABASE:
            # Checked against JOURNAL_MODES above.
            self._connection.execute(f"PRAGMA journal_mode = {self._journal_mode}")
        logger.debug("engine_opened", file_path=self._file_path, journal_mode=self._journal_mode)

    @property
    def file_path(self) -> str:
        return self._file_path

    @property
    def is_closed(self) -> bool:
        return self._connection is None

    def prepare(self, sql: str) -> SQLiteStatement | None:
        if self._connection is None:
            logger.error("engine_closed", sql=sql)
            return None
        return SQLiteStatement(self._connection, sql)

    def query(self, sql: str) -> SQLiteCursor | None:
        if self._connection is None:
            logger.error("engine_closed", sql=sql)
            return None
        try:
            return SQLiteCursor(self._connection.execute(sql))
        except sqlite3.Error as e:
            logger.error("engine_error", sql=sql, error=str(e))
            return None

    def exec(self, sql: str) -> bool:
        if self._connection is None:
            logger.error("engine_closed", sql=sql)
            return False
        try:
            self._connection.execute(sql).close()
        except sqlite3.Error as e:
            logger.error("engine_error", sql=sql, error=str(e))
            return False
        return True

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            logger.debug("engine_closed", file_path=self._file_path)
