"""Table handle - the entry point for working with one table.

Usage:
    from slugstore import And, Compare, OrderBy, open_table

    with open_table("/path/to/site.db", "posts") as posts:
        posts.table_column_add_ignore({"title": "TEXT", "views": "INTEGER"})
        posts.row_upsert("hello-world", {"title": "Hello", "views": 1})

        rows = posts.select(
            And([Compare("views", ">=", 1), Compare("title", "LIKE", "Hel%")]),
            order_by=[OrderBy("_id")],
            limit=10,
        )

Every table carries four reserved columns (``_id``, ``_slug``,
``_created_at``, ``_updated_at``). Rows are addressed by slug only.
Each operation is one autocommitted statement. Contract violations raise
``ContractError`` subclasses before SQL is built; engine failures come
back as ``False``/``None``/``QUERY_ERROR``.
"""

from __future__ import annotations

import functools
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence, TypeVar

from slugstore.adapters.outbound.sqlite_engine import SQLiteEngine
from slugstore.application.schema_inspector import SchemaInspector
from slugstore.application.statement_executor import StatementExecutor
from slugstore.domain.entities.predicate import Compare, ComparisonOp, Predicate
from slugstore.domain.entities.row import OrderBy, Row
from slugstore.domain.errors import ContractError, InvalidQueryError, UnknownColumnError
from slugstore.domain.services import Binding, compile_predicate
from slugstore.domain.value_objects import (
    CREATED_AT_COLUMN,
    ID_COLUMN,
    SLUG_COLUMN,
    UPDATED_AT_COLUMN,
    ColumnType,
    Identifier,
    quote_identifier,
    validate_column_reference,
    validate_column_type,
    validate_identifier,
    validate_slug,
)
from slugstore.infrastructure.config import Config, get_config
from slugstore.infrastructure.logging import get_logger
from slugstore.infrastructure.metrics import MetricsRegistry, get_metrics
from slugstore.ports.inbound import (
    ColumnAddResult,
    ColumnDeleteResult,
    TableAddResult,
    TableDeleteResult,
)
from slugstore.ports.outbound import StorageEngine

F = TypeVar("F", bound=Callable[..., Any])

SLUG_PLACEHOLDER = ":slug"
NOW_PLACEHOLDER = ":now"
PAYLOAD_PLACEHOLDER_PREFIX = "p"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _contract_guard(func: F) -> F:
    """Count and log contract violations raised by a handle operation."""

    @functools.wraps(func)
    def wrapper(self: TableHandle, *args: Any, **kwargs: Any) -> Any:
        try:
            return func(self, *args, **kwargs)
        except ContractError as e:
            self._metrics.contract_violations_total.labels(kind=e.kind).inc()
            self._log.error("contract_violation", operation=func.__name__, kind=e.kind, error=str(e))
            raise

    return wrapper  # type: ignore[return-value]


def _check_count(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidQueryError(f"{name} must be a non-negative integer, got {value!r}")
    return value


class TableHandle:
    """Safe accessor for one table of an embedded database.

    The handle owns its engine connection exclusively. It is not safe for
    concurrent use; serialize calls externally.

    Attributes:
        table_name: The validated table name.
    """

    def __init__(
        self,
        engine: StorageEngine,
        table_name: str,
        *,
        metrics: MetricsRegistry | None = None,
        clock: Callable[[], datetime] | None = None,
        timestamp_timespec: str | None = None,
    ) -> None:
        """Bind a handle to ``table_name`` on an open engine.

        Args:
            engine: The storage engine connection to take ownership of.
            table_name: Table to operate on.
            metrics: Metrics registry (default: global registry).
            clock: Source of row timestamps (default: UTC now).
            timestamp_timespec: ``datetime.isoformat`` precision for row
                timestamps (default from config).

        Raises:
            InvalidIdentifierError: If ``table_name`` is invalid.
        """
        self._table: Identifier = validate_identifier(table_name)
        self._engine = engine
        self._metrics = metrics or get_metrics()
        self._clock = clock or _utc_now
        self._timespec = timestamp_timespec or get_config().rows.timestamp_timespec
        self._inspector = SchemaInspector(engine, self._table)
        self._executor = StatementExecutor(engine, self._inspector, self._metrics)
        self._log = get_logger(__name__, table=self._table)

    @property
    def table_name(self) -> str:
        return self._table

    def close(self) -> None:
        """Close the underlying connection."""
        self._engine.close()

    def __enter__(self) -> TableHandle:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def columns(self) -> dict[str, str]:
        return self._inspector.columns()

    def table_exists(self) -> bool:
        return self._inspector.table_exists()

    @_contract_guard
    def column_exists(self, name: str) -> bool:
        return self._inspector.column_exists(name)

    # ------------------------------------------------------------------
    # Schema operations
    # ------------------------------------------------------------------

    def table_add_ignore(self) -> TableAddResult:
        """Create the table with its reserved columns unless it exists."""
        if self.table_exists():
            result = TableAddResult.ALREADY_EXISTS
        else:
            sql = (
                f"CREATE TABLE {quote_identifier(self._table)} ("
                f"{quote_identifier(ID_COLUMN)} INTEGER PRIMARY KEY AUTOINCREMENT, "
                f"{quote_identifier(SLUG_COLUMN)} TEXT NOT NULL UNIQUE, "
                f"{quote_identifier(CREATED_AT_COLUMN)} TEXT NOT NULL, "
                f"{quote_identifier(UPDATED_AT_COLUMN)} TEXT NOT NULL)"
            )
            ok = self._engine.exec(sql)
            result = TableAddResult.CREATED if ok else TableAddResult.QUERY_ERROR
        self._record_schema_change("table_add", result)
        return result

    def table_delete_ignore(self) -> TableDeleteResult:
        """Drop the table if it exists."""
        if not self.table_exists():
            result = TableDeleteResult.DID_NOT_EXIST
        else:
            ok = self._engine.exec(f"DROP TABLE {quote_identifier(self._table)}")
            result = TableDeleteResult.REMOVED if ok else TableDeleteResult.QUERY_ERROR
        self._record_schema_change("table_delete", result)
        return result

    @_contract_guard
    def column_add_ignore(self, name: str, column_type: ColumnType | str) -> ColumnAddResult:
        """Add a column unless it exists.

        Raises:
            InvalidIdentifierError: If ``name`` is invalid.
            InvalidColumnTypeError: If ``column_type`` is not INTEGER, REAL,
                BLOB or TEXT.
        """
        column = validate_identifier(name)
        declared = validate_column_type(column_type)

        if self._inspector.column_exists(column):
            result = ColumnAddResult.ALREADY_EXISTS
        else:
            sql = (
                f"ALTER TABLE {quote_identifier(self._table)} "
                f"ADD COLUMN {quote_identifier(column)} {declared.value}"
            )
            ok = self._engine.exec(sql)
            result = ColumnAddResult.ADDED if ok else ColumnAddResult.QUERY_ERROR
        self._record_schema_change("column_add", result, column=column)
        return result

    @_contract_guard
    def column_delete_ignore(self, name: str) -> ColumnDeleteResult:
        """Drop a column if it exists.

        Raises:
            InvalidIdentifierError: If ``name`` is invalid.
        """
        column = validate_identifier(name)

        if not self._inspector.column_exists(column):
            result = ColumnDeleteResult.DID_NOT_EXIST
        else:
            sql = (
                f"ALTER TABLE {quote_identifier(self._table)} "
                f"DROP COLUMN {quote_identifier(column)}"
            )
            ok = self._engine.exec(sql)
            result = ColumnDeleteResult.REMOVED if ok else ColumnDeleteResult.QUERY_ERROR
        self._record_schema_change("column_delete", result, column=column)
        return result

    @_contract_guard
    def table_column_add_ignore(self, columns: Mapping[str, ColumnType | str]) -> bool:
        """Ensure the table and every listed column exist.

        All names and types are validated before any DDL runs.

        Returns:
            True if the table and every requested column are present
            afterwards (created now or already there).
        """
        requested = {
            validate_identifier(name): validate_column_type(column_type)
            for name, column_type in columns.items()
        }

        if self.table_add_ignore() == TableAddResult.QUERY_ERROR:
            return False

        present: dict[str, ColumnType] = {}
        for column, declared in requested.items():
            if self.column_add_ignore(column, declared) != ColumnAddResult.QUERY_ERROR:
                present[column] = declared

        return present == requested

    # ------------------------------------------------------------------
    # Row operations
    # ------------------------------------------------------------------

    @_contract_guard
    def row_exists(self, slug: str) -> bool:
        """Check whether a row with ``slug`` exists.

        Raises:
            EmptySlugError: If ``slug`` is empty.
        """
        slug = validate_slug(slug)
        sql = (
            f"SELECT 1 FROM {quote_identifier(self._table)} "
            f"WHERE {quote_identifier(SLUG_COLUMN)} = {SLUG_PLACEHOLDER} LIMIT 1"
        )
        cursor = self._executor.execute(sql, [Binding(SLUG_PLACEHOLDER, SLUG_COLUMN, slug)])
        if cursor is None:
            return False
        try:
            return cursor.next() is not None
        finally:
            cursor.close()

    @_contract_guard
    def row_upsert(self, slug: str, payload: Mapping[str, Any]) -> bool:
        """Insert a row, or update the row that already has ``slug``.

        Every payload key must be an existing column. ``_created_at`` is
        written on insert only; ``_updated_at`` on insert and update.

        Returns:
            True if the statement executed, False on engine failure.

        Raises:
            EmptySlugError: If ``slug`` is empty.
            InvalidIdentifierError: If a payload key is not a valid name.
            UnknownColumnError: If any payload key is not a column of the
                table. Nothing is written.
        """
        slug = validate_slug(slug)
        if not isinstance(payload, Mapping):
            raise InvalidQueryError(f"Upsert payload must be a mapping, got {type(payload).__name__}")

        catalog = self._inspector.columns()
        retained: list[Binding] = []
        missing: list[str] = []
        for name, value in payload.items():
            column = validate_identifier(name)
            if column in catalog:
                placeholder = f":{PAYLOAD_PLACEHOLDER_PREFIX}{len(retained)}"
                retained.append(Binding(placeholder, column, value))
            else:
                missing.append(column)

        if len(retained) < len(payload):
            raise UnknownColumnError(self._table, missing)

        table = quote_identifier(self._table)
        slug_col = quote_identifier(SLUG_COLUMN)
        updated_col = quote_identifier(UPDATED_AT_COLUMN)
        insert_columns = [
            slug_col,
            quote_identifier(CREATED_AT_COLUMN),
            updated_col,
            *(quote_identifier(b.column) for b in retained),
        ]
        insert_values = [
            SLUG_PLACEHOLDER,
            NOW_PLACEHOLDER,
            NOW_PLACEHOLDER,
            *(b.placeholder for b in retained),
        ]
        assignments = [
            f"{updated_col} = {NOW_PLACEHOLDER}",
            *(f"{quote_identifier(b.column)} = {b.placeholder}" for b in retained),
        ]
        sql = (
            f"INSERT INTO {table} ({', '.join(insert_columns)}) "
            f"VALUES ({', '.join(insert_values)}) "
            f"ON CONFLICT({slug_col}) DO UPDATE SET {', '.join(assignments)}"
        )

        bindings = [
            Binding(SLUG_PLACEHOLDER, SLUG_COLUMN, slug),
            Binding(NOW_PLACEHOLDER, UPDATED_AT_COLUMN, self._timestamp()),
            *retained,
        ]
        cursor = self._executor.execute(sql, bindings)
        if cursor is None:
            return False
        cursor.close()
        return True

    @_contract_guard
    def row_remove(self, slug: str) -> bool:
        """Delete the row with ``slug``. Deleting a missing row succeeds.

        Raises:
            EmptySlugError: If ``slug`` is empty.
        """
        slug = validate_slug(slug)
        sql = (
            f"DELETE FROM {quote_identifier(self._table)} "
            f"WHERE {quote_identifier(SLUG_COLUMN)} = {SLUG_PLACEHOLDER}"
        )
        cursor = self._executor.execute(sql, [Binding(SLUG_PLACEHOLDER, SLUG_COLUMN, slug)])
        if cursor is None:
            return False
        cursor.close()
        return True

    @_contract_guard
    def row_get(self, slug: str) -> Row | None:
        """Return the row with ``slug``, or None if absent or on failure."""
        slug = validate_slug(slug)
        rows = self.select(Compare(SLUG_COLUMN, ComparisonOp.EQ, slug), limit=1)
        return rows[0] if rows else None

    @_contract_guard
    def select(
        self,
        where: Predicate | None = None,
        columns: Sequence[str] = (),
        order_by: Sequence[OrderBy | str] = (),
        limit: int | None = None,
        offset: int | None = None,
        distinct: bool = False,
    ) -> list[Row] | None:
        """Run a filtered read and materialize every row.

        Args:
            where: Predicate tree; None (or one compiling to nothing)
                selects every row.
            columns: Columns to project; empty selects ``*``.
            order_by: ORDER BY items. A bare column name sorts ascending.
            limit: Maximum number of rows.
            offset: Rows to skip.
            distinct: Emit ``SELECT DISTINCT``.

        Returns:
            The rows in engine order, or None on engine failure.

        Raises:
            InvalidIdentifierError: For an invalid column anywhere.
            PredicateCompileError: For a malformed predicate tree.
            InvalidQueryError: For malformed ordering, limit or offset.
        """
        if isinstance(columns, str):
            raise InvalidQueryError("columns must be a sequence of names, not a string")
        if isinstance(order_by, (str, OrderBy)):
            raise InvalidQueryError("order_by must be a sequence of OrderBy items")

        parts = ["SELECT"]
        if distinct:
            parts.append("DISTINCT")

        projection = [quote_identifier(validate_column_reference(c)) for c in columns]
        parts.append(", ".join(projection) if projection else "*")
        parts.append(f"FROM {quote_identifier(self._table)}")

        bindings: list[Binding] = []
        if where is not None:
            compiled = compile_predicate(where)
            if not compiled.is_empty:
                parts.append(f"WHERE {compiled.sql}")
                bindings = compiled.bindings

        ordering = [self._order_item(item) for item in order_by]
        if ordering:
            parts.append(f"ORDER BY {', '.join(ordering)}")

        if limit is not None or offset is not None:
            row_limit = -1 if limit is None else _check_count("limit", limit)
            parts.append(f"LIMIT {row_limit}")
            if offset is not None:
                parts.append(f"OFFSET {_check_count('offset', offset)}")

        cursor = self._executor.execute(" ".join(parts), bindings)
        if cursor is None:
            return None
        return list(cursor)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _order_item(self, item: OrderBy | str) -> str:
        if isinstance(item, str):
            item = OrderBy(item)
        if not isinstance(item, OrderBy) or not isinstance(item.ascending, bool):
            raise InvalidQueryError(f"Invalid ORDER BY item: {item!r}")
        return f"{quote_identifier(validate_column_reference(item.column))} {item.direction}"

    def _timestamp(self) -> str:
        return self._clock().isoformat(timespec=self._timespec)

    def _record_schema_change(self, operation: str, result: Any, **context: Any) -> None:
        self._metrics.schema_changes_total.labels(operation=operation, result=result.name).inc()
        if result.value == 0:
            self._log.error("schema_change_failed", operation=operation, **context)
        else:
            self._log.info("schema_change", operation=operation, result=result.name, **context)


def open_table(
    file_path: str | Path,
    table_name: str,
    *,
    config: Config | None = None,
    metrics: MetricsRegistry | None = None,
    clock: Callable[[], datetime] | None = None,
) -> TableHandle:
    """Open ``file_path`` and return a handle bound to ``table_name``.

    The table name is validated before the file is touched.

    Raises:
        InvalidIdentifierError: If ``table_name`` is invalid.
    """
    table = validate_identifier(table_name)
    config = config or get_config()
    engine = SQLiteEngine(
        file_path,
        timeout_seconds=config.engine.timeout_seconds,
        journal_mode=config.engine.journal_mode,
    )
    return TableHandle(
        engine,
        table,
        metrics=metrics,
        clock=clock,
        timestamp_timespec=config.rows.timestamp_timespec,
    )
