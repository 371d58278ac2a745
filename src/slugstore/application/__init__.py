"""Application layer for slugstore.

The application layer wires the domain compiler to the storage engine
and exposes the table-level use cases.

Exports:
    TableHandle:
        - TableHandle: Schema and row operations for one table
        - open_table: Open a database file and bind a handle to a table
    Executor:
        - StatementExecutor: Verified, typed, all-or-nothing binding
        - SchemaInspector: Live column catalog lookups
"""

from slugstore.application.schema_inspector import SchemaInspector
from slugstore.application.statement_executor import StatementExecutor, statement_type
from slugstore.application.table_handle import TableHandle, open_table

__all__ = [
    "TableHandle",
    "open_table",
    "StatementExecutor",
    "SchemaInspector",
    "statement_type",
]
