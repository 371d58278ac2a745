"""Column and bind types."""

from __future__ import annotations

from enum import Enum
from typing import Any

from slugstore.domain.errors import InvalidColumnTypeError


class ColumnType(Enum):
    """Declared types a column may be created with."""

    INTEGER = "INTEGER"
    REAL = "REAL"
    BLOB = "BLOB"
    TEXT = "TEXT"


class BindType(Enum):
    """Typed channel a parameter value is sent through."""

    NULL = "null"
    INTEGER = "integer"
    FLOAT = "float"
    BLOB = "blob"
    TEXT = "text"


def validate_column_type(column_type: Any) -> ColumnType:
    """Resolve a requested column type.

    Accepts a ``ColumnType`` or its exact (upper-case) string value.

    Raises:
        InvalidColumnTypeError: For anything else.
    """
    if isinstance(column_type, ColumnType):
        return column_type
    if isinstance(column_type, str):
        try:
            return ColumnType(column_type)
        except ValueError:
            pass
    raise InvalidColumnTypeError(
        f"Invalid column type {column_type!r}: allowed types are INTEGER, REAL, BLOB, TEXT"
    )
