"""Value objects for the slugstore domain.

Exports:
    Identifiers:
        - Identifier: A name that passed validation
        - validate_identifier, validate_column_reference, validate_slug
        - quote_identifier: Double-quote a validated name
        - ID_COLUMN, SLUG_COLUMN, CREATED_AT_COLUMN, UPDATED_AT_COLUMN
        - RESERVED_COLUMNS: The four bookkeeping columns

    Types:
        - ColumnType: INTEGER, REAL, BLOB, TEXT
        - BindType: NULL, INTEGER, FLOAT, BLOB, TEXT
        - validate_column_type
"""

from slugstore.domain.value_objects.column_types import (
    BindType,
    ColumnType,
    validate_column_type,
)
from slugstore.domain.value_objects.identifiers import (
    CREATED_AT_COLUMN,
    ID_COLUMN,
    RESERVED_COLUMNS,
    SLUG_COLUMN,
    UPDATED_AT_COLUMN,
    Identifier,
    quote_identifier,
    validate_column_reference,
    validate_identifier,
    validate_slug,
)

__all__ = [
    # Identifiers
    "Identifier",
    "validate_identifier",
    "validate_column_reference",
    "validate_slug",
    "quote_identifier",
    "ID_COLUMN",
    "SLUG_COLUMN",
    "CREATED_AT_COLUMN",
    "UPDATED_AT_COLUMN",
    "RESERVED_COLUMNS",
    # Types
    "ColumnType",
    "BindType",
    "validate_column_type",
]
