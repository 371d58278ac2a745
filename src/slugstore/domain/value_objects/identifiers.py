"""Identifier and slug validation.

Table and column names cannot be bound as statement parameters, so they
end up in SQL text. Every such name passes through this module first.
A name is a letter followed by letters, digits or underscores. Nothing
else is accepted, no matter how it would be quoted.
"""

from __future__ import annotations

import re
from typing import Any, NewType

from slugstore.domain.errors import EmptySlugError, InvalidIdentifierError

Identifier = NewType("Identifier", str)
"""A name that passed validation and may be interpolated into SQL."""

IDENTIFIER_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9_]*")

# Reserved bookkeeping columns created with every table.
ID_COLUMN = Identifier("_id")
SLUG_COLUMN = Identifier("_slug")
CREATED_AT_COLUMN = Identifier("_created_at")
UPDATED_AT_COLUMN = Identifier("_updated_at")

RESERVED_COLUMNS: frozenset[str] = frozenset(
    {ID_COLUMN, SLUG_COLUMN, CREATED_AT_COLUMN, UPDATED_AT_COLUMN}
)


def validate_identifier(name: Any) -> Identifier:
    """Return ``name`` unchanged if it is a valid table or column name.

    Raises:
        InvalidIdentifierError: If ``name`` is not a string matching
            ``^[A-Za-z][A-Za-z0-9_]*$``.

    Example:
        >>> validate_identifier("title")
        'title'
    """
    if not isinstance(name, str) or IDENTIFIER_PATTERN.fullmatch(name) is None:
        raise InvalidIdentifierError(
            f"Invalid table or column name {name!r}: it may contain only letters, "
            "digits or underscores and must start with a letter"
        )
    return Identifier(name)


def validate_column_reference(name: Any) -> Identifier:
    """Validate a column referenced by a read (filter, projection, ordering).

    Reads may address the reserved bookkeeping columns in addition to
    anything ``validate_identifier`` accepts.
    """
    if isinstance(name, str) and name in RESERVED_COLUMNS:
        return Identifier(name)
    return validate_identifier(name)


def quote_identifier(name: Identifier) -> str:
    """Double-quote a validated identifier for SQL text."""
    return f'"{name}"'


def validate_slug(slug: Any) -> str:
    """Return ``slug`` if it is a non-empty string.

    Raises:
        EmptySlugError: If ``slug`` is empty or not a string.
    """
    if not isinstance(slug, str) or len(slug) == 0:
        raise EmptySlugError("The row slug must be a non-empty string")
    return slug
