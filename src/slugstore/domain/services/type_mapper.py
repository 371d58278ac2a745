"""Bind type selection.

The channel a value is bound through depends on the declared type of the
column it targets, looked up at bind time. A ``None`` value always goes
through NULL so that an INTEGER column can still be cleared.
"""

from __future__ import annotations

from typing import Any

from slugstore.domain.value_objects import BindType

_DECLARED_TO_BIND: dict[str, BindType] = {
    "INTEGER": BindType.INTEGER,
    "REAL": BindType.FLOAT,
    "BLOB": BindType.BLOB,
}


def bind_type(declared_type: str | None, value: Any) -> BindType:
    """Pick the bind type for ``value`` targeting a column of ``declared_type``.

    Args:
        declared_type: The column's declared type from the catalog, or
            ``None`` when the column is not in the catalog.
        value: The raw value about to be bound.

    Returns:
        NULL for ``None``; otherwise INTEGER, FLOAT or BLOB for the matching
        declared type and TEXT for everything else.
    """
    if value is None:
        return BindType.NULL
    if declared_type is None:
        return BindType.TEXT
    return _DECLARED_TO_BIND.get(declared_type, BindType.TEXT)
