"""Result rows and ordering items."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class Row:
    """A row of data returned by a read.

    Rows can be accessed by column name or index.
    """

    columns: list[str]
    values: list[Any]

    def __getitem__(self, key: str | int) -> Any:
        if isinstance(key, int):
            return self.values[key]
        try:
            idx = self.columns.index(key)
            return self.values[idx]
        except ValueError as e:
            raise KeyError(f"Column '{key}' not found") from e

    def __len__(self) -> int:
        return len(self.values)

    def get(self, key: str, default: Any = None) -> Any:
        try:
            return self[key]
        except KeyError:
            return default

    def as_dict(self) -> dict[str, Any]:
        return dict(zip(self.columns, self.values))

    def __repr__(self) -> str:
        pairs = ", ".join(f"{c}={v!r}" for c, v in zip(self.columns, self.values))
        return f"Row({pairs})"


@dataclass(frozen=True)
class OrderBy:
    """One ORDER BY item."""

    column: str
    ascending: bool = True

    @property
    def direction(self) -> str:
        return "ASC" if self.ascending else "DESC"
