"""Unit tests for bind type selection."""

from __future__ import annotations

import pytest

from slugstore.domain.services import bind_type
from slugstore.domain.value_objects import BindType


@pytest.mark.unit
class TestBindType:
    """Tests for bind_type."""

    @pytest.mark.parametrize("declared", ["INTEGER", "REAL", "BLOB", "TEXT", "NUMERIC", None])
    def test_none_is_always_null(self, declared: str | None) -> None:
        """A None value binds as NULL whatever the declared type."""
        assert bind_type(declared, None) is BindType.NULL

    def test_integer_column_with_null_value(self) -> None:
        """INTEGER column plus null value binds as NULL, not INTEGER."""
        assert bind_type("INTEGER", None) is BindType.NULL

    @pytest.mark.parametrize(
        ("declared", "expected"),
        [
            ("INTEGER", BindType.INTEGER),
            ("REAL", BindType.FLOAT),
            ("BLOB", BindType.BLOB),
            ("TEXT", BindType.TEXT),
        ],
    )
    def test_declared_type_mapping(self, declared: str, expected: BindType) -> None:
        """Declared types map to their bind channel."""
        assert bind_type(declared, 1) is expected

    @pytest.mark.parametrize("declared", ["VARCHAR(20)", "", "integer", None])
    def test_unknown_or_missing_type_is_text(self, declared: str | None) -> None:
        """Unrecognized or missing declared types fall back to TEXT."""
        assert bind_type(declared, "x") is BindType.TEXT

    def test_mapping_depends_on_value_per_call(self) -> None:
        """The same column yields different channels for different values."""
        assert bind_type("INTEGER", 5) is BindType.INTEGER
        assert bind_type("INTEGER", None) is BindType.NULL
        assert bind_type("INTEGER", 6) is BindType.INTEGER
