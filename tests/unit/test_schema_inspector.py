"""Unit tests for SchemaInspector."""

from __future__ import annotations

import pytest

from slugstore.adapters.outbound import SQLiteEngine
from slugstore.application import SchemaInspector
from slugstore.domain.errors import InvalidIdentifierError
from slugstore.domain.value_objects import validate_identifier


@pytest.fixture
def inspector(engine: SQLiteEngine) -> SchemaInspector:
    return SchemaInspector(engine, validate_identifier("items"))


@pytest.mark.unit
class TestSchemaInspector:
    """Tests for catalog reads."""

    def test_missing_table_is_empty(self, inspector: SchemaInspector) -> None:
        """A table that does not exist has an empty catalog."""
        assert inspector.columns() == {}
        assert inspector.table_exists() is False

    def test_columns_with_declared_types(
        self, engine: SQLiteEngine, inspector: SchemaInspector
    ) -> None:
        """Declared types are reported verbatim."""
        engine.exec('CREATE TABLE "items" ("_id" INTEGER PRIMARY KEY, "name" TEXT, "weight" REAL)')

        assert inspector.columns() == {"_id": "INTEGER", "name": "TEXT", "weight": "REAL"}
        assert inspector.table_exists() is True

    def test_catalog_is_not_cached(
        self, engine: SQLiteEngine, inspector: SchemaInspector
    ) -> None:
        """Changes made behind the inspector's back are seen on the next read."""
        engine.exec('CREATE TABLE "items" ("name" TEXT)')
        assert inspector.column_exists("weight") is False

        engine.exec('ALTER TABLE "items" ADD COLUMN "weight" REAL')
        assert inspector.column_exists("weight") is True

    def test_column_exists_validates(self, inspector: SchemaInspector) -> None:
        """Invalid names raise instead of answering False."""
        with pytest.raises(InvalidIdentifierError):
            inspector.column_exists("bad name")

    def test_closed_engine_reads_as_absent(
        self, engine: SQLiteEngine, inspector: SchemaInspector
    ) -> None:
        """An unreadable catalog is treated as an absent table."""
        engine.exec('CREATE TABLE "items" ("name" TEXT)')
        engine.close()
        assert inspector.columns() == {}
