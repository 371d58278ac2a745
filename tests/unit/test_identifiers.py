"""Unit tests for domain value objects - identifiers and column types."""

from __future__ import annotations

import pytest

from slugstore.domain.errors import (
    ContractError,
    EmptySlugError,
    InvalidColumnTypeError,
    InvalidIdentifierError,
)
from slugstore.domain.value_objects import (
    RESERVED_COLUMNS,
    BindType,
    ColumnType,
    quote_identifier,
    validate_column_reference,
    validate_column_type,
    validate_identifier,
    validate_slug,
)


@pytest.mark.unit
class TestValidateIdentifier:
    """Tests for validate_identifier."""

    @pytest.mark.parametrize("name", ["a", "title", "Title2", "created_by_user", "x_1_y", "ABC"])
    def test_valid_names_are_returned_unchanged(self, name: str) -> None:
        """Valid identifiers pass through as the identity."""
        assert validate_identifier(name) == name

    @pytest.mark.parametrize(
        "name",
        [
            "",
            "1abc",
            "a-b",
            "_slug",
            "_private",
            "a b",
            "a;DROP TABLE x",
            'a"b',
            "a'b",
            "naïve",
            "title\n",
            "a.b",
        ],
    )
    def test_invalid_names_are_rejected(self, name: str) -> None:
        """Anything outside ^[A-Za-z][A-Za-z0-9_]*$ is rejected."""
        with pytest.raises(InvalidIdentifierError):
            validate_identifier(name)

    @pytest.mark.parametrize("name", [None, 42, b"title", ["title"]])
    def test_non_strings_are_rejected(self, name: object) -> None:
        """Only strings can be identifiers."""
        with pytest.raises(InvalidIdentifierError):
            validate_identifier(name)

    def test_error_is_contract_error(self) -> None:
        """Identifier failures belong to the contract-error tier."""
        with pytest.raises(ContractError):
            validate_identifier("1abc")


@pytest.mark.unit
class TestValidateColumnReference:
    """Tests for read-side column references."""

    @pytest.mark.parametrize("name", sorted(RESERVED_COLUMNS))
    def test_reserved_columns_are_accepted(self, name: str) -> None:
        """Reserved bookkeeping columns may be read."""
        assert validate_column_reference(name) == name

    def test_regular_names_are_accepted(self) -> None:
        """Regular identifiers are accepted."""
        assert validate_column_reference("title") == "title"

    def test_other_underscore_names_are_rejected(self) -> None:
        """Only the four reserved names get the underscore exemption."""
        with pytest.raises(InvalidIdentifierError):
            validate_column_reference("_rowid_")


@pytest.mark.unit
class TestQuoteIdentifier:
    """Tests for quote_identifier."""

    def test_double_quotes(self) -> None:
        """Validated names are wrapped in double quotes."""
        assert quote_identifier(validate_identifier("order")) == '"order"'


@pytest.mark.unit
class TestValidateSlug:
    """Tests for validate_slug."""

    def test_non_empty_slug(self) -> None:
        """Non-empty strings are returned unchanged, whatever they contain."""
        assert validate_slug("p1") == "p1"
        assert validate_slug("'; DROP TABLE posts; --") == "'; DROP TABLE posts; --"

    @pytest.mark.parametrize("slug", ["", None, 7])
    def test_empty_or_non_string_slug(self, slug: object) -> None:
        """Empty or non-string slugs are rejected."""
        with pytest.raises(EmptySlugError):
            validate_slug(slug)


@pytest.mark.unit
class TestColumnTypes:
    """Tests for ColumnType and validate_column_type."""

    @pytest.mark.parametrize("name", ["INTEGER", "REAL", "BLOB", "TEXT"])
    def test_allowed_types(self, name: str) -> None:
        """The four storage classes are accepted by name."""
        assert validate_column_type(name) == ColumnType(name)

    def test_enum_member_accepted(self) -> None:
        """ColumnType members pass through."""
        assert validate_column_type(ColumnType.REAL) is ColumnType.REAL

    @pytest.mark.parametrize("name", ["integer", "VARCHAR", "NUMERIC", "", "TEXT NOT NULL", None])
    def test_rejected_types(self, name: object) -> None:
        """Anything else, including lower case, is rejected."""
        with pytest.raises(InvalidColumnTypeError):
            validate_column_type(name)

    def test_bind_types(self) -> None:
        """There are exactly five bind channels."""
        assert {b.name for b in BindType} == {"NULL", "INTEGER", "FLOAT", "BLOB", "TEXT"}
