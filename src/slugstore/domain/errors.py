"""Contract errors.

These signal programming mistakes: a caller handed the store something
that must never be turned into SQL. They are raised before any statement
runs and are not meant to be caught and retried. Engine-level failures
are not exceptions; operations report them as ``False``/``None`` or a
``QUERY_ERROR`` result code.
"""

from __future__ import annotations


class ContractError(Exception):
    """Base class for all contract violations."""

    kind = "contract"


class InvalidIdentifierError(ContractError, ValueError):
    """A table or column name failed lexical validation."""

    kind = "invalid_identifier"


class InvalidColumnTypeError(ContractError, ValueError):
    """A column type outside INTEGER/REAL/BLOB/TEXT was requested."""

    kind = "invalid_column_type"


class EmptySlugError(ContractError, ValueError):
    """A row slug was empty or not a string."""

    kind = "empty_slug"


class UnknownColumnError(ContractError, KeyError):
    """A write payload referenced columns that do not exist in the table."""

    kind = "unknown_column"

    def __init__(self, table: str, columns: list[str]) -> None:
        self.table = table
        self.columns = columns
        super().__init__(
            f"Columns {columns} do not exist in table '{table}'; "
            "create them first or drop them from the payload"
        )

    def __str__(self) -> str:
        return str(self.args[0])


class PredicateCompileError(ContractError, ValueError):
    """A filter expression could not be compiled."""

    kind = "predicate_compile"


class UnsupportedOperatorError(PredicateCompileError):
    """A reserved filter operator was used before it is implemented."""

    kind = "unsupported_operator"


class BindingMismatchError(ContractError, RuntimeError):
    """Bindings disagree with the placeholders of the statement template."""

    kind = "binding_mismatch"


class InvalidQueryError(ContractError, ValueError):
    """A select argument (limit, offset, ordering) is malformed."""

    kind = "invalid_query"
