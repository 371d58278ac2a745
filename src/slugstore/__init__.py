"""slugstore - safe single-table accessor for SQLite.

Slug-keyed row upserts, filtered reads compiled to parameterized SQL,
and idempotent table/column management. No caller-supplied string is
ever interpolated into SQL text without passing strict validation.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"

from slugstore.application.table_handle import TableHandle, open_table
from slugstore.domain.entities.predicate import And, Compare, ComparisonOp, Not, Or
from slugstore.domain.entities.row import OrderBy, Row
from slugstore.domain.errors import ContractError

__all__ = [
    "open_table",
    "TableHandle",
    "And",
    "Or",
    "Not",
    "Compare",
    "ComparisonOp",
    "OrderBy",
    "Row",
    "ContractError",
]
