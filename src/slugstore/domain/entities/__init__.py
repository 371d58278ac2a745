"""Domain entities.

Exports:
    Predicates:
        - And, Or, Not, Compare: Predicate tree nodes
        - Predicate: Union of the four node types
        - ComparisonOp: Leaf operators (EXISTS/IN/BETWEEN reserved)

    Rows:
        - Row: A materialized result row
        - OrderBy: One ORDER BY item
"""

from slugstore.domain.entities.predicate import (
    RESERVED_OPERATORS,
    VALUE_OPERATORS,
    And,
    Compare,
    ComparisonOp,
    Not,
    Or,
    Predicate,
)
from slugstore.domain.entities.row import OrderBy, Row

__all__ = [
    "And",
    "Or",
    "Not",
    "Compare",
    "ComparisonOp",
    "Predicate",
    "VALUE_OPERATORS",
    "RESERVED_OPERATORS",
    "Row",
    "OrderBy",
]
