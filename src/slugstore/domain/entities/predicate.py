"""Filter expressions (predicate trees).

A predicate tree is a closed union of four node types:

    And(children)   - all children hold
    Or(children)    - any child holds
    Not(child)      - the child does not hold
    Compare(column, op, value) - leaf comparison against a bound value

Nodes are plain immutable data. Turning them into SQL is the job of
``slugstore.domain.services.predicate_compiler``; nothing here validates
column names or operators so that a malformed tree is rejected in one
place, at compile time.

Example:
    >>> tree = And([Compare("status", "=", "draft"), Not(Compare("body", "IS NULL"))])
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class ComparisonOp(Enum):
    """Comparison operators for predicate leaves."""

    EQ = "="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    LIKE = "LIKE"
    IS_NULL = "IS NULL"
    # Reserved for future extension; the compiler rejects them.
    EXISTS = "EXISTS"
    IN = "IN"
    BETWEEN = "BETWEEN"


VALUE_OPERATORS: frozenset[ComparisonOp] = frozenset(
    {
        ComparisonOp.EQ,
        ComparisonOp.NE,
        ComparisonOp.LT,
        ComparisonOp.LE,
        ComparisonOp.GT,
        ComparisonOp.GE,
        ComparisonOp.LIKE,
    }
)

RESERVED_OPERATORS: frozenset[ComparisonOp] = frozenset(
    {ComparisonOp.EXISTS, ComparisonOp.IN, ComparisonOp.BETWEEN}
)


@dataclass(frozen=True)
class And:
    """Logical conjunction of child predicates."""

    children: list[Predicate] = field(default_factory=list)


@dataclass(frozen=True)
class Or:
    """Logical disjunction of child predicates."""

    children: list[Predicate] = field(default_factory=list)


@dataclass(frozen=True)
class Not:
    """Negation of a single child predicate."""

    child: Predicate


@dataclass(frozen=True)
class Compare:
    """Leaf comparison ``column <op> value``.

    ``op`` may be a ``ComparisonOp`` or its string value. ``value`` is
    ignored for ``IS NULL``; for every other operator it is required.
    """

    column: str
    op: ComparisonOp | str
    value: Any = None


Predicate = Union[And, Or, Not, Compare]
