"""Predicate compiler.

Compiles a predicate tree into a SQL boolean fragment plus the ordered
list of values that must be bound to it.

Rules:
    - And/Or compile every child, drop empty fragments, and join the rest
      inside parentheses. With no surviving child the result is empty.
    - Not wraps its child as ``NOT (...)``; negating an empty fragment is
      an error.
    - ``IS NULL`` leaves emit no binding.
    - Every other leaf gets a fresh placeholder ``:b<n>``. Numbering
      restarts at zero for each compile call and follows pre-order,
      left-to-right traversal, which is also the order of the bindings.

Any node the compiler does not understand aborts the compilation. A
dropped clause would silently widen the result set of a read, so there
is no lenient mode.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from slugstore.domain.entities.predicate import (
    RESERVED_OPERATORS,
    VALUE_OPERATORS,
    And,
    Compare,
    ComparisonOp,
    Not,
    Or,
)
from slugstore.domain.errors import PredicateCompileError, UnsupportedOperatorError
from slugstore.domain.value_objects import quote_identifier, validate_column_reference

PLACEHOLDER_PREFIX = "b"

_PLACEHOLDER_PATTERN = re.compile(r"(?<![:\w]):([A-Za-z_][A-Za-z0-9_]*)")


@dataclass(frozen=True)
class Binding:
    """A value waiting to be bound to ``placeholder``.

    ``column`` names the column the value is compared against or written
    to; its declared type decides the bind type.
    """

    placeholder: str
    column: str
    value: Any


@dataclass
class CompiledPredicate:
    """The output of a compilation."""

    sql: str
    bindings: list[Binding] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.sql == ""


class PredicateCompiler:
    """Recursive-descent compiler.

    State is reset by every ``compile`` call, so an instance can be
    reused; ``compile_predicate`` covers the common case.
    """

    def __init__(self) -> None:
        self._counter = 0
        self._bindings: list[Binding] = []

    def compile(self, expr: Any) -> CompiledPredicate:
        self._counter = 0
        self._bindings = []
        sql = self._compile_node(expr)
        return CompiledPredicate(sql=sql, bindings=list(self._bindings))

    def _compile_node(self, expr: Any) -> str:
        if isinstance(expr, And):
            return self._compile_group(expr.children, " AND ", "And")
        elif isinstance(expr, Or):
            return self._compile_group(expr.children, " OR ", "Or")
        elif isinstance(expr, Not):
            inner = self._compile_node(expr.child)
            if not inner:
                raise PredicateCompileError("Not() cannot negate an empty expression")
            return f"NOT ({inner})"
        elif isinstance(expr, Compare):
            return self._compile_compare(expr)
        raise PredicateCompileError(f"Unsupported filter node: {type(expr).__name__}")

    def _compile_group(self, children: Any, joiner: str, name: str) -> str:
        if not isinstance(children, (list, tuple)):
            raise PredicateCompileError(
                f"{name}() expects a list of predicates, got {type(children).__name__}"
            )
        parts = [part for part in (self._compile_node(c) for c in children) if part]
        if not parts:
            return ""
        return f"({joiner.join(parts)})"

    def _compile_compare(self, leaf: Compare) -> str:
        op = _resolve_operator(leaf.op)
        column = validate_column_reference(leaf.column)

        if op == ComparisonOp.IS_NULL:
            return f"{quote_identifier(column)} IS NULL"

        if leaf.value is None:
            raise PredicateCompileError(
                f"Operator {op.value} on column '{column}' requires a value; "
                "use IS NULL to match missing values"
            )

        placeholder = f":{PLACEHOLDER_PREFIX}{self._counter}"
        self._counter += 1
        self._bindings.append(Binding(placeholder=placeholder, column=column, value=leaf.value))
        return f"{quote_identifier(column)} {op.value} {placeholder}"


def _resolve_operator(op: Any) -> ComparisonOp:
    if isinstance(op, ComparisonOp):
        resolved = op
    elif isinstance(op, str):
        try:
            resolved = ComparisonOp(op.strip().upper())
        except ValueError as e:
            raise PredicateCompileError(f"Unsupported comparison operator {op!r}") from e
    else:
        raise PredicateCompileError(f"Unsupported comparison operator {op!r}")

    if resolved in RESERVED_OPERATORS:
        raise UnsupportedOperatorError(f"Operator {resolved.value} is not supported yet")
    if resolved != ComparisonOp.IS_NULL and resolved not in VALUE_OPERATORS:
        raise PredicateCompileError(f"Unsupported comparison operator {op!r}")
    return resolved


def compile_predicate(expr: Any) -> CompiledPredicate:
    """Compile ``expr`` into a SQL fragment and its bindings.

    Raises:
        PredicateCompileError: If the tree is malformed or uses an
            unsupported operator.
        InvalidIdentifierError: If a leaf references an invalid column.
    """
    return PredicateCompiler().compile(expr)


def template_placeholders(sql: str) -> frozenset[str]:
    """Return the named ``:placeholders`` used by a statement template.

    Templates built by slugstore never contain string literals, so a
    plain scan of the text is exact.
    """
    return frozenset(f":{name}" for name in _PLACEHOLDER_PATTERN.findall(sql))
