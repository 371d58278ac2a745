"""Statement executor.

Runs one parameterized statement through the storage engine:

    verify -> prepare -> bind all -> execute

Verification compares the bindings with the template's placeholders.
Any disagreement means the SQL builder and the binding list drifted
apart, which is a defect, so it raises ``BindingMismatchError`` before
the engine sees anything.

Binding is all-or-nothing. Every binding is attempted and counted; if
the engine refused even one value the statement is dropped unexecuted
and the call returns ``None``.
"""

from __future__ import annotations

import time
from collections import Counter
from typing import TYPE_CHECKING, Sequence

from slugstore.domain.errors import BindingMismatchError
from slugstore.domain.services import Binding, bind_type, template_placeholders
from slugstore.infrastructure.logging import get_logger
from slugstore.infrastructure.metrics import MetricsRegistry, get_metrics
from slugstore.infrastructure.tracing import record_status, statement_span

if TYPE_CHECKING:
    from slugstore.application.schema_inspector import SchemaInspector
    from slugstore.ports.outbound import ResultCursor, StorageEngine

logger = get_logger(__name__)


def statement_type(sql: str) -> str:
    """Return the leading SQL keyword in lower case (``select``, ``insert``...)."""
    head = sql.split(None, 1)
    return head[0].lower() if head else "unknown"


class StatementExecutor:
    """Executes parameterized statements with typed, verified binding."""

    def __init__(
        self,
        engine: StorageEngine,
        inspector: SchemaInspector,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        self._engine = engine
        self._inspector = inspector
        self._metrics = metrics or get_metrics()

    def execute(self, sql: str, bindings: Sequence[Binding]) -> ResultCursor | None:
        """Execute ``sql`` with ``bindings``.

        Args:
            sql: Statement template with named ``:placeholders``.
            bindings: Values to bind, in binding order.

        Returns:
            An open cursor the caller must drain or close, or None if the
            engine rejected the statement or any of its values.

        Raises:
            BindingMismatchError: If the bindings do not cover the
                template's placeholders exactly once each.
        """
        kind = statement_type(sql)
        self._verify(sql, bindings, kind)

        start = time.perf_counter()
        with statement_span(kind, len(bindings)) as span:
            status = "engine_error"
            try:
                statement = self._engine.prepare(sql)
                if statement is None:
                    return None

                catalog = self._inspector.columns() if bindings else {}
                bound = 0
                for binding in bindings:
                    channel = bind_type(catalog.get(binding.column), binding.value)
                    if statement.bind(binding.placeholder, binding.value, channel):
                        bound += 1
                    else:
                        self._metrics.bind_failures_total.inc()

                if bound != len(bindings):
                    status = "bind_error"
                    logger.warning(
                        "statement_abandoned",
                        statement_type=kind,
                        bound=bound,
                        expected=len(bindings),
                    )
                    return None

                cursor = statement.execute()
                if cursor is not None:
                    status = "success"
                return cursor
            finally:
                record_status(span, status)
                self._metrics.statements_total.labels(statement_type=kind, status=status).inc()
                self._metrics.statement_latency_seconds.labels(statement_type=kind).observe(
                    time.perf_counter() - start
                )

    def _verify(self, sql: str, bindings: Sequence[Binding], kind: str) -> None:
        names = [b.placeholder for b in bindings]
        duplicates = sorted(name for name, count in Counter(names).items() if count > 1)
        expected = template_placeholders(sql)
        missing = sorted(expected - set(names))
        unexpected = sorted(set(names) - expected)

        if duplicates or missing or unexpected:
            logger.error(
                "binding_mismatch",
                statement_type=kind,
                duplicates=duplicates,
                missing=missing,
                unexpected=unexpected,
            )
            raise BindingMismatchError(
                f"Bindings do not match the {kind} template: duplicates={duplicates}, "
                f"missing={missing}, unexpected={unexpected}"
            )
