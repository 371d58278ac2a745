"""Prometheus metrics for slugstore."""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Histogram,
    Info,
    start_http_server,
    REGISTRY,
    CollectorRegistry,
)


class MetricsRegistry:
    """Registry of all slugstore metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Statement metrics
        self.statements_total = Counter(
            "slugstore_statements_total",
            "Total number of statements handed to the executor",
            ["statement_type", "status"],  # status: success, bind_error, engine_error
            registry=self._registry,
        )

        self.statement_latency_seconds = Histogram(
            "slugstore_statement_latency_seconds",
            "Statement latency in seconds",
            ["statement_type"],  # select, insert, delete, ...
            buckets=(0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 5.0),
            registry=self._registry,
        )

        self.bind_failures_total = Counter(
            "slugstore_bind_failures_total",
            "Total number of values the engine refused to bind",
            registry=self._registry,
        )

        # Contract metrics
        self.contract_violations_total = Counter(
            "slugstore_contract_violations_total",
            "Total number of rejected contract violations",
            ["kind"],  # unknown_column, binding_mismatch, ...
            registry=self._registry,
        )

        # Schema metrics
        self.schema_changes_total = Counter(
            "slugstore_schema_changes_total",
            "Total idempotent schema operations by outcome",
            ["operation", "result"],
            registry=self._registry,
        )

        self.info = Info(
            "slugstore",
            "slugstore information",
            registry=self._registry,
        )


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    from slugstore import __version__
    _metrics.info.info({
        "version": __version__,
    })

    start_http_server(port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
