"""Infrastructure layer - cross-cutting concerns."""

from slugstore.infrastructure.config import Config, get_config
from slugstore.infrastructure.logging import setup_logging, get_logger
from slugstore.infrastructure.metrics import setup_metrics, get_metrics, MetricsRegistry
from slugstore.infrastructure.tracing import setup_tracing, get_tracer, trace_span, statement_span
from slugstore.infrastructure.observability import configure_observability

__all__ = [
    "Config",
    "get_config",
    "setup_logging",
    "get_logger",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "get_tracer",
    "trace_span",
    "statement_span",
    "configure_observability",
]
