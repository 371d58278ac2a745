"""Apply the observability section of a configuration."""

from __future__ import annotations

from slugstore.infrastructure.config import Config, get_config
from slugstore.infrastructure.logging import get_logger, setup_logging
from slugstore.infrastructure.metrics import setup_metrics
from slugstore.infrastructure.tracing import setup_tracing


def configure_observability(config: Config | None = None, serve_metrics: bool = False) -> None:
    """
    Configure logging and tracing, and optionally the metrics endpoint.

    Args:
        config: Configuration to apply (default: global configuration)
        serve_metrics: Start the Prometheus HTTP endpoint on ``metrics_port``
    """
    observability = (config or get_config()).observability

    setup_logging(level=observability.log_level, log_format=observability.log_format)
    setup_tracing(
        service_name=observability.otel_service_name,
        otlp_endpoint=observability.otel_endpoint,
    )
    if serve_metrics:
        setup_metrics(port=observability.metrics_port)

    get_logger(__name__).info(
        "observability_configured",
        log_level=observability.log_level,
        tracing_endpoint=observability.otel_endpoint,
        metrics_port=observability.metrics_port if serve_metrics else None,
    )
