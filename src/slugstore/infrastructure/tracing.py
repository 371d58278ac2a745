"""OpenTelemetry tracing configuration.

Statement spans carry a fixed attribute set: the statement type, the
number of bindings and the final status. Bound values never become span
attributes.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter


_tracer: trace.Tracer | None = None


def setup_tracing(
    service_name: str = "slugstore",
    otlp_endpoint: str | None = None,
    console_export: bool = False,
) -> trace.Tracer:
    """
    Set up OpenTelemetry tracing.

    Args:
        service_name: Name of the service for tracing
        otlp_endpoint: OTLP collector endpoint (e.g., "http://localhost:4317")
        console_export: Whether to also export to console (for debugging)

    Returns:
        Configured tracer instance
    """
    global _tracer

    from slugstore import __version__

    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": __version__,
        }
    )
    provider = TracerProvider(resource=resource)

    if otlp_endpoint:
        otlp_exporter = OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    if console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    _tracer = trace.get_tracer(service_name)

    return _tracer


def get_tracer() -> trace.Tracer:
    """Get the global tracer instance."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer("slugstore")
    return _tracer


@contextmanager
def trace_span(
    name: str,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """
    Context manager for creating a trace span.

    Only identifiers and counts belong in ``attributes``; bound values
    must never be attached to a span.

    Args:
        name: Name of the span
        attributes: Optional attributes to add to the span

    Yields:
        The created span
    """
    tracer = get_tracer()
    with tracer.start_as_current_span(name) as span:
        if attributes:
            for key, value in attributes.items():
                span.set_attribute(key, value)
        yield span


STATEMENT_SPAN_NAME = "slugstore.execute"
ATTR_STATEMENT_TYPE = "slugstore.statement_type"
ATTR_BINDINGS = "slugstore.bindings"
ATTR_STATUS = "slugstore.status"


def statement_attributes(statement_type: str, binding_count: int) -> dict[str, Any]:
    """Span attributes describing one statement."""
    return {ATTR_STATEMENT_TYPE: statement_type, ATTR_BINDINGS: binding_count}


@contextmanager
def statement_span(statement_type: str, binding_count: int) -> Generator[trace.Span, None, None]:
    """Span around one statement execution.

    Set the outcome with ``record_status`` before the block exits.
    """
    with trace_span(STATEMENT_SPAN_NAME, statement_attributes(statement_type, binding_count)) as span:
        yield span


def record_status(span: trace.Span, status: str) -> None:
    """Attach the statement outcome (success, bind_error, engine_error)."""
    span.set_attribute(ATTR_STATUS, status)
