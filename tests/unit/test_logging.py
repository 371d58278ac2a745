"""Unit tests for logging processors and observability wiring."""

from __future__ import annotations

import pytest

from slugstore.infrastructure import observability
from slugstore.infrastructure.config import Config, ObservabilityConfig
from slugstore.infrastructure.logging import add_service_context, redact_bound_values


@pytest.mark.unit
class TestProcessors:
    """Tests for the custom structlog processors."""

    def test_service_context_added(self) -> None:
        """Entries are tagged with the service name."""
        event = add_service_context(None, "info", {"event": "x"})
        assert event["service"] == "slugstore"

    def test_service_context_not_overwritten(self) -> None:
        """An explicit service field is kept."""
        event = add_service_context(None, "info", {"event": "x", "service": "other"})
        assert event["service"] == "other"

    @pytest.mark.security
    def test_bound_values_redacted(self) -> None:
        """Values are replaced with their type names."""
        event = redact_bound_values(
            None, "warning", {"event": "bind_rejected", "value": "s3cret", "values": [1, b"x"]}
        )
        assert event["value"] == "str"
        assert event["values"] == ["int", "bytes"]

    def test_other_keys_untouched(self) -> None:
        """Only value/values are redacted."""
        event = redact_bound_values(None, "info", {"event": "x", "table": "posts"})
        assert event == {"event": "x", "table": "posts"}


@pytest.mark.unit
class TestConfigureObservability:
    """Tests for configure_observability."""

    def test_applies_observability_section(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Logging and tracing follow the config; metrics only on request."""
        calls: dict[str, dict] = {}
        monkeypatch.setattr(observability, "setup_logging", lambda **kw: calls.setdefault("logging", kw))
        monkeypatch.setattr(observability, "setup_tracing", lambda **kw: calls.setdefault("tracing", kw))
        monkeypatch.setattr(observability, "setup_metrics", lambda **kw: calls.setdefault("metrics", kw))

        config = Config(
            observability=ObservabilityConfig(
                log_level="DEBUG",
                log_format="console",
                otel_endpoint="http://collector:4317",
                metrics_port=9100,
            )
        )
        observability.configure_observability(config)

        assert calls["logging"] == {"level": "DEBUG", "log_format": "console"}
        assert calls["tracing"] == {
            "service_name": "slugstore",
            "otlp_endpoint": "http://collector:4317",
        }
        assert "metrics" not in calls

        observability.configure_observability(config, serve_metrics=True)
        assert calls["metrics"] == {"port": 9100}
