"""Configuration management for slugstore."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineConfig(BaseModel):
    """SQLite engine configuration."""

    timeout_seconds: float = Field(
        default=5.0, gt=0, description="How long the engine waits on a locked database file"
    )
    journal_mode: Literal["DELETE", "TRUNCATE", "PERSIST", "MEMORY", "WAL", "OFF"] = Field(
        default="DELETE", description="SQLite journal mode applied when the file is opened"
    )


class RowConfig(BaseModel):
    """Row bookkeeping configuration."""

    timestamp_timespec: Literal["seconds", "milliseconds", "microseconds"] = Field(
        default="microseconds", description="Precision of _created_at/_updated_at timestamps"
    )


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="slugstore", description="Service name for tracing")
    metrics_port: int = Field(default=8001, ge=1, le=65535, description="Prometheus metrics port")


class Config(BaseSettings):
    """Main configuration for slugstore."""

    model_config = SettingsConfigDict(
        env_prefix="SLUGSTORE_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    engine: EngineConfig = Field(default_factory=EngineConfig)
    rows: RowConfig = Field(default_factory=RowConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
