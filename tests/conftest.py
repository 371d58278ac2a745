"""Pytest configuration and fixtures for slugstore tests."""

from __future__ import annotations

import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Generator

import pytest
from prometheus_client import CollectorRegistry

from slugstore.adapters.outbound import SQLiteEngine
from slugstore.application import TableHandle, open_table
from slugstore.infrastructure.config import Config, EngineConfig
from slugstore.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def db_path(temp_dir: Path) -> Path:
    """Path of a fresh database file."""
    return temp_dir / "store.db"


@pytest.fixture
def test_config() -> Config:
    """Provide a test configuration."""
    return Config(engine=EngineConfig(timeout_seconds=1.0, journal_mode="MEMORY"))


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def fake_clock() -> Callable[[], datetime]:
    """A clock that advances one second per call."""
    current = [datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)]

    def tick() -> datetime:
        now = current[0]
        current[0] = now + timedelta(seconds=1)
        return now

    return tick


@pytest.fixture
def engine(db_path: Path) -> Generator[SQLiteEngine, None, None]:
    """Provide an open SQLite engine on a fresh file."""
    eng = SQLiteEngine(db_path, timeout_seconds=1.0, journal_mode="MEMORY")
    yield eng
    eng.close()


@pytest.fixture
def handle(
    db_path: Path,
    test_config: Config,
    metrics_registry: MetricsRegistry,
    fake_clock: Callable[[], datetime],
) -> Generator[TableHandle, None, None]:
    """Provide a handle on table ``posts`` (not yet created)."""
    with open_table(
        db_path,
        "posts",
        config=test_config,
        metrics=metrics_registry,
        clock=fake_clock,
    ) as h:
        yield h


@pytest.fixture
def posts(handle: TableHandle) -> TableHandle:
    """Provide a handle whose table exists with title/views/score/body columns."""
    assert handle.table_column_add_ignore(
        {"title": "TEXT", "views": "INTEGER", "score": "REAL", "body": "BLOB"}
    )
    return handle


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "security: Injection and validation tests")
