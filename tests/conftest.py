"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Dict

import pytest

from influx_reporter.adapters.memory_registry import InMemoryRegistry
from influx_reporter.adapters.memory_store import InMemoryStoreClient
from influx_reporter.domain.value_objects import (
    HistogramSnapshot,
    MeterSnapshot,
    TimerSnapshot,
)
from influx_reporter.reporting.translator import MetricTranslator
from influx_reporter.resilience.connection_supervisor import ConnectionSupervisor


@pytest.fixture
def fixtures_path() -> Path:
    """Directory holding sample configuration files."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_config_path(fixtures_path: Path) -> Path:
    """Path to sample configuration file."""
    return fixtures_path / "sample_config.yaml"


@pytest.fixture
def reference_time() -> datetime:
    """Standard capture time for a report tick."""
    return datetime(2024, 12, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def base_tags() -> Dict[str, str]:
    """Reporter-wide tags."""
    return {"host": "h1"}


@pytest.fixture
def translator(base_tags: Dict[str, str]) -> MetricTranslator:
    """Translator with the base tags."""
    return MetricTranslator(base_tags)


@pytest.fixture
def registry() -> InMemoryRegistry:
    """Empty in-memory registry."""
    return InMemoryRegistry()


@pytest.fixture
def store() -> InMemoryStoreClient:
    """Recording store client."""
    return InMemoryStoreClient()


@pytest.fixture
def supervisor(store: InMemoryStoreClient) -> ConnectionSupervisor:
    """Connected supervisor whose factory always returns ``store``."""
    sup = ConnectionSupervisor(
        "http://localhost:8086",
        username="user",
        password="pw",
        client_factory=lambda endpoint, username, password: store,
    )
    sup.connect()
    return sup


@pytest.fixture
def histogram_snapshot() -> HistogramSnapshot:
    """Histogram snapshot with all default quantiles supplied."""
    return HistogramSnapshot(
        count=100,
        min=1,
        max=250,
        mean=42.5,
        stddev=12.0,
        variance=144.0,
        percentile_values={
            0.5: 40.0,
            0.75: 55.0,
            0.95: 90.0,
            0.99: 180.0,
            0.999: 240.0,
            0.9999: 250.0,
        },
    )


@pytest.fixture
def meter_snapshot() -> MeterSnapshot:
    """Meter snapshot with distinct rates."""
    return MeterSnapshot(count=300, rate1=1.5, rate5=1.2, rate15=1.1, rate_mean=1.0)


@pytest.fixture
def timer_snapshot(histogram_snapshot: HistogramSnapshot) -> TimerSnapshot:
    """Timer snapshot combining the histogram values with rates."""
    return TimerSnapshot(
        **histogram_snapshot.model_dump(),
        rate1=2.5,
        rate5=2.0,
        rate15=1.5,
        rate_mean=1.25,
    )
