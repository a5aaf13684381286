"""
Integration Tests for the Reporter Loop.

Tests cover:
    - Reporter running on its own thread against an in-memory store
    - Recovery from a dropped connection while running
    - Clean shutdown via stop(), and restart after a timed-out stop
"""

from __future__ import annotations

import threading
import time
from typing import Callable, List

import pytest

from influx_reporter.adapters.memory_registry import (
    Counter,
    Gauge,
    GaugeCollection,
    InMemoryRegistry,
)
from influx_reporter.adapters.memory_store import InMemoryStoreClient
from influx_reporter.domain.entities import Tag
from influx_reporter.errors import ReporterError
from influx_reporter.reporting.batch_sender import SendResult
from influx_reporter.reporting.reporter import Reporter


def wait_for(condition: Callable[[], bool], timeout: float = 5.0) -> bool:
    """Poll until condition holds or timeout expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.005)
    return condition()


@pytest.fixture
def populated_registry() -> InMemoryRegistry:
    """Registry with one metric of each simple kind."""
    registry = InMemoryRegistry()
    counter = Counter()
    counter.inc(42)
    gauge = Gauge()
    gauge.update(10, tag=Tag(name="sensor", value="A"))
    collection = GaugeCollection()
    collection.add(1.0)
    collection.add(2.0)
    registry.register("reqs", counter)
    registry.register("temp", gauge)
    registry.register("rssi", collection)
    return registry


class TestReportingCycle:
    """Integration tests for a running reporter."""

    def test_reports_until_stopped(
        self, populated_registry: InMemoryRegistry
    ) -> None:
        """
        SCENARIO: Reporter started with a short interval
        EXPECTED: Batches arrive; gauges only in the first; thread exits on stop
        """
        # Arrange
        store = InMemoryStoreClient()
        reporter = Reporter.create(
            populated_registry,
            0.02,
            "http://db:8086",
            "metrics",
            tags={"host": "h1"},
            client_factory=lambda e, u, p: store,
            ping_interval_seconds=0.05,
        )

        # Act
        reporter.start()
        try:
            assert wait_for(lambda: len(store.batches) >= 3)
            assert wait_for(lambda: store.ping_count >= 1)
        finally:
            reporter.stop(timeout=5)

        # Assert
        assert not reporter.is_running
        first, later = store.batches[0], store.batches[1:]
        assert {p.measurement for p in first} == {
            "reqs.count",
            "temp.gauge",
            "rssi.gauge",
        }
        temp = next(p for p in first if p.measurement == "temp.gauge")
        assert temp.tags == {"host": "h1", "sensor": "A"}
        for batch in later:
            assert [p.measurement for p in batch] == ["reqs.count"]

    def test_recovers_from_dropped_connection(
        self, populated_registry: InMemoryRegistry
    ) -> None:
        """
        SCENARIO: Store stops answering pings and writes while running
        EXPECTED: Client rebuilt, later batches reach the new client
        """
        # Arrange
        broken = InMemoryStoreClient()
        fresh = InMemoryStoreClient()
        clients: List[InMemoryStoreClient] = [broken, fresh]
        reporter = Reporter.create(
            populated_registry,
            0.02,
            "http://db:8086",
            "metrics",
            client_factory=lambda e, u, p: clients.pop(0),
            ping_interval_seconds=0.03,
        )
        reporter.start()

        # Act
        try:
            assert wait_for(lambda: len(broken.batches) >= 1)
            broken.write_error = ConnectionError("gone")
            broken.ping_error = ConnectionError("gone")
            assert wait_for(lambda: len(fresh.batches) >= 1)
        finally:
            reporter.stop(timeout=5)

        # Assert
        assert reporter.supervisor.client is fresh
        assert broken.closed

    def test_cannot_start_twice(self, populated_registry: InMemoryRegistry) -> None:
        """
        SCENARIO: start() called on a running reporter
        EXPECTED: ReporterError
        """
        store = InMemoryStoreClient()
        reporter = Reporter.create(
            populated_registry,
            10,
            "http://db:8086",
            "metrics",
            client_factory=lambda e, u, p: store,
        )
        reporter.start()
        try:
            with pytest.raises(ReporterError):
                reporter.start()
        finally:
            reporter.stop(timeout=5)

        assert not reporter.is_running

    def test_restart_refused_while_stopping_loop_is_busy(
        self, populated_registry: InMemoryRegistry
    ) -> None:
        """
        SCENARIO: stop() times out during a slow send, then start() is called
        EXPECTED: Old thread still reported running, start() refused, only
                  one loop thread alive; the old loop exits once unblocked
        """
        # Arrange
        entered = threading.Event()
        release = threading.Event()

        def slow_send(result: SendResult) -> None:
            entered.set()
            release.wait(5)

        store = InMemoryStoreClient()
        reporter = Reporter.create(
            populated_registry,
            0.01,
            "http://db:8086",
            "metrics",
            client_factory=lambda e, u, p: store,
            on_send=slow_send,
        )
        first = reporter.start()

        # Act
        try:
            assert entered.wait(5)
            stopped = reporter.stop(timeout=0.01)

            # Assert
            assert stopped is False
            assert reporter.is_running
            with pytest.raises(ReporterError):
                reporter.start()
            alive = [
                t
                for t in threading.enumerate()
                if t.name == "influx-reporter" and t.is_alive()
            ]
            assert alive == [first]
        finally:
            release.set()

        assert reporter.stop(timeout=5) is True
        assert not first.is_alive()
        assert not reporter.is_running

    def test_restart_after_stop_runs_a_fresh_loop(
        self, populated_registry: InMemoryRegistry
    ) -> None:
        """
        SCENARIO: Reporter stopped cleanly, then started again
        EXPECTED: New thread reports; the first loop stays finished
        """
        # Arrange
        store = InMemoryStoreClient()
        reporter = Reporter.create(
            populated_registry,
            0.02,
            "http://db:8086",
            "metrics",
            client_factory=lambda e, u, p: store,
        )
        first = reporter.start()
        assert wait_for(lambda: len(store.batches) >= 1)
        assert reporter.stop(timeout=5) is True
        reported = len(store.batches)

        # Act
        second = reporter.start()
        try:
            assert wait_for(lambda: len(store.batches) > reported)
        finally:
            assert reporter.stop(timeout=5) is True

        # Assert
        assert second is not first
        assert not first.is_alive()
        assert not second.is_alive()

    def test_stop_without_start(self, populated_registry: InMemoryRegistry) -> None:
        """
        SCENARIO: stop() called on a reporter that never started
        EXPECTED: Returns True, nothing running
        """
        reporter = Reporter.create(
            populated_registry,
            10,
            "http://db:8086",
            "metrics",
            client_factory=lambda e, u, p: InMemoryStoreClient(),
        )

        assert reporter.stop() is True
        assert not reporter.is_running
