"""
In-Memory Metric Registry.

A minimal thread-safe registry plus the simple metric kinds a host can
update directly. Distribution kinds (histogram, meter, timer) are fed with
snapshots computed elsewhere through SnapshotMetric.
"""

from __future__ import annotations

from datetime import datetime, timezone
from threading import Lock
from typing import Any, Callable, Dict, List, Optional, Tuple

from influx_reporter.domain.entities import MetricKind, Reading, Tag
from influx_reporter.domain.value_objects import (
    CounterSnapshot,
    GaugeCollectionSnapshot,
    GaugeFloatSnapshot,
    GaugeSnapshot,
    HistogramSnapshot,
    MeterSnapshot,
    TimerSnapshot,
)


class Counter:
    """Monotonic (or decrementable) count."""

    kind = MetricKind.COUNTER

    def __init__(self) -> None:
        self._count = 0
        self._lock = Lock()

    def inc(self, amount: int = 1) -> None:
        with self._lock:
            self._count += amount

    def dec(self, amount: int = 1) -> None:
        with self._lock:
            self._count -= amount

    def clear(self) -> None:
        with self._lock:
            self._count = 0

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    def snapshot(self) -> CounterSnapshot:
        with self._lock:
            return CounterSnapshot(count=self._count)


class Gauge:
    """
    Integer gauge; reported once per update, then cleared.

    The reporter reads it through snapshot_and_clear(), so an update()
    racing with a report lands either in that report or the next one.
    """

    kind = MetricKind.GAUGE

    def __init__(self) -> None:
        self._value = 0
        self._tag: Optional[Tag] = None
        self._is_set = False
        self._lock = Lock()

    def update(self, value: int, tag: Optional[Tag] = None) -> None:
        """Set the current value, optionally with a dynamic tag."""
        with self._lock:
            self._value = value
            self._tag = tag
            self._is_set = True

    def clear(self) -> None:
        with self._lock:
            self._reset()

    def snapshot(self) -> GaugeSnapshot:
        with self._lock:
            return self._take()

    def snapshot_and_clear(self) -> GaugeSnapshot:
        """Snapshot and, if set, reset under a single lock hold."""
        with self._lock:
            snapshot = self._take()
            if self._is_set:
                self._reset()
            return snapshot

    # Callers hold self._lock
    def _take(self) -> GaugeSnapshot:
        return GaugeSnapshot(value=self._value, is_set=self._is_set, tag=self._tag)

    def _reset(self) -> None:
        self._value = 0
        self._tag = None
        self._is_set = False


class GaugeFloat(Gauge):
    """Floating point gauge."""

    kind = MetricKind.GAUGE_FLOAT

    def update(self, value: float, tag: Optional[Tag] = None) -> None:  # type: ignore[override]
        super().update(value, tag)  # type: ignore[arg-type]

    def _take(self) -> GaugeFloatSnapshot:  # type: ignore[override]
        return GaugeFloatSnapshot(
            value=float(self._value), is_set=self._is_set, tag=self._tag
        )


class GaugeCollection:
    """
    Accumulates timestamped readings between reports.

    snapshot_and_clear() hands over the pending readings atomically, so
    no reading added during a report is dropped.
    """

    kind = MetricKind.GAUGE_COLLECTION

    def __init__(self) -> None:
        self._readings: List[Reading] = []
        self._is_set = False
        self._lock = Lock()

    def add(
        self,
        value: float,
        tag: Optional[Tag] = None,
        time: Optional[datetime] = None,
    ) -> None:
        """
        Append a reading.

        Args:
            value: Reading value
            tag: Optional dynamic tag for this reading
            time: Reading time (defaults to now, UTC)
        """
        reading = Reading(
            value=value,
            time=time or datetime.now(timezone.utc),
            tag=tag,
        )
        with self._lock:
            self._readings.append(reading)
            self._is_set = True

    def clear(self) -> None:
        with self._lock:
            self._readings = []
            self._is_set = False

    def snapshot(self) -> GaugeCollectionSnapshot:
        with self._lock:
            return GaugeCollectionSnapshot(
                readings=list(self._readings), is_set=self._is_set
            )

    def snapshot_and_clear(self) -> GaugeCollectionSnapshot:
        """Take the pending readings and start a new, unset batch."""
        with self._lock:
            readings, is_set = list(self._readings), self._is_set
            if is_set:
                self._readings = []
                self._is_set = False
        return GaugeCollectionSnapshot(readings=readings, is_set=is_set)


class SnapshotMetric:
    """
    Holds the latest snapshot of a histogram, meter or timer.

    Percentiles and rates are computed by the producer; this class only
    hands the most recent snapshot to the reporter.
    """

    _SNAPSHOT_TYPES = {
        MetricKind.HISTOGRAM: HistogramSnapshot,
        MetricKind.METER: MeterSnapshot,
        MetricKind.TIMER: TimerSnapshot,
    }

    def __init__(self, kind: MetricKind, snapshot: Optional[Any] = None) -> None:
        if kind not in self._SNAPSHOT_TYPES:
            raise ValueError(f"SnapshotMetric does not support kind {kind.value}")
        self.kind = kind
        self._snapshot = (
            snapshot if snapshot is not None else self._SNAPSHOT_TYPES[kind]()
        )
        self._lock = Lock()

    def update(self, snapshot: Any) -> None:
        with self._lock:
            self._snapshot = snapshot

    def snapshot(self) -> Any:
        with self._lock:
            return self._snapshot


class InMemoryRegistry:
    """Thread-safe name -> metric mapping."""

    def __init__(self) -> None:
        self._metrics: Dict[str, Any] = {}
        self._lock = Lock()

    def register(self, name: str, metric: Any) -> None:
        """
        Register a metric under a new name.

        Raises:
            ValueError: If the name is already registered
        """
        with self._lock:
            if name in self._metrics:
                raise ValueError(f"Metric already registered: {name}")
            self._metrics[name] = metric

    def get_or_register(self, name: str, factory: Callable[[], Any]) -> Any:
        """Return the metric registered under ``name``, creating it if needed."""
        with self._lock:
            if name not in self._metrics:
                self._metrics[name] = factory()
            return self._metrics[name]

    def get(self, name: str) -> Optional[Any]:
        with self._lock:
            return self._metrics.get(name)

    def unregister(self, name: str) -> None:
        with self._lock:
            self._metrics.pop(name, None)

    def each(self) -> List[Tuple[str, Any]]:
        """Return (name, metric) pairs; safe against concurrent registration."""
        with self._lock:
            return list(self._metrics.items())

    def __len__(self) -> int:
        with self._lock:
            return len(self._metrics)
