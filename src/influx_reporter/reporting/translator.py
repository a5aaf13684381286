"""
Metric Translator - Snapshot to Data Point Mapping.

Converts one named metric into zero or more data points. The measurement
name is ``"<name>.<suffix>"`` where the suffix depends on the metric kind:

    counter           -> <name>.count      value
    gauge/gauge_float -> <name>.gauge      value (only when set)
    gauge_collection  -> <name>.gauge      one point per reading
    histogram         -> <name>.histogram  count, max, mean, min, stddev,
                                           variance, p50 .. p9999
    meter             -> <name>.meter      count, m1, m5, m15, mean
    timer             -> <name>.timer      histogram fields + m1, m5, m15,
                                           meanrate

Design Notes:
    - Dispatch is a table keyed by MetricKind; unknown kinds yield nothing
    - Settable gauges are drained atomically when they support it,
      otherwise cleared only after their points are built
    - Gauge collection points keep each reading's own timestamp
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from influx_reporter.domain.entities import DataPoint, MetricKind
from influx_reporter.domain.value_objects import DEFAULT_QUANTILES
from influx_reporter.interfaces.metric_registry import DrainableMetric, MetricRegistry
from influx_reporter.reporting.tags import copy_tags, merge_tag

logger = logging.getLogger(__name__)

PERCENTILE_KEYS = ("p50", "p75", "p95", "p99", "p999", "p9999")


@dataclass
class TranslationResult:
    """Points produced from one pass over the registry."""

    points: List[DataPoint] = field(default_factory=list)
    failed: List[Tuple[str, Exception]] = field(default_factory=list)
    skipped: int = 0

    @property
    def has_failures(self) -> bool:
        """Check if any metric could not be translated."""
        return len(self.failed) > 0


class MetricTranslator:
    """
    Translates metric snapshots into data points.

    The base tags are copied for every point and never modified.
    """

    def __init__(
        self,
        tags: Optional[Mapping[str, str]] = None,
        quantiles: Tuple[float, ...] = DEFAULT_QUANTILES,
    ) -> None:
        """
        Initialize translator.

        Args:
            tags: Base tags attached to every point
            quantiles: Quantiles reported as p50 .. p9999
        """
        if len(quantiles) != len(PERCENTILE_KEYS):
            raise ValueError(
                f"Expected {len(PERCENTILE_KEYS)} quantiles, got {len(quantiles)}"
            )
        self._tags = copy_tags(tags)
        self._quantiles = tuple(quantiles)
        self._handlers: Dict[
            MetricKind, Callable[[str, Any, datetime], List[DataPoint]]
        ] = {
            MetricKind.COUNTER: self._counter,
            MetricKind.GAUGE: self._gauge,
            MetricKind.GAUGE_FLOAT: self._gauge,
            MetricKind.GAUGE_COLLECTION: self._gauge_collection,
            MetricKind.HISTOGRAM: self._histogram,
            MetricKind.METER: self._meter,
            MetricKind.TIMER: self._timer,
        }

    @property
    def tags(self) -> Dict[str, str]:
        """Copy of the base tags."""
        return copy_tags(self._tags)

    def translate(self, name: str, metric: Any, now: datetime) -> List[DataPoint]:
        """
        Translate a single metric.

        Args:
            name: Registered metric name
            metric: Metric instance exposing ``kind`` and ``snapshot()``
            now: Capture time shared by all points of the current tick

        Returns:
            Data points for this metric (empty for unknown kinds or unset gauges)
        """
        handler = self._handlers.get(self._kind_of(metric))
        if handler is None:
            return []
        return handler(name, metric, now)

    def translate_registry(
        self, registry: MetricRegistry, now: datetime
    ) -> TranslationResult:
        """
        Translate every metric in the registry.

        A metric that raises while being read is logged and left out;
        the remaining metrics are still translated.

        Args:
            registry: Registry to visit
            now: Capture time for this tick

        Returns:
            TranslationResult with all points and per-metric failures
        """
        result = TranslationResult()

        for name, metric in registry.each():
            try:
                points = self.translate(name, metric, now)
            except Exception as e:
                logger.warning(f"Unable to translate metric {name}: {e}")
                result.failed.append((name, e))
                continue

            if points:
                result.points.extend(points)
            else:
                result.skipped += 1

        return result

    @staticmethod
    def _kind_of(metric: Any) -> Optional[MetricKind]:
        kind = getattr(metric, "kind", None)
        if isinstance(kind, MetricKind):
            return kind
        try:
            return MetricKind(kind)
        except ValueError:
            return None

    @staticmethod
    def _read_settable(metric: Any) -> Tuple[Any, bool]:
        """Return (snapshot, already_cleared) for a gauge-like metric."""
        if isinstance(metric, DrainableMetric):
            return metric.snapshot_and_clear(), True
        return metric.snapshot(), False

    # =========================================================================
    # Per-kind translations
    # =========================================================================

    def _counter(self, name: str, metric: Any, now: datetime) -> List[DataPoint]:
        ms = metric.snapshot()
        return [
            DataPoint(
                measurement=f"{name}.count",
                tags=copy_tags(self._tags),
                fields={"value": ms.count},
                time=now,
            )
        ]

    def _gauge(self, name: str, metric: Any, now: datetime) -> List[DataPoint]:
        ms, cleared = self._read_settable(metric)
        if not ms.is_set:
            return []

        points = [
            DataPoint(
                measurement=f"{name}.gauge",
                tags=merge_tag(self._tags, ms.tag),
                fields={"value": ms.value},
                time=now,
            )
        ]
        if not cleared:
            metric.clear()
        return points

    def _gauge_collection(
        self, name: str, metric: Any, now: datetime
    ) -> List[DataPoint]:
        ms, cleared = self._read_settable(metric)
        if not ms.is_set:
            return []

        # Each reading stays a plain gauge point with its own time
        points = [
            DataPoint(
                measurement=f"{name}.gauge",
                tags=merge_tag(self._tags, reading.tag),
                fields={"value": reading.value},
                time=reading.time,
            )
            for reading in ms.readings
        ]
        if not cleared:
            metric.clear()
        return points

    def _histogram(self, name: str, metric: Any, now: datetime) -> List[DataPoint]:
        ms = metric.snapshot()
        return [
            DataPoint(
                measurement=f"{name}.histogram",
                tags=copy_tags(self._tags),
                fields=self._distribution_fields(ms),
                time=now,
            )
        ]

    def _meter(self, name: str, metric: Any, now: datetime) -> List[DataPoint]:
        ms = metric.snapshot()
        return [
            DataPoint(
                measurement=f"{name}.meter",
                tags=copy_tags(self._tags),
                fields={
                    "count": ms.count,
                    "m1": ms.rate1,
                    "m5": ms.rate5,
                    "m15": ms.rate15,
                    "mean": ms.rate_mean,
                },
                time=now,
            )
        ]

    def _timer(self, name: str, metric: Any, now: datetime) -> List[DataPoint]:
        ms = metric.snapshot()
        fields = self._distribution_fields(ms)
        fields.update(
            {
                "m1": ms.rate1,
                "m5": ms.rate5,
                "m15": ms.rate15,
                "meanrate": ms.rate_mean,
            }
        )
        return [
            DataPoint(
                measurement=f"{name}.timer",
                tags=copy_tags(self._tags),
                fields=fields,
                time=now,
            )
        ]

    def _distribution_fields(self, ms: Any) -> Dict[str, Any]:
        """Fields shared by histograms and timers."""
        fields: Dict[str, Any] = {
            "count": ms.count,
            "max": ms.max,
            "mean": ms.mean,
            "min": ms.min,
            "stddev": ms.stddev,
            "variance": ms.variance,
        }
        percentiles = ms.percentiles(list(self._quantiles))
        fields.update(zip(PERCENTILE_KEYS, percentiles))
        return fields
