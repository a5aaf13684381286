"""
Domain Layer - Data Points, Tags and Metric Snapshots.

Entities:
    - MetricKind: Discriminator for the metric kinds the reporter translates
    - Tag: Dynamic (name, value) dimension
    - Reading: Timestamped value of a gauge collection
    - DataPoint: One record written to the store

Value Objects:
    - CounterSnapshot, GaugeSnapshot, GaugeFloatSnapshot
    - GaugeCollectionSnapshot, HistogramSnapshot, MeterSnapshot, TimerSnapshot

Design Principles:
    - Immutable (frozen Pydantic models)
    - No infrastructure dependencies
"""

from influx_reporter.domain.entities import DataPoint, MetricKind, Reading, Tag
from influx_reporter.domain.value_objects import (
    DEFAULT_QUANTILES,
    CounterSnapshot,
    GaugeCollectionSnapshot,
    GaugeFloatSnapshot,
    GaugeSnapshot,
    HistogramSnapshot,
    MeterSnapshot,
    TimerSnapshot,
)

__all__ = [
    "DataPoint",
    "MetricKind",
    "Reading",
    "Tag",
    "DEFAULT_QUANTILES",
    "CounterSnapshot",
    "GaugeCollectionSnapshot",
    "GaugeFloatSnapshot",
    "GaugeSnapshot",
    "HistogramSnapshot",
    "MeterSnapshot",
    "TimerSnapshot",
]
