"""
Interfaces Layer - Abstract Protocols for Dependencies.

Protocols:
    - MetricRegistry: Iteration over named metrics
    - Metric / ClearableMetric: A metric kind plus its snapshot
    - StoreClient: Transport to the time-series database

Design Principles:
    - Use typing.Protocol (not ABC) for Pythonic interfaces
    - Small, focused interfaces
"""

from influx_reporter.interfaces.metric_registry import (
    ClearableMetric,
    DrainableMetric,
    Metric,
    MetricRegistry,
)
from influx_reporter.interfaces.store_client import StoreClient, StoreClientFactory

__all__ = [
    "ClearableMetric",
    "DrainableMetric",
    "Metric",
    "MetricRegistry",
    "StoreClient",
    "StoreClientFactory",
]
