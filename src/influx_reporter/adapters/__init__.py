"""
Adapters Package - Infrastructure Implementations.

Concrete implementations of the protocols in the interfaces package.

Stores:
    - InfluxDBStoreClient: InfluxDB 1.x over HTTP via the influxdb library
    - InMemoryStoreClient: Records batches for development/testing

Registry:
    - InMemoryRegistry: Thread-safe name -> metric mapping
    - Counter, Gauge, GaugeFloat, GaugeCollection, SnapshotMetric

Design Principles:
    - All adapters implement their respective protocols
    - Easily swappable via Dependency Injection
"""

from influx_reporter.adapters.influxdb_client import (
    Endpoint,
    InfluxDBStoreClient,
    parse_endpoint,
)
from influx_reporter.adapters.memory_registry import (
    Counter,
    Gauge,
    GaugeCollection,
    GaugeFloat,
    InMemoryRegistry,
    SnapshotMetric,
)
from influx_reporter.adapters.memory_store import InMemoryStoreClient

__all__ = [
    "Endpoint",
    "InfluxDBStoreClient",
    "parse_endpoint",
    "Counter",
    "Gauge",
    "GaugeCollection",
    "GaugeFloat",
    "InMemoryRegistry",
    "SnapshotMetric",
    "InMemoryStoreClient",
]
