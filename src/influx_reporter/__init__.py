"""
InfluxDB Reporter - Periodic Export of In-Process Metrics.

Snapshots every metric of a registry on a fixed interval, converts each
into timestamped data points and writes them to InfluxDB as one batch.
A separate 5 second health check pings the store and recreates the
client when the ping fails.

Architecture:
    - Ports & Adapters: registry and store are protocols
    - Single reporter thread owns the store client
    - Configuration-driven wiring via YAML

Main Components:
    - domain: Data points, tags, metric snapshots
    - interfaces: Protocols for registry, metrics and store
    - reporting: Translator, batch sender, reporter loop
    - resilience: Connection supervisor
    - adapters: InfluxDB client, in-memory registry and store
    - config: Configuration models and loader

Example:
    >>> from influx_reporter import Reporter
    >>> from influx_reporter.adapters import Counter, InMemoryRegistry
    >>> registry = InMemoryRegistry()
    >>> registry.register("reqs", Counter())
    >>> reporter = Reporter.create(registry, 10, "http://localhost:8086", "metrics")
    >>> reporter.start()
"""

import logging

from influx_reporter.errors import (
    InvalidEndpointError,
    ReporterError,
    StoreConnectionError,
)
from influx_reporter.reporting.reporter import Reporter, run_reporter

__version__ = "0.1.0"

__all__ = [
    "InvalidEndpointError",
    "ReporterError",
    "StoreConnectionError",
    "Reporter",
    "run_reporter",
    "configure_logging",
]


def configure_logging(
    level: int = logging.INFO,
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
) -> None:
    """
    Configure logging for the reporter.

    Call this at application startup to see log messages.
    By default, only WARNING and above are visible.

    Args:
        level: Logging level (default: INFO)
        format: Log message format

    Example:
        >>> import influx_reporter
        >>> influx_reporter.configure_logging(logging.DEBUG)
    """
    logging.basicConfig(
        level=level,
        format=format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("influx_reporter").setLevel(level)
