"""
Store Client Protocol.

Defines the transport used to reach the time-series database.
The reporter treats it as opaque: it only writes batches, pings,
and closes handles it no longer needs.

Design Notes:
    - Every method raises on failure; callers turn errors into results
    - Timeouts are the transport's concern
"""

from __future__ import annotations

from typing import Callable, Protocol, Sequence, runtime_checkable

from influx_reporter.domain.entities import DataPoint


@runtime_checkable
class StoreClient(Protocol):
    """Abstract interface for a time-series store connection."""

    def write_points(self, points: Sequence[DataPoint], database: str) -> None:
        """
        Write one batch of points.

        Args:
            points: Points produced during one report tick
            database: Target database name

        Raises:
            Exception: Any transport or server error
        """
        ...

    def ping(self) -> None:
        """
        Issue a lightweight liveness probe.

        Raises:
            Exception: When the store cannot be reached
        """
        ...

    def close(self) -> None:
        """Release the underlying transport session."""
        ...


# Builds a client from (endpoint, username, password)
StoreClientFactory = Callable[[str, str, str], StoreClient]
