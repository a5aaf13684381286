"""
In-Memory Store Client.

A fake store for development and testing. Records every batch and can
be told to fail writes or pings.
"""

from __future__ import annotations

from threading import Lock
from typing import List, Optional, Sequence

from influx_reporter.domain.entities import DataPoint


class InMemoryStoreClient:
    """Store client that keeps written batches in memory."""

    def __init__(
        self,
        write_error: Optional[Exception] = None,
        ping_error: Optional[Exception] = None,
    ) -> None:
        """
        Initialize in-memory store.

        Args:
            write_error: Raised by write_points while set
            ping_error: Raised by ping while set
        """
        self.write_error = write_error
        self.ping_error = ping_error
        self.batches: List[List[DataPoint]] = []
        self.databases: List[str] = []
        self.ping_count = 0
        self.closed = False
        self._lock = Lock()

    def write_points(self, points: Sequence[DataPoint], database: str) -> None:
        """Record a batch, or raise the configured write error."""
        with self._lock:
            if self.write_error is not None:
                raise self.write_error
            self.batches.append(list(points))
            self.databases.append(database)

    def ping(self) -> None:
        """Count the ping, or raise the configured ping error."""
        with self._lock:
            self.ping_count += 1
            if self.ping_error is not None:
                raise self.ping_error

    def close(self) -> None:
        self.closed = True

    @property
    def points(self) -> List[DataPoint]:
        """All points written so far, across batches."""
        with self._lock:
            return [p for batch in self.batches for p in batch]
