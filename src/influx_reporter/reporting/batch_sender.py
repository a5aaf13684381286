"""
Batch Sender - One Write per Report Tick.

Writes all points of a tick in a single batch. There is no retry and no
buffering: a failed batch is dropped and the next tick starts fresh.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from influx_reporter.domain.entities import DataPoint
from influx_reporter.interfaces.store_client import StoreClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendResult:
    """Outcome of writing one batch."""

    success: bool
    point_count: int
    error: Optional[Exception] = None


class BatchSender:
    """Writes batches through whichever client is current."""

    def __init__(
        self,
        client_provider: Callable[[], StoreClient],
        database: str,
    ) -> None:
        """
        Initialize batch sender.

        Args:
            client_provider: Returns the live client at call time, so a
                reconnect is picked up by the next send
            database: Target database name
        """
        self._client_provider = client_provider
        self.database = database

    def send(self, points: Sequence[DataPoint]) -> SendResult:
        """
        Write the points as a single batch.

        Args:
            points: All points produced during one tick

        Returns:
            SendResult; ``error`` holds the transport failure, if any
        """
        if not points:
            logger.debug("No points to send")
            return SendResult(success=True, point_count=0)

        try:
            self._client_provider().write_points(list(points), self.database)
        except Exception as e:
            return SendResult(success=False, point_count=len(points), error=e)

        logger.debug(f"Wrote {len(points)} points to {self.database}")
        return SendResult(success=True, point_count=len(points))
