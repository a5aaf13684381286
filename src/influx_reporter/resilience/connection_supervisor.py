"""
Connection Supervisor - Store Client Ownership and Liveness.

Owns the single live client handle. A failed ping triggers one immediate
rebuild; a failed rebuild leaves the previous handle in place so the next
check can try the same recovery again.

Design Notes:
    - Only the reporter thread touches the handle, so no lock is held
    - The handle is replaced wholesale, never patched
    - check() and rebuild() return results; only connect() raises
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from influx_reporter.adapters.influxdb_client import InfluxDBStoreClient
from influx_reporter.errors import (
    InvalidEndpointError,
    ReporterError,
    StoreConnectionError,
)
from influx_reporter.interfaces.store_client import StoreClient, StoreClientFactory

logger = logging.getLogger(__name__)


class ConnectionStatus(Enum):
    """Outcome of a liveness check or rebuild."""
    HEALTHY = "healthy"          # Ping succeeded
    RECONNECTED = "reconnected"  # A new handle replaced the old one
    FAILED = "failed"            # Old handle still in place


@dataclass
class ConnectionCheck:
    """Result of check() or rebuild()."""
    status: ConnectionStatus
    ping_error: Optional[Exception] = None
    rebuild_error: Optional[Exception] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_healthy(self) -> bool:
        """True unless the connection is known to be unusable."""
        return self.status != ConnectionStatus.FAILED


def _default_factory(endpoint: str, username: str, password: str) -> StoreClient:
    return InfluxDBStoreClient.from_endpoint(endpoint, username, password)


class ConnectionSupervisor:
    """
    Creates, recreates and probes the store client.

    Usage:
        supervisor = ConnectionSupervisor("http://localhost:8086", "user", "pw")
        supervisor.connect()          # raises on failure
        supervisor.client.ping()
        check = supervisor.check()    # never raises
    """

    def __init__(
        self,
        endpoint: str,
        username: str = "",
        password: str = "",
        client_factory: Optional[StoreClientFactory] = None,
    ) -> None:
        """
        Initialize supervisor.

        Args:
            endpoint: Store URL
            username: Passed through to the client
            password: Passed through to the client
            client_factory: Builds a client; defaults to InfluxDBStoreClient
        """
        self.endpoint = endpoint
        self.username = username
        self._password = password
        self._client_factory = client_factory or _default_factory
        self._client: Optional[StoreClient] = None

    @property
    def client(self) -> StoreClient:
        """The current client handle."""
        if self._client is None:
            raise StoreConnectionError("Store client has not been connected")
        return self._client

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def connect(self) -> StoreClient:
        """
        Build the first client.

        Returns:
            The new client

        Raises:
            InvalidEndpointError: If the endpoint cannot be parsed
            StoreConnectionError: If the client cannot be created
        """
        self._client = self._create()
        logger.info(f"Connected to store at {self.endpoint}")
        return self._client

    def rebuild(self) -> ConnectionCheck:
        """
        Discard the current client and create a new one.

        On failure the previous handle stays in place.

        Returns:
            ConnectionCheck with RECONNECTED or FAILED status
        """
        try:
            new_client = self._create()
        except ReporterError as e:
            return ConnectionCheck(status=ConnectionStatus.FAILED, rebuild_error=e)

        old_client, self._client = self._client, new_client
        if old_client is not None:
            self._close_quietly(old_client)
        return ConnectionCheck(status=ConnectionStatus.RECONNECTED)

    def check(self) -> ConnectionCheck:
        """
        Ping the store and rebuild the client if the ping fails.

        Returns:
            ConnectionCheck; HEALTHY when the ping succeeded, otherwise the
            rebuild outcome with the ping error attached
        """
        if self._client is None:
            return self.rebuild()

        try:
            self._client.ping()
        except Exception as e:
            result = self.rebuild()
            result.ping_error = e
            return result

        return ConnectionCheck(status=ConnectionStatus.HEALTHY)

    def close(self) -> None:
        """Close the current client, if any."""
        if self._client is not None:
            self._close_quietly(self._client)
            self._client = None

    def _create(self) -> StoreClient:
        try:
            return self._client_factory(self.endpoint, self.username, self._password)
        except InvalidEndpointError:
            raise
        except Exception as e:
            raise StoreConnectionError(
                f"Unable to create store client for {self.endpoint}: {e}"
            ) from e

    @staticmethod
    def _close_quietly(client: StoreClient) -> None:
        # A handle being replaced is usually already broken
        try:
            client.close()
        except Exception as e:
            logger.debug(f"Ignoring error while closing store client: {e}")
