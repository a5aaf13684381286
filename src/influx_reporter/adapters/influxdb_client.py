"""
InfluxDB Store Client.

Store transport built on the ``influxdb`` client library (InfluxDB 1.x
HTTP API). Points are written with the JSON point form the library
expects; pings hit the ``/ping`` endpoint.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence
from urllib.parse import urlsplit

from influxdb import InfluxDBClient

from influx_reporter.domain.entities import DataPoint
from influx_reporter.errors import InvalidEndpointError

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8086


@dataclass(frozen=True)
class Endpoint:
    """Parsed store URL."""
    host: str
    port: int
    ssl: bool
    path: str = ""


def parse_endpoint(url: str) -> Endpoint:
    """
    Parse and validate a store URL.

    Args:
        url: e.g. "http://influx.local:8086" or "https://host/influx"

    Returns:
        Endpoint with host, port, ssl flag and path prefix

    Raises:
        InvalidEndpointError: If the URL is not an http(s) URL with a host
    """
    try:
        parts = urlsplit(url)
        port = parts.port
    except (TypeError, ValueError) as e:
        raise InvalidEndpointError(f"Unable to parse store URL {url!r}: {e}") from e

    if parts.scheme not in ("http", "https"):
        raise InvalidEndpointError(
            f"Unsupported scheme in store URL {url!r}, expected http or https"
        )
    if not parts.hostname:
        raise InvalidEndpointError(f"Store URL {url!r} has no host")

    return Endpoint(
        host=parts.hostname,
        port=port or DEFAULT_PORT,
        ssl=parts.scheme == "https",
        path=parts.path.strip("/"),
    )


class InfluxDBStoreClient:
    """StoreClient backed by ``influxdb.InfluxDBClient``."""

    def __init__(self, client: InfluxDBClient) -> None:
        """
        Initialize store client.

        Args:
            client: Configured InfluxDB client
        """
        self._client = client

    @classmethod
    def from_endpoint(
        cls,
        endpoint: str,
        username: str = "",
        password: str = "",
        timeout_seconds: Optional[float] = None,
        verify_ssl: bool = True,
    ) -> "InfluxDBStoreClient":
        """
        Build a client for the given URL and credentials.

        Raises:
            InvalidEndpointError: If the URL cannot be used
        """
        ep = parse_endpoint(endpoint)
        client = InfluxDBClient(
            host=ep.host,
            port=ep.port,
            username=username,
            password=password,
            ssl=ep.ssl,
            verify_ssl=verify_ssl,
            timeout=timeout_seconds,
            retries=1,
            path=ep.path,
        )
        return cls(client)

    @classmethod
    def factory(
        cls,
        timeout_seconds: Optional[float] = None,
        verify_ssl: bool = True,
    ) -> Callable[[str, str, str], "InfluxDBStoreClient"]:
        """Return a client factory with fixed transport settings."""

        def build(endpoint: str, username: str, password: str) -> "InfluxDBStoreClient":
            return cls.from_endpoint(
                endpoint,
                username,
                password,
                timeout_seconds=timeout_seconds,
                verify_ssl=verify_ssl,
            )

        return build

    def write_points(self, points: Sequence[DataPoint], database: str) -> None:
        """Write one batch; raises on any client or server error."""
        self._client.write_points(
            [point.to_influx() for point in points],
            database=database,
        )

    def ping(self) -> Any:
        """Ping the server; returns the reported version."""
        return self._client.ping()

    def close(self) -> None:
        self._client.close()
