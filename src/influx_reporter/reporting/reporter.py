"""
Reporter - Periodic Export of Registry Metrics.

Drives two periodic triggers on a single thread:
    - every ``interval_seconds``: translate the registry and send one batch
    - every 5 seconds: ping the store, rebuilding the client on failure

Only one handler runs at a time. A handler that overruns its period
delays the next decision; the missed trigger then fires once and the
schedule restarts from that moment.

The stop event is only waited on between triggers, so a batch that has
started translating is always sent.
"""

from __future__ import annotations

import logging
import threading
import time
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

from influx_reporter.adapters.influxdb_client import InfluxDBStoreClient
from influx_reporter.config.models import ReporterConfig
from influx_reporter.errors import ReporterError
from influx_reporter.interfaces.metric_registry import MetricRegistry
from influx_reporter.interfaces.store_client import StoreClientFactory
from influx_reporter.reporting.batch_sender import BatchSender, SendResult
from influx_reporter.reporting.translator import MetricTranslator
from influx_reporter.resilience.connection_supervisor import (
    ConnectionCheck,
    ConnectionStatus,
    ConnectionSupervisor,
)

logger = logging.getLogger(__name__)

PING_INTERVAL_SECONDS = 5.0


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Reporter:
    """
    Background reporter for one registry and one store.

    Usage:
        reporter = Reporter.create(
            registry,
            interval_seconds=10,
            url="http://localhost:8086",
            database="metrics",
            tags={"host": "h1"},
        )
        reporter.start()
        ...
        reporter.stop()
    """

    def __init__(
        self,
        registry: MetricRegistry,
        supervisor: ConnectionSupervisor,
        database: str,
        interval_seconds: float,
        tags: Optional[Mapping[str, str]] = None,
        ping_interval_seconds: float = PING_INTERVAL_SECONDS,
        on_send: Optional[Callable[[SendResult], Any]] = None,
        on_check: Optional[Callable[[ConnectionCheck], Any]] = None,
        stop_event: Optional[threading.Event] = None,
        clock: Callable[[], datetime] = _utc_now,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize reporter.

        Args:
            registry: Metrics to export
            supervisor: Owner of the (already connected) store client
            database: Target database name
            interval_seconds: Report period
            tags: Base tags attached to every point
            ping_interval_seconds: Health-check period
            on_send: Called with every SendResult
            on_check: Called with every ConnectionCheck
            stop_event: Event that ends the loop when set
            clock: Wall clock used to timestamp points
            monotonic: Clock used for scheduling
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        if ping_interval_seconds <= 0:
            raise ValueError("ping_interval_seconds must be positive")

        self.registry = registry
        self.supervisor = supervisor
        self.interval_seconds = interval_seconds
        self.ping_interval_seconds = ping_interval_seconds
        self.translator = MetricTranslator(tags)
        self.sender = BatchSender(lambda: self.supervisor.client, database)
        self._on_send = on_send
        self._on_check = on_check
        self._stop_event = stop_event or threading.Event()
        self._clock = clock
        self._monotonic = monotonic
        self._thread: Optional[threading.Thread] = None

    @classmethod
    def create(
        cls,
        registry: MetricRegistry,
        interval_seconds: float,
        url: str,
        database: str,
        username: str = "",
        password: str = "",
        tags: Optional[Mapping[str, str]] = None,
        client_factory: Optional[StoreClientFactory] = None,
        **kwargs: Any,
    ) -> "Reporter":
        """
        Validate the endpoint, connect, and build a reporter.

        Raises:
            InvalidEndpointError: If the URL cannot be used
            StoreConnectionError: If the first client cannot be created
        """
        supervisor = ConnectionSupervisor(
            url,
            username=username,
            password=password,
            client_factory=client_factory,
        )
        supervisor.connect()
        return cls(
            registry,
            supervisor,
            database,
            interval_seconds,
            tags=tags,
            **kwargs,
        )

    @classmethod
    def from_config(
        cls,
        config: ReporterConfig,
        registry: MetricRegistry,
        client_factory: Optional[StoreClientFactory] = None,
        **kwargs: Any,
    ) -> "Reporter":
        """Build and connect a reporter from a validated ReporterConfig."""
        influx = config.influxdb
        factory = client_factory or InfluxDBStoreClient.factory(
            timeout_seconds=influx.timeout_seconds,
            verify_ssl=influx.verify_ssl,
        )
        return cls.create(
            registry,
            config.interval_seconds,
            influx.url,
            influx.database,
            username=influx.username,
            password=influx.password,
            tags=config.tags,
            client_factory=factory,
            **kwargs,
        )

    @property
    def database(self) -> str:
        return self.sender.database

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # =========================================================================
    # Trigger handlers
    # =========================================================================

    def report(self) -> SendResult:
        """
        Translate every metric and send the batch.

        Returns:
            SendResult for this tick; failures are logged, never raised
        """
        now = self._clock()
        try:
            translation = self.translator.translate_registry(self.registry, now)
        except Exception as e:
            result = SendResult(success=False, point_count=0, error=e)
            logger.error(f"Unable to read metrics registry: {e}")
            self._notify(self._on_send, result)
            return result

        result = self.sender.send(translation.points)
        if result.success:
            logger.debug(
                f"Reported {result.point_count} points "
                f"({translation.skipped} metrics without points, "
                f"{len(translation.failed)} failed)"
            )
        else:
            logger.error(f"Unable to send metrics to InfluxDB: {result.error}")

        self._notify(self._on_send, result)
        return result

    def check_connection(self) -> ConnectionCheck:
        """
        Ping the store; rebuild the client if the ping fails.

        Returns:
            ConnectionCheck; failures are logged, never raised
        """
        result = self.supervisor.check()

        if result.ping_error is not None:
            logger.warning(
                f"Got error while sending a ping to InfluxDB, "
                f"trying to recreate client: {result.ping_error}"
            )
        if result.status == ConnectionStatus.RECONNECTED:
            logger.info(f"Recreated InfluxDB client for {self.supervisor.endpoint}")
        elif result.status == ConnectionStatus.FAILED:
            logger.error(f"Unable to make InfluxDB client: {result.rebuild_error}")

        self._notify(self._on_check, result)
        return result

    # =========================================================================
    # Loop
    # =========================================================================

    def run(self) -> None:
        """Run the loop on the calling thread until stop() is called."""
        self._loop(self._stop_event)

    def _loop(self, stop_event: threading.Event) -> None:
        start = self._monotonic()
        next_report = start + self.interval_seconds
        next_check = start + self.ping_interval_seconds
        logger.info(
            f"Reporting to {self.supervisor.endpoint}/{self.database} "
            f"every {self.interval_seconds}s"
        )

        while True:
            due = min(next_report, next_check)
            timeout = max(0.0, due - self._monotonic())
            if stop_event.wait(timeout):
                break
            if due > self._monotonic():
                continue

            if next_report <= next_check:
                self.report()
                next_report = self._next_deadline(next_report, self.interval_seconds)
            else:
                self.check_connection()
                next_check = self._next_deadline(next_check, self.ping_interval_seconds)

        logger.info("Reporter stopped")

    def start(self) -> threading.Thread:
        """
        Run the loop on a daemon thread.

        A stopped reporter gets a fresh stop event, so the event of an
        earlier run stays set and that loop can never resume.

        Raises:
            ReporterError: If a loop thread is still alive, including one
                that stop() gave up waiting for
        """
        if self.is_running:
            raise ReporterError("Reporter is already running")

        if self._stop_event.is_set():
            self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._loop,
            args=(self._stop_event,),
            name="influx-reporter",
            daemon=True,
        )
        self._thread.start()
        return self._thread

    def stop(self, timeout: Optional[float] = None) -> bool:
        """
        Signal the loop to exit and wait for the thread to finish.

        Returns:
            True if no loop thread is left running
        """
        self._stop_event.set()
        thread = self._thread
        if thread is None:
            return True

        thread.join(timeout)
        if thread.is_alive():
            logger.warning(
                f"Reporter thread still running after {timeout}s, "
                f"it will exit after the current handler"
            )
            return False

        self._thread = None
        return True

    def _next_deadline(self, deadline: float, period: float) -> float:
        now = self._monotonic()
        nxt = deadline + period
        return nxt if nxt > now else now

    @staticmethod
    def _notify(callback: Optional[Callable[[Any], Any]], result: Any) -> None:
        if callback is None:
            return
        try:
            callback(result)
        except Exception:
            logger.exception("Reporter callback failed")


def run_reporter(
    registry: MetricRegistry,
    interval_seconds: float,
    url: str,
    database: str,
    username: str = "",
    password: str = "",
    tags: Optional[Mapping[str, str]] = None,
    stop_event: Optional[threading.Event] = None,
    client_factory: Optional[StoreClientFactory] = None,
) -> Optional[Reporter]:
    """
    Connect and run a reporter on the calling thread.

    Startup failures are logged and the function returns None without
    reporting; otherwise it blocks until ``stop_event`` is set.

    Returns:
        The reporter after it stopped, or None if it never started
    """
    try:
        reporter = Reporter.create(
            registry,
            interval_seconds,
            url,
            database,
            username=username,
            password=password,
            tags=tags,
            client_factory=client_factory,
            stop_event=stop_event,
        )
    except ReporterError as e:
        logger.error(f"Unable to start InfluxDB reporter: {e}")
        return None

    reporter.run()
    return reporter
