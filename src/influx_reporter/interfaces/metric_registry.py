"""
Metric Registry Protocols.

Defines the contracts the reporter relies on when reading metrics.
The registry only has to support iteration; each metric only has to
say what kind it is and hand out an immutable snapshot.

Design Notes:
    - Iteration order is unspecified
    - The registry is responsible for its own thread safety
    - Settable gauges expose clear(), called after their snapshot is consumed;
      snapshot_and_clear() is preferred when available
"""

from __future__ import annotations

from typing import Any, Iterable, Protocol, Tuple, runtime_checkable

from influx_reporter.domain.entities import MetricKind


@runtime_checkable
class Metric(Protocol):
    """Abstract interface for a registered metric."""

    @property
    def kind(self) -> MetricKind:
        """Discriminator used to choose the translation."""
        ...

    def snapshot(self) -> Any:
        """Return an immutable view of the current state."""
        ...


@runtime_checkable
class ClearableMetric(Metric, Protocol):
    """A metric whose accumulated state can be reset after reporting."""

    def clear(self) -> None:
        """Reset internal state so the next snapshot starts empty."""
        ...


@runtime_checkable
class DrainableMetric(ClearableMetric, Protocol):
    """A clearable metric that can snapshot and reset in one atomic step."""

    def snapshot_and_clear(self) -> Any:
        """Return the current snapshot and reset the metric if it was set."""
        ...


@runtime_checkable
class MetricRegistry(Protocol):
    """Abstract interface for a named collection of metrics."""

    def each(self) -> Iterable[Tuple[str, Any]]:
        """
        Visit every registered metric.

        Returns:
            Iterable of (name, metric) pairs in no particular order
        """
        ...
