"""
Value Objects for Domain Layer.

Immutable snapshots capturing a metric's state at the moment
``snapshot()`` was called. The translator only ever reads them.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from influx_reporter.domain.entities import Reading, Tag


# Quantiles reported for histograms and timers, in field order
DEFAULT_QUANTILES = (0.5, 0.75, 0.95, 0.99, 0.999, 0.9999)

# Quantile -> precomputed percentile value
PercentileDict = Dict[float, float]


class CounterSnapshot(BaseModel):
    """Point-in-time count."""

    count: int = 0

    model_config = {"frozen": True}


class GaugeSnapshot(BaseModel):
    """Integer gauge value; ``is_set`` is False until the first update."""

    value: int = 0
    is_set: bool = False
    tag: Optional[Tag] = None

    model_config = {"frozen": True}


class GaugeFloatSnapshot(BaseModel):
    """Floating point gauge value."""

    value: float = 0.0
    is_set: bool = False
    tag: Optional[Tag] = None

    model_config = {"frozen": True}


class GaugeCollectionSnapshot(BaseModel):
    """All readings accumulated since the last clear."""

    readings: List[Reading] = Field(default_factory=list)
    is_set: bool = False

    model_config = {"frozen": True}


class HistogramSnapshot(BaseModel):
    """
    Distribution statistics with precomputed percentiles.

    Percentiles are computed by whatever produced the snapshot; a quantile
    that was not supplied reads as 0.0, the value an empty sample reports.
    """

    count: int = 0
    min: int = 0
    max: int = 0
    mean: float = 0.0
    stddev: float = 0.0
    variance: float = 0.0
    percentile_values: PercentileDict = Field(default_factory=dict)

    model_config = {"frozen": True}

    def percentiles(self, quantiles: Sequence[float]) -> List[float]:
        """Return the percentile for each quantile, in the order given."""
        return [self.percentile_values.get(q, 0.0) for q in quantiles]


class MeterSnapshot(BaseModel):
    """Event count and moving-average rates (events/second)."""

    count: int = 0
    rate1: float = 0.0
    rate5: float = 0.0
    rate15: float = 0.0
    rate_mean: float = 0.0

    model_config = {"frozen": True}


class TimerSnapshot(HistogramSnapshot):
    """Duration distribution plus the rate of timed events."""

    rate1: float = 0.0
    rate5: float = 0.0
    rate15: float = 0.0
    rate_mean: float = 0.0
