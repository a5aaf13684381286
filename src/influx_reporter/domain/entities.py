"""
Core Domain Entities.

This module defines the records the reporter produces and the small
building blocks metrics attach to their readings.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class MetricKind(str, Enum):
    """Kinds of metric the reporter knows how to translate."""

    COUNTER = "counter"
    GAUGE = "gauge"
    GAUGE_FLOAT = "gauge_float"
    GAUGE_COLLECTION = "gauge_collection"
    HISTOGRAM = "histogram"
    METER = "meter"
    TIMER = "timer"


class Tag(BaseModel):
    """A dimension attached to a reading at emission time."""

    name: str = Field(..., min_length=1, description="Tag key")
    value: str = Field(..., description="Tag value")

    model_config = {"frozen": True}


class Reading(BaseModel):
    """One timestamped value of a gauge collection."""

    value: float
    time: datetime
    tag: Optional[Tag] = None

    model_config = {"frozen": True}


class DataPoint(BaseModel):
    """A single record written to the time-series store."""

    measurement: str = Field(..., description="Measurement name, e.g. 'reqs.count'")
    tags: Dict[str, str] = Field(default_factory=dict)
    fields: Dict[str, Any] = Field(default_factory=dict)
    time: datetime

    model_config = {"frozen": True}

    def to_influx(self) -> Dict[str, Any]:
        """Render in the JSON point form accepted by the InfluxDB client."""
        return {
            "measurement": self.measurement,
            "tags": dict(self.tags),
            "fields": dict(self.fields),
            "time": self.time,
        }
