"""
Configuration Models - Pydantic Models for Type-Safe Config.

All configuration is validated at load time using Pydantic.
"""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator

from influx_reporter.adapters.influxdb_client import parse_endpoint


class InfluxDBConfig(BaseModel):
    """Connection settings for the InfluxDB store."""

    url: str = Field(default="http://localhost:8086")
    database: str = Field(..., min_length=1)
    username: str = ""
    password: str = ""
    timeout_seconds: Optional[float] = Field(default=10.0, gt=0)
    verify_ssl: bool = True

    @field_validator("url")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        parse_endpoint(value)
        return value


class ReporterConfig(BaseModel):
    """Root configuration object."""

    version: str = "1.0"
    influxdb: InfluxDBConfig
    interval_seconds: float = Field(default=10.0, gt=0)
    tags: Dict[str, str] = Field(default_factory=dict)
