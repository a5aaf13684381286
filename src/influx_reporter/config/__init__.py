"""
Configuration Package - Models and Loaders.

Configuration Structure:
    - ReporterConfig: Root configuration object (interval, base tags)
    - InfluxDBConfig: Store URL, database, credentials, transport settings

Design Principles:
    - Type-safe via Pydantic
    - Validation on load (fail fast)
    - Support for profiles merged over a base file
"""

from influx_reporter.config.loader import ConfigLoader, load_config
from influx_reporter.config.models import InfluxDBConfig, ReporterConfig

__all__ = ["ConfigLoader", "load_config", "InfluxDBConfig", "ReporterConfig"]
