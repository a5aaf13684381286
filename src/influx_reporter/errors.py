"""
Reporter Exceptions.

Only startup failures are raised; everything that can go wrong while
the loop runs is returned as a result object instead.
"""

from __future__ import annotations


class ReporterError(Exception):
    """Base class for reporter errors."""
    pass


class InvalidEndpointError(ReporterError, ValueError):
    """Raised when the store endpoint URL cannot be used."""
    pass


class StoreConnectionError(ReporterError):
    """Raised when a store client cannot be created."""
    pass
