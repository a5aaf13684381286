"""
Resilience Package - Store Connection Supervision.

This package keeps the reporter connected:
    - ConnectionSupervisor: Owns the client, pings it, rebuilds on failure

Design Principles:
    - Fail fast at startup
    - One immediate reconnect per failed ping, no backoff
    - Keep the old handle when a rebuild fails
"""

from influx_reporter.resilience.connection_supervisor import (
    ConnectionCheck,
    ConnectionStatus,
    ConnectionSupervisor,
)

__all__ = ["ConnectionCheck", "ConnectionStatus", "ConnectionSupervisor"]
