"""Shared telemetry: logging setup and OpenTelemetry config."""

from geolab.shared.telemetry.logging import get_audit_logger, get_logger, setup_logging
from geolab.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    get_tracer,
    set_telemetry,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "get_audit_logger",
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
    "get_tracer",
]
