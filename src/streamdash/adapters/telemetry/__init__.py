"""Telemetry sources implementing the frame, metrics and stream-stats ports."""

from streamdash.adapters.telemetry.host import HostMetricsSource
from streamdash.adapters.telemetry.synthetic import (
    SeededTelemetrySource,
    SyntheticTelemetrySource,
)

__all__ = [
    "HostMetricsSource",
    "SeededTelemetrySource",
    "SyntheticTelemetrySource",
]
