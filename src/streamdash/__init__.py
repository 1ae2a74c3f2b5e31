"""streamdash - telemetry aggregation for multi-stream video-analytics dashboards.

Example:
    ```python
    from streamdash import SessionConfig, create_session

    session = create_session(SessionConfig(seed=7))
    session.set_all(True)
    session.ingest_tick()
    print(session.export_csv())
    ```
"""

from streamdash.config import SessionConfig, configure_logging
from streamdash.core.buffer import MAX_ENTRIES, EventLogBuffer
from streamdash.core.classify import Severity, UsageLevel, classify, usage_level
from streamdash.core.exceptions import (
    ConfigurationError,
    InvalidEntryError,
    InvalidFilterError,
    SchedulerError,
    StreamdashError,
    UnknownStreamError,
)
from streamdash.core.models import LogEntry, MetricsSnapshot, StreamStats
from streamdash.core.registry import StreamRegistry
from streamdash.core.sampler import MetricsSampler
from streamdash.runtime.session import DashboardSession, MonitoringMode, create_session

__all__ = [
    "MAX_ENTRIES",
    "ConfigurationError",
    "DashboardSession",
    "EventLogBuffer",
    "InvalidEntryError",
    "InvalidFilterError",
    "LogEntry",
    "MetricsSampler",
    "MetricsSnapshot",
    "MonitoringMode",
    "SchedulerError",
    "SessionConfig",
    "Severity",
    "StreamRegistry",
    "StreamStats",
    "StreamdashError",
    "UnknownStreamError",
    "UsageLevel",
    "classify",
    "configure_logging",
    "create_session",
    "usage_level",
]
