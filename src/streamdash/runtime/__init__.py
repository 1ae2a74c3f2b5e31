"""Runtime: schedulers, clocks and the dashboard session."""

from streamdash.runtime.scheduler import (
    AsyncioScheduler,
    RecurringTask,
    SystemClock,
    VirtualClock,
    VirtualScheduler,
)
from streamdash.runtime.session import DashboardSession, MonitoringMode, create_session

__all__ = [
    "AsyncioScheduler",
    "DashboardSession",
    "MonitoringMode",
    "RecurringTask",
    "SystemClock",
    "VirtualClock",
    "VirtualScheduler",
    "create_session",
]
