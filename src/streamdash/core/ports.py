"""Port interfaces for telemetry sources and clocks.

These protocols define the contracts that telemetry adapters must implement.
The buffer, sampler and session depend only on these interfaces, so a real
data-ingesting source can replace the synthetic generator.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol, runtime_checkable

from streamdash.core.models import LogEntry, MetricsSnapshot, StreamStats


@runtime_checkable
class FrameSourcePort(Protocol):
    """Port for producing candidate log entries.

    Examples: SyntheticTelemetrySource, SeededTelemetrySource.
    """

    def frame_candidates(
        self, stream_ids: Sequence[str], now: datetime
    ) -> list[LogEntry]:
        """Produce candidate entries for the given active streams.

        Args:
            stream_ids: Currently active stream ids.
            now: Tick instant, used as the entries' timestamp.

        Returns:
            At most one entry per stream id; empty when stream_ids is empty.
        """
        ...


@runtime_checkable
class MetricsSourcePort(Protocol):
    """Port for reading system gauges.

    Examples: SyntheticTelemetrySource, HostMetricsSource.
    """

    def read_metrics(self, active_stream_count: int, now: datetime) -> MetricsSnapshot:
        """Read one set of gauges for the given load."""
        ...


@runtime_checkable
class StreamStatsSourcePort(Protocol):
    """Port for reading live per-stream processing figures."""

    def stream_stats(self, stream_id: str, now: datetime) -> StreamStats:
        """Read current figures for an active stream."""
        ...


@runtime_checkable
class ClockPort(Protocol):
    """Port for time.

    now() is a monotonic reading used for scheduling; utcnow() is the wall
    clock used to stamp entries and snapshots.
    """

    def now(self) -> float:
        """Monotonic time in seconds."""
        ...

    def utcnow(self) -> datetime:
        """Current wall-clock instant (UTC)."""
        ...
