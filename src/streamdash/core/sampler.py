"""Periodic metrics sampler.

Derives one MetricsSnapshot per tick from the number of active streams by
reading a metrics source and applying the sampler's policies: percentage
gauges are kept within [0, 100] and the frames counter is either passed
through or accumulated.
"""

import dataclasses
import logging
from datetime import datetime

from streamdash.core.models import MetricsSnapshot, utcnow
from streamdash.core.ports import ClockPort, MetricsSourcePort

logger = logging.getLogger(__name__)

_PERCENT_GAUGES = ("cpu_percent", "memory_percent", "disk_percent")


def _clamp_percent(value: float) -> float:
    return min(100.0, max(0.0, value))


class MetricsSampler:
    """Produces metrics snapshots from a metrics source.

    Args:
        source: Metrics source implementing MetricsSourcePort.
        clock: Clock used to stamp snapshots (default: system UTC time).
        cumulative_frames: When False (default) total_frames_processed is
            reported as read from the source on every tick. When True the
            value read on each tick is treated as frames processed since the
            previous tick and added to a running total, so the reported
            counter never decreases.
    """

    def __init__(
        self,
        source: MetricsSourcePort,
        clock: ClockPort | None = None,
        cumulative_frames: bool = False,
    ) -> None:
        self._source = source
        self._clock = clock
        self._cumulative_frames = cumulative_frames
        self._frames_total = 0
        self._latest: MetricsSnapshot | None = None

    @property
    def latest(self) -> MetricsSnapshot:
        """Most recent snapshot, or an all-zero snapshot before the first tick."""
        if self._latest is None:
            return MetricsSnapshot.empty(self._utcnow())
        return self._latest

    @property
    def frames_total(self) -> int:
        """Running frames counter (only advanced when cumulative_frames is set)."""
        return self._frames_total

    def _utcnow(self) -> datetime:
        return self._clock.utcnow() if self._clock is not None else utcnow()

    def sample(self, active_stream_count: int) -> MetricsSnapshot:
        """Take one snapshot for the given number of active streams.

        Args:
            active_stream_count: Active streams at sampling time.

        Returns:
            The new snapshot, also retained as `latest`.

        Raises:
            ValueError: If active_stream_count is negative.
        """
        if active_stream_count < 0:
            raise ValueError(
                f"active_stream_count must be >= 0, got {active_stream_count}"
            )
        reading = self._source.read_metrics(active_stream_count, self._utcnow())

        changes: dict[str, float | int] = {"active_stream_count": active_stream_count}
        for name in _PERCENT_GAUGES:
            value = getattr(reading, name)
            clamped = _clamp_percent(value)
            if clamped != value:
                logger.warning("Clamped %s from %s to %s", name, value, clamped)
                changes[name] = clamped

        if self._cumulative_frames:
            self._frames_total += reading.total_frames_processed
            changes["total_frames_processed"] = self._frames_total

        snapshot = dataclasses.replace(reading, **changes)
        self._latest = snapshot
        logger.debug(
            "Sampled metrics for %d active streams: cpu=%s memory=%s",
            active_stream_count,
            snapshot.cpu_percent,
            snapshot.memory_percent,
        )
        return snapshot
