"""Dashboard session: the owned context tying the telemetry components together.

A session owns its stream registry, event log buffer, metrics sampler and
per-stream stats. Sessions share no state, so several dashboards can run in
one process.
"""

import logging
from enum import StrEnum

from streamdash.adapters.telemetry.host import HostMetricsSource
from streamdash.adapters.telemetry.synthetic import (
    SeededTelemetrySource,
    SyntheticTelemetrySource,
)
from streamdash.config import SessionConfig
from streamdash.core.buffer import ALL, EventLogBuffer, SeverityFilter
from streamdash.core.models import LogEntry, MetricsSnapshot, StreamStats
from streamdash.core.ports import (
    ClockPort,
    FrameSourcePort,
    MetricsSourcePort,
    StreamStatsSourcePort,
)
from streamdash.core.registry import StreamRegistry
from streamdash.core.sampler import MetricsSampler
from streamdash.runtime.scheduler import SchedulerPort, SystemClock, VirtualScheduler

logger = logging.getLogger(__name__)

EXPORT_FILENAME_PREFIX = "frame-logs"


class MonitoringMode(StrEnum):
    """Analytics scenario the dashboard is configured for."""

    TRAFFIC = "traffic"
    CAMPUS = "campus"
    ANIMAL = "animal"
    PARKING = "parking"
    AGRICULTURE = "agriculture"
    ANOMALY = "anomaly"


class DashboardSession:
    """One isolated dashboard context.

    Args:
        config: Session configuration.
        frame_source: Producer of candidate log entries.
        metrics_source: Producer of system gauges.
        stats_source: Producer of per-stream figures (optional).
        scheduler: Scheduler for the periodic ticks (default: a
            VirtualScheduler, which only fires when advanced).
        clock: Clock used to stamp entries and snapshots. Defaults to the
            scheduler's clock when it has one, else the system clock.

    Example:
        ```python
        source = SeededTelemetrySource(seed=1)
        session = DashboardSession(SessionConfig(), source, source, source)
        session.toggle("person-detection")
        session.ingest_tick()
        session.current_entries("error")
        ```
    """

    def __init__(
        self,
        config: SessionConfig,
        frame_source: FrameSourcePort,
        metrics_source: MetricsSourcePort,
        stats_source: StreamStatsSourcePort | None = None,
        scheduler: SchedulerPort | None = None,
        clock: ClockPort | None = None,
    ) -> None:
        self.config = config
        self._frame_source = frame_source
        self._stats_source = stats_source
        self._scheduler = scheduler or VirtualScheduler()
        self._clock = clock or getattr(self._scheduler, "clock", None) or SystemClock()
        self.registry = StreamRegistry(config.stream_ids)
        self.buffer = EventLogBuffer(config.max_entries)
        self.sampler = MetricsSampler(
            metrics_source,
            clock=self._clock,
            cumulative_frames=config.cumulative_frames,
        )
        now = self._clock.utcnow()
        self._stats: dict[str, StreamStats] = {
            sid: StreamStats.idle(sid, updated_at=now) for sid in config.stream_ids
        }
        self._mode = MonitoringMode.TRAFFIC

    @property
    def scheduler(self) -> SchedulerPort:
        return self._scheduler

    @property
    def running(self) -> bool:
        return self._scheduler.running

    # --- Lifecycle ---

    def start(self) -> None:
        """Register the periodic ticks and start the scheduler."""
        if self._scheduler.running:
            return
        self._scheduler.every(
            "log-ingest", self.config.log_interval_seconds, self.ingest_tick
        )
        self._scheduler.every(
            "metrics-sample", self.config.metrics_interval_seconds, self.sample_tick
        )
        if self._stats_source is not None:
            self._scheduler.every(
                "stream-stats", self.config.stats_interval_seconds, self.stats_tick
            )
        self._scheduler.start()
        logger.info("Dashboard session started with streams %s", self.config.stream_ids)

    def stop(self) -> None:
        """Stop the scheduler, tearing down all periodic ticks."""
        if not self._scheduler.running:
            return
        self._scheduler.stop()
        self._scheduler.clear()
        logger.info("Dashboard session stopped")

    # --- Ticks ---

    def ingest_tick(self) -> list[LogEntry]:
        """Pull one candidate per active stream into the buffer.

        Returns:
            The ingested candidates (empty when no stream is active).
        """
        active = self.registry.active_ids()
        if not active:
            return []
        candidates = self._frame_source.frame_candidates(active, self._clock.utcnow())
        self.buffer.ingest(candidates)
        return candidates

    def sample_tick(self) -> MetricsSnapshot:
        """Sample system metrics for the current active-stream count."""
        return self.sampler.sample(self.registry.active_count())

    def stats_tick(self) -> None:
        """Refresh per-stream figures; inactive streams report idle stats."""
        if self._stats_source is None:
            return
        now = self._clock.utcnow()
        for stream_id in self.registry.stream_ids:
            if self.registry.is_active(stream_id):
                self._stats[stream_id] = self._stats_source.stream_stats(stream_id, now)
            else:
                previous = self._stats[stream_id]
                self._stats[stream_id] = StreamStats.idle(
                    stream_id, previous.processed_frames, updated_at=now
                )

    # --- Toggle interface ---

    def toggle(self, stream_id: str) -> None:
        """Flip one stream. Raises UnknownStreamError for unknown ids."""
        self.registry.toggle(stream_id)

    def set_all(self, active: bool) -> None:
        """Start or stop every stream."""
        self.registry.set_all(active)

    def toggle_all(self) -> None:
        """Stop all streams if all are active, otherwise start all."""
        self.registry.toggle_all()

    # --- Render interface ---

    def current_entries(self, severity: SeverityFilter | str = ALL) -> list[LogEntry]:
        """Buffer contents, most recent first, optionally filtered."""
        return self.buffer.filter(severity)

    def entry_counts(self) -> dict[str, int]:
        """Entry counts per severity plus the total under "all"."""
        return self.buffer.counts()

    def current_snapshot(self) -> MetricsSnapshot:
        """Latest metrics snapshot."""
        return self.sampler.latest

    def active_count(self) -> int:
        return self.registry.active_count()

    def active_ids(self) -> tuple[str, ...]:
        return self.registry.active_ids()

    def streams(self) -> dict[str, bool]:
        """Copy of the stream id to active-flag mapping."""
        return self.registry.snapshot()

    def stream_stats(self) -> list[StreamStats]:
        """Per-stream figures in registration order."""
        return [self._stats[sid] for sid in self.registry.stream_ids]

    def processed_frames_total(self) -> int:
        """Sum of the last processed-frame counts over all streams."""
        return sum(s.processed_frames for s in self._stats.values())

    def average_inference_ms(self) -> float:
        """Mean inference time over the streams currently reporting a frame rate."""
        live = [s.inference_time_ms for s in self._stats.values() if s.frame_rate]
        return sum(live) / len(live) if live else 0.0

    # --- Export interface ---

    def export_csv(self) -> str:
        """CSV of the full, unfiltered buffer."""
        return self.buffer.export_csv()

    def export_ndjson(self) -> str:
        """NDJSON of the full, unfiltered buffer."""
        return self.buffer.export_ndjson()

    def export_filename(self, extension: str = "csv") -> str:
        """Download name for an export, e.g. frame-logs-2024-05-01.csv."""
        day = self._clock.utcnow().date().isoformat()
        return f"{EXPORT_FILENAME_PREFIX}-{day}.{extension}"

    def clear_logs(self) -> None:
        """Empty the event log buffer."""
        self.buffer.clear()
        logger.info("Frame logs cleared")

    # --- Monitoring mode ---

    @property
    def mode(self) -> MonitoringMode:
        return self._mode

    def set_mode(self, mode: MonitoringMode | str) -> None:
        """Select the monitoring mode.

        Raises:
            ValueError: If mode is not a MonitoringMode value.
        """
        self._mode = MonitoringMode(mode)
        logger.info("Monitoring mode set to %s", self._mode.value)


def create_session(
    config: SessionConfig | None = None,
    scheduler: SchedulerPort | None = None,
    clock: ClockPort | None = None,
) -> DashboardSession:
    """Create a session fed by the synthetic telemetry generator.

    Uses a SeededTelemetrySource when config.seed is set, otherwise an
    unseeded SyntheticTelemetrySource. With config.metrics_source == "host"
    the system gauges come from a HostMetricsSource instead; its frame total
    and inference average follow the session's per-stream stats.
    """
    config = config or SessionConfig()
    source = (
        SeededTelemetrySource(config.seed)
        if config.seed is not None
        else SyntheticTelemetrySource()
    )
    metrics_source: MetricsSourcePort = source
    if config.metrics_source == "host":
        metrics_source = HostMetricsSource(
            frames_processed=lambda: session.processed_frames_total(),
            avg_inference_ms=lambda: session.average_inference_ms(),
        )
    session = DashboardSession(
        config,
        frame_source=source,
        metrics_source=metrics_source,
        stats_source=source,
        scheduler=scheduler,
        clock=clock,
    )
    return session
