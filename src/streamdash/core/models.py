"""Core domain models for dashboard telemetry."""

import time
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from streamdash.core.classify import Severity, classify
from streamdash.core.exceptions import InvalidEntryError

TEMPERATURE_GAUGE_SCALE = 1.2

_EPOCH = datetime.fromtimestamp(0, UTC)


def format_timestamp(value: datetime) -> str:
    """Format an instant as ISO-8601 UTC with millisecond precision.

    Naive datetimes are treated as UTC.

    Example:
        2024-05-01T12:00:00.123Z
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utcnow() -> datetime:
    """Return the current instant as a timezone-aware UTC datetime."""
    return datetime.fromtimestamp(time.time(), UTC)


@dataclass(frozen=True)
class LogEntry:
    """A classified frame-processing log entry.

    Attributes:
        id: Opaque unique identifier (stream id, epoch millis and a salt).
        stream_id: Stream that produced the frame.
        frame_number: Frame number within the stream.
        timestamp: Creation instant (UTC).
        inference_time_ms: Inference duration in milliseconds.
        confidence: Detection confidence in percent (0-100).
        detections_count: Number of detections in the frame.
        severity: Severity derived from confidence at creation time.
    """

    id: str
    stream_id: str
    frame_number: int
    timestamp: datetime
    inference_time_ms: int
    confidence: int
    detections_count: int
    severity: Severity

    def __post_init__(self) -> None:
        if not 0 <= self.confidence <= 100:
            raise InvalidEntryError(
                f"confidence must be within [0, 100], got {self.confidence}"
            )
        for name in ("frame_number", "inference_time_ms", "detections_count"):
            if getattr(self, name) < 0:
                raise InvalidEntryError(
                    f"{name} must be non-negative, got {getattr(self, name)}"
                )
        try:
            object.__setattr__(self, "severity", Severity(self.severity))
        except ValueError as e:
            raise InvalidEntryError(f"unknown severity {self.severity!r}") from e

    @classmethod
    def create(
        cls,
        stream_id: str,
        frame_number: int,
        inference_time_ms: int,
        confidence: int,
        detections_count: int,
        timestamp: datetime | None = None,
        salt: str | None = None,
    ) -> "LogEntry":
        """Create an entry with a generated id and a derived severity.

        Args:
            stream_id: Stream that produced the frame.
            frame_number: Frame number within the stream.
            inference_time_ms: Inference duration in milliseconds.
            confidence: Detection confidence in percent (0-100).
            detections_count: Number of detections in the frame.
            timestamp: Creation instant (default: now).
            salt: Uniqueness salt for the id (default: random).

        Returns:
            LogEntry whose severity is classify(confidence).
        """
        timestamp = timestamp or utcnow()
        salt = salt or uuid.uuid4().hex[:12]
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=UTC)
        epoch_ms = (timestamp - _EPOCH) // timedelta(milliseconds=1)
        return cls(
            id=f"{stream_id}-{epoch_ms}-{salt}",
            stream_id=stream_id,
            frame_number=frame_number,
            timestamp=timestamp,
            inference_time_ms=inference_time_ms,
            confidence=confidence,
            detections_count=detections_count,
            severity=classify(confidence),
        )

    @property
    def timestamp_iso(self) -> str:
        """Creation instant in ISO-8601 textual form."""
        return format_timestamp(self.timestamp)


@dataclass(frozen=True)
class MetricsSnapshot:
    """System-wide gauges captured at one sampling instant.

    Attributes:
        cpu_percent: CPU usage (0-100).
        memory_percent: Memory usage (0-100).
        disk_percent: Disk usage (0-100).
        temperature_celsius: Device temperature.
        network_bandwidth_mbps: Network throughput in MB/s.
        total_frames_processed: Frames processed, see MetricsSampler.
        avg_inference_time_ms: Average inference duration.
        sampled_at: Sampling instant (UTC).
        active_stream_count: Active streams the gauges were derived from.
    """

    cpu_percent: float
    memory_percent: float
    disk_percent: float
    temperature_celsius: float
    network_bandwidth_mbps: float
    total_frames_processed: int
    avg_inference_time_ms: float
    sampled_at: datetime
    active_stream_count: int = 0

    @classmethod
    def empty(cls, sampled_at: datetime | None = None) -> "MetricsSnapshot":
        """All-zero snapshot reported before the first sampling tick."""
        return cls(
            cpu_percent=0.0,
            memory_percent=0.0,
            disk_percent=0.0,
            temperature_celsius=0.0,
            network_bandwidth_mbps=0.0,
            total_frames_processed=0,
            avg_inference_time_ms=0.0,
            sampled_at=sampled_at or utcnow(),
        )

    @property
    def temperature_gauge_percent(self) -> float:
        """Temperature scaled for progress-bar display only."""
        return self.temperature_celsius * TEMPERATURE_GAUGE_SCALE


@dataclass(frozen=True)
class StreamStats:
    """Live processing figures of a single stream.

    Inactive streams report a zero frame rate and inference time.
    """

    stream_id: str
    frame_rate: int
    processed_frames: int
    inference_time_ms: int
    updated_at: datetime

    @classmethod
    def idle(
        cls, stream_id: str, processed_frames: int = 0, updated_at: datetime | None = None
    ) -> "StreamStats":
        """Stats for an inactive stream, keeping the last processed-frame count."""
        return cls(
            stream_id=stream_id,
            frame_rate=0,
            processed_frames=processed_frames,
            inference_time_ms=0,
            updated_at=updated_at or utcnow(),
        )
