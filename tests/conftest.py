"""Shared test fixtures for all test modules."""

from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from streamdash.adapters.telemetry.synthetic import SeededTelemetrySource
from streamdash.config import SessionConfig
from streamdash.core.models import LogEntry
from streamdash.runtime.scheduler import VirtualClock, VirtualScheduler
from streamdash.runtime.session import DashboardSession

START = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def make_entry() -> Callable[..., LogEntry]:
    """Factory fixture for log entries with sensible defaults.

    Usage:
        def test_something(make_entry):
            entry = make_entry(confidence=10, stream_id="cam-1")
    """

    def _make(
        stream_id: str = "person-detection",
        confidence: int = 75,
        frame_number: int = 5000,
        inference_time_ms: int = 30,
        detections_count: int = 2,
        timestamp: datetime = START,
        salt: str = "s",
    ) -> LogEntry:
        return LogEntry.create(
            stream_id=stream_id,
            frame_number=frame_number,
            inference_time_ms=inference_time_ms,
            confidence=confidence,
            detections_count=detections_count,
            timestamp=timestamp,
            salt=salt,
        )

    return _make


@pytest.fixture
def virtual_clock() -> VirtualClock:
    """Virtual clock starting at 2024-05-01 12:00:00 UTC."""
    return VirtualClock(start=START)


@pytest.fixture
def virtual_scheduler(virtual_clock: VirtualClock) -> VirtualScheduler:
    """Virtual scheduler driving the shared virtual clock."""
    return VirtualScheduler(virtual_clock)


@pytest.fixture
def seeded_source() -> SeededTelemetrySource:
    """Deterministic synthetic telemetry source."""
    return SeededTelemetrySource(seed=1234)


@pytest.fixture
def session(
    seeded_source: SeededTelemetrySource, virtual_scheduler: VirtualScheduler
) -> DashboardSession:
    """Session with the default streams, a seeded source and a virtual clock."""
    return DashboardSession(
        SessionConfig(),
        frame_source=seeded_source,
        metrics_source=seeded_source,
        stats_source=seeded_source,
        scheduler=virtual_scheduler,
    )
