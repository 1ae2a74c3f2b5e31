"""Step definitions for dashboard session features."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest
from pytest_bdd import given, parsers, then, when

from streamdash.adapters.telemetry.synthetic import SeededTelemetrySource
from streamdash.config import SessionConfig
from streamdash.core.exceptions import UnknownStreamError
from streamdash.core.models import LogEntry
from streamdash.runtime.scheduler import VirtualClock, VirtualScheduler
from streamdash.runtime.session import DashboardSession

START = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


@dataclass
class SessionScenarioContext:
    """Shared state between steps in a session scenario."""

    scheduler: VirtualScheduler = field(
        default_factory=lambda: VirtualScheduler(VirtualClock(start=START))
    )
    session: DashboardSession | None = None
    error: Exception | None = None
    filtered: list[LogEntry] = field(default_factory=list)


@pytest.fixture
def ctx() -> SessionScenarioContext:
    """Fresh scenario context for each test."""
    return SessionScenarioContext()


# === Background Steps ===
@given("a dashboard session with a seeded telemetry source")
def step_session(ctx: SessionScenarioContext) -> None:
    source = SeededTelemetrySource(seed=2024)
    ctx.session = DashboardSession(
        SessionConfig(),
        frame_source=source,
        metrics_source=source,
        stats_source=source,
        scheduler=ctx.scheduler,
    )
    ctx.session.start()


# === Given Steps ===
@given(parsers.parse('the stream "{stream_id}" is toggled'))
def given_stream_toggled(ctx: SessionScenarioContext, stream_id: str) -> None:
    ctx.session.toggle(stream_id)


@given("all streams are started")
def given_all_started(ctx: SessionScenarioContext) -> None:
    ctx.session.set_all(True)


# === When Steps ===
@when(parsers.parse("{seconds:d} seconds pass"))
def when_seconds_pass(ctx: SessionScenarioContext, seconds: int) -> None:
    ctx.scheduler.advance(seconds)


@when(parsers.parse('the stream "{stream_id}" is toggled'))
def when_stream_toggled(ctx: SessionScenarioContext, stream_id: str) -> None:
    try:
        ctx.session.toggle(stream_id)
    except UnknownStreamError as e:
        ctx.error = e


@when(parsers.parse('the log filter is "{severity}"'))
def when_log_filter(ctx: SessionScenarioContext, severity: str) -> None:
    ctx.filtered = ctx.session.current_entries(severity)


# === Then Steps ===
@then("the log buffer is empty")
def then_buffer_empty(ctx: SessionScenarioContext) -> None:
    assert ctx.session.current_entries() == []


@then(parsers.parse("the log buffer holds {count:d} entries"))
def then_buffer_holds(ctx: SessionScenarioContext, count: int) -> None:
    assert len(ctx.session.current_entries()) == count


@then("every entry comes from an active stream")
def then_entries_from_active(ctx: SessionScenarioContext) -> None:
    active = set(ctx.session.active_ids())
    assert all(e.stream_id in active for e in ctx.session.current_entries())


@then("the entries are ordered most recent first")
def then_most_recent_first(ctx: SessionScenarioContext) -> None:
    timestamps = [e.timestamp for e in ctx.session.current_entries()]
    assert timestamps == sorted(timestamps, reverse=True)


@then(parsers.parse("the latest snapshot reports {count:d} active streams"))
def then_snapshot_active(ctx: SessionScenarioContext, count: int) -> None:
    assert ctx.session.current_snapshot().active_stream_count == count


@then(parsers.parse("the CSV export has {count:d} lines"))
def then_csv_lines(ctx: SessionScenarioContext, count: int) -> None:
    assert len(ctx.session.export_csv().splitlines()) == count


@then(parsers.parse('the CSV export is named "{filename}"'))
def then_csv_named(ctx: SessionScenarioContext, filename: str) -> None:
    assert ctx.session.export_filename() == filename


@then("an unknown stream error is raised")
def then_unknown_stream(ctx: SessionScenarioContext) -> None:
    assert isinstance(ctx.error, UnknownStreamError)


@then(parsers.parse("{count:d} streams are active"))
def then_active_count(ctx: SessionScenarioContext, count: int) -> None:
    assert ctx.session.active_count() == count


@then(parsers.parse('the filtered view holds only "{severity}" entries'))
def then_filtered_only(ctx: SessionScenarioContext, severity: str) -> None:
    assert all(e.severity == severity for e in ctx.filtered)
    assert len(ctx.filtered) == ctx.session.entry_counts()[severity]
