"""Tests for the bounded event log buffer."""

import json
import threading

import pytest

from streamdash.core.buffer import MAX_ENTRIES, EventLogBuffer, parse_filter
from streamdash.core.classify import Severity
from streamdash.core.encoding.csv import CSV_HEADER
from streamdash.core.exceptions import InvalidFilterError


@pytest.mark.core
class TestIngest:
    """Tests for EventLogBuffer.ingest()."""

    def test_default_capacity_is_fifty(self) -> None:
        assert EventLogBuffer().capacity == MAX_ENTRIES == 50

    def test_rejects_non_positive_capacity(self) -> None:
        with pytest.raises(ValueError):
            EventLogBuffer(0)

    def test_new_buffer_is_empty(self) -> None:
        buffer = EventLogBuffer()
        assert len(buffer) == 0
        assert buffer.entries() == ()

    def test_batch_is_prepended_in_order(self, make_entry) -> None:
        """Candidates keep their relative order at the front of the buffer."""
        buffer = EventLogBuffer()
        old = make_entry(salt="old")
        a, b = make_entry(salt="a"), make_entry(salt="b")

        buffer.ingest([old])
        buffer.ingest([a, b])

        assert buffer.entries() == (a, b, old)

    def test_empty_batch_is_noop(self, make_entry) -> None:
        buffer = EventLogBuffer()
        entry = make_entry()
        buffer.ingest([entry])
        buffer.ingest([])
        assert buffer.entries() == (entry,)

    def test_keeps_fifty_most_recent_single_ingests(self, make_entry) -> None:
        """After N > 50 single-entry ingests only the newest 50 remain."""
        buffer = EventLogBuffer()
        entries = [make_entry(salt=str(i)) for i in range(73)]

        for entry in entries:
            buffer.ingest([entry])

        assert len(buffer) == 50
        assert list(buffer) == list(reversed(entries))[:50]

    def test_length_never_exceeds_capacity(self, make_entry) -> None:
        buffer = EventLogBuffer(max_entries=5)
        for batch_size in (1, 3, 7, 2, 10):
            buffer.ingest(make_entry(salt=f"{batch_size}-{i}") for i in range(batch_size))
            assert len(buffer) <= 5

    def test_oversized_batch_keeps_its_head(self, make_entry) -> None:
        buffer = EventLogBuffer(max_entries=3)
        batch = [make_entry(salt=str(i)) for i in range(5)]
        buffer.ingest(batch)
        assert buffer.entries() == tuple(batch[:3])

    def test_concurrent_ingest_keeps_capacity(self, make_entry) -> None:
        """Ingest is atomic, so threaded feeders cannot overfill the buffer."""
        buffer = EventLogBuffer(max_entries=10)
        entries = [make_entry(salt=str(i)) for i in range(20)]

        def feed() -> None:
            for entry in entries:
                buffer.ingest([entry])

        threads = [threading.Thread(target=feed) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(buffer) == 10


@pytest.mark.core
class TestFilter:
    """Tests for EventLogBuffer.filter()."""

    @pytest.fixture
    def buffer(self, make_entry) -> EventLogBuffer:
        buffer = EventLogBuffer()
        buffer.ingest(
            [
                make_entry(confidence=90, salt="s1"),
                make_entry(confidence=10, salt="e1"),
                make_entry(confidence=45, salt="w1"),
                make_entry(confidence=65, salt="s2"),
                make_entry(confidence=0, salt="e2"),
            ]
        )
        return buffer

    def test_all_returns_full_buffer(self, buffer: EventLogBuffer) -> None:
        assert buffer.filter("all") == list(buffer.entries())

    def test_default_filter_is_all(self, buffer: EventLogBuffer) -> None:
        assert buffer.filter() == list(buffer.entries())

    def test_filters_by_severity_preserving_order(self, buffer: EventLogBuffer) -> None:
        result = buffer.filter(Severity.ERROR)
        assert [e.id.rsplit("-", 1)[1] for e in result] == ["e1", "e2"]
        assert all(e.severity is Severity.ERROR for e in result)

    def test_accepts_string_severity(self, buffer: EventLogBuffer) -> None:
        assert buffer.filter("success") == buffer.filter(Severity.SUCCESS)

    def test_no_matches_returns_empty_list(self, make_entry) -> None:
        buffer = EventLogBuffer()
        buffer.ingest([make_entry(confidence=99)])
        assert buffer.filter("error") == []

    def test_filter_does_not_mutate(self, buffer: EventLogBuffer) -> None:
        before = buffer.entries()
        buffer.filter("warning")
        assert buffer.entries() == before

    def test_unknown_filter_raises(self, buffer: EventLogBuffer) -> None:
        with pytest.raises(InvalidFilterError):
            buffer.filter("critical")

    def test_counts(self, buffer: EventLogBuffer) -> None:
        assert buffer.counts() == {"all": 5, "success": 2, "warning": 1, "error": 2}


@pytest.mark.core
class TestParseFilter:
    """Tests for parse_filter()."""

    def test_all_maps_to_none(self) -> None:
        assert parse_filter("all") is None

    def test_severity_value(self) -> None:
        assert parse_filter("warning") is Severity.WARNING

    def test_unknown_raises_value_error(self) -> None:
        """InvalidFilterError is also a ValueError."""
        with pytest.raises(ValueError):
            parse_filter("ALL")


@pytest.mark.core
class TestExportAndClear:
    """Tests for export_csv(), export_ndjson() and clear()."""

    def test_empty_buffer_exports_header_only(self) -> None:
        assert EventLogBuffer().export_csv() == CSV_HEADER + "\n"

    def test_export_has_one_row_per_entry(self, make_entry) -> None:
        buffer = EventLogBuffer()
        buffer.ingest([make_entry(salt=str(i)) for i in range(4)])

        lines = buffer.export_csv().splitlines()

        assert len(lines) == len(buffer) + 1

    def test_export_ignores_filtered_view(self, make_entry) -> None:
        """Export always covers the whole buffer, whatever is being filtered."""
        buffer = EventLogBuffer()
        buffer.ingest([make_entry(confidence=10), make_entry(confidence=90)])
        buffer.filter("error")

        rows = buffer.export_csv().splitlines()[1:]

        assert [r.rsplit(",", 1)[1] for r in rows] == ["error", "success"]

    def test_ndjson_export_covers_whole_buffer(self, make_entry) -> None:
        buffer = EventLogBuffer()
        buffer.ingest([make_entry(confidence=10, salt="a")])
        buffer.ingest([make_entry(confidence=90, salt="b")])
        buffer.filter("error")

        records = [json.loads(line) for line in buffer.export_ndjson().splitlines()]

        assert [r["severity"] for r in records] == ["success", "error"]

    def test_empty_buffer_exports_empty_ndjson(self) -> None:
        assert EventLogBuffer().export_ndjson() == ""

    def test_clear_empties_buffer(self, make_entry) -> None:
        buffer = EventLogBuffer()
        buffer.ingest([make_entry()])
        buffer.clear()
        assert len(buffer) == 0
        assert buffer.export_csv() == CSV_HEADER + "\n"
