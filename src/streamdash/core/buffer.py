"""Bounded event log buffer for classified frame log entries.

Entries are kept most-recent-first. Ingesting a batch prepends it and
evicts the oldest entries beyond capacity, so memory use stays predictable
no matter how many streams feed the buffer.
"""

import logging
import threading
from collections import Counter
from collections.abc import Iterable, Iterator
from typing import Literal

from streamdash.core.classify import Severity
from streamdash.core.encoding.csv import encode_csv
from streamdash.core.encoding.ndjson import encode_entries
from streamdash.core.exceptions import InvalidFilterError
from streamdash.core.models import LogEntry

logger = logging.getLogger(__name__)

MAX_ENTRIES = 50

ALL = "all"

SeverityFilter = Severity | Literal["all"]


def parse_filter(value: str | Severity) -> Severity | None:
    """Parse a severity filter.

    Args:
        value: A Severity, its string value, or "all".

    Returns:
        The Severity to match, or None for "all".

    Raises:
        InvalidFilterError: If value is neither "all" nor a severity.
    """
    if value == ALL:
        return None
    try:
        return Severity(value)
    except ValueError as e:
        raise InvalidFilterError(f"Unknown log filter: {value!r}") from e


class EventLogBuffer:
    """Capacity-bounded, insertion-ordered buffer of log entries.

    Eviction is strict FIFO by insertion: the tail (oldest) entries are
    discarded once the buffer exceeds capacity. There is no age-based expiry.

    Args:
        max_entries: Maximum number of entries to keep (default 50).
    """

    def __init__(self, max_entries: int = MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self._max_entries = max_entries
        self._entries: list[LogEntry] = []
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        """Maximum number of entries kept."""
        return self._max_entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self.entries())

    def entries(self) -> tuple[LogEntry, ...]:
        """Return the current entries, most recent first."""
        with self._lock:
            return tuple(self._entries)

    def ingest(self, candidates: Iterable[LogEntry]) -> None:
        """Prepend a batch of entries and evict beyond capacity.

        The batch keeps its relative order at the front of the buffer.
        Prepend and truncate happen under one lock.
        """
        batch = list(candidates)
        if not batch:
            return
        with self._lock:
            combined = batch + self._entries
            evicted = len(combined) - self._max_entries
            self._entries = combined[: self._max_entries]
        if evicted > 0:
            logger.debug("Ingested %d entries, evicted %d", len(batch), evicted)
        else:
            logger.debug("Ingested %d entries", len(batch))

    def filter(self, severity: SeverityFilter | str = ALL) -> list[LogEntry]:
        """Return entries matching a severity, order preserved.

        Args:
            severity: A Severity (or its value) or "all".

        Returns:
            Matching entries; the full buffer for "all".

        Raises:
            InvalidFilterError: If severity is not a recognised filter.
        """
        wanted = parse_filter(severity)
        entries = self.entries()
        if wanted is None:
            return list(entries)
        return [e for e in entries if e.severity == wanted]

    def counts(self) -> dict[str, int]:
        """Return entry counts per severity plus the "all" total."""
        entries = self.entries()
        tally = Counter(e.severity for e in entries)
        counts = {ALL: len(entries)}
        for severity in Severity:
            counts[severity.value] = tally.get(severity, 0)
        return counts

    def export_csv(self) -> str:
        """Serialize the entire unfiltered buffer to CSV, most recent first."""
        return encode_csv(self.entries())

    def export_ndjson(self) -> str:
        """Serialize the entire unfiltered buffer to NDJSON, most recent first."""
        return encode_entries(self.entries())

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._entries = []
