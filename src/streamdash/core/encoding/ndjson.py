"""NDJSON encoding of log entries for line-oriented log shippers."""

import json
from collections.abc import Iterable

from streamdash.core.encoding.records import entry_to_dict
from streamdash.core.models import LogEntry


def encode_entries(entries: Iterable[LogEntry]) -> str:
    """Encode entries as one compact JSON object per line.

    Every line, the last included, ends with a newline, so an empty input
    yields an empty string.
    """
    return "".join(
        json.dumps(entry_to_dict(entry), separators=(",", ":")) + "\n"
        for entry in entries
    )
