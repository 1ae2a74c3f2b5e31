"""CSV encoder for log entries.

Fields are comma-joined verbatim without quoting or escaping. Values that
contain a comma (for example a stream id such as "cam,1") shift the columns
of their row; stream ids are expected to be comma-free.
"""

from collections.abc import Iterable

from streamdash.core.models import LogEntry

CSV_HEADER = (
    "Timestamp,Stream ID,Frame Number,Inference Time (ms),"
    "Confidence (%),Detections,Status"
)


def encode_row(entry: LogEntry) -> str:
    """Encode one entry as a CSV row without line terminator."""
    return ",".join(
        [
            entry.timestamp_iso,
            entry.stream_id,
            str(entry.frame_number),
            str(entry.inference_time_ms),
            str(entry.confidence),
            str(entry.detections_count),
            entry.severity.value,
        ]
    )


def encode_csv(entries: Iterable[LogEntry]) -> str:
    """Encode log entries to CSV text.

    Args:
        entries: Entries in the order they should appear.

    Returns:
        Header row followed by one row per entry, each line terminated
        by "\\n". An empty iterable yields the header row only.
    """
    lines = [CSV_HEADER]
    lines.extend(encode_row(entry) for entry in entries)
    return "\n".join(lines) + "\n"
