"""Plain-dict encoding of domain models for JSON responses."""

from typing import Any

from streamdash.core.classify import usage_level
from streamdash.core.models import (
    LogEntry,
    MetricsSnapshot,
    StreamStats,
    format_timestamp,
)


def entry_to_dict(entry: LogEntry) -> dict[str, Any]:
    """Convert a log entry to a JSON-serializable dict."""
    return {
        "id": entry.id,
        "stream_id": entry.stream_id,
        "frame_number": entry.frame_number,
        "timestamp": entry.timestamp_iso,
        "inference_time_ms": entry.inference_time_ms,
        "confidence": entry.confidence,
        "detections_count": entry.detections_count,
        "severity": entry.severity.value,
    }


def snapshot_to_dict(snapshot: MetricsSnapshot) -> dict[str, Any]:
    """Convert a metrics snapshot to a JSON-serializable dict.

    Includes the derived temperature gauge and the usage level of each
    percentage gauge (temperature is graded on its gauge value), neither of
    which is stored on the snapshot.
    """
    return {
        "cpu_percent": snapshot.cpu_percent,
        "memory_percent": snapshot.memory_percent,
        "disk_percent": snapshot.disk_percent,
        "temperature_celsius": snapshot.temperature_celsius,
        "temperature_gauge_percent": snapshot.temperature_gauge_percent,
        "network_bandwidth_mbps": snapshot.network_bandwidth_mbps,
        "total_frames_processed": snapshot.total_frames_processed,
        "avg_inference_time_ms": snapshot.avg_inference_time_ms,
        "active_stream_count": snapshot.active_stream_count,
        "sampled_at": format_timestamp(snapshot.sampled_at),
        "usage_levels": {
            "cpu": usage_level(snapshot.cpu_percent).value,
            "memory": usage_level(snapshot.memory_percent).value,
            "disk": usage_level(snapshot.disk_percent).value,
            "temperature": usage_level(snapshot.temperature_gauge_percent).value,
        },
    }


def stats_to_dict(stats: StreamStats) -> dict[str, Any]:
    """Convert per-stream stats to a JSON-serializable dict."""
    return {
        "stream_id": stats.stream_id,
        "frame_rate": stats.frame_rate,
        "processed_frames": stats.processed_frames,
        "inference_time_ms": stats.inference_time_ms,
        "updated_at": format_timestamp(stats.updated_at),
    }
