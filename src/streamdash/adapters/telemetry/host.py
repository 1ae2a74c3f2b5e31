"""Host metrics source backed by psutil.

Reads real CPU, memory, disk, temperature and network gauges from the
machine running the dashboard. Frame totals and inference averages are not
host properties; they come from injectable callables.
"""

import logging
import time
from collections.abc import Callable
from datetime import datetime

import psutil

from streamdash.core.models import MetricsSnapshot

logger = logging.getLogger(__name__)

_BYTES_PER_MB = 1_000_000


def _first_temperature() -> float:
    """Return the first reported sensor temperature, or 0.0 if unavailable."""
    sensors = getattr(psutil, "sensors_temperatures", None)
    if sensors is None:
        return 0.0
    try:
        readings = sensors()
    except (OSError, RuntimeError) as e:
        logger.debug("Temperature sensors unavailable: %s", e)
        return 0.0
    for entries in readings.values():
        for entry in entries:
            if entry.current is not None:
                return float(entry.current)
    return 0.0


class HostMetricsSource:
    """MetricsSourcePort implementation reading the local host via psutil.

    Network bandwidth is the byte throughput (sent + received) since the
    previous reading; the first reading reports 0.

    Args:
        disk_path: Mount point whose usage is reported (default "/").
        frames_processed: Returns the current processed-frames total.
        avg_inference_ms: Returns the current average inference time.
        monotonic: Monotonic clock used for throughput (default time.monotonic).
    """

    def __init__(
        self,
        disk_path: str = "/",
        frames_processed: Callable[[], int] | None = None,
        avg_inference_ms: Callable[[], float] | None = None,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self._disk_path = disk_path
        self._frames_processed = frames_processed or (lambda: 0)
        self._avg_inference_ms = avg_inference_ms or (lambda: 0.0)
        self._monotonic = monotonic
        self._last_net: tuple[float, int] | None = None

    def _network_mbps(self) -> float:
        counters = psutil.net_io_counters()
        total = counters.bytes_sent + counters.bytes_recv
        now = self._monotonic()
        previous = self._last_net
        self._last_net = (now, total)
        if previous is None:
            return 0.0
        elapsed = now - previous[0]
        if elapsed <= 0:
            return 0.0
        return max(0, total - previous[1]) / elapsed / _BYTES_PER_MB

    def read_metrics(self, active_stream_count: int, now: datetime) -> MetricsSnapshot:
        """Read current host gauges."""
        return MetricsSnapshot(
            cpu_percent=psutil.cpu_percent(interval=None),
            memory_percent=psutil.virtual_memory().percent,
            disk_percent=psutil.disk_usage(self._disk_path).percent,
            temperature_celsius=_first_temperature(),
            network_bandwidth_mbps=self._network_mbps(),
            total_frames_processed=self._frames_processed(),
            avg_inference_time_ms=self._avg_inference_ms(),
            sampled_at=now,
            active_stream_count=active_stream_count,
        )
