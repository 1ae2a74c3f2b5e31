"""Synthetic telemetry sources.

Generate plausible frame log entries, system gauges and per-stream figures
from uniform random draws, with load-correlated gauges that grow with the
number of active streams. Useful for demos and tests; a real deployment
substitutes a data-ingesting source implementing the same ports.
"""

import random
from collections.abc import Sequence
from datetime import datetime

from streamdash.core.models import LogEntry, MetricsSnapshot, StreamStats

CPU_LOAD_PER_STREAM = 15
CPU_CEILING = 95
MEMORY_CEILING = 90


class SyntheticTelemetrySource:
    """Random telemetry generator implementing all telemetry ports.

    Args:
        rng: Random generator to draw from (default: a fresh, unseeded one).
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def _draw(self, upper: int) -> int:
        """Integer draw from floor(uniform[0, upper))."""
        return int(self._rng.random() * upper)

    def _salt(self) -> str:
        return f"{self._rng.getrandbits(48):012x}"

    def frame_candidates(
        self, stream_ids: Sequence[str], now: datetime
    ) -> list[LogEntry]:
        """Produce one candidate entry per active stream id."""
        candidates: list[LogEntry] = []
        for stream_id in stream_ids:
            frame_number = self._draw(10000) + 5000
            confidence = self._draw(100)
            detections_count = self._draw(8)
            inference_time_ms = self._draw(50) + 20
            candidates.append(
                LogEntry.create(
                    stream_id=stream_id,
                    frame_number=frame_number,
                    inference_time_ms=inference_time_ms,
                    confidence=confidence,
                    detections_count=detections_count,
                    timestamp=now,
                    salt=self._salt(),
                )
            )
        return candidates

    def read_metrics(self, active_stream_count: int, now: datetime) -> MetricsSnapshot:
        """Derive gauges from the active-stream count.

        Each active stream adds about 15% CPU, 20% memory, 3 degrees,
        2.5 MB/s of bandwidth and 5 ms of average inference time.
        """
        n = active_stream_count
        base_load = n * CPU_LOAD_PER_STREAM
        return MetricsSnapshot(
            cpu_percent=min(CPU_CEILING, base_load + self._draw(20)),
            memory_percent=min(MEMORY_CEILING, n * 20 + self._draw(15) + 25),
            disk_percent=45 + self._draw(10),
            temperature_celsius=45 + self._draw(20) + n * 3,
            network_bandwidth_mbps=n * 2.5 + self._rng.random() * 2,
            total_frames_processed=self._draw(1000) + 15000,
            avg_inference_time_ms=25 + self._draw(30) + n * 5,
            sampled_at=now,
            active_stream_count=n,
        )

    def stream_stats(self, stream_id: str, now: datetime) -> StreamStats:
        """Live figures for an active stream (25-34 fps, 20-69 ms inference)."""
        return StreamStats(
            stream_id=stream_id,
            frame_rate=self._draw(10) + 25,
            processed_frames=self._draw(1000) + 5000,
            inference_time_ms=self._draw(50) + 20,
            updated_at=now,
        )


class SeededTelemetrySource(SyntheticTelemetrySource):
    """Deterministic synthetic source.

    Two sources created with the same seed produce identical sequences.

    Args:
        seed: Seed for the private random generator.
    """

    def __init__(self, seed: int) -> None:
        super().__init__(random.Random(seed))
        self.seed = seed
