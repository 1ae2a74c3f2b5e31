"""Session configuration and logging setup."""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from streamdash.core.buffer import MAX_ENTRIES
from streamdash.core.exceptions import ConfigurationError

DEFAULT_STREAM_IDS = ("person-detection", "face-detection", "segmentation")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

METRICS_SOURCES = ("synthetic", "host")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class SessionConfig:
    """Configuration of a dashboard session.

    Attributes:
        stream_ids: Fixed set of stream ids known to the registry.
        max_entries: Event log buffer capacity.
        log_interval_seconds: Seconds between log ingestion ticks.
        metrics_interval_seconds: Seconds between metrics sampling ticks.
        stats_interval_seconds: Seconds between per-stream stats refreshes.
        cumulative_frames: Accumulate total_frames_processed across ticks
            instead of reporting each tick's reading.
        seed: Seed for the synthetic telemetry source (None for unseeded).
        metrics_source: "synthetic" for generated gauges or "host" for the
            machine running the dashboard.
    """

    stream_ids: tuple[str, ...] = DEFAULT_STREAM_IDS
    max_entries: int = MAX_ENTRIES
    log_interval_seconds: float = 2.0
    metrics_interval_seconds: float = 2.0
    stats_interval_seconds: float = 1.0
    cumulative_frames: bool = False
    seed: int | None = None
    metrics_source: str = "synthetic"

    def __post_init__(self) -> None:
        object.__setattr__(self, "stream_ids", tuple(self.stream_ids))
        if not self.stream_ids:
            raise ConfigurationError("stream_ids must not be empty")
        if len(set(self.stream_ids)) != len(self.stream_ids):
            raise ConfigurationError(f"Duplicate stream ids: {self.stream_ids}")
        if self.max_entries < 1:
            raise ConfigurationError(
                f"max_entries must be >= 1, got {self.max_entries}"
            )
        for name in (
            "log_interval_seconds",
            "metrics_interval_seconds",
            "stats_interval_seconds",
        ):
            if getattr(self, name) <= 0:
                raise ConfigurationError(
                    f"{name} must be > 0, got {getattr(self, name)}"
                )
        if self.metrics_source not in METRICS_SOURCES:
            raise ConfigurationError(
                f"metrics_source must be one of {METRICS_SOURCES}, "
                f"got {self.metrics_source!r}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SessionConfig":
        """Build a configuration from STREAMDASH_* environment variables.

        Unset variables keep their defaults.

        Raises:
            ConfigurationError: If a variable cannot be parsed or the
                resulting configuration is invalid.
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}

        streams = env.get("STREAMDASH_STREAMS")
        if streams is not None:
            kwargs["stream_ids"] = tuple(
                s.strip() for s in streams.split(",") if s.strip()
            )

        for key, field, parse in (
            ("STREAMDASH_MAX_ENTRIES", "max_entries", int),
            ("STREAMDASH_LOG_INTERVAL", "log_interval_seconds", float),
            ("STREAMDASH_METRICS_INTERVAL", "metrics_interval_seconds", float),
            ("STREAMDASH_STATS_INTERVAL", "stats_interval_seconds", float),
            ("STREAMDASH_SEED", "seed", int),
        ):
            raw = env.get(key)
            if raw is None:
                continue
            try:
                kwargs[field] = parse(raw)
            except ValueError as e:
                raise ConfigurationError(f"Invalid {key}: {raw!r}") from e

        metrics_source = env.get("STREAMDASH_METRICS_SOURCE")
        if metrics_source is not None:
            kwargs["metrics_source"] = metrics_source.strip().lower()

        cumulative = env.get("STREAMDASH_CUMULATIVE_FRAMES")
        if cumulative is not None:
            flag = cumulative.strip().lower()
            if flag in _TRUE_VALUES:
                kwargs["cumulative_frames"] = True
            elif flag in _FALSE_VALUES:
                kwargs["cumulative_frames"] = False
            else:
                raise ConfigurationError(
                    f"Invalid STREAMDASH_CUMULATIVE_FRAMES: {cumulative!r}"
                )

        return cls(**kwargs)  # type: ignore[arg-type]


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach a stream handler to the "streamdash" logger.

    Calling it again only updates the level; no second handler is added.

    Returns:
        The "streamdash" logger.
    """
    logger = logging.getLogger("streamdash")
    logger.setLevel(level)
    if not any(getattr(h, "_streamdash", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._streamdash = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
