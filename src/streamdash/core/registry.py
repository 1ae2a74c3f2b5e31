"""Stream activity registry.

Tracks which of a fixed set of streams are currently active. The set of
known stream ids is fixed at construction; only the active flags change.
"""

import logging
from collections.abc import Iterable

from streamdash.core.exceptions import UnknownStreamError

logger = logging.getLogger(__name__)


class StreamRegistry:
    """Mapping of stream id to active flag.

    Args:
        stream_ids: The deployment's stream ids, all initially inactive.

    Raises:
        ValueError: If stream_ids is empty or contains duplicates.
    """

    def __init__(self, stream_ids: Iterable[str]) -> None:
        ids = list(stream_ids)
        if not ids:
            raise ValueError("A stream registry needs at least one stream id")
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate stream ids: {ids}")
        self._active: dict[str, bool] = dict.fromkeys(ids, False)

    @property
    def stream_ids(self) -> tuple[str, ...]:
        """All known stream ids in registration order."""
        return tuple(self._active)

    def __contains__(self, stream_id: object) -> bool:
        return stream_id in self._active

    def __len__(self) -> int:
        return len(self._active)

    def is_active(self, stream_id: str) -> bool:
        """Return the active flag of a stream.

        Raises:
            UnknownStreamError: If stream_id is not registered.
        """
        if stream_id not in self._active:
            raise UnknownStreamError(stream_id)
        return self._active[stream_id]

    def toggle(self, stream_id: str) -> None:
        """Flip the active flag of a stream.

        Raises:
            UnknownStreamError: If stream_id is not registered. The registry
                is left unchanged.
        """
        if stream_id not in self._active:
            raise UnknownStreamError(stream_id)
        self._active[stream_id] = not self._active[stream_id]
        logger.info(
            "Stream %s %s",
            stream_id,
            "started" if self._active[stream_id] else "stopped",
        )

    def set_all(self, active: bool) -> None:
        """Set every stream to the same active flag."""
        for stream_id in self._active:
            self._active[stream_id] = active
        logger.info("All streams %s", "started" if active else "stopped")

    def toggle_all(self) -> None:
        """Stop all streams if every stream is active, otherwise start all."""
        self.set_all(not all(self._active.values()))

    def active_count(self) -> int:
        """Number of active streams."""
        return sum(self._active.values())

    def active_ids(self) -> tuple[str, ...]:
        """Ids of active streams in registration order."""
        return tuple(sid for sid, active in self._active.items() if active)

    def snapshot(self) -> dict[str, bool]:
        """Copy of the id to active-flag mapping."""
        return dict(self._active)
