"""Exception hierarchy for the telemetry aggregation layer."""


class StreamdashError(Exception):
    """Base class for all streamdash errors."""


class UnknownStreamError(StreamdashError, KeyError):
    """Raised when a stream id is not part of the registry's fixed set.

    Attributes:
        stream_id: The identifier that was not recognised.
    """

    def __init__(self, stream_id: str) -> None:
        super().__init__(stream_id)
        self.stream_id = stream_id

    def __str__(self) -> str:
        return f"Unknown stream: {self.stream_id!r}"


class InvalidFilterError(StreamdashError, ValueError):
    """Raised when a log filter is neither a severity nor "all"."""


class InvalidEntryError(StreamdashError, ValueError):
    """Raised when a log entry field is outside its allowed range."""


class ConfigurationError(StreamdashError, ValueError):
    """Raised when session configuration is invalid or cannot be parsed."""


class SchedulerError(StreamdashError, RuntimeError):
    """Raised when a scheduler is used in an invalid state."""
