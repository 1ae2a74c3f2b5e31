"""Classification of confidence scores and gauge readings into tiers."""

from enum import StrEnum

ERROR_THRESHOLD = 30
WARNING_THRESHOLD = 60

ELEVATED_USAGE_THRESHOLD = 50
CRITICAL_USAGE_THRESHOLD = 80


class Severity(StrEnum):
    """Severity tier of a frame log entry."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class UsageLevel(StrEnum):
    """Load tier of a percentage gauge."""

    NORMAL = "normal"
    ELEVATED = "elevated"
    CRITICAL = "critical"


def classify(confidence: int) -> Severity:
    """Map a confidence score to a severity tier.

    Maps confidence scores to severities:
    - below 30 → ERROR
    - 30-59 → WARNING
    - 60 and above → SUCCESS

    Args:
        confidence: Detection confidence in percent (0-100).

    Returns:
        The severity tier for the score.
    """
    if confidence < ERROR_THRESHOLD:
        return Severity.ERROR
    if confidence < WARNING_THRESHOLD:
        return Severity.WARNING
    return Severity.SUCCESS


def usage_level(value: float) -> UsageLevel:
    """Map a gauge percentage to a load tier (normal < 50 <= elevated < 80)."""
    if value < ELEVATED_USAGE_THRESHOLD:
        return UsageLevel.NORMAL
    if value < CRITICAL_USAGE_THRESHOLD:
        return UsageLevel.ELEVATED
    return UsageLevel.CRITICAL
