"""Map a usage percentage to a severity level."""

from ovlspace.core.config import Thresholds
from ovlspace.usage.models import SeverityLevel


def is_valid_percent(percent: object) -> bool:
    """Check whether a value is an integer percentage in 0..100."""
    # bool is an int subclass but never a percentage
    return isinstance(percent, int) and not isinstance(percent, bool) and 0 <= percent <= 100


def classify(percent: object, thresholds: Thresholds | None = None) -> SeverityLevel:
    """Classify a usage percentage.

    Args:
        percent: Usage percentage. Anything but an integer in 0..100 is unknown.
        thresholds: Warning and critical thresholds. Defaults to 85/95.

    Returns:
        The severity level for the percentage.
    """
    if not is_valid_percent(percent):
        return SeverityLevel.UNKNOWN

    limits = thresholds or Thresholds()
    value = int(percent)  # type: ignore[call-overload]
    if value >= limits.critical_percent:
        return SeverityLevel.CRITICAL
    if value >= limits.warn_percent:
        return SeverityLevel.WARNING
    return SeverityLevel.OK
