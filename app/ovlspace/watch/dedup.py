"""Alert deduplication.

Alerts are deduplicated on the exact usage percentage, not on the
severity band: a move from 86% to 87% alerts again, a steady 86% does
not. Dropping below the warning threshold (or losing track of usage)
resets the state so the next crossing alerts again.
"""

import logging
from dataclasses import dataclass

from ovlspace.core.config import Thresholds
from ovlspace.usage.classifier import classify, is_valid_percent
from ovlspace.usage.models import SeverityLevel
from ovlspace.watch.state import AlertState

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UsageAlert:
    """A usage alert that should be shown to the user.

    Attributes:
        percent: Usage percentage that triggered the alert.
        severity: Severity of that percentage.
        warn_percent: Warning threshold in effect.
    """

    percent: int
    severity: SeverityLevel
    warn_percent: int

    @property
    def title(self) -> str:
        return f"Overlay {self.severity.label}"

    @property
    def message(self) -> str:
        return (
            f"Overlay usage is {self.percent}% (>= {self.warn_percent}%).\n\n"
            "Fix: clean caches or move /root heavy folders outside overlay."
        )


class AlertDeduplicator:
    """Decides, poll by poll, whether a new alert is due."""

    def __init__(self, state: AlertState, thresholds: Thresholds | None = None) -> None:
        """Initialize the deduplicator.

        Args:
            state: Persistent last-alerted percentage.
            thresholds: Warning and critical thresholds. Defaults to 85/95.
        """
        self._state = state
        self._thresholds = thresholds or Thresholds()

    @property
    def thresholds(self) -> Thresholds:
        return self._thresholds

    def observe(self, percent: int | None) -> UsageAlert | None:
        """Feed one usage reading.

        Args:
            percent: Current usage percentage, or None if unknown.

        Returns:
            An alert if one should be raised now, None otherwise.
        """
        last = self._state.last_alerted_percent
        warn = self._thresholds.warn_percent

        if percent is None or not is_valid_percent(percent) or percent < warn:
            if last != 0:
                logger.info("Usage below %d%%, clearing alert state", warn)
                self._state.reset()
            return None

        if percent == last:
            return None

        self._state.record(percent)
        return UsageAlert(
            percent=percent,
            severity=classify(percent, self._thresholds),
            warn_percent=warn,
        )
