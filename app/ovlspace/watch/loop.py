"""Background watch loop.

Polls overlay usage at a fixed interval and raises one notification per
distinct usage level above the warning threshold. A single poll failing
never stops the loop.
"""

import logging
import time
from collections.abc import Callable

from ovlspace.dialogs.base import Dialog
from ovlspace.dialogs.text import TextDialog
from ovlspace.usage.probe import ProbeUnavailableError, UsageProbe
from ovlspace.watch.dedup import AlertDeduplicator, UsageAlert
from ovlspace.watch.state import PidLock

logger = logging.getLogger(__name__)

ACTION_LABEL = "Open Manager"


class WatchLoop:
    """Single-instance usage watcher.

    Attributes:
        _probe: Usage source.
        _dedup: Alert deduplicator (owns the persisted alert state).
        _dialog: Notification provider.
        _lock: Instance lock.
        _interval: Seconds between polls.
    """

    def __init__(
        self,
        probe: UsageProbe,
        dedup: AlertDeduplicator,
        dialog: Dialog,
        lock: PidLock,
        *,
        interval: float = 60.0,
        notify_timeout: int = 12,
        on_action: Callable[[], None] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the watch loop.

        Args:
            probe: Usage source.
            dedup: Decides whether a reading deserves an alert.
            dialog: Shows notifications.
            lock: Prevents a second loop from running.
            interval: Seconds between polls.
            notify_timeout: Seconds a notification stays up.
            on_action: Called when the user picks the notification action.
            sleep: Blocking sleep function.
        """
        self._probe = probe
        self._dedup = dedup
        self._dialog = dialog
        self._lock = lock
        self._interval = interval
        self._notify_timeout = notify_timeout
        self._on_action = on_action
        self._sleep = sleep
        self._fallback = TextDialog()

    def run(self, max_polls: int | None = None) -> bool:
        """Take the lock and poll until stopped.

        Args:
            max_polls: Stop after this many polls. None runs forever.

        Returns:
            False if another instance already holds the lock, True after
            max_polls polls.
        """
        if not self._lock.acquire():
            return False

        logger.info("Watching %s every %ss", self._probe.mount_point, self._interval)
        polls = 0
        try:
            while max_polls is None or polls < max_polls:
                try:
                    self.poll_once()
                except (OSError, ValueError) as e:
                    logger.warning("Poll failed: %s", e)
                polls += 1
                if max_polls is None or polls < max_polls:
                    self._sleep(self._interval)
        finally:
            self._lock.release()
        return True

    def poll_once(self) -> UsageAlert | None:
        """Probe once and notify if a new alert is due.

        Returns:
            The alert that was raised, if any.
        """
        try:
            percent = self._probe.probe().percent_used
        except ProbeUnavailableError as e:
            logger.warning("Usage probe unavailable: %s", e)
            percent = None
        else:
            if percent is None:
                logger.warning("Usage percent unknown for %s", self._probe.mount_point)

        alert = self._dedup.observe(percent)
        if alert is not None:
            self._notify(alert)
        return alert

    def _notify(self, alert: UsageAlert) -> None:
        """Show an alert, falling back to plain text if the dialog fails."""
        logger.info("Usage alert at %d%% (%s)", alert.percent, alert.severity.label)
        try:
            picked = self._dialog.notify(
                alert.title, alert.message, self._notify_timeout, ACTION_LABEL
            )
        except OSError as e:
            logger.warning("%s notification failed, using text: %s", self._dialog.name, e)
            picked = self._fallback.notify(
                alert.title, alert.message, self._notify_timeout, ACTION_LABEL
            )

        if picked and self._on_action is not None:
            try:
                self._on_action()
            except OSError as e:
                logger.warning("Could not open manager: %s", e)
