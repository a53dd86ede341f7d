"""Unit tests for AlertDeduplicator."""

import pytest
from ovlspace.core.config import Thresholds
from ovlspace.usage.models import SeverityLevel
from ovlspace.watch.dedup import AlertDeduplicator, UsageAlert
from ovlspace.watch.state import AlertState, MemoryValueStore


@pytest.fixture
def store() -> MemoryValueStore:
    return MemoryValueStore()


@pytest.fixture
def dedup(store: MemoryValueStore) -> AlertDeduplicator:
    return AlertDeduplicator(AlertState(store))


class TestObserve:
    """Tests for AlertDeduplicator.observe."""

    def test_sequence_alerts_on_each_new_percent(self, dedup: AlertDeduplicator) -> None:
        """Steady usage is silent; any change above warn alerts again."""
        readings = [86, 86, 87, 86, 40, 86]

        alerted = [i for i, p in enumerate(readings) if dedup.observe(p) is not None]

        assert alerted == [0, 2, 3, 5]

    def test_steady_percent_alerts_once(self, dedup: AlertDeduplicator) -> None:
        readings = [90, 90, 90]

        alerts = [dedup.observe(p) for p in readings]

        assert alerts[0] is not None
        assert alerts[1:] == [None, None]

    def test_below_warn_resets(self, dedup: AlertDeduplicator, store: MemoryValueStore) -> None:
        """Dropping below warn clears the state so the next crossing alerts."""
        dedup.observe(88)
        assert store.value == "88"

        assert dedup.observe(50) is None
        assert store.value == "0"
        assert dedup.observe(88) is not None

    def test_idle_reset_not_rewritten(self, store: MemoryValueStore) -> None:
        """An idle state is not rewritten on every quiet poll."""
        dedup = AlertDeduplicator(AlertState(store))

        dedup.observe(10)

        assert store.value is None

    def test_unknown_percent_resets(
        self, dedup: AlertDeduplicator, store: MemoryValueStore
    ) -> None:
        """An unknown reading counts as below warn."""
        dedup.observe(92)

        assert dedup.observe(None) is None
        assert store.value == "0"
        assert dedup.observe(92) is not None

    def test_exact_warn_threshold_alerts(self, dedup: AlertDeduplicator) -> None:
        alert = dedup.observe(85)

        assert alert is not None
        assert alert.severity is SeverityLevel.WARNING

    def test_critical_alert(self, dedup: AlertDeduplicator) -> None:
        alert = dedup.observe(97)

        assert alert == UsageAlert(percent=97, severity=SeverityLevel.CRITICAL, warn_percent=85)
        assert alert.title == "Overlay CRITICAL"

    def test_custom_thresholds(self, store: MemoryValueStore) -> None:
        dedup = AlertDeduplicator(AlertState(store), Thresholds(warn_percent=70, critical_percent=80))

        assert dedup.observe(75) is not None
        assert dedup.thresholds.warn_percent == 70

    def test_state_survives_restart(self, store: MemoryValueStore) -> None:
        """A new deduplicator over the same store remembers the last alert."""
        AlertDeduplicator(AlertState(store)).observe(89)

        assert AlertDeduplicator(AlertState(store)).observe(89) is None


class TestUsageAlert:
    """Tests for UsageAlert text."""

    def test_message(self) -> None:
        alert = UsageAlert(percent=88, severity=SeverityLevel.WARNING, warn_percent=85)

        assert alert.title == "Overlay WARNING"
        assert alert.message.startswith("Overlay usage is 88% (>= 85%).")
        assert "move /root heavy folders" in alert.message
