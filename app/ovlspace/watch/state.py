"""Persistent watch loop state: alert level and instance lock.

Both the alert state and the lock are single plain-text values that are
overwritten wholesale. They are kept behind a small ValueStore interface
so the watch loop can be exercised against memory instead of /tmp.
"""

import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)


class ValueStore(ABC):
    """Storage for a single text value."""

    @abstractmethod
    def read(self) -> str | None:
        """Return the stored value, or None if nothing is stored.

        Raises:
            OSError: If the backing storage cannot be read.
        """

    @abstractmethod
    def write(self, value: str) -> None:
        """Replace the stored value.

        Raises:
            OSError: If the backing storage cannot be written.
        """

    @abstractmethod
    def clear(self) -> None:
        """Remove the stored value."""


class FileValueStore(ValueStore):
    """Value stored as the whole content of a text file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> str | None:
        """Return the file content stripped of whitespace.

        Bytes that are not valid UTF-8 are replaced, so a mangled file
        reads as corrupt content instead of raising.
        """
        try:
            return self._path.read_text(encoding="utf-8", errors="replace").strip()
        except FileNotFoundError:
            return None

    def write(self, value: str) -> None:
        self._path.write_text(f"{value}\n", encoding="utf-8")

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)


class MemoryValueStore(ValueStore):
    """Value held in memory, for tests and dry runs."""

    def __init__(self, value: str | None = None) -> None:
        self.value = value

    def read(self) -> str | None:
        return self.value

    def write(self, value: str) -> None:
        self.value = value

    def clear(self) -> None:
        self.value = None


class AlertState:
    """Last usage percentage an alert was raised for.

    Zero means no alert is outstanding (usage is below the warning
    threshold or nothing was ever alerted).
    """

    def __init__(self, store: ValueStore) -> None:
        self._store = store

    @property
    def last_alerted_percent(self) -> int:
        """Read the stored percentage.

        Unreadable or corrupt state counts as 0.
        """
        try:
            raw = self._store.read()
        except OSError as e:
            logger.warning("Cannot read alert state: %s", e)
            return 0
        if not raw:
            return 0
        try:
            return int(raw)
        except ValueError:
            logger.warning("Ignoring corrupt alert state %r", raw)
            return 0

    def record(self, percent: int) -> None:
        """Persist the percentage an alert was just raised for."""
        self._write(str(percent))

    def reset(self) -> None:
        """Return to the idle state."""
        self._write("0")

    def _write(self, value: str) -> None:
        try:
            self._store.write(value)
        except OSError as e:
            logger.warning("Cannot write alert state: %s", e)


def pid_alive(pid: int) -> bool:
    """Check whether a process with the given ID exists.

    Args:
        pid: Process identifier.

    Returns:
        True if the process exists, even when owned by another user.
    """
    if pid <= 0:
        return False
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    return True


class PidLock:
    """Advisory single-instance lock based on a recorded process ID.

    A lock whose recorded process is gone is stale and simply taken over,
    so no explicit teardown is needed. Checking and writing are not
    atomic; two instances starting at the same moment may both win.
    """

    def __init__(
        self,
        store: ValueStore,
        pid: int | None = None,
        is_alive: Callable[[int], bool] = pid_alive,
    ) -> None:
        """Initialize the lock.

        Args:
            store: Where the owning process ID is recorded.
            pid: This process's ID. Defaults to os.getpid().
            is_alive: Liveness check for a recorded process ID.
        """
        self._store = store
        self._pid = pid if pid is not None else os.getpid()
        self._is_alive = is_alive

    @property
    def pid(self) -> int:
        return self._pid

    def holder(self) -> int | None:
        """Return the ID of a live process holding the lock, if any."""
        try:
            raw = self._store.read()
        except OSError as e:
            logger.warning("Cannot read lock: %s", e)
            return None
        if not raw:
            return None
        try:
            pid = int(raw)
        except ValueError:
            logger.debug("Ignoring corrupt lock content %r", raw)
            return None
        if pid == self._pid or not self._is_alive(pid):
            return None
        return pid

    def acquire(self) -> bool:
        """Try to take the lock.

        Returns:
            False if another live process holds it, True otherwise.
        """
        holder = self.holder()
        if holder is not None:
            logger.info("Lock held by running process %d", holder)
            return False
        try:
            self._store.write(str(self._pid))
        except OSError as e:
            logger.warning("Cannot write lock, continuing unlocked: %s", e)
        return True

    def release(self) -> None:
        """Drop the lock if this process still owns it."""
        try:
            if self._store.read() == str(self._pid):
                self._store.clear()
        except OSError as e:
            logger.warning("Cannot release lock: %s", e)
