"""Cache, trash and log cleanup.

Reclaims overlay space from a fixed, ordered set of configured locations.
Nothing outside those locations is touched: cache targets lose their
direct children (symlinked children are unlinked, never followed), and
only regular files below the configured log directory are truncated or
deleted. Every failure is isolated to the entry it happened on.
"""

import fnmatch
import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from ovlspace.core.config import CacheTarget, LogCleanup

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CleanupFailure:
    """A single entry that could not be removed or truncated.

    Attributes:
        path: Path that was operated on.
        error: Error message from the failed operation.
    """

    path: str
    error: str


@dataclass(slots=True)
class CleanupReport:
    """Outcome of one cleanup run.

    Attributes:
        emptied: Cache directories whose contents were processed.
        removed_directories: Cache directories removed after emptying.
        removed_entries: Number of direct children removed from cache directories.
        truncated: Log files truncated in place.
        deleted: Log files deleted.
        reclaimed_log_bytes: Bytes freed by truncating and deleting logs.
        failures: Entries that could not be handled.
    """

    emptied: list[str] = field(default_factory=list)
    removed_directories: list[str] = field(default_factory=list)
    removed_entries: int = 0
    truncated: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    reclaimed_log_bytes: int = 0
    failures: list[CleanupFailure] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)


class CleanupEngine:
    """Empties configured cache directories and trims logs.

    Attributes:
        _targets: Cache directories, processed in order.
        _logs: Log trimming rules, or None to leave logs alone.
    """

    def __init__(self, targets: list[CacheTarget], logs: LogCleanup | None = None) -> None:
        """Initialize the CleanupEngine.

        Args:
            targets: Ordered cache directories to empty.
            logs: Log trimming rules. None disables log trimming.
        """
        self._targets = list(targets)
        self._logs = logs

    def clean(self) -> CleanupReport:
        """Run every cleanup step.

        Missing directories are skipped. Per-entry failures are recorded in
        the report and never abort the remaining steps.

        Returns:
            CleanupReport describing what was done.
        """
        report = CleanupReport()

        for target in self._targets:
            self._clean_target(target, report)

        if self._logs is not None:
            self._trim_logs(self._logs, report)

        logger.info(
            "Cleanup finished: %d cache dirs, %d logs truncated, %d logs deleted, %d failures",
            len(report.emptied),
            len(report.truncated),
            len(report.deleted),
            len(report.failures),
        )
        return report

    def _clean_target(self, target: CacheTarget, report: CleanupReport) -> None:
        """Empty a single cache directory."""
        directory = target.path
        if not directory.is_dir():
            logger.debug("Cache directory absent, skipping: %s", directory)
            return

        try:
            entries = sorted(directory.iterdir())
        except OSError as e:
            self._record_failure(report, directory, e)
            return

        for entry in entries:
            try:
                self._remove_entry(entry)
            except FileNotFoundError:
                # Vanished between listing and removal
                continue
            except OSError as e:
                self._record_failure(report, entry, e)
                continue
            report.removed_entries += 1

        report.emptied.append(str(directory))

        if target.remove_directory:
            try:
                directory.rmdir()
            except FileNotFoundError:
                pass
            except OSError as e:
                self._record_failure(report, directory, e)
            else:
                report.removed_directories.append(str(directory))

    def _remove_entry(self, entry: Path) -> None:
        """Remove one child of a cache directory.

        Directories (but not symlinks to directories) are removed
        recursively; files and symlinks are unlinked.
        """
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()

    def _trim_logs(self, rules: LogCleanup, report: CleanupReport) -> None:
        """Truncate oversized logs and delete stale ones."""
        if not rules.directory.is_dir():
            logger.debug("Log directory absent, skipping: %s", rules.directory)
            return

        for dirpath, _dirnames, filenames in os.walk(rules.directory):
            for name in sorted(filenames):
                path = Path(dirpath) / name
                if path.is_symlink() or not path.is_file():
                    continue
                if _matches(name, rules.delete_patterns):
                    self._delete_log(path, report)
                elif _matches(name, rules.truncate_patterns):
                    self._truncate_log(path, rules.truncate_above_bytes, report)

    def _truncate_log(self, path: Path, above_bytes: int, report: CleanupReport) -> None:
        """Truncate a log to zero length, keeping its inode for open writers."""
        try:
            size = path.stat().st_size
            if size <= above_bytes:
                return
            os.truncate(path, 0)
        except FileNotFoundError:
            return
        except OSError as e:
            self._record_failure(report, path, e)
            return
        report.truncated.append(str(path))
        report.reclaimed_log_bytes += size

    def _delete_log(self, path: Path, report: CleanupReport) -> None:
        """Delete a rotated or stale log file."""
        try:
            size = path.stat().st_size
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            self._record_failure(report, path, e)
            return
        report.deleted.append(str(path))
        report.reclaimed_log_bytes += size

    def _record_failure(self, report: CleanupReport, path: Path, error: OSError) -> None:
        logger.warning("Could not clean %s: %s", path, error)
        report.failures.append(CleanupFailure(path=str(path), error=str(error)))


def _matches(name: str, patterns: list[str]) -> bool:
    return any(fnmatch.fnmatch(name, pattern) for pattern in patterns)
