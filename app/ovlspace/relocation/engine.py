"""Relocation engine: move directories out and leave symlinks behind.

Each configured source is moved under a destination root and replaced by
a symbolic link to its new location, so existing path references keep
working. Sources are processed in their configured order. The first
failure aborts the whole run and nothing already moved is rolled back.
"""

import errno
import logging
import os
import shutil
from collections.abc import Callable, Iterable
from datetime import datetime
from enum import Enum
from pathlib import Path

from ovlspace.relocation.models import RelocationEntry, RelocationRecord

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"


class RelocationStage(str, Enum):
    """Step of a relocation that failed.

    Attributes:
        MOVE: Moving the tree to its destination.
        REMOVE_SOURCE: Deleting the source after a cross-device copy.
        LINK: Creating the symlink at the original location.
    """

    MOVE = "move"
    REMOVE_SOURCE = "remove_source"
    LINK = "link"


class DestinationError(Exception):
    """Raised when the destination root is unusable."""


class RelocationError(Exception):
    """Raised when moving or relinking a source fails.

    Attributes:
        source: Source path being relocated.
        destination: Destination path it was going to.
        stage: Step that failed.
        completed: Records of sources relocated before the failure.
    """

    def __init__(
        self,
        source: Path,
        destination: Path,
        stage: RelocationStage,
        reason: str,
        completed: Iterable[RelocationRecord] = (),
    ) -> None:
        self.source = source
        self.destination = destination
        self.stage = stage
        self.reason = reason
        self.completed = list(completed)

        if stage is RelocationStage.REMOVE_SOURCE:
            message = (
                f"Removing source failed: {source}: {reason}. "
                f"The data is now complete at {destination}; finish with: "
                f"rm -rf '{source}' && ln -s '{destination}' '{source}'"
            )
        elif stage is RelocationStage.LINK:
            message = (
                f"Symlink failed: {source} -> {destination}: {reason}. "
                f"The data is now at {destination}; restore access with: "
                f"ln -s '{destination}' '{source}'"
            )
        else:
            message = f"Move failed: {source} -> {destination}: {reason}"
        super().__init__(message)


class RelocationEngine:
    """Moves configured directories to a destination root.

    Example:
        >>> engine = RelocationEngine([RelocationEntry.from_path(Path("/root/Music"))])
        >>> records = engine.relocate(Path("/mnt/sda1/EasyData"))
    """

    def __init__(
        self,
        entries: Iterable[RelocationEntry],
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the RelocationEngine.

        Args:
            entries: Ordered sources to relocate.
            clock: Source of the timestamp used to disambiguate collisions.
        """
        self._entries = list(entries)
        self._clock = clock

    @classmethod
    def from_paths(
        cls,
        sources: Iterable[Path],
        clock: Callable[[], datetime] = datetime.now,
    ) -> "RelocationEngine":
        """Build an engine from plain source paths."""
        return cls([RelocationEntry.from_path(p) for p in sources], clock=clock)

    def prepare_destination(self, destination_root: Path | str) -> Path:
        """Create the destination root if needed and validate it.

        Args:
            destination_root: Directory that will receive relocated trees.

        Returns:
            The destination root as an absolute path.

        Raises:
            DestinationError: If it is empty, cannot be created, or is not
                a directory.
        """
        if isinstance(destination_root, str) and not destination_root.strip():
            msg = "Empty destination."
            raise DestinationError(msg)

        root = Path(destination_root).expanduser().absolute()
        try:
            root.mkdir(parents=True, exist_ok=True)
        except FileExistsError as e:
            msg = f"Destination is not a directory: {root}"
            raise DestinationError(msg) from e
        except OSError as e:
            msg = f"Cannot create destination: {root}: {e}"
            raise DestinationError(msg) from e

        if not root.is_dir():
            msg = f"Destination is not a directory: {root}"
            raise DestinationError(msg)
        return root

    def relocate(self, destination_root: Path | str) -> list[RelocationRecord]:
        """Relocate every configured source under destination_root.

        Missing sources and sources that already are symlinks are skipped,
        which makes a repeated run a no-op.

        Args:
            destination_root: Directory that will receive relocated trees.
                Created with its parents if missing.

        Returns:
            One record per source that was moved.

        Raises:
            DestinationError: If the destination root is unusable.
            RelocationError: On the first failed step for any source. Sources
                after it are not attempted.
        """
        root = self.prepare_destination(destination_root)
        records: list[RelocationRecord] = []

        for entry in self._entries:
            try:
                record = self._relocate_one(entry, root)
            except RelocationError as e:
                e.completed = records
                raise
            if record is not None:
                records.append(record)

        return records

    def _relocate_one(self, entry: RelocationEntry, root: Path) -> RelocationRecord | None:
        """Move a single source and replace it with a symlink."""
        source = entry.source
        if source.is_symlink():
            logger.debug("Already relocated, skipping: %s", source)
            return None
        if not source.exists():
            logger.debug("Source absent, skipping: %s", source)
            return None

        destination, renamed = self._choose_destination(root, source.name)
        if renamed:
            logger.info("%s taken, relocating %s to %s", source.name, entry.name, destination)

        try:
            copied = self._move_tree(source, destination)
        except OSError as e:
            raise RelocationError(source, destination, RelocationStage.MOVE, str(e)) from e

        if copied:
            try:
                _remove_tree(source)
            except OSError as e:
                raise RelocationError(
                    source, destination, RelocationStage.REMOVE_SOURCE, str(e)
                ) from e

        try:
            source.symlink_to(destination)
        except OSError as e:
            raise RelocationError(source, destination, RelocationStage.LINK, str(e)) from e

        logger.info("Relocated %s -> %s", source, destination)
        return RelocationRecord(source=source, destination=destination, renamed=renamed)

    def _choose_destination(self, root: Path, name: str) -> tuple[Path, bool]:
        """Pick a destination path that does not exist yet.

        Returns:
            Tuple of (destination, renamed). The first candidate is
            root/name, then root/name-<timestamp>, then numbered variants.
        """
        candidate = root / name
        if not _occupied(candidate):
            return candidate, False

        stamped = f"{name}-{self._clock().strftime(TIMESTAMP_FORMAT)}"
        candidate = root / stamped
        counter = 1
        while _occupied(candidate):
            candidate = root / f"{stamped}-{counter}"
            counter += 1
        return candidate, True

    def _move_tree(self, source: Path, destination: Path) -> bool:
        """Move or copy source to destination.

        A same-filesystem move is a single rename. Across filesystems the
        tree is copied into a hidden staging name next to the destination
        and renamed into place; the source is left for the caller to remove.

        Returns:
            True if the tree was copied and the source still exists.

        Raises:
            OSError: If any step fails. A failed copy leaves no staging tree.
        """
        try:
            os.rename(source, destination)
            return False
        except OSError as e:
            if e.errno != errno.EXDEV:
                raise

        staging = destination.with_name(f".{destination.name}.partial-{os.getpid()}")
        try:
            if source.is_dir():
                shutil.copytree(source, staging, symlinks=True)
            else:
                shutil.copy2(source, staging)
            os.rename(staging, destination)
        except OSError:
            _discard(staging)
            raise
        return True


def _occupied(path: Path) -> bool:
    return path.exists() or path.is_symlink()


def _remove_tree(path: Path) -> None:
    if path.is_dir():
        shutil.rmtree(path)
    else:
        path.unlink()


def _discard(path: Path) -> None:
    """Remove a staging tree left by a failed copy."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path, ignore_errors=True)
    elif _occupied(path):
        try:
            path.unlink()
        except OSError as e:
            logger.warning("Could not remove staging copy %s: %s", path, e)
