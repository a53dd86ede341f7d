"""Largest directories under a root, as measured by ``du``."""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from ovlspace.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HeavyPath:
    """A directory and its disk usage in KiB."""

    path: str
    size_kb: int


def parse_du_output(output: str) -> list[HeavyPath]:
    """Parse ``du`` output lines of the form "<kb>\\t<path>".

    Malformed lines are skipped.
    """
    entries: list[HeavyPath] = []
    for line in output.splitlines():
        size, sep, path = line.partition("\t")
        if not sep or not size.strip().isdigit():
            continue
        entries.append(HeavyPath(path=path, size_kb=int(size)))
    return entries


def find_heavy_paths(root: Path, depth: int = 2, limit: int = 12) -> list[HeavyPath]:
    """List the largest directories under root, biggest first.

    du stays on root's filesystem (-x), so relocated directories behind
    symlinks are not counted against the overlay.

    Args:
        root: Directory to measure.
        depth: Maximum depth below root to report.
        limit: Maximum number of entries to return.

    Returns:
        Up to ``limit`` entries sorted by size descending. Empty if du is
        unavailable or root does not exist.
    """
    if limit <= 0 or not root.is_dir() or not command_exists("du"):
        return []

    try:
        # du exits non-zero on unreadable subdirectories but still reports the rest
        result = run_command(["du", "-x", "-k", "-d", str(depth), str(root)], timeout=120.0)
    except (FileNotFoundError, subprocess.TimeoutExpired, OSError) as e:
        logger.warning("Could not measure %s: %s", root, e)
        return []

    entries = parse_du_output(result.stdout)
    entries.sort(key=lambda e: e.size_kb, reverse=True)
    return entries[:limit]
