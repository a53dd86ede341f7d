"""Filesystem usage probe.

Queries ``df -kP`` for a mount point and turns its POSIX output into a
UsageSnapshot. The percentage is parsed leniently: an unreadable value
becomes an explicit unknown instead of an exception, while a missing or
malformed report as a whole means the probe is unavailable.
"""

import logging
import subprocess
from pathlib import Path

from ovlspace.usage.models import UsageSnapshot
from ovlspace.utils.shell import run_command

logger = logging.getLogger(__name__)

_KB = 1024


class ProbeUnavailableError(Exception):
    """Raised when filesystem statistics cannot be obtained."""


def parse_percent(raw: str) -> int | None:
    """Parse a df capacity column such as "86%".

    Args:
        raw: Capacity value as printed by df.

    Returns:
        The percentage as a non-negative integer, or None if unparseable.
    """
    value = raw.strip().removesuffix("%")
    # str.isdigit() also accepts superscripts and other non-ASCII digits
    if not value or not value.isascii() or not value.isdigit():
        return None
    return int(value)


def parse_df_output(output: str) -> UsageSnapshot:
    """Parse the output of ``df -kP <mount>``.

    Args:
        output: Full df output including the header line.

    Returns:
        UsageSnapshot built from the first data line.

    Raises:
        ProbeUnavailableError: If the data line is missing or its size
            columns are not numeric.
    """
    lines = [line for line in output.splitlines() if line.strip()]
    if len(lines) < 2:
        msg = "df produced no data line"
        raise ProbeUnavailableError(msg)

    fields = lines[1].split()
    if len(fields) < 6:
        msg = f"Unexpected df line: {lines[1]!r}"
        raise ProbeUnavailableError(msg)

    # Parse from the right; only the filesystem name may contain spaces
    capacity, available, used, total = fields[-2], fields[-3], fields[-4], fields[-5]
    filesystem = " ".join(fields[:-5])
    try:
        total_kb, used_kb, available_kb = int(total), int(used), int(available)
    except ValueError as e:
        msg = f"Non-numeric size in df line: {lines[1]!r}"
        raise ProbeUnavailableError(msg) from e

    percent = parse_percent(capacity)
    if percent is None:
        logger.warning("Cannot parse usage percent %r for %s", capacity, filesystem)

    return UsageSnapshot(
        filesystem=filesystem,
        total_bytes=total_kb * _KB,
        used_bytes=used_kb * _KB,
        available_bytes=available_kb * _KB,
        percent_used=percent,
        capacity=capacity,
    )


class UsageProbe:
    """Reports usage of a single mount point.

    Example:
        >>> probe = UsageProbe(Path("/"))
        >>> snapshot = probe.probe()
        >>> snapshot.percent_used
        42
    """

    def __init__(self, mount_point: Path = Path("/"), timeout: float = 30.0) -> None:
        """Initialize the probe.

        Args:
            mount_point: Mount point to query.
            timeout: Maximum time in seconds to wait for df.
        """
        self._mount_point = mount_point
        self._timeout = timeout

    @property
    def mount_point(self) -> Path:
        """Mount point this probe reports on."""
        return self._mount_point

    def probe(self) -> UsageSnapshot:
        """Query filesystem statistics for the mount point.

        Returns:
            A fresh UsageSnapshot. Its percent_used is None when df printed
            an unreadable capacity.

        Raises:
            ProbeUnavailableError: If df is missing, fails, times out or
                prints an unreadable report.
        """
        try:
            result = run_command(
                ["df", "-kP", str(self._mount_point)],
                timeout=self._timeout,
            )
        except FileNotFoundError as e:
            msg = "df command not found"
            raise ProbeUnavailableError(msg) from e
        except (subprocess.TimeoutExpired, OSError) as e:
            msg = f"df failed for {self._mount_point}: {e}"
            raise ProbeUnavailableError(msg) from e

        if not result.success:
            msg = f"df failed for {self._mount_point}: {result.stderr.strip() or 'no output'}"
            raise ProbeUnavailableError(msg)

        return parse_df_output(result.stdout)
