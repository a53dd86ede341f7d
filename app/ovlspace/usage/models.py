"""Usage domain models.

This module defines the snapshot produced by each filesystem probe and
the severity levels derived from it.
"""

from dataclasses import dataclass
from enum import Enum

BYTES_PER_MB = 1024 * 1024


class SeverityLevel(str, Enum):
    """Coarse health of the overlay derived from its usage percentage.

    Levels are compared for equality only; they carry no useful ordering.

    Attributes:
        UNKNOWN: Usage percentage could not be determined.
        OK: Usage is below the warning threshold.
        WARNING: Usage is at or above the warning threshold.
        CRITICAL: Usage is at or above the critical threshold.
    """

    UNKNOWN = "unknown"
    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def label(self) -> str:
        """Upper-case name used in reports and notification titles."""
        return self.value.upper()


@dataclass(frozen=True, slots=True)
class UsageSnapshot:
    """Filesystem statistics for a mount point at one instant.

    Attributes:
        filesystem: Device or filesystem identifier (e.g., "overlay").
        total_bytes: Size of the filesystem.
        used_bytes: Space in use.
        available_bytes: Space available to unprivileged users.
        percent_used: Usage percentage, or None when it could not be parsed.
        capacity: Capacity column exactly as df printed it (e.g., "86%").
    """

    filesystem: str
    total_bytes: int
    used_bytes: int
    available_bytes: int
    percent_used: int | None
    capacity: str = ""

    @property
    def total_mb(self) -> int:
        """Total size in whole MiB, rounded down."""
        return self.total_bytes // BYTES_PER_MB

    @property
    def used_mb(self) -> int:
        """Used space in whole MiB, rounded down."""
        return self.used_bytes // BYTES_PER_MB

    @property
    def available_mb(self) -> int:
        """Available space in whole MiB, rounded down."""
        return self.available_bytes // BYTES_PER_MB
