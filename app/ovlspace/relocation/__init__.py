"""Moving heavy directories out of the overlay behind symlinks."""

from ovlspace.relocation.engine import (
    DestinationError,
    RelocationEngine,
    RelocationError,
    RelocationStage,
)
from ovlspace.relocation.models import RelocationEntry, RelocationRecord

__all__ = [
    "DestinationError",
    "RelocationEngine",
    "RelocationEntry",
    "RelocationError",
    "RelocationRecord",
    "RelocationStage",
]
