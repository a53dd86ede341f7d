"""Relocation domain models."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class RelocationEntry:
    """A configured directory that may be moved out of the overlay.

    Attributes:
        source: Directory inside the overlay (e.g., /root/Downloads).
        name: Well-known name used in messages (e.g., "Downloads").
    """

    source: Path
    name: str

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if self.source in (Path("/"), Path(".")):
            msg = f"Invalid relocation source: {self.source!r}"
            raise ValueError(msg)

    @classmethod
    def from_path(cls, source: Path) -> "RelocationEntry":
        """Build an entry named after the source's base name."""
        return cls(source=source, name=source.name)


@dataclass(frozen=True, slots=True)
class RelocationRecord:
    """Outcome of one successful move.

    After the move, ``source`` is a symbolic link to ``destination``.

    Attributes:
        source: Original location, now a symlink.
        destination: Where the data lives now.
        renamed: True if a timestamp suffix was added to avoid a collision.
    """

    source: Path
    destination: Path
    renamed: bool = False
