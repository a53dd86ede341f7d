"""Move command implementation.

Moves heavy directories out of the overlay and leaves symlinks behind.
"""

from pathlib import Path
from typing import Annotated

import typer

from ovlspace.cli.commands.status import show_status
from ovlspace.cli.display import create_relocation_table
from ovlspace.cli.types import get_config
from ovlspace.core.config import OverlayConfig
from ovlspace.core.privilege import PrivilegeError, require_root
from ovlspace.relocation.engine import DestinationError, RelocationEngine, RelocationError
from ovlspace.relocation.models import RelocationRecord
from ovlspace.utils.formatting import console, print_error, print_info


def move(
    ctx: typer.Context,
    dest: Annotated[
        str | None,
        typer.Argument(
            help="Destination outside the overlay. Defaults to the configured target.",
            metavar="DEST",
            show_default=False,
        ),
    ] = None,
) -> None:
    """Move heavy folders outside the overlay and symlink them back."""
    config = get_config(ctx)
    target: Path | str = dest if dest is not None else config.default_target

    try:
        records = perform_move(config, target)
    except (PrivilegeError, DestinationError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except RelocationError as e:
        if e.completed:
            console.print(create_relocation_table(e.completed))
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if records:
        console.print(create_relocation_table(records))
    else:
        print_info("Nothing to move: folders are absent or already relocated.")
    console.print()
    show_status(config)


def perform_move(config: OverlayConfig, destination: Path | str) -> list[RelocationRecord]:
    """Relocate the configured sources under a destination root.

    Args:
        config: Active configuration.
        destination: Destination root; created if missing.

    Returns:
        One record per relocated directory.

    Raises:
        PrivilegeError: If not running as root.
        DestinationError: If the destination root is unusable.
        RelocationError: If a move or symlink fails.
    """
    require_root()
    engine = RelocationEngine.from_paths(config.relocation_sources)
    return engine.relocate(destination)
