"""Status command implementation.

Prints overlay usage, its severity and the heaviest directories.
"""

import typer

from ovlspace.cli.display import print_status_report
from ovlspace.cli.types import get_config
from ovlspace.core.config import OverlayConfig
from ovlspace.usage.probe import ProbeUnavailableError
from ovlspace.usage.report import build_status_report
from ovlspace.utils.formatting import print_error


def status(ctx: typer.Context) -> None:
    """Show overlay usage and the heaviest directories."""
    show_status(get_config(ctx))


def show_status(config: OverlayConfig) -> None:
    """Probe the overlay and print the status report.

    Args:
        config: Active configuration.

    Raises:
        typer.Exit: If the usage probe is unavailable.
    """
    try:
        report = build_status_report(config)
    except ProbeUnavailableError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_status_report(report)
