"""Clean command implementation.

Removes known caches, trash and stale logs from the overlay.
"""

import typer

from ovlspace.cleanup.engine import CleanupEngine, CleanupReport
from ovlspace.cli.commands.status import show_status
from ovlspace.cli.display import print_cleanup_summary
from ovlspace.cli.types import get_config, is_quiet
from ovlspace.core.config import OverlayConfig
from ovlspace.core.privilege import PrivilegeError, require_root
from ovlspace.utils.formatting import print_error


def clean(ctx: typer.Context) -> None:
    """Remove caches, trash and stale logs, then show status."""
    config = get_config(ctx)

    try:
        report = perform_cleanup(config)
    except PrivilegeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not is_quiet(ctx):
        print_cleanup_summary(report)
    show_status(config)


def perform_cleanup(config: OverlayConfig) -> CleanupReport:
    """Run the cleanup engine over the configured targets.

    Args:
        config: Active configuration.

    Returns:
        What the cleanup did.

    Raises:
        PrivilegeError: If not running as root.
    """
    require_root()
    engine = CleanupEngine(config.cache_targets, config.logs)
    return engine.clean()
