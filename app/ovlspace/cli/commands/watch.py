"""Watch command implementation.

Runs the usage watcher until the process is stopped.
"""

import sys
from pathlib import Path

import typer

from ovlspace.cli.types import get_config
from ovlspace.core.config import OverlayConfig
from ovlspace.dialogs import select_dialog
from ovlspace.dialogs.base import Dialog
from ovlspace.usage.probe import UsageProbe
from ovlspace.utils.formatting import print_info
from ovlspace.utils.shell import spawn_detached
from ovlspace.watch.dedup import AlertDeduplicator
from ovlspace.watch.loop import WatchLoop
from ovlspace.watch.state import AlertState, FileValueStore, PidLock


def watch(ctx: typer.Context) -> None:
    """Warn whenever overlay usage reaches a new level above the threshold."""
    config = get_config(ctx)
    loop = build_watch_loop(config, select_dialog(), ctx.obj.get("config_path"))

    try:
        started = loop.run()
    except KeyboardInterrupt:
        raise typer.Exit(code=0) from None

    if not started:
        print_info("Another watch loop is already running.")


def build_watch_loop(
    config: OverlayConfig,
    dialog: Dialog,
    config_path: Path | None = None,
) -> WatchLoop:
    """Assemble a watch loop from configuration.

    Args:
        config: Active configuration.
        dialog: Notification provider.
        config_path: Config file to hand to a manager opened from a notification.

    Returns:
        A ready-to-run WatchLoop.
    """
    settings = config.watch
    state = AlertState(FileValueStore(settings.state_file))
    lock = PidLock(FileValueStore(settings.lock_file))

    def open_manager() -> None:
        args = [sys.executable, "-m", "ovlspace"]
        if config_path is not None:
            args += ["--config", str(config_path)]
        spawn_detached([*args, "gui"])

    return WatchLoop(
        UsageProbe(config.mount_point),
        AlertDeduplicator(state, config.thresholds),
        dialog,
        lock,
        interval=settings.interval_seconds,
        notify_timeout=settings.notify_timeout_seconds,
        on_action=open_manager,
    )
