"""Interactive menu.

Offers status, cleanup and relocation through the selected dialog
provider. Fatal errors are shown in a dialog and the menu continues.
"""

from typing import Annotated

import typer

from ovlspace.cli.commands.clean import perform_cleanup
from ovlspace.cli.commands.move import perform_move
from ovlspace.cli.types import get_config
from ovlspace.core.config import OverlayConfig
from ovlspace.core.privilege import PrivilegeError
from ovlspace.dialogs import select_dialog
from ovlspace.dialogs.base import Dialog, MenuChoice
from ovlspace.relocation.engine import DestinationError, RelocationError
from ovlspace.usage.probe import ProbeUnavailableError
from ovlspace.usage.report import build_status_report, format_status_text

MENU_TITLE = "Overlay Space Manager"
MENU_TEXT = "Manage writable overlay space (what REALLY limits /root).\n\nChoose:"

MENU_CHOICES = [
    MenuChoice("status", "Status", "/usr/share/pixmaps/apps48.png"),
    MenuChoice("clean", "Clean caches", "/usr/share/pixmaps/archive48.png"),
    MenuChoice("move", "Move /root folders out", "/usr/share/pixmaps/card_mntd48.png"),
]


def gui(
    ctx: typer.Context,
    text: Annotated[
        bool,
        typer.Option("--text", help="Use terminal prompts even if yad is available."),
    ] = False,
) -> None:
    """Open the interactive menu."""
    run_menu(get_config(ctx), select_dialog(text_only=text))


def run_menu(config: OverlayConfig, dialog: Dialog) -> None:
    """Show the menu until the user quits.

    Args:
        config: Active configuration.
        dialog: Dialog provider to interact through.
    """
    while True:
        choice = dialog.menu(MENU_TITLE, MENU_TEXT, MENU_CHOICES)
        if choice is None:
            return
        if choice == "status":
            _show_status(config, dialog, "Overlay status")
        elif choice == "clean":
            _clean(config, dialog)
        elif choice == "move":
            _move(config, dialog)


def _clean(config: OverlayConfig, dialog: Dialog) -> None:
    if not dialog.confirm("This removes common caches and empties Trash.\n\nContinue?"):
        return
    try:
        perform_cleanup(config)
    except PrivilegeError as e:
        dialog.show_text("Cleanup failed", str(e))
        return
    _show_status(config, dialog, "Cleanup done")


def _move(config: OverlayConfig, dialog: Dialog) -> None:
    dest = dialog.pick_directory("Pick a destination OUTSIDE the overlay", config.default_target)
    if dest is None:
        return
    question = (
        f"Will move typical heavy folders from /root to:\n\n{dest}\n\n"
        "Then create symlinks.\n\nContinue?"
    )
    if not dialog.confirm(question):
        return
    try:
        perform_move(config, dest)
    except (PrivilegeError, DestinationError, RelocationError) as e:
        dialog.show_text("Move failed", str(e))
        return
    _show_status(config, dialog, "Move done")


def _show_status(config: OverlayConfig, dialog: Dialog, title: str) -> None:
    try:
        report = build_status_report(config)
    except ProbeUnavailableError as e:
        dialog.show_text(title, f"Cannot read overlay usage: {e}")
        return
    dialog.show_text(title, format_status_text(report))
