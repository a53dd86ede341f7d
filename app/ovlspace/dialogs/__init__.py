"""User dialog providers.

A provider is selected once at startup: yad when it is installed and a
display is available, the plain terminal otherwise.
"""

import os

from ovlspace.dialogs.base import Dialog, MenuChoice
from ovlspace.dialogs.text import TextDialog
from ovlspace.dialogs.yad import YadDialog
from ovlspace.utils.shell import command_exists


def has_display() -> bool:
    """Check whether a graphical session is reachable."""
    return bool(os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY"))


def select_dialog(*, text_only: bool = False) -> Dialog:
    """Pick the dialog provider for this process.

    Args:
        text_only: Force the terminal provider.

    Returns:
        YadDialog if yad is installed and a display is available,
        TextDialog otherwise.
    """
    if not text_only and command_exists("yad") and has_display():
        return YadDialog()
    return TextDialog()


__all__ = ["Dialog", "MenuChoice", "TextDialog", "YadDialog", "has_display", "select_dialog"]
