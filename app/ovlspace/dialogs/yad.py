"""Graphical dialogs through yad.

Each dialog is one blocking yad invocation; the user's answer comes back
through yad's exit code and standard output.
"""

import html
import logging
from pathlib import Path

from ovlspace.dialogs.base import Dialog, MenuChoice
from ovlspace.utils.shell import CommandResult, run_command

logger = logging.getLogger(__name__)

APP_ICON = "/usr/share/pixmaps/overlay-space-manager.svg"

# yad exit codes besides the button codes we assign
YAD_CANCEL = 1
YAD_TIMEOUT = 70
YAD_ESCAPE = 252

_MENU_CODE_STEP = 10


def _markup(text: str) -> str:
    """Escape text for yad's Pango markup."""
    return html.escape(text, quote=False)


class YadDialog(Dialog):
    """Dialog provider backed by the yad command."""

    def __init__(self, binary: str = "yad", icon: str = APP_ICON) -> None:
        self._binary = binary
        self._icon = icon

    @property
    def name(self) -> str:
        return "yad"

    def _run(self, args: list[str], *, input: str | None = None) -> CommandResult:
        # Dialogs wait for the user, so no timeout
        return run_command([self._binary, *args], timeout=None, input=input)

    def show_text(self, title: str, text: str) -> None:
        self._run(
            [
                f"--title={title}",
                "--center",
                "--width=760",
                "--height=520",
                "--text-info",
                "--wrap",
                "--fontname=monospace 10",
                "--button=OK:0",
            ],
            input=text,
        )

    def confirm(self, text: str) -> bool:
        result = self._run(["--title=Confirm", "--center", "--question", f"--text={_markup(text)}"])
        return result.success

    def pick_directory(self, title: str, initial: Path) -> Path | None:
        result = self._run(
            [
                f"--title={title}",
                "--center",
                "--file-selection",
                "--directory",
                f"--filename={initial}/",
            ]
        )
        chosen = result.stdout.strip()
        if not result.success or not chosen:
            return None
        return Path(chosen)

    def notify(self, title: str, text: str, timeout: int, action_label: str) -> bool:
        result = self._run(
            [
                f"--title={title}",
                "--center",
                "--on-top",
                f"--image={self._icon}",
                f"--text={_markup(text)}",
                f"--button={action_label}:0",
                f"--timeout={timeout}",
                "--timeout-indicator=right",
            ]
        )
        if result.returncode not in (0, YAD_CANCEL, YAD_TIMEOUT, YAD_ESCAPE):
            msg = f"yad exited with {result.returncode}: {result.stderr.strip()}"
            raise OSError(msg)
        return result.success

    def menu(self, title: str, text: str, choices: list[MenuChoice]) -> str | None:
        codes: dict[int, str] = {}
        args = [
            f"--title={title}",
            "--center",
            "--width=560",
            f"--text={_markup(text)}",
            f"--image={self._icon}",
            "--image-on-top",
        ]
        for index, choice in enumerate(choices, start=1):
            code = index * _MENU_CODE_STEP
            codes[code] = choice.key
            label = f"{choice.label}!{choice.icon}" if choice.icon else choice.label
            args.append(f"--button={label}:{code}")
        args.append("--button=Quit:0")

        result = self._run(args)
        return codes.get(result.returncode)
