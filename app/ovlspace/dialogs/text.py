"""Plain terminal dialogs.

Fallback used when no graphical dialog tool is available. Prompts go
through Typer, output through the shared Rich consoles.
"""

from pathlib import Path

import typer
from rich.markup import escape

from ovlspace.dialogs.base import Dialog, MenuChoice
from ovlspace.utils.formatting import console, err_console, print_warning

QUIT_ANSWERS = frozenset({"q", "quit", "0"})


class TextDialog(Dialog):
    """Dialog provider that talks to the terminal."""

    @property
    def name(self) -> str:
        return "text"

    def show_text(self, title: str, text: str) -> None:
        console.rule(f"[bold_header]{escape(title)}[/]")
        console.print(text, markup=False, highlight=False)

    def confirm(self, text: str) -> bool:
        return typer.confirm(text, default=False)

    def pick_directory(self, title: str, initial: Path) -> Path | None:
        answer: str = typer.prompt(title, default=str(initial))
        answer = answer.strip()
        return Path(answer) if answer else None

    def notify(self, title: str, text: str, timeout: int, action_label: str) -> bool:
        err_console.print(f"[warning]WARNING:[/] {escape(text)}", highlight=False)
        return False

    def menu(self, title: str, text: str, choices: list[MenuChoice]) -> str | None:
        console.print(f"\n[bold_header]{escape(title)}[/]")
        console.print(text, markup=False, highlight=False)
        for index, choice in enumerate(choices, start=1):
            console.print(f"  [info]{index}[/]) {escape(choice.label)}")
        console.print("  [info]q[/]) Quit")

        while True:
            answer: str = typer.prompt("Choose", default="q")
            answer = answer.strip().lower()
            if answer in QUIT_ANSWERS:
                return None
            if answer.isdigit() and 1 <= int(answer) <= len(choices):
                return choices[int(answer) - 1].key
            print_warning(f"Invalid choice: {answer}")
