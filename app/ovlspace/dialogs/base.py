"""Abstract base class for user dialogs.

This module defines the Dialog interface used by the interactive menu
and the watch loop to talk to the user, whether through graphical
dialogs or the terminal.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class MenuChoice:
    """One button of the main menu.

    Attributes:
        key: Identifier returned when the choice is picked.
        label: Text shown to the user.
        icon: Optional icon file for graphical dialogs.
    """

    key: str
    label: str
    icon: str | None = None


class Dialog(ABC):
    """Abstract base class for all dialog providers.

    Example:
        >>> dialog = select_dialog()
        >>> if dialog.confirm("Continue?"):
        ...     dialog.show_text("Done", "All good.")
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short provider name for logging."""

    @abstractmethod
    def show_text(self, title: str, text: str) -> None:
        """Show a block of text and wait until the user dismisses it."""

    @abstractmethod
    def confirm(self, text: str) -> bool:
        """Ask a yes/no question.

        Returns:
            True if the user agreed.
        """

    @abstractmethod
    def pick_directory(self, title: str, initial: Path) -> Path | None:
        """Let the user choose a directory.

        Returns:
            The chosen directory, or None if the user cancelled.
        """

    @abstractmethod
    def notify(self, title: str, text: str, timeout: int, action_label: str) -> bool:
        """Show a timed notification with one action.

        Args:
            title: Notification title.
            text: Notification body.
            timeout: Seconds before the notification closes by itself.
            action_label: Label of the action button.

        Returns:
            True if the user picked the action.

        Raises:
            OSError: If the notification could not be shown.
        """

    @abstractmethod
    def menu(self, title: str, text: str, choices: list[MenuChoice]) -> str | None:
        """Show the main menu.

        Returns:
            The key of the picked choice, or None to quit.
        """
