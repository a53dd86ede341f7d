"""Subprocess helpers for the external tools we drive (df, du, yad)."""

import shutil
import subprocess
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of a finished command.

    Attributes:
        stdout: Decoded standard output; undecodable bytes are replaced.
        stderr: Decoded standard error.
        returncode: Exit status of the process.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """True when the command exited with status 0."""
        return self.returncode == 0


def run_command(
    args: list[str],
    *,
    check: bool = False,
    timeout: float | None = 60.0,
    input: str | None = None,
) -> CommandResult:
    """Run a command to completion and capture its text output.

    Args:
        args: Program and arguments; never passed through a shell.
        check: Raise on a non-zero exit status.
        timeout: Seconds to wait. None blocks until the command exits,
            which dialogs waiting on the user need.
        input: Text written to the command's standard input.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.CalledProcessError: If check is set and the command fails.
        subprocess.TimeoutExpired: If the command outlives the timeout.
        FileNotFoundError: If the program is not installed.
    """
    proc = subprocess.run(
        args,
        capture_output=True,
        text=True,
        errors="replace",
        check=check,
        timeout=timeout,
        input=input,
    )
    return CommandResult(stdout=proc.stdout, stderr=proc.stderr, returncode=proc.returncode)


def command_exists(name: str) -> bool:
    """Check whether a program is on PATH."""
    return shutil.which(name) is not None


def spawn_detached(args: list[str]) -> None:
    """Start a command in its own session and return without waiting.

    The child outlives the caller and is cut off from its terminal.

    Raises:
        OSError: If the program cannot be started.
    """
    subprocess.Popen(
        args,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )
