"""Utility modules for ovlspace.

This module exports commonly used utility functions.
"""

from ovlspace.utils.formatting import (
    console,
    err_console,
    format_size_kb,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from ovlspace.utils.shell import CommandResult, command_exists, run_command, spawn_detached

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "err_console",
    "format_size_kb",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
    "spawn_detached",
]
