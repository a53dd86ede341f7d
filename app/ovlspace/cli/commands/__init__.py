"""CLI commands for ovlspace.

This package contains all subcommand implementations.
"""

from ovlspace.cli.commands import clean, config, gui, move, status, watch

__all__ = ["clean", "config", "gui", "move", "status", "watch"]
