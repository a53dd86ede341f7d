"""CLI package for ovlspace.

This package contains the Typer application and all subcommands.
"""

from ovlspace.cli.main import app

__all__ = ["app"]
