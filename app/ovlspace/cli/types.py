"""Shared helpers for CLI commands.

This module provides configuration access and output flags shared by
several command modules.
"""

import typer

from ovlspace.core.config import ConfigError, OverlayConfig, load_config
from ovlspace.utils.formatting import print_error


def get_config(ctx: typer.Context) -> OverlayConfig:
    """Load the configuration once per invocation.

    The path given with the global ``--config`` option wins over the
    default location. The loaded config is cached on the context.

    Args:
        ctx: Current Typer context.

    Returns:
        The active configuration.

    Raises:
        typer.Exit: If the configuration file is invalid.
    """
    obj = ctx.ensure_object(dict)
    if "config" not in obj:
        try:
            obj["config"] = load_config(obj.get("config_path"))
        except ConfigError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
    return obj["config"]


def is_quiet(ctx: typer.Context) -> bool:
    """Check whether non-essential output is suppressed."""
    return bool(ctx.ensure_object(dict).get("quiet"))
