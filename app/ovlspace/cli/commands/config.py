"""Config command implementation.

Shows the effective configuration and writes a default config file.
"""

from typing import Annotated

import typer

from ovlspace.cli.types import get_config
from ovlspace.core.config import ConfigError, OverlayConfig, config_to_toml, save_config
from ovlspace.core.paths import get_config_path
from ovlspace.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Show or initialize the configuration.",
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Print the effective configuration as TOML."""
    config = get_config(ctx)
    console.print(config_to_toml(config), markup=False, highlight=False)


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write the default configuration file."""
    path = ctx.ensure_object(dict).get("config_path") or get_config_path()

    if path.exists() and not force:
        print_error(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_config(OverlayConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Default configuration written to {saved}")
