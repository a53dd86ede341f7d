"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from pathlib import Path
from typing import Annotated

import typer

from ovlspace import __version__
from ovlspace.cli.commands import clean, config, gui, move, status, watch
from ovlspace.cli.types import get_config
from ovlspace.dialogs import select_dialog
from ovlspace.utils.formatting import setup_logging

# Create main Typer app
app = typer.Typer(
    name="overlay-space-manager",
    help="Manage free space of the writable overlay layer.",
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"overlay-space-manager version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Configuration file (default: ~/.config/ovlspace/config.toml).",
            dir_okay=False,
        ),
    ] = None,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """overlay-space-manager - keep the writable overlay from filling up.

    Without a command, opens the interactive menu.
    """
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    setup_logging(verbose=verbose, quiet=quiet)

    if ctx.invoked_subcommand is None:
        gui.run_menu(get_config(ctx), select_dialog())


@app.command("help")
def help_command(ctx: typer.Context) -> None:
    """Show usage and exit."""
    root = ctx.find_root()
    typer.echo(root.get_help())


# Register commands
app.command("status")(status.status)
app.command("clean")(clean.clean)
app.command("move")(move.move)
app.command("watch")(watch.watch)
app.command("gui")(gui.gui)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
