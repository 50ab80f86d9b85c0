"""
Main Typer application for the openskills CLI.

This module defines the root CLI application and registers all commands.
"""

from typing import Annotated

import typer

from openskills import __version__
from openskills.cli.commands import install, listing, manage, read, remove, sync
from openskills.cli.output import print_error, print_info, setup_logging
from openskills.config import ConfigurationError, get_config

# Create the main Typer app
app = typer.Typer(
    name="openskills",
    help="Universal skills loader for AI coding agents.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=True,
    pretty_exceptions_show_locals=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        print_info(f"openskills version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show debug logging.",
        ),
    ] = False,
) -> None:
    """
    [bold blue]openskills[/bold blue] - skills manager for AI coding agents

    Install skills into [bold].claude/skills[/bold] or [bold].agent/skills[/bold],
    read them for agents, and sync the listing into [bold]AGENTS.md[/bold].
    """
    setup_logging(verbose)

    try:
        get_config()
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(1)


# Register commands
app.command("list")(listing.list_skills)
app.command("install")(install.install_skills)
app.command("read")(read.read_skills)
app.command("remove")(remove.remove_skill)
app.command("rm", hidden=True)(remove.remove_skill)
app.command("manage")(manage.manage_skills)
app.command("sync")(sync.sync_skills)
app.command("unsync")(sync.unsync_skills)
