"""
Output formatting utilities for the CLI.

Provides consistent output formatting across all CLI commands.
"""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

# Global console instance
console = Console()
err_console = Console(stderr=True)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]![/yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]i[/blue] {message}")


def print_raw(text: str = "") -> None:
    """Print text unchanged (no markup, no wrapping)."""
    typer.echo(text)


def setup_logging(verbose: bool = False) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose, markup=False)],
        force=True,
    )
