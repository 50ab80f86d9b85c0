"""Command-line interface for openskills."""

from openskills.cli.app import app

__all__ = ["app"]
