"""CLI command modules."""

from openskills.cli.commands import install, listing, manage, read, remove, sync

__all__ = ["install", "listing", "manage", "read", "remove", "sync"]
