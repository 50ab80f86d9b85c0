"""
openskills - skills manager for AI coding agents

Installs, lists, reads and syncs SKILL.md based skills for agents that
read .claude/skills or .agent/skills.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("openskills")
except PackageNotFoundError:
    __version__ = "1.2.0"

__all__ = [
    "__version__",
]
