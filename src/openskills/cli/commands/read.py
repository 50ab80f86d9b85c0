"""
openskills read - Print skills to stdout for agents.

Usage:
    openskills read pdf
    openskills read pdf,xlsx
    openskills read ./path/to/skill
    openskills read file:///abs/path/to/skill/SKILL.md
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from openskills.cli.output import print_error, print_raw
from openskills.skills import SkillNotFoundError, get_skill_manager


def read_skills(
    skill_names: Annotated[
        str,
        typer.Argument(
            help="Skill name(s), comma-separated. Paths and file:// URIs are accepted.",
        ),
    ],
) -> None:
    """Read skill(s) to stdout (for AI agents)."""
    names = [name.strip() for name in skill_names.split(",") if name.strip()]
    if not names:
        print_error("No skill names given")
        raise typer.Exit(1)

    manager = get_skill_manager(Path.cwd())

    for name in names:
        try:
            location, content = manager.read_skill(name)
        except SkillNotFoundError as e:
            print_error(f"Skill '{escape(name)}' not found")
            print_raw("\nSearched:")
            for directory in e.searched_paths:
                print_raw(f"  {directory}")
            print_raw("\nInstall skills: openskills install owner/repo")
            raise typer.Exit(1)

        print_raw(manager.format_readout(location.name, location, content))
