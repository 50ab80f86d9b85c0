"""
openskills remove - Delete an installed skill.

Usage:
    openskills remove pdf
    openskills rm pdf
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from openskills.cli.output import print_error, print_raw, print_success
from openskills.skills import SkillNotFoundError, get_skill_manager
from openskills.storage import is_project_dir


def remove_skill(
    skill_name: Annotated[
        str,
        typer.Argument(
            help="Name of the skill to remove.",
        ),
    ],
) -> None:
    """Remove an installed skill."""
    manager = get_skill_manager(Path.cwd())

    try:
        location = manager.remove_skill(skill_name)
    except SkillNotFoundError:
        print_error(f"Skill '{escape(skill_name)}' not found")
        raise typer.Exit(1)
    except OSError as e:
        print_error(f"Failed to remove {escape(skill_name)}: {escape(str(e))}")
        raise typer.Exit(1)

    scope = "project" if is_project_dir(location.source, manager.cwd) else "global"
    print_success(f"Removed: {escape(skill_name)}")
    print_raw(f"   From: {scope} ({location.source})")
