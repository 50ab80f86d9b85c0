"""
openskills sync / unsync - Maintain the skills section of AGENTS.md.

Usage:
    openskills sync
    openskills sync --yes --output CLAUDE.md
    openskills unsync
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from openskills.cli.output import console, print_info, print_success, print_warning
from openskills.cli.selection import select, skill_choice
from openskills.skills import get_skill_manager

OutputOption = Annotated[
    str | None,
    typer.Option(
        "--output",
        "-o",
        help="Agents file to update (default: skills.output_file, AGENTS.md).",
    ),
]


def sync_skills(
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Sync every installed skill without prompting.",
        ),
    ] = False,
    output: OutputOption = None,
) -> None:
    """Write the installed skills listing into AGENTS.md."""
    manager = get_skill_manager(Path.cwd())
    path = manager.output_path(output)
    skills = manager.list_skills()

    if not skills:
        print_warning("No skills installed. Install skills first:")
        console.print("  [cyan]openskills install anthropics/skills[/cyan]")
        return

    selected = None
    if not yes:
        current = manager.current_synced(output)
        choices = [
            skill_choice(
                skill,
                checked=skill.name in current or (not current and skill.location == "project"),
            )
            for skill in skills
        ]
        selected = select(f"Select skills to sync to {path.name}", choices)

    result = manager.sync(output, selected=selected, skills=skills)

    if result.created_file:
        print_info(f"Created {escape(path.name)}")

    if result.removed:
        print_success(f"Removed all skills from {escape(path.name)}")
    elif result.had_section:
        print_success(f"Synced {result.count} skill(s) to {escape(path.name)}")
    else:
        print_success(f"Added skills section to {escape(path.name)} ({result.count} skill(s))")


def unsync_skills(output: OutputOption = None) -> None:
    """Remove the skills section from AGENTS.md."""
    manager = get_skill_manager(Path.cwd())
    path = manager.output_path(output)

    result = manager.unsync(output)
    if result is None:
        print_warning(f"No {escape(path.name)} to update")
        return

    print_success(f"Removed skills section from {escape(path.name)}")
