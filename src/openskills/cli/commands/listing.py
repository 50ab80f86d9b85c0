"""
openskills list - Show installed skills.

Usage:
    openskills list
"""

from pathlib import Path

from rich.markup import escape

from openskills.cli.output import console, print_raw
from openskills.skills import get_skill_manager

LOCATION_LABELS = {
    "project": "Project skills (.agent/skills, .claude/skills)",
    "global": "Global skills (~/.agent/skills, ~/.claude/skills)",
}


def list_skills() -> None:
    """List all installed skills, grouped by location."""
    manager = get_skill_manager(Path.cwd())
    skills = manager.list_skills()

    if not skills:
        console.print("[yellow]No skills installed.[/yellow]\n")
        console.print("Install skills:")
        console.print("  [cyan]openskills install anthropics/skills[/cyan]            # Project (default)")
        console.print("  [cyan]openskills install owner/unique-skill --global[/cyan]  # Global")
        return

    console.print("[bold]Available Skills[/bold]\n")

    for location, label in LOCATION_LABELS.items():
        group = [skill for skill in skills if skill.location == location]
        if not group:
            continue

        console.print(f"[bold]{label}:[/bold]")
        for skill in group:
            suffix = " [dim](universal)[/dim]" if skill.universal else ""
            console.print(f"  [cyan]{escape(skill.name)}[/cyan]{suffix}")
            if skill.description:
                print_raw(f"    {skill.description}")
        print_raw()

    console.print(f"[dim]Total: {len(skills)} skill(s)[/dim]")
