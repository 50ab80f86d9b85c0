"""
openskills manage - Interactively remove installed skills.

Usage:
    openskills manage
"""

from pathlib import Path

from openskills.cli.output import print_info, print_success
from openskills.cli.selection import select, skill_choice
from openskills.skills import get_skill_manager


def manage_skills() -> None:
    """Select installed skills to remove."""
    manager = get_skill_manager(Path.cwd())
    skills = manager.list_skills()

    if not skills:
        print_info("No skills installed.")
        return

    selected = select("Select skills to remove", [skill_choice(skill) for skill in skills])

    if not selected:
        print_info("No skills selected for removal.")
        return

    removed = manager.remove_skills(selected)
    print_success(f"Removed {len(removed)} skill(s)")
