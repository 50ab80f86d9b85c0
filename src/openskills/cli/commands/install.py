"""
openskills install - Install skills from git or a local path.

Usage:
    openskills install anthropics/skills
    openskills install anthropics/skills/document-skills/pdf --global
    openskills install git@github.com:owner/repo.git --universal
    openskills install ./my-skills --symlink --yes
    openskills install anthropics/skills --project
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from openskills.cli.output import print_error, print_info, print_raw, print_success, print_warning
from openskills.cli.selection import select
from openskills.prompts import Choice
from openskills.skills import InstallError, InvalidSourceError, get_skill_manager
from openskills.skills.installer import directory_size, format_size
from openskills.skills.parser import extract_yaml_field


def _skill_dir_choice(skill_dir: Path) -> Choice:
    try:
        content = (skill_dir / "SKILL.md").read_text(encoding="utf-8")
    except OSError:
        content = ""
    size = format_size(directory_size(skill_dir))
    description = extract_yaml_field(content, "description")
    return Choice(
        value=skill_dir,
        name=f"{skill_dir.name.ljust(25)} ({size})",
        short=skill_dir.name,
        description=description[:70] or None,
        checked=True,
    )


def _select_skill_dirs(skill_dirs: list[Path]) -> list[Path]:
    return select("Select skills to install", [_skill_dir_choice(d) for d in skill_dirs])


def install_skills(
    source: Annotated[
        str,
        typer.Argument(
            help="GitHub owner/repo[/path], git URL or local path.",
        ),
    ],
    global_: Annotated[
        bool,
        typer.Option(
            "--global",
            "-g",
            help="Install to ~/.claude/skills instead of the project.",
        ),
    ] = False,
    project: Annotated[
        bool,
        typer.Option(
            "--project",
            "-p",
            help="Install to the project even when the configured scope is global.",
        ),
    ] = False,
    universal: Annotated[
        bool,
        typer.Option(
            "--universal",
            "-u",
            help="Install to .agent/skills (shared by all agents).",
        ),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Install every skill found without prompting.",
        ),
    ] = False,
    symlink: Annotated[
        bool,
        typer.Option(
            "--symlink",
            help="Symlink local skills instead of copying them.",
        ),
    ] = False,
) -> None:
    """Install skills from GitHub, any git URL or a local directory."""
    if global_ and project:
        print_error("Use either --global or --project, not both")
        raise typer.Exit(1)

    manager = get_skill_manager(Path.cwd())
    target = manager.target_dir(global_=global_, universal=universal or None, project=project)

    print_info(f"Installing from: {escape(source)}")
    print_info(f"Location: {escape(str(target))}")

    try:
        report = manager.install(
            source,
            global_=global_,
            universal=universal or None,
            select=None if yes else _select_skill_dirs,
            symlink=symlink,
            project=project,
        )
    except (InvalidSourceError, InstallError) as e:
        print_error(escape(str(e)))
        raise typer.Exit(1)

    for message in report.skipped:
        print_warning(f"Skipping {escape(message)}")

    for skill in report.installed:
        if skill.overwritten:
            print_warning(f"Overwrote existing skill at {escape(str(skill.path))}")
        kind = " (symlink)" if skill.symlinked else ""
        print_success(f"Installed: {escape(skill.name)}{kind}")

    if report.count == 0:
        print_warning("No skills installed")
        return

    print_raw()
    print_success(f"Installation complete: {report.count} skill(s) installed")
    print_raw("Read skill: openskills read <skill-name>")
