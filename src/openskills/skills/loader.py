"""
Skill loader for openskills.

Discovers installed skills across the project and global directories.
"""

import logging
from pathlib import Path
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

from openskills.skills.models import Skill, SkillLocation
from openskills.skills.parser import extract_yaml_field
from openskills.storage.paths import (
    UNIVERSAL_SKILLS_SUBDIR,
    get_search_dirs,
    is_project_dir,
)

logger = logging.getLogger(__name__)


class SkillNotFoundError(Exception):
    """Skill not found error."""

    def __init__(self, name: str, searched_paths: list[Path] | None = None):
        self.name = name
        self.searched_paths = searched_paths or []
        super().__init__(f"Skill not found: {name}")


def find_all_skills(cwd: Path | None = None) -> list[Skill]:
    """
    Find all installed skills across the search directories.

    Directories are scanned in priority order; when two directories hold a
    skill with the same name, the first one wins. Symlinked skill
    directories are followed.

    Args:
        cwd: Project root, defaults to the current directory.

    Returns:
        List of skills in discovery order.
    """
    skills: list[Skill] = []
    seen: set[str] = set()

    for directory in get_search_dirs(cwd):
        if not directory.is_dir():
            continue

        for entry in sorted(directory.iterdir()):
            skill_md = entry / "SKILL.md"
            if not entry.is_dir() or not skill_md.exists():
                continue
            if entry.name in seen:
                continue

            try:
                content = skill_md.read_text(encoding="utf-8")
            except OSError as e:
                logger.warning("Skipping %s: %s", entry, e)
                continue

            seen.add(entry.name)
            skills.append(
                Skill(
                    name=entry.name,
                    description=extract_yaml_field(content, "description"),
                    location="project" if is_project_dir(directory, cwd) else "global",
                    path=entry,
                    universal=directory.parent.name == UNIVERSAL_SKILLS_SUBDIR.parent.name,
                )
            )

    return skills


def sort_skills(skills: list[Skill]) -> list[Skill]:
    """Sort skills for display: project skills first, then by name."""
    return sorted(skills, key=lambda s: (s.location != "project", s.name.lower()))


def find_skill(name: str, cwd: Path | None = None) -> SkillLocation | None:
    """
    Find a specific skill by name.

    Args:
        name: Skill (directory) name.
        cwd: Project root, defaults to the current directory.

    Returns:
        The first match in priority order, or None.
    """
    for directory in get_search_dirs(cwd):
        skill_md = directory / name / "SKILL.md"
        if skill_md.exists():
            return SkillLocation(path=skill_md, base_dir=directory / name, source=directory)
    return None


def _path_from_reference(reference: str) -> Path | None:
    if reference.startswith("file://"):
        parsed = urlparse(reference)
        return Path(url2pathname(unquote(parsed.path)))

    if reference.startswith(("/", "./", "../", "~")) or "/" in reference or "\\" in reference:
        return Path(reference).expanduser()

    return None


def resolve_skill_reference(reference: str, cwd: Path | None = None) -> SkillLocation | None:
    """
    Resolve a skill name, path or file:// URI to a location.

    Paths may point at a skill directory or directly at its SKILL.md.

    Args:
        reference: Skill name, filesystem path or file:// URI.
        cwd: Project root, defaults to the current directory.

    Returns:
        The resolved location, or None when nothing matches.
    """
    path = _path_from_reference(reference)
    if path is None:
        return find_skill(reference, cwd)

    if not path.is_absolute():
        path = (cwd or Path.cwd()) / path

    if path.is_file() and path.name == "SKILL.md":
        base_dir = path.parent
    elif path.is_dir() and (path / "SKILL.md").exists():
        base_dir = path
    else:
        return None

    return SkillLocation(path=base_dir / "SKILL.md", base_dir=base_dir, source=base_dir.parent)
