"""
Skill manager for openskills.

Provides the main interface for working with installed skills.
"""

import logging
import shutil
from pathlib import Path

from openskills.config import get_config
from openskills.skills.agents_md import (
    generate_skills_xml,
    has_skills_section,
    parse_current_skills,
    remove_skills_section,
    replace_skills_section,
)
from openskills.skills.installer import SelectCallback, install_from_source
from openskills.skills.loader import (
    SkillNotFoundError,
    find_all_skills,
    find_skill,
    resolve_skill_reference,
    sort_skills,
)
from openskills.skills.models import InstallReport, Skill, SkillLocation, SyncResult
from openskills.storage.paths import get_search_dirs, get_skills_dir

logger = logging.getLogger(__name__)

AGENTS_MD_HEADER = "# AGENTS\n\n"


class SkillManager:
    """Main interface for working with skills.

    Provides methods to:
    - List, read and remove installed skills
    - Install skills from git repositories or local paths
    - Sync the skills listing into an agents file
    """

    def __init__(self, project_path: Path | None = None):
        """Initialize the skill manager.

        Args:
            project_path: Project root, defaults to the current directory.
        """
        self.project_path = project_path

    @property
    def cwd(self) -> Path:
        return self.project_path or Path.cwd()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_skills(self) -> list[Skill]:
        """List installed skills, project skills first."""
        return sort_skills(find_all_skills(self.cwd))

    def get_skill(self, reference: str) -> SkillLocation:
        """Resolve a skill name, path or file:// URI.

        Raises:
            SkillNotFoundError: If nothing matches.
        """
        location = resolve_skill_reference(reference, self.cwd)
        if location is None:
            raise SkillNotFoundError(reference, get_search_dirs(self.cwd))
        return location

    def read_skill(self, reference: str) -> tuple[SkillLocation, str]:
        """Resolve a skill and read its SKILL.md."""
        location = self.get_skill(reference)
        return location, location.path.read_text(encoding="utf-8")

    @staticmethod
    def format_readout(name: str, location: SkillLocation, content: str) -> str:
        """Format SKILL.md content the way agents expect to load it."""
        return "\n".join(
            [
                f"Reading: {name}",
                f"Base directory: {location.base_dir}",
                "",
                content,
                "",
                f"Skill read: {name}",
            ]
        )

    # -------------------------------------------------------------------------
    # Install / Remove
    # -------------------------------------------------------------------------

    def target_dir(
        self, global_: bool = False, universal: bool | None = None, project: bool = False
    ) -> Path:
        """Skills directory an install writes to.

        ``global_`` and ``project`` override the configured default scope.
        """
        skills_config = get_config().skills
        if universal is None:
            universal = skills_config.universal
        if global_:
            scope = "global"
        elif project:
            scope = "project"
        else:
            scope = skills_config.default_scope
        return get_skills_dir(project_local=scope == "project", universal=universal, cwd=self.cwd)

    def install(
        self,
        source: str,
        global_: bool = False,
        universal: bool | None = None,
        select: SelectCallback | None = None,
        symlink: bool = False,
        project: bool = False,
    ) -> InstallReport:
        """Install skills from a source into the selected skills directory."""
        target = self.target_dir(global_=global_, universal=universal, project=project)
        logger.debug("Installing %s into %s", source, target)
        return install_from_source(source, target, select=select, symlink=symlink)

    def remove_skill(self, name: str) -> SkillLocation:
        """Permanently delete an installed skill.

        Raises:
            SkillNotFoundError: If no skill has that name.
        """
        location = find_skill(name, self.cwd)
        if location is None:
            raise SkillNotFoundError(name, get_search_dirs(self.cwd))

        if location.base_dir.is_symlink():
            location.base_dir.unlink()
        else:
            shutil.rmtree(location.base_dir)
        logger.debug("Removed %s from %s", name, location.source)
        return location

    def remove_skills(self, names: list[str]) -> list[SkillLocation]:
        """Remove several skills, skipping names that are already gone."""
        removed = []
        for name in names:
            try:
                removed.append(self.remove_skill(name))
            except SkillNotFoundError:
                logger.warning("Skill already removed: %s", name)
        return removed

    # -------------------------------------------------------------------------
    # Agents file
    # -------------------------------------------------------------------------

    def output_path(self, output: str | Path | None = None) -> Path:
        path = Path(output or get_config().skills.output_file)
        return path if path.is_absolute() else self.cwd / path

    def current_synced(self, output: str | Path | None = None) -> list[str]:
        """Skill names listed in the agents file."""
        path = self.output_path(output)
        if not path.exists():
            return []
        return parse_current_skills(path.read_text(encoding="utf-8"))

    def sync(
        self,
        output: str | Path | None = None,
        selected: list[str] | None = None,
        skills: list[Skill] | None = None,
    ) -> SyncResult:
        """
        Write the skills section to the agents file.

        Args:
            output: Agents file, defaults to the configured output file.
            selected: Names to include; None includes every skill and an
                empty list removes the section.
            skills: Installed skills, looked up when not given.

        Returns:
            What was written.
        """
        path = self.output_path(output)
        created = not path.exists()
        if created:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(AGENTS_MD_HEADER, encoding="utf-8")

        content = path.read_text(encoding="utf-8")
        had_section = has_skills_section(content)

        if selected is not None and not selected:
            path.write_text(remove_skills_section(content), encoding="utf-8")
            logger.debug("Removed skills section from %s", path)
            return SyncResult(
                output_file=path, created_file=created, had_section=had_section, removed=True
            )

        if skills is None:
            skills = self.list_skills()
        if selected is not None:
            wanted = set(selected)
            skills = [skill for skill in skills if skill.name in wanted]

        path.write_text(replace_skills_section(content, generate_skills_xml(skills)), encoding="utf-8")
        logger.debug("Synced %d skill(s) to %s", len(skills), path)
        return SyncResult(
            output_file=path, count=len(skills), created_file=created, had_section=had_section
        )

    def unsync(self, output: str | Path | None = None) -> SyncResult | None:
        """Remove the skills section; None when the agents file is missing."""
        path = self.output_path(output)
        if not path.exists():
            return None
        content = path.read_text(encoding="utf-8")
        path.write_text(remove_skills_section(content), encoding="utf-8")
        return SyncResult(output_file=path, had_section=has_skills_section(content), removed=True)


# Global manager instance
_manager: SkillManager | None = None


def get_skill_manager(project_path: Path | None = None) -> SkillManager:
    """Get the skill manager singleton.

    Args:
        project_path: Optional project root.

    Returns:
        SkillManager instance.
    """
    global _manager
    if _manager is None or (project_path and _manager.project_path != project_path):
        _manager = SkillManager(project_path)
    return _manager
