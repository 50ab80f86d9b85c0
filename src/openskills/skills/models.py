"""
Skill models for openskills.

Defines the data structures for installed skills, their locations and
install sources.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class SkillFrontmatter(BaseModel):
    """Frontmatter parsed from SKILL.md."""

    name: str = Field(..., description="Skill name")
    description: str = Field(default="", description="Short description")


class Skill(BaseModel):
    """An installed skill found in one of the search directories."""

    name: str = Field(..., description="Skill name (directory name)")
    description: str = Field(default="", description="Description from SKILL.md frontmatter")
    location: Literal["project", "global"] = Field(..., description="Where the skill lives")
    path: Path = Field(..., description="Path to the skill directory")
    universal: bool = Field(default=False, description="Installed under .agent/skills")

    @property
    def skill_md(self) -> Path:
        return self.path / "SKILL.md"


class SkillLocation(BaseModel):
    """Where a single skill was resolved to."""

    path: Path = Field(..., description="Path to SKILL.md")
    base_dir: Path = Field(..., description="Skill directory (resources resolve from here)")
    source: Path = Field(..., description="Search directory the skill was found in")

    @property
    def name(self) -> str:
        return self.base_dir.name


class InstallSource(BaseModel):
    """A parsed install source."""

    kind: Literal["local", "git"] = Field(..., description="Local path or git repository")
    raw: str = Field(..., description="Source as given by the user")
    url: str | None = Field(default=None, description="Clone URL for git sources")
    local_path: Path | None = Field(default=None, description="Resolved path for local sources")
    subpath: str = Field(default="", description="Skill path inside the repository")

    @property
    def is_local(self) -> bool:
        return self.kind == "local"


class InstalledSkill(BaseModel):
    """One skill written to a target directory."""

    name: str
    path: Path
    description: str = ""
    overwritten: bool = False
    symlinked: bool = False


class InstallReport(BaseModel):
    """Outcome of an install run."""

    source: str
    target_dir: Path
    installed: list[InstalledSkill] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list, description="Messages for skipped skills")

    @property
    def count(self) -> int:
        return len(self.installed)


class SyncResult(BaseModel):
    """Outcome of writing the skills section to an agents file."""

    output_file: Path
    count: int = 0
    created_file: bool = False
    had_section: bool = False
    removed: bool = False
