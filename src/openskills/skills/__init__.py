"""
openskills Skills System.

A skill is a directory holding a SKILL.md with YAML frontmatter (name,
description) plus any resources it references.

Usage:
    from openskills.skills import SkillManager, get_skill_manager

    manager = get_skill_manager()

    # List installed skills, project skills first
    skills = manager.list_skills()

    # Install from GitHub shorthand
    report = manager.install("anthropics/skills")

    # Write the skills section into AGENTS.md
    manager.sync()
"""

# Models
from openskills.skills.models import (
    InstalledSkill,
    InstallReport,
    InstallSource,
    Skill,
    SkillFrontmatter,
    SkillLocation,
    SyncResult,
)

# Parser
from openskills.skills.parser import (
    SkillParseError,
    extract_yaml_field,
    has_valid_frontmatter,
    parse_skill_md,
    parse_yaml_frontmatter,
    read_skill_frontmatter,
)

# Loader
from openskills.skills.loader import (
    SkillNotFoundError,
    find_all_skills,
    find_skill,
    resolve_skill_reference,
    sort_skills,
)

# Installer
from openskills.skills.installer import (
    InstallError,
    InvalidSourceError,
    discover_skill_dirs,
    install_from_source,
    install_skill_dir,
    is_git_url,
    is_local_path,
    parse_source,
)

# Agents file
from openskills.skills.agents_md import (
    generate_skills_xml,
    parse_current_skills,
    remove_skills_section,
    replace_skills_section,
)

# Manager
from openskills.skills.manager import (
    SkillManager,
    get_skill_manager,
)

__all__ = [
    # Models
    "InstalledSkill",
    "InstallReport",
    "InstallSource",
    "Skill",
    "SkillFrontmatter",
    "SkillLocation",
    "SyncResult",
    # Parser
    "SkillParseError",
    "extract_yaml_field",
    "has_valid_frontmatter",
    "parse_skill_md",
    "parse_yaml_frontmatter",
    "read_skill_frontmatter",
    # Loader
    "SkillNotFoundError",
    "find_all_skills",
    "find_skill",
    "resolve_skill_reference",
    "sort_skills",
    # Installer
    "InstallError",
    "InvalidSourceError",
    "discover_skill_dirs",
    "install_from_source",
    "install_skill_dir",
    "is_git_url",
    "is_local_path",
    "parse_source",
    # Agents file
    "generate_skills_xml",
    "parse_current_skills",
    "remove_skills_section",
    "replace_skills_section",
    # Manager
    "SkillManager",
    "get_skill_manager",
]
