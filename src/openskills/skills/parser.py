"""
SKILL.md parsing for openskills.

Skills are discovered by directory name; the frontmatter only supplies
the description shown in listings, so parsing is deliberately lenient.
"""

import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from openskills.skills.models import SkillFrontmatter


class SkillParseError(Exception):
    """Error parsing a skill."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        super().__init__(f"{message}" + (f" (at {path})" if path else ""))


def has_valid_frontmatter(content: str) -> bool:
    """Check whether SKILL.md content starts with a frontmatter delimiter."""
    return content.strip().startswith("---")


def extract_yaml_field(content: str, field: str) -> str:
    """Extract a single ``field: value`` line from frontmatter.

    Args:
        content: SKILL.md content.
        field: Field name.

    Returns:
        The trimmed value, or "" when the field is missing.
    """
    match = re.search(rf"^{re.escape(field)}:\s*(.+?)$", content, re.MULTILINE)
    return match.group(1).strip() if match else ""


def parse_yaml_frontmatter(content: str) -> tuple[dict[str, Any] | None, str]:
    """Parse YAML frontmatter from a markdown file.

    Frontmatter is delimited by --- at the start and end.

    Args:
        content: The full markdown content.

    Returns:
        Tuple of (frontmatter dict or None, remaining content).
    """
    if not content.startswith("---"):
        return None, content

    lines = content.split("\n")
    end_index = None

    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == "---":
            end_index = i
            break

    if end_index is None:
        return None, content

    frontmatter_text = "\n".join(lines[1:end_index])
    remaining_content = "\n".join(lines[end_index + 1 :]).strip()

    try:
        frontmatter = yaml.safe_load(frontmatter_text)
    except yaml.YAMLError:
        return None, content

    if not isinstance(frontmatter, dict):
        return None, content
    return frontmatter, remaining_content


def parse_skill_md(content: str, default_name: str, path: Path | None = None) -> SkillFrontmatter:
    """Parse SKILL.md into its frontmatter.

    Falls back to line-based extraction when the frontmatter is not valid
    YAML (unquoted colons in descriptions are common).

    Args:
        content: SKILL.md content.
        default_name: Name to use when the frontmatter has none.
        path: Optional path for error messages.

    Returns:
        Parsed frontmatter.

    Raises:
        SkillParseError: If the content has no frontmatter at all.
    """
    if not has_valid_frontmatter(content):
        raise SkillParseError("Invalid SKILL.md (missing YAML frontmatter)", path)

    data, _ = parse_yaml_frontmatter(content.lstrip())
    if data is None:
        data = {
            "name": extract_yaml_field(content, "name"),
            "description": extract_yaml_field(content, "description"),
        }

    name = data.get("name") or default_name
    description = data.get("description") or ""

    try:
        return SkillFrontmatter(name=str(name), description=str(description).strip())
    except ValidationError as e:
        raise SkillParseError(f"Invalid SKILL.md frontmatter: {e}", path) from e


def read_skill_frontmatter(skill_dir: Path) -> SkillFrontmatter:
    """Read and parse the SKILL.md of a skill directory.

    Raises:
        SkillParseError: If SKILL.md is missing, unreadable or invalid.
    """
    skill_md = skill_dir / "SKILL.md"
    try:
        content = skill_md.read_text(encoding="utf-8")
    except OSError as e:
        raise SkillParseError(f"Failed to read SKILL.md: {e}", skill_md) from e
    return parse_skill_md(content, skill_dir.name, skill_md)
