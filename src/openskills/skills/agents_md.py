"""
Skills section handling for agent instruction files (AGENTS.md).

The section is an XML ``<skills_system>`` block wrapping an
``<available_skills>`` list between HTML comment markers.
"""

import re
from collections.abc import Iterable

from openskills.skills.models import Skill

SECTION_START = "<skills_system"
SECTION_END = "</skills_system>"
TABLE_START = "<!-- SKILLS_TABLE_START -->"
TABLE_END = "<!-- SKILLS_TABLE_END -->"
REMOVED_MARKER = "<!-- Skills section removed -->"

_SECTION_RE = re.compile(r"<skills_system[^>]*>[\s\S]*?</skills_system>")
_TABLE_RE = re.compile(re.escape(TABLE_START) + r"[\s\S]*?" + re.escape(TABLE_END))
_NAME_RE = re.compile(r"<name>\s*([^<]+?)\s*</name>")

USAGE = """<usage>
Skills provide specialized procedural guidance for complex tasks.
Progressive disclosure: Skills expand detailed instructions only when loaded.
Check available skills before starting complex work.

Load: openskills read <skill-name>
List: openskills list
Priority: .agent/skills/ and .claude/skills/ (project) first, then ~/.agent/skills/ and ~/.claude/skills/ (global)

Rules:
- Load only relevant skills for current task
- Don't load skills already in context
- Each load is stateless

Resource resolution:
- Base directory provided in read output
- Relative paths in SKILL.md resolve from base directory
- Example: references/guide.md -> {base-directory}/references/guide.md
</usage>"""


def _skill_tag(skill: Skill) -> str:
    return (
        "<skill>\n"
        f"<name>{skill.name}</name>\n"
        f"<description>{skill.description}</description>\n"
        f"<location>{skill.location}</location>\n"
        "</skill>"
    )


def generate_skills_xml(skills: Iterable[Skill]) -> str:
    """Generate the skills section for an agents file."""
    tags = "\n\n".join(_skill_tag(skill) for skill in skills)
    return (
        '<skills_system priority="1">\n\n'
        "## Available Skills\n\n"
        f"{TABLE_START}\n"
        f"{USAGE}\n\n"
        "<available_skills>\n\n"
        f"{tags}\n\n"
        "</available_skills>\n"
        f"{TABLE_END}\n\n"
        f"{SECTION_END}"
    )


def has_skills_section(content: str) -> bool:
    """Check whether content already holds a skills section."""
    return SECTION_START in content or TABLE_START in content


def replace_skills_section(content: str, section: str) -> str:
    """
    Replace the skills section in content, or append it.

    The first ``<skills_system>`` block is replaced whole. Without one, the
    text between the HTML table markers is replaced. Otherwise the section
    is appended after a blank line.

    Args:
        content: Current file content.
        section: Section generated by generate_skills_xml.

    Returns:
        Updated content.
    """
    if SECTION_START in content:
        return _SECTION_RE.sub(lambda _: section, content, count=1)

    if TABLE_START in content:
        table = _TABLE_RE.search(section)
        inner = table.group(0) if table else section
        return _TABLE_RE.sub(lambda _: inner, content)

    return content.rstrip() + "\n\n" + section + "\n"


def remove_skills_section(content: str) -> str:
    """Replace the skills section with a removal marker; no-op without one."""
    if SECTION_START in content:
        return _SECTION_RE.sub(lambda _: REMOVED_MARKER, content, count=1)

    if TABLE_START in content:
        return _TABLE_RE.sub(lambda _: f"{TABLE_START}\n{REMOVED_MARKER}\n{TABLE_END}", content)

    return content


def parse_current_skills(content: str) -> list[str]:
    """
    List skill names currently in the skills section.

    Args:
        content: Agents file content.

    Returns:
        Names in file order, empty when there is no section.
    """
    match = _SECTION_RE.search(content)
    if match:
        block = match.group(0)
    else:
        table = _TABLE_RE.search(content)
        if not table:
            return []
        block = table.group(0)
    return _NAME_RE.findall(block)
