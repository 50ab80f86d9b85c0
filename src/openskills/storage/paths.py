"""
Path utilities for openskills.

Provides consistent resolution of the tool's home directory and of the
skill directories agents read from.
"""

import os
from pathlib import Path

CLAUDE_SKILLS_SUBDIR = Path(".claude") / "skills"
UNIVERSAL_SKILLS_SUBDIR = Path(".agent") / "skills"


def get_openskills_home() -> Path:
    """
    Get the openskills home directory.

    Resolution order:
    1. OPENSKILLS_HOME environment variable
    2. Default: ~/.openskills

    Returns:
        Path to the openskills home directory.
    """
    env_home = os.environ.get("OPENSKILLS_HOME")
    if env_home:
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".openskills"


def get_global_config_path() -> Path:
    """
    Get the path to the global configuration file.

    Returns:
        Path to ~/.openskills/config.yaml
    """
    return get_openskills_home() / "config.yaml"


def get_skills_dir(
    project_local: bool = False,
    universal: bool = False,
    cwd: Path | None = None,
) -> Path:
    """
    Get a skills directory.

    Args:
        project_local: Use the project directory instead of the home directory.
        universal: Use .agent/skills (shared by all agents) instead of .claude/skills.
        cwd: Project root, defaults to the current directory.

    Returns:
        Path to the selected skills directory.
    """
    base = (cwd or Path.cwd()) if project_local else Path.home()
    subdir = UNIVERSAL_SKILLS_SUBDIR if universal else CLAUDE_SKILLS_SUBDIR
    return base / subdir


def get_search_dirs(cwd: Path | None = None) -> list[Path]:
    """
    Get all skill directories in priority order.

    Order:
    1. ./.agent/skills (project, universal)
    2. ~/.agent/skills (global, universal)
    3. ./.claude/skills (project)
    4. ~/.claude/skills (global)

    Args:
        cwd: Project root, defaults to the current directory.

    Returns:
        List of directories; they may not exist.
    """
    return [
        get_skills_dir(project_local=True, universal=True, cwd=cwd),
        get_skills_dir(project_local=False, universal=True),
        get_skills_dir(project_local=True, universal=False, cwd=cwd),
        get_skills_dir(project_local=False, universal=False),
    ]


def is_project_dir(directory: Path, cwd: Path | None = None) -> bool:
    """Check whether a skills directory lives under the project root."""
    project_dirs = {
        get_skills_dir(project_local=True, universal=True, cwd=cwd),
        get_skills_dir(project_local=True, universal=False, cwd=cwd),
    }
    return directory in project_dirs


def expand_path(path: str | Path) -> Path:
    """
    Expand a path string, handling ~ and environment variables.

    Args:
        path: Path string or Path object.

    Returns:
        Expanded and resolved Path.
    """
    if isinstance(path, str):
        path = os.path.expandvars(path)
        path = os.path.expanduser(path)
    return Path(path).resolve()


def ensure_directory(path: Path, mode: int = 0o755) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path.
        mode: Permission mode for created directories.

    Returns:
        The path (for chaining).
    """
    path.mkdir(parents=True, exist_ok=True, mode=mode)
    return path
