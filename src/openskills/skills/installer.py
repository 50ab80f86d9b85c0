"""
Skill installation for openskills.

Installs skills from local directories or git repositories into a skills
directory, by copy or by symlink.
"""

import logging
import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path

from git import GitCommandError, Repo

from openskills.skills.models import InstalledSkill, InstallReport, InstallSource
from openskills.skills.parser import SkillParseError, read_skill_frontmatter
from openskills.storage.paths import ensure_directory, expand_path

logger = logging.getLogger(__name__)

# Called with the discovered skill directories, returns the ones to install
SelectCallback = Callable[[list[Path]], list[Path]]


class InvalidSourceError(ValueError):
    """Install source could not be parsed."""


class InstallError(Exception):
    """Error installing a skill."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        super().__init__(f"{message}" + (f" (at {path})" if path else ""))


# =============================================================================
# Source Parsing
# =============================================================================


def is_local_path(source: str) -> bool:
    """Check whether a source names a local path."""
    return source.startswith(("/", "./", "../", "~/")) or source in (".", "..", "~")


def is_git_url(source: str) -> bool:
    """Check whether a source is a git URL."""
    return source.startswith(("git@", "git://", "http://", "https://")) or source.endswith(".git")


def parse_source(source: str) -> InstallSource:
    """
    Parse an install source.

    Accepts local paths, git URLs and GitHub shorthand
    (``owner/repo`` or ``owner/repo/path/to/skill``).

    Args:
        source: Source as given by the user.

    Returns:
        Parsed source.

    Raises:
        InvalidSourceError: If the source matches none of the formats.
    """
    source = source.strip()
    if not source:
        raise InvalidSourceError("Empty install source")

    if is_local_path(source) or Path(source).expanduser().is_dir():
        return InstallSource(kind="local", raw=source, local_path=expand_path(source))

    if is_git_url(source):
        return InstallSource(kind="git", raw=source, url=source)

    parts = [part for part in source.split("/") if part]
    if len(parts) < 2:
        raise InvalidSourceError(
            f"Invalid source format: {source}. Expected owner/repo, owner/repo/skill-path, "
            "a git URL or a local path"
        )

    return InstallSource(
        kind="git",
        raw=source,
        url=f"https://github.com/{parts[0]}/{parts[1]}",
        subpath="/".join(parts[2:]),
    )


# =============================================================================
# Discovery
# =============================================================================


def discover_skill_dirs(root: Path) -> list[Path]:
    """
    Find skill directories below a root.

    A directory containing SKILL.md is a skill and is not descended into.
    When the root itself holds SKILL.md, it is the only result.

    Args:
        root: Directory to scan.

    Returns:
        Skill directories sorted by path.
    """
    if (root / "SKILL.md").exists():
        return [root]

    found: list[Path] = []
    for entry in sorted(root.iterdir()):
        if not entry.is_dir() or entry.name == ".git":
            continue
        if (entry / "SKILL.md").exists():
            found.append(entry)
        else:
            found.extend(discover_skill_dirs(entry))
    return found


def directory_size(path: Path) -> int:
    """Total size in bytes of the files below a directory."""
    return sum(f.stat().st_size for f in path.rglob("*") if f.is_file() and ".git" not in f.parts)


def format_size(size: int) -> str:
    """Format a byte count for display."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


# =============================================================================
# Installation
# =============================================================================


def clone_repository(url: str, dest: Path) -> Path:
    """
    Shallow-clone a git repository.

    Raises:
        InstallError: If git fails.
    """
    logger.debug("Cloning %s into %s", url, dest)
    try:
        Repo.clone_from(url, str(dest), depth=1)
    except GitCommandError as e:
        detail = (e.stderr or "").strip() or str(e)
        raise InstallError(f"Failed to clone repository {url}: {detail}") from e
    return dest


def _remove_existing(target: Path) -> None:
    if target.is_symlink() or target.is_file():
        target.unlink()
    else:
        shutil.rmtree(target)


def install_skill_dir(skill_dir: Path, target_dir: Path, symlink: bool = False) -> InstalledSkill:
    """
    Install one skill directory into a skills directory.

    Args:
        skill_dir: Directory containing SKILL.md.
        target_dir: Skills directory to install into.
        symlink: Link to the source instead of copying it.

    Returns:
        The installed skill.

    Raises:
        SkillParseError: If SKILL.md is missing or has no frontmatter.
        InstallError: If the source already is the target, or the copy fails.
    """
    frontmatter = read_skill_frontmatter(skill_dir)
    ensure_directory(target_dir)

    source = skill_dir.resolve()
    target = target_dir / skill_dir.name
    if not target.is_symlink() and target.resolve() == source:
        raise InstallError("Source is already installed at the target", target)

    overwritten = target.exists() or target.is_symlink()
    try:
        if overwritten:
            logger.debug("Overwriting existing skill at %s", target)
            _remove_existing(target)

        if symlink:
            logger.debug("Linking %s -> %s", target, source)
            target.symlink_to(source, target_is_directory=True)
        else:
            logger.debug("Copying %s -> %s", source, target)
            shutil.copytree(source, target, ignore=shutil.ignore_patterns(".git"))
    except OSError as e:
        raise InstallError(f"Failed to install {skill_dir.name}: {e}", target) from e

    return InstalledSkill(
        name=skill_dir.name,
        path=target,
        description=frontmatter.description,
        overwritten=overwritten,
        symlinked=symlink,
    )


def _install_dirs(
    source: InstallSource,
    root: Path,
    target_dir: Path,
    select: SelectCallback | None,
    symlink: bool,
) -> InstallReport:
    report = InstallReport(source=source.raw, target_dir=target_dir)

    if source.subpath:
        skill_dir = root / source.subpath
        if not (skill_dir / "SKILL.md").exists():
            raise InstallError(f"SKILL.md not found at {source.subpath}")
        candidates = [skill_dir]
    else:
        candidates = discover_skill_dirs(root)
        if not candidates:
            raise InstallError("No SKILL.md files found", root)

    if select is not None and len(candidates) > 1:
        candidates = select(candidates)

    for skill_dir in candidates:
        try:
            report.installed.append(install_skill_dir(skill_dir, target_dir, symlink=symlink))
        except SkillParseError as e:
            if source.subpath:
                raise InstallError(str(e)) from e
            logger.debug("Skipping %s: %s", skill_dir.name, e)
            report.skipped.append(f"{skill_dir.name}: Invalid SKILL.md")
        except InstallError as e:
            logger.debug("Skipping %s: %s", skill_dir.name, e)
            report.skipped.append(f"{skill_dir.name}: {e}")

    return report


def install_from_source(
    source: str | InstallSource,
    target_dir: Path,
    select: SelectCallback | None = None,
    symlink: bool = False,
) -> InstallReport:
    """
    Install skills from a local path or git repository.

    Args:
        source: Raw source string or a parsed source.
        target_dir: Skills directory to install into.
        select: Optional callback that narrows down several discovered skills.
        symlink: Link local skills instead of copying them.

    Returns:
        Report of installed and skipped skills.

    Raises:
        InvalidSourceError: If the source cannot be parsed.
        InstallError: If cloning fails or no skill is found.
    """
    parsed = source if isinstance(source, InstallSource) else parse_source(source)

    if parsed.is_local:
        root = parsed.local_path
        if root is None or not root.is_dir():
            raise InstallError("Source directory does not exist", root)
        return _install_dirs(parsed, root, target_dir, select, symlink)

    if symlink:
        logger.warning("--symlink only applies to local sources, copying instead")

    with tempfile.TemporaryDirectory(prefix="openskills-") as tmp:
        checkout = clone_repository(parsed.url or parsed.raw, Path(tmp) / "repo")
        return _install_dirs(parsed, checkout, target_dir, select, symlink=False)
