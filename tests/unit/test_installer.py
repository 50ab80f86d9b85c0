"""
Unit tests for skill installation.
"""

from pathlib import Path

import pytest
from git import GitCommandError

from openskills.skills import (
    InstallError,
    InvalidSourceError,
    discover_skill_dirs,
    install_from_source,
    install_skill_dir,
    is_git_url,
    is_local_path,
    parse_source,
)
from openskills.skills import installer as installer_module
from openskills.skills.installer import format_size


# =============================================================================
# Source Parsing Tests
# =============================================================================


class TestParseSource:
    """Tests for install source parsing."""

    @pytest.mark.parametrize("source", ["/abs/path", "./rel", "../up", "~/skills"])
    def test_is_local_path(self, source):
        """Test local path prefixes."""
        assert is_local_path(source)

    @pytest.mark.parametrize(
        "source",
        [
            "git@github.com:owner/repo.git",
            "git://example.com/repo",
            "https://github.com/owner/repo",
            "http://example.com/repo",
            "example.com/owner/repo.git",
        ],
    )
    def test_is_git_url(self, source):
        """Test git URL detection."""
        assert is_git_url(source)

    def test_github_shorthand(self):
        """Test owner/repo shorthand."""
        source = parse_source("anthropics/skills")
        assert source.kind == "git"
        assert source.url == "https://github.com/anthropics/skills"
        assert source.subpath == ""

    def test_github_shorthand_with_subpath(self):
        """Test owner/repo/path shorthand."""
        source = parse_source("anthropics/skills/document-skills/pdf")
        assert source.url == "https://github.com/anthropics/skills"
        assert source.subpath == "document-skills/pdf"

    def test_git_url(self):
        """Test that URLs are cloned as given."""
        source = parse_source("git@github.com:owner/repo.git")
        assert source.kind == "git"
        assert source.url == "git@github.com:owner/repo.git"

    def test_local_path(self, temp_dir):
        """Test local sources."""
        source = parse_source(str(temp_dir))
        assert source.is_local
        assert source.local_path == temp_dir

    def test_existing_relative_dir_is_local(self, project_dir):
        """Test that an existing directory without ./ is local."""
        (project_dir / "skills").mkdir()
        assert parse_source("skills").is_local

    @pytest.mark.parametrize("source", ["", "   ", "just-a-name"])
    def test_invalid(self, source, project_dir):
        """Test sources matching no format."""
        with pytest.raises(InvalidSourceError):
            parse_source(source)


# =============================================================================
# Discovery Tests
# =============================================================================


class TestDiscovery:
    """Tests for finding skills in a checkout."""

    def test_recursive_discovery(self, temp_dir, make_skill):
        """Test nested skills are found without descending into skills."""
        make_skill(temp_dir / "document-skills", "pdf")
        make_skill(temp_dir / "document-skills", "xlsx")
        outer = make_skill(temp_dir, "outer")
        make_skill(outer, "inner")
        (temp_dir / ".git").mkdir()
        make_skill(temp_dir / ".git", "hidden")

        found = discover_skill_dirs(temp_dir)
        assert [d.name for d in found] == ["pdf", "xlsx", "outer"]

    def test_root_is_skill(self, temp_dir, make_skill):
        """Test a source that is itself a skill."""
        skill_dir = make_skill(temp_dir, "single")
        assert discover_skill_dirs(skill_dir) == [skill_dir]

    def test_format_size(self):
        """Test human-readable sizes."""
        assert format_size(512) == "512 B"
        assert format_size(2048) == "2.0 KB"
        assert format_size(3 * 1024 * 1024) == "3.0 MB"


# =============================================================================
# Install Tests
# =============================================================================


class TestInstall:
    """Tests for installing skill directories."""

    def test_copy_install(self, temp_dir, make_skill):
        """Test copying a skill with its resources."""
        source = make_skill(temp_dir / "src", "pdf", "PDF tools")
        (source / "references").mkdir()
        (source / "references" / "guide.md").write_text("guide")
        target_dir = temp_dir / "target"

        installed = install_skill_dir(source, target_dir)
        assert installed.name == "pdf"
        assert installed.description == "PDF tools"
        assert installed.overwritten is False
        assert (target_dir / "pdf" / "references" / "guide.md").read_text() == "guide"
        assert not (target_dir / "pdf").is_symlink()

    def test_symlink_install(self, temp_dir, make_skill):
        """Test linking instead of copying."""
        source = make_skill(temp_dir / "src", "pdf")
        target_dir = temp_dir / "target"

        installed = install_skill_dir(source, target_dir, symlink=True)
        assert installed.symlinked is True
        assert (target_dir / "pdf").is_symlink()
        assert (target_dir / "pdf").resolve() == source.resolve()

    def test_overwrite(self, temp_dir, make_skill):
        """Test that reinstalling replaces the old copy."""
        source = make_skill(temp_dir / "src", "pdf", "new")
        target_dir = temp_dir / "target"
        old = make_skill(target_dir, "pdf", "old")
        (old / "stale.txt").write_text("stale")

        installed = install_skill_dir(source, target_dir)
        assert installed.overwritten is True
        assert not (target_dir / "pdf" / "stale.txt").exists()
        assert "description: new" in (target_dir / "pdf" / "SKILL.md").read_text()

    def test_install_onto_itself_is_refused(self, temp_dir, make_skill):
        """Test that installing a skill from its own target keeps it intact."""
        target_dir = temp_dir / "target"
        installed = make_skill(target_dir, "pdf", "PDF tools")
        (installed / "ref.md").write_text("reference")

        with pytest.raises(InstallError, match="already installed"):
            install_skill_dir(installed, target_dir)
        assert (installed / "SKILL.md").exists()
        assert (installed / "ref.md").read_text() == "reference"

    def test_reinstall_from_target_is_skipped(self, temp_dir, make_skill):
        """Test that a source inside the target is reported as skipped."""
        target_dir = temp_dir / "target"
        installed = make_skill(target_dir, "pdf")
        (installed / "ref.md").write_text("reference")

        report = install_from_source(str(installed), target_dir)
        assert report.installed == []
        assert len(report.skipped) == 1
        assert report.skipped[0].startswith("pdf: Source is already installed")
        assert (installed / "ref.md").read_text() == "reference"

    def test_symlinked_target_is_replaced_by_copy(self, temp_dir, make_skill):
        """Test copying over a previous symlink install of the same source."""
        source = make_skill(temp_dir / "src", "pdf")
        target_dir = temp_dir / "target"
        install_skill_dir(source, target_dir, symlink=True)

        installed = install_skill_dir(source, target_dir)
        assert installed.overwritten is True
        assert not (target_dir / "pdf").is_symlink()
        assert (target_dir / "pdf" / "SKILL.md").exists()
        assert (source / "SKILL.md").exists()

    def test_copy_failure_is_wrapped(self, temp_dir, make_skill, monkeypatch):
        """Test that filesystem errors become InstallError."""
        source = make_skill(temp_dir / "src", "pdf")

        def failing_copytree(*args, **kwargs):
            raise PermissionError("permission denied")

        monkeypatch.setattr(installer_module.shutil, "copytree", failing_copytree)
        with pytest.raises(InstallError, match="permission denied"):
            install_skill_dir(source, temp_dir / "target")

    def test_invalid_skill_is_skipped(self, temp_dir, make_skill):
        """Test that skills without frontmatter are skipped."""
        repo = temp_dir / "repo"
        make_skill(repo, "good")
        make_skill(repo, "bad", content="# no frontmatter\n")
        target_dir = temp_dir / "target"

        report = install_from_source(str(repo), target_dir)
        assert [skill.name for skill in report.installed] == ["good"]
        assert report.skipped == ["bad: Invalid SKILL.md"]
        assert not (target_dir / "bad").exists()

    def test_select_callback(self, temp_dir, make_skill):
        """Test narrowing down several skills."""
        repo = temp_dir / "repo"
        make_skill(repo, "a")
        make_skill(repo, "b")
        target_dir = temp_dir / "target"

        report = install_from_source(
            str(repo), target_dir, select=lambda dirs: [d for d in dirs if d.name == "b"]
        )
        assert report.count == 1
        assert (target_dir / "b").exists()
        assert not (target_dir / "a").exists()

    def test_missing_local_source(self, temp_dir):
        """Test a local path that does not exist."""
        with pytest.raises(InstallError, match="does not exist"):
            install_from_source(str(temp_dir / "missing"), temp_dir / "target")

    def test_no_skills_found(self, temp_dir):
        """Test a directory without any SKILL.md."""
        (temp_dir / "empty").mkdir()
        with pytest.raises(InstallError, match="No SKILL.md"):
            install_from_source(str(temp_dir / "empty"), temp_dir / "target")


class TestGitInstall:
    """Tests for installing from git with the clone stubbed out."""

    def test_clone_and_install_subpath(self, temp_dir, make_skill, monkeypatch):
        """Test that a subpath installs exactly that skill."""
        calls = []

        def fake_clone(url, dest, depth=None):
            calls.append((url, depth))
            make_skill(Path(dest) / "document-skills", "pdf")
            make_skill(Path(dest) / "document-skills", "xlsx")

        monkeypatch.setattr(installer_module.Repo, "clone_from", fake_clone)
        target_dir = temp_dir / "target"

        report = install_from_source("anthropics/skills/document-skills/pdf", target_dir)
        assert calls == [("https://github.com/anthropics/skills", 1)]
        assert [skill.name for skill in report.installed] == ["pdf"]
        assert not (target_dir / "xlsx").exists()

    def test_missing_subpath(self, temp_dir, monkeypatch):
        """Test a subpath without SKILL.md."""
        monkeypatch.setattr(
            installer_module.Repo, "clone_from", lambda url, dest, depth=None: Path(dest).mkdir()
        )
        with pytest.raises(InstallError, match="SKILL.md not found"):
            install_from_source("owner/repo/nothing", temp_dir / "target")

    def test_clone_failure(self, temp_dir, monkeypatch):
        """Test that git errors become InstallError."""

        def failing_clone(url, dest, depth=None):
            raise GitCommandError(["git", "clone"], 128, stderr="repository not found")

        monkeypatch.setattr(installer_module.Repo, "clone_from", failing_clone)
        with pytest.raises(InstallError, match="repository not found"):
            install_from_source("owner/missing", temp_dir / "target")
