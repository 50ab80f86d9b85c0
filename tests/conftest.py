"""
Pytest configuration and fixtures for openskills tests.
"""

import os
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from openskills.config import clear_config_cache
from openskills.skills import manager as manager_module


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def home_dir(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME and OPENSKILLS_HOME at a temporary directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("OPENSKILLS_HOME", str(home / ".openskills"))
    for key in list(os.environ):
        if key.startswith("OPENSKILLS_") and key != "OPENSKILLS_HOME":
            monkeypatch.delenv(key)
    return home


@pytest.fixture
def project_dir(
    temp_dir: Path, home_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Provide an empty project directory as the working directory."""
    project = temp_dir / "project"
    project.mkdir()
    monkeypatch.chdir(project)

    clear_config_cache()
    manager_module._manager = None
    yield project
    clear_config_cache()
    manager_module._manager = None


@pytest.fixture
def sample_skill_md() -> str:
    """Provide sample SKILL.md content."""
    return """---
name: test-skill
description: A test skill for unit tests
---

# Test Skill

This is a test skill for unit testing.

## Instructions

1. Do something
2. Do something else
"""


@pytest.fixture
def make_skill() -> Callable[..., Path]:
    """Factory that writes a skill directory with a SKILL.md."""

    def _make(parent: Path, name: str, description: str = "", content: str | None = None) -> Path:
        skill_dir = parent / name
        skill_dir.mkdir(parents=True, exist_ok=True)
        if content is None:
            content = f"---\nname: {name}\ndescription: {description or name + ' skill'}\n---\n\n# {name}\n"
        (skill_dir / "SKILL.md").write_text(content, encoding="utf-8")
        return skill_dir

    return _make
