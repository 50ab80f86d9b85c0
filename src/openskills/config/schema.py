"""
Pydantic configuration schema for openskills.

This module defines all configuration models with validation.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# Skills Configuration
# =============================================================================


class SkillsConfig(BaseModel):
    """Where skills are installed and synced to."""

    model_config = ConfigDict(extra="allow")

    # Agent instructions file that `sync` writes the skills listing into
    output_file: str = "AGENTS.md"

    # Default install scope when neither --global nor a project flag is given
    default_scope: Literal["project", "global"] = "project"

    # Install into .agent/skills instead of .claude/skills by default
    universal: bool = False


# =============================================================================
# Prompt Configuration
# =============================================================================


class PromptConfig(BaseModel):
    """Interactive selection prompt settings."""

    model_config = ConfigDict(extra="allow")

    page_size: int = Field(default=15, ge=1, le=100)
    loop: bool = True
    search_key: str = "f"
    clear_search_key: str = "escape"
    keybindings: list[Literal["vim", "emacs"]] = Field(default_factory=list)

    @field_validator("keybindings", mode="before")
    @classmethod
    def _split_keybindings(cls, value):
        if isinstance(value, str):
            return [value]
        return value


# =============================================================================
# Root Configuration Model
# =============================================================================


class Config(BaseModel):
    """
    Root configuration model for openskills.

    Loaded from ~/.openskills/config.yaml and OPENSKILLS_* environment
    variables, merged over these defaults.
    """

    model_config = ConfigDict(extra="allow")

    skills: SkillsConfig = Field(default_factory=SkillsConfig)
    prompt: PromptConfig = Field(default_factory=PromptConfig)
