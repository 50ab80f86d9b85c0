"""
Interactive skill selection for CLI commands.

Wraps the searchable checkbox prompt with the configured prompt settings
and the CLI's cancellation handling.
"""

from collections.abc import Sequence
from typing import Any

import typer

from openskills.config import get_config
from openskills.prompts import (
    Choice,
    CheckboxTheme,
    NoSelectableChoicesError,
    PromptCancelledError,
    checkbox,
)
from openskills.skills.models import Skill
from openskills.cli.output import print_error, print_warning

NAME_WIDTH = 25
DESCRIPTION_WIDTH = 70


def skill_choice(skill: Skill, checked: bool = False) -> Choice:
    """Build a checkbox choice for an installed skill."""
    return Choice(
        value=skill.name,
        name=f"{skill.name.ljust(NAME_WIDTH)} ({skill.location})",
        short=skill.name,
        description=skill.description[:DESCRIPTION_WIDTH] or None,
        checked=checked,
    )


def select(message: str, choices: Sequence[Choice], **kwargs: Any) -> list[Any]:
    """
    Run the checkbox prompt with the configured prompt settings.

    Cancelling (Ctrl-C) prints "Cancelled by user" and exits cleanly.

    Args:
        message: Prompt question.
        choices: Choices to offer.
        **kwargs: Overrides for the prompt options.

    Returns:
        Values of the checked choices.
    """
    prompt_config = get_config().prompt
    options: dict[str, Any] = {
        "page_size": prompt_config.page_size,
        "loop": prompt_config.loop,
        "search_key": prompt_config.search_key,
        "clear_search_key": prompt_config.clear_search_key,
        "theme": CheckboxTheme(keybindings=tuple(prompt_config.keybindings)),
    }
    options.update(kwargs)

    try:
        return checkbox(message, list(choices), **options)
    except PromptCancelledError:
        print_warning("Cancelled by user")
        raise typer.Exit(0)
    except NoSelectableChoicesError as e:
        print_error(str(e))
        raise typer.Exit(1)
