"""
Interactive prompts for openskills.

The searchable checkbox is a multi-select list with fuzzy search,
pagination and bulk shortcuts. It is split into a pure state machine
(``checkbox``), a renderer (``render``) and a prompt_toolkit driver
(``app``).

Usage:
    from openskills.prompts import Separator, checkbox

    selected = checkbox(
        "Select skills to install",
        ["pdf", Separator(), "xlsx", "docx"],
        required=True,
    )
"""

# Models
from openskills.prompts.models import (
    CheckboxConfig,
    CheckboxShortcuts,
    CheckboxState,
    CheckboxTheme,
    Choice,
    KeyPress,
    PromptStatus,
    Separator,
    is_separator,
)

# Exceptions
from openskills.prompts.exceptions import NoSelectableChoicesError, PromptCancelledError

# State machine
from openskills.prompts.checkbox import (
    create_state,
    dispatch,
    handle_key,
    selected_values,
    submit,
)

# Fuzzy search
from openskills.prompts.fuzzy import filter_indexes, fuzzy_score

# Rendering
from openskills.prompts.render import render, render_text

# Driver
from openskills.prompts.app import CheckboxPrompt, checkbox, searchable_checkbox

__all__ = [
    # Models
    "CheckboxConfig",
    "CheckboxShortcuts",
    "CheckboxState",
    "CheckboxTheme",
    "Choice",
    "KeyPress",
    "PromptStatus",
    "Separator",
    "is_separator",
    # Exceptions
    "NoSelectableChoicesError",
    "PromptCancelledError",
    # State machine
    "create_state",
    "dispatch",
    "handle_key",
    "selected_values",
    "submit",
    # Fuzzy search
    "filter_indexes",
    "fuzzy_score",
    # Rendering
    "render",
    "render_text",
    # Driver
    "CheckboxPrompt",
    "checkbox",
    "searchable_checkbox",
]
