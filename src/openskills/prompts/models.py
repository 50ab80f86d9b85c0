"""
Prompt models - data structures for the searchable checkbox prompt.

Everything here is UI-agnostic: the state machine in
``openskills.prompts.checkbox`` works on these types only, and the
terminal driver converts real key presses into ``KeyPress`` values.
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class PromptStatus(str, Enum):
    """Lifecycle of a prompt session."""

    IDLE = "idle"
    DONE = "done"


@dataclass(frozen=True)
class Choice:
    """A selectable row.

    ``checked_name`` and ``short`` fall back to ``name`` after
    normalization; ``name`` falls back to ``str(value)``.
    """

    value: Any
    name: str | None = None
    checked_name: str | None = None
    short: str | None = None
    description: str | None = None
    disabled: bool | str = False
    checked: bool = False

    @property
    def is_disabled(self) -> bool:
        return bool(self.disabled)


@dataclass(frozen=True)
class Separator:
    """A non-interactive row used to group choices."""

    separator: str = "──────────────"

    @staticmethod
    def is_separator(item: Any) -> bool:
        return isinstance(item, Separator)


def is_separator(item: Any) -> bool:
    """Check whether an item is a Separator."""
    return isinstance(item, Separator)


Item = Union[Choice, Separator]


@dataclass(frozen=True)
class KeyPress:
    """A single key event delivered to the prompt.

    Mirrors the readline-style shape ``{name, sequence, ctrl, meta}``:
    ``name`` is a symbolic key name ("up", "enter", "a", "1") and
    ``sequence`` is the raw text the key produced.
    """

    name: str | None = None
    sequence: str | None = None
    ctrl: bool = False
    meta: bool = False
    shift: bool = False


@dataclass(frozen=True)
class CheckboxShortcuts:
    """Key names for the bulk shortcuts. ``None`` disables a shortcut."""

    all: str | None = "a"
    invert: str | None = "i"


@dataclass(frozen=True)
class CheckboxTheme:
    """Glyphs and labels used when rendering the prompt.

    Colors live in the prompt_toolkit style (see ``render.CHECKBOX_STYLE``);
    the theme only controls the text.
    """

    prefix: str = "?"
    done_prefix: str = "✔"
    checked_icon: str = "◉"
    unchecked_icon: str = "◯"
    cursor_icon: str = "❯"
    disabled_label: str = "(disabled)"
    no_matches: str = "No matches"
    help_separator: str = " • "
    # Extra navigation styles: "vim" (j/k) and/or "emacs" (C-n/C-p)
    keybindings: tuple[str, ...] = ()


ValidateResult = Union[bool, str]
ValidateFn = Callable[[list[Choice]], Union[ValidateResult, Awaitable[ValidateResult]]]
Scorer = Callable[[str, str], Union[float, None]]


@dataclass
class CheckboxConfig:
    """Construction options for a searchable checkbox prompt."""

    message: str
    choices: Sequence[Union[str, Choice, Separator]]
    page_size: int = 7
    loop: bool = True
    required: bool = False
    validate: ValidateFn | None = None
    theme: CheckboxTheme = field(default_factory=CheckboxTheme)
    shortcuts: CheckboxShortcuts = field(default_factory=CheckboxShortcuts)
    search_key: str = "f"
    clear_search_key: str = "escape"
    scorer: Scorer | None = None

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {self.page_size}")
        if isinstance(self.theme, dict):
            self.theme = CheckboxTheme(**self.theme)
        if isinstance(self.shortcuts, dict):
            self.shortcuts = CheckboxShortcuts(**self.shortcuts)


@dataclass(frozen=True)
class CheckboxState:
    """Complete session state of one prompt.

    Instances are immutable; transitions return a new state. ``version``
    is bumped whenever ``items`` changes so observers can tell a redraw
    apart from a data change.

    ``view`` holds the indexes into ``items`` that are currently visible
    (the filtered view) and is recomputed whenever ``items`` or
    ``search_query`` change.
    """

    items: tuple[Item, ...]
    view: tuple[int, ...]
    active: int = 0
    search_query: str = ""
    search_active: bool = False
    active_item: int | None = None
    pre_search_item: int | None = None
    restore_active: int | None = None
    status: PromptStatus = PromptStatus.IDLE
    error: str | None = None
    version: int = 0

    @property
    def filtered_items(self) -> list[Item]:
        return [self.items[index] for index in self.view]
