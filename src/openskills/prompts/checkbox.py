"""
Searchable checkbox state machine.

The prompt is modelled as an immutable ``CheckboxState`` plus pure
transition functions:

- ``create_state(config)`` normalizes the choices and builds the first state
- ``handle_key(state, key, config)`` applies one key press (everything but Enter)
- ``submit(state, config)`` runs the commit logic, awaiting ``validate``
- ``dispatch(state, key, config)`` routes a key to one of the two above

Rendering lives in ``openskills.prompts.render`` and the terminal loop in
``openskills.prompts.app``; neither is needed to exercise the transitions.
"""

import inspect
import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace
from typing import Any

from openskills.prompts.exceptions import NoSelectableChoicesError
from openskills.prompts.fuzzy import filter_indexes
from openskills.prompts.models import (
    CheckboxConfig,
    CheckboxState,
    Choice,
    Item,
    KeyPress,
    PromptStatus,
    Separator,
    is_separator,
)

logger = logging.getLogger(__name__)

REQUIRED_ERROR = "At least one choice must be selected"
INVALID_ERROR = "You must select a valid value"


# =============================================================================
# Item helpers
# =============================================================================


def is_selectable(item: Item) -> bool:
    """A row the cursor can land on: a Choice that is not disabled."""
    return not is_separator(item) and not item.disabled


def is_checked(item: Item) -> bool:
    """A selectable row that is currently checked.

    Disabled rows never count as checked, even when constructed with
    ``checked=True``.
    """
    return is_selectable(item) and item.checked


def toggle(item: Item) -> Item:
    if is_selectable(item):
        return replace(item, checked=not item.checked)
    return item


def check(item: Item, checked: bool) -> Item:
    if is_selectable(item):
        return replace(item, checked=checked)
    return item


def normalize_choice(choice: Any) -> Item:
    """Normalize one raw choice into a Choice or Separator.

    Plain strings become unchecked choices whose value, name and short
    label are the string. Mappings are treated as Choice keyword arguments.
    """
    if is_separator(choice):
        return choice

    if isinstance(choice, str):
        return Choice(value=choice, name=choice, checked_name=choice, short=choice)

    if isinstance(choice, dict):
        choice = Choice(**choice)

    if not isinstance(choice, Choice):
        raise TypeError(f"Unsupported choice type: {type(choice).__name__}")

    name = choice.name if choice.name is not None else str(choice.value)
    return Choice(
        value=choice.value,
        name=name,
        checked_name=choice.checked_name if choice.checked_name is not None else name,
        short=choice.short if choice.short is not None else name,
        description=choice.description or None,
        disabled=choice.disabled if choice.disabled is not None else False,
        checked=bool(choice.checked),
    )


def normalize_choices(choices: Iterable[Any]) -> tuple[Item, ...]:
    return tuple(normalize_choice(choice) for choice in choices)


def selected_choices(state: CheckboxState) -> list[Choice]:
    """Checked choices in original list order."""
    return [item for item in state.items if is_checked(item)]


def selected_values(state: CheckboxState) -> list[Any]:
    """Values of the checked choices in original list order."""
    return [choice.value for choice in selected_choices(state)]


# =============================================================================
# Key classification
# =============================================================================


def is_up_key(key: KeyPress, keybindings: Sequence[str] = ()) -> bool:
    return (
        key.name == "up"
        or ("vim" in keybindings and key.name == "k" and not key.ctrl)
        or ("emacs" in keybindings and key.ctrl and key.name == "p")
    )


def is_down_key(key: KeyPress, keybindings: Sequence[str] = ()) -> bool:
    return (
        key.name == "down"
        or ("vim" in keybindings and key.name == "j" and not key.ctrl)
        or ("emacs" in keybindings and key.ctrl and key.name == "n")
    )


def is_space_key(key: KeyPress) -> bool:
    return key.name == "space"


def is_enter_key(key: KeyPress) -> bool:
    return key.name in ("enter", "return")


def is_backspace_key(key: KeyPress) -> bool:
    return key.name == "backspace"


def is_number_key(key: KeyPress) -> bool:
    return key.name is not None and len(key.name) == 1 and key.name in "1234567890"


def is_printable_key(key: KeyPress) -> bool:
    """Single visible ASCII character without modifiers.

    Space is excluded so that it keeps toggling rows while searching.
    """
    if key.ctrl or key.meta:
        return False
    if not key.sequence or len(key.sequence) != 1:
        return False
    code = ord(key.sequence)
    return 33 <= code <= 126


# =============================================================================
# State construction
# =============================================================================


def _bounds(state: CheckboxState) -> tuple[int, int]:
    """First and last selectable positions in the filtered view (-1 if none)."""
    positions = [i for i, item in enumerate(state.filtered_items) if is_selectable(item)]
    if not positions:
        return -1, -1
    return positions[0], positions[-1]


def _refilter(state: CheckboxState, config: CheckboxConfig) -> CheckboxState:
    view = filter_indexes(state.items, state.search_query, config.scorer)
    return replace(state, view=view)


def _settle(state: CheckboxState) -> CheckboxState:
    """Re-home the cursor and record which absolute item it points at.

    Runs after every transition so the cursor is always on a selectable
    row of the current view, or parked at 0 when there is none.
    """
    filtered = state.filtered_items
    active = state.active

    if not state.search_active and state.restore_active is not None:
        restored = state.restore_active
        state = replace(state, restore_active=None)
        if restored in state.view:
            position = state.view.index(restored)
            if is_selectable(filtered[position]):
                return _track(replace(state, active=position))

    first = next((i for i, item in enumerate(filtered) if is_selectable(item)), -1)
    if not filtered or first == -1:
        active = 0
    elif active >= len(filtered) or not is_selectable(filtered[active]):
        active = first

    return _track(replace(state, active=active))


def _track(state: CheckboxState) -> CheckboxState:
    if state.active < len(state.view):
        return replace(state, active_item=state.view[state.active])
    if not state.search_active:
        return replace(state, active_item=state.active)
    return state


def create_state(config: CheckboxConfig) -> CheckboxState:
    """Build the initial prompt state.

    Raises:
        NoSelectableChoicesError: If no choice is selectable.
    """
    items = normalize_choices(config.choices)
    if not any(is_selectable(item) for item in items):
        raise NoSelectableChoicesError()

    state = CheckboxState(items=items, view=filter_indexes(items, "", config.scorer))
    return _settle(state)


def _with_items(state: CheckboxState, items: Sequence[Item]) -> CheckboxState:
    return replace(state, items=tuple(items), version=state.version + 1)


# =============================================================================
# Transitions
# =============================================================================


def handle_key(state: CheckboxState, key: KeyPress, config: CheckboxConfig) -> CheckboxState:
    """Apply one key press to the state.

    Enter is not handled here because committing may await the caller's
    validate function; see ``submit``. Unknown keys return the state
    unchanged.

    Args:
        state: Current state.
        key: The key press.
        config: Prompt configuration.

    Returns:
        The next state.
    """
    if state.status is PromptStatus.DONE:
        return state

    keybindings = config.theme.keybindings
    shortcuts = config.shortcuts

    if not state.search_active and key.name == config.search_key:
        state = replace(
            state,
            pre_search_item=state.active_item,
            search_active=True,
            search_query="",
            error=None,
        )
        return _settle(_refilter(state, config))

    if state.search_active:
        if key.name == config.clear_search_key:
            state = replace(
                state,
                restore_active=state.pre_search_item,
                pre_search_item=None,
                search_active=False,
                search_query="",
                error=None,
            )
            return _settle(_refilter(state, config))

        if is_backspace_key(key):
            state = replace(state, search_query=state.search_query[:-1], error=None)
            return _settle(_refilter(state, config))

        if is_printable_key(key):
            state = replace(state, search_query=state.search_query + key.sequence, error=None)
            return _settle(_refilter(state, config))

    if is_enter_key(key):
        return state

    first, last = _bounds(state)
    up = is_up_key(key, keybindings)
    down = is_down_key(key, keybindings)

    if first != -1 and (up or down):
        if config.loop or (up and state.active != first) or (down and state.active != last):
            filtered = state.filtered_items
            offset = -1 if up else 1
            position = state.active
            while True:
                position = (position + offset) % len(filtered)
                if is_selectable(filtered[position]):
                    break
            return _track(replace(state, active=position))
        return state

    if is_space_key(key):
        state = replace(state, error=None)
        if state.active >= len(state.view):
            return state
        target = state.view[state.active]
        items = [toggle(item) if i == target else item for i, item in enumerate(state.items)]
        return _settle(_refilter(_with_items(state, items), config))

    if not state.search_active and shortcuts.all and key.name == shortcuts.all:
        select_all = any(is_selectable(item) and not item.checked for item in state.items)
        return _settle(
            _refilter(_with_items(state, [check(item, select_all) for item in state.items]), config)
        )

    if not state.search_active and shortcuts.invert and key.name == shortcuts.invert:
        return _settle(_refilter(_with_items(state, [toggle(item) for item in state.items]), config))

    if first != -1 and is_number_key(key):
        wanted = int(key.name) - 1
        selectable = [i for i, item in enumerate(state.filtered_items) if is_selectable(item)]
        if 0 <= wanted < len(selectable):
            position = selectable[wanted]
            target = state.view[position]
            items = [toggle(item) if i == target else item for i, item in enumerate(state.items)]
            state = _with_items(replace(state, active=position), items)
            return _settle(_refilter(state, config))
        return state

    return state


async def submit(state: CheckboxState, config: CheckboxConfig) -> CheckboxState:
    """Attempt to commit the current selection.

    A required prompt with nothing checked, or a validate function that
    returns anything but True, keeps the prompt idle and sets ``error``.

    Args:
        state: Current state.
        config: Prompt configuration.

    Returns:
        The next state; ``status`` is DONE on success.
    """
    if state.status is PromptStatus.DONE:
        return state

    selection = selected_choices(state)

    if config.required and not selection:
        return replace(state, error=REQUIRED_ERROR)

    result: Any = True
    if config.validate is not None:
        result = config.validate(list(selection))
        if inspect.isawaitable(result):
            result = await result

    if result is True:
        logger.debug("Checkbox committed with %d selected item(s)", len(selection))
        return replace(state, status=PromptStatus.DONE, error=None)

    message = result if isinstance(result, str) and result else INVALID_ERROR
    return replace(state, error=message)


async def dispatch(state: CheckboxState, key: KeyPress, config: CheckboxConfig) -> CheckboxState:
    """Route a key press: Enter commits, everything else is a transition."""
    if state.status is not PromptStatus.DONE and is_enter_key(key):
        return await submit(state, config)
    return handle_key(state, key, config)


__all__ = [
    "INVALID_ERROR",
    "REQUIRED_ERROR",
    "Separator",
    "create_state",
    "dispatch",
    "handle_key",
    "is_checked",
    "is_selectable",
    "normalize_choices",
    "selected_choices",
    "selected_values",
    "submit",
]
