"""
Rendering for the searchable checkbox prompt.

``render(state, config)`` turns a state into one full frame of
prompt_toolkit formatted text (a list of ``(style, text)`` tuples).
Frames are full redraws, never diffs.
"""

from prompt_toolkit.formatted_text import StyleAndTextTuples, fragment_list_to_text
from prompt_toolkit.styles import Style

from openskills.prompts.checkbox import is_selectable, selected_choices
from openskills.prompts.models import (
    CheckboxConfig,
    CheckboxState,
    Choice,
    Item,
    PromptStatus,
    is_separator,
)

CHECKBOX_STYLES = {
    "checkbox.prefix": "bold #00d4ff",
    "checkbox.done-prefix": "bold #00ff88",
    "checkbox.message": "bold",
    "checkbox.answer": "#00d4ff",
    "checkbox.highlight": "bold #00d4ff",
    "checkbox.checked": "#00ff88",
    "checkbox.disabled": "#666666",
    "checkbox.separator": "#666666",
    "checkbox.description": "#00bcd4",
    "checkbox.error": "#ff6b6b",
    "checkbox.search-label": "bold",
    "checkbox.search-hint": "#888888",
    "checkbox.help-key": "bold",
    "checkbox.help-action": "#888888",
    "checkbox.dim": "#666666",
}

CHECKBOX_STYLE = Style.from_dict(CHECKBOX_STYLES)


def page_positions(length: int, active: int, page_size: int, loop: bool) -> list[int]:
    """Positions of the view to show in the current page.

    With ``loop`` the list behaves as a ring once the cursor passes the
    middle of the page; without it the window slides just enough to keep
    the cursor visible.
    """
    if length <= page_size:
        return list(range(length))

    middle = page_size // 2

    if loop:
        start = 0 if active < middle else active - middle
        return [(start + offset) % length for offset in range(page_size)]

    start = min(max(active - middle, 0), length - page_size)
    return list(range(start, start + page_size))


def _render_row(item: Item, is_active: bool, config: CheckboxConfig) -> StyleAndTextTuples:
    theme = config.theme

    if is_separator(item):
        return [("class:checkbox.separator", f" {item.separator}")]

    if item.disabled:
        label = item.disabled if isinstance(item.disabled, str) else theme.disabled_label
        return [("class:checkbox.disabled", f"- {item.name} {label}")]

    cursor = theme.cursor_icon if is_active else " "
    name = item.checked_name if item.checked else item.name
    text_style = "class:checkbox.highlight" if is_active else ""

    if item.checked:
        icon = ("class:checkbox.checked", theme.checked_icon)
    else:
        icon = (text_style, theme.unchecked_icon)

    return [(text_style, cursor), icon, (text_style, f" {name}")]


def _help_line(state: CheckboxState, config: CheckboxConfig) -> StyleAndTextTuples:
    keys: list[tuple[str, str]] = [
        ("↑↓", "navigate"),
        ("space", "select"),
        (config.search_key, "search"),
    ]
    if state.search_active:
        clear_label = "esc" if config.clear_search_key == "escape" else config.clear_search_key
        keys.append((clear_label, "clear"))
    if not state.search_active and config.shortcuts.all:
        keys.append((config.shortcuts.all, "all"))
    if not state.search_active and config.shortcuts.invert:
        keys.append((config.shortcuts.invert, "invert"))
    keys.append(("⏎", "submit"))

    fragments: StyleAndTextTuples = []
    for i, (key, action) in enumerate(keys):
        if i:
            fragments.append(("class:checkbox.dim", config.theme.help_separator))
        fragments.append(("class:checkbox.help-key", key))
        fragments.append(("", " "))
        fragments.append(("class:checkbox.help-action", action))
    return fragments


def _header(state: CheckboxState, config: CheckboxConfig) -> StyleAndTextTuples:
    if state.status is PromptStatus.DONE:
        prefix = ("class:checkbox.done-prefix", config.theme.done_prefix)
    else:
        prefix = ("class:checkbox.prefix", config.theme.prefix)
    return [prefix, ("", " "), ("class:checkbox.message", config.message)]


def render(state: CheckboxState, config: CheckboxConfig) -> StyleAndTextTuples:
    """Render one frame for the given state.

    Args:
        state: State to render.
        config: Prompt configuration (message, theme, keys, page size).

    Returns:
        Formatted text for prompt_toolkit.
    """
    header = _header(state, config)

    if state.status is PromptStatus.DONE:
        answer = ", ".join(choice.short for choice in selected_choices(state))
        if answer:
            return header + [("", " "), ("class:checkbox.answer", answer)]
        return header

    if state.search_active:
        hint = ("class:checkbox.highlight", state.search_query or "type to search")
    else:
        hint = (
            "class:checkbox.search-hint",
            state.search_query or f"press {config.search_key} to search",
        )

    lines: list[StyleAndTextTuples] = [
        header,
        [("class:checkbox.search-label", "Search:"), ("", " "), hint],
    ]

    filtered = state.filtered_items
    description: str | None = None

    if not filtered:
        lines.append([("class:checkbox.dim", f"  {config.theme.no_matches}")])
    else:
        for position in page_positions(len(filtered), state.active, config.page_size, config.loop):
            item = filtered[position]
            is_active = position == state.active
            if is_active and isinstance(item, Choice) and is_selectable(item):
                description = item.description
            lines.append(_render_row(item, is_active, config))

    lines.append([("", " ")])
    if description:
        lines.append([("class:checkbox.description", description)])
    if state.error:
        lines.append([("class:checkbox.error", state.error)])
    lines.append(_help_line(state, config))

    frame: StyleAndTextTuples = []
    for i, line in enumerate(lines):
        if i:
            frame.append(("", "\n"))
        frame.extend(line)
    return frame


def render_text(state: CheckboxState, config: CheckboxConfig) -> str:
    """Render a frame as plain text, without styles."""
    return fragment_list_to_text(render(state, config))
