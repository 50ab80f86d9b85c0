"""
Unit tests for the searchable checkbox state machine.
"""

import pytest

from openskills.prompts import (
    CheckboxConfig,
    Choice,
    KeyPress,
    NoSelectableChoicesError,
    PromptStatus,
    Separator,
    create_state,
    dispatch,
    handle_key,
    selected_values,
    submit,
)
from openskills.prompts.checkbox import INVALID_ERROR, REQUIRED_ERROR, normalize_choice


def key(name: str, **kwargs) -> KeyPress:
    sequence = kwargs.pop("sequence", name if len(name) == 1 else None)
    return KeyPress(name=name, sequence=sequence, **kwargs)


SPACE = KeyPress(name="space", sequence=" ")
UP = key("up")
DOWN = key("down")
ENTER = KeyPress(name="enter", sequence="\r")
ESCAPE = key("escape")
BACKSPACE = key("backspace")


def type_text(state, text, config):
    for char in text:
        name = char.lower() if char.isalnum() else None
        state = handle_key(state, KeyPress(name=name, sequence=char), config)
    return state


def press(state, config, *keys):
    for k in keys:
        state = handle_key(state, k, config)
    return state


def make(choices, **kwargs):
    config = CheckboxConfig(message="Pick", choices=choices, **kwargs)
    return config, create_state(config)


def active_value(state):
    return state.filtered_items[state.active].value


# =============================================================================
# Construction
# =============================================================================


class TestNormalization:
    """Tests for choice normalization."""

    def test_string_choice(self):
        """Test that strings become plain choices."""
        choice = normalize_choice("pdf")
        assert choice == Choice(value="pdf", name="pdf", checked_name="pdf", short="pdf")

    def test_defaults_from_value(self):
        """Test that name, checked_name and short fall back."""
        choice = normalize_choice(Choice(value=42))
        assert choice.name == "42"
        assert choice.checked_name == "42"
        assert choice.short == "42"

    def test_dict_choice(self):
        """Test mapping choices."""
        choice = normalize_choice({"value": "x", "name": "Ex", "checked": True})
        assert choice.name == "Ex"
        assert choice.checked is True

    def test_separator_passthrough(self):
        """Test that separators are kept as-is."""
        sep = Separator("--")
        assert normalize_choice(sep) is sep

    def test_rejects_unknown_type(self):
        """Test that unsupported values raise TypeError."""
        with pytest.raises(TypeError):
            normalize_choice(3.5)


class TestCreateState:
    """Tests for initial state construction."""

    def test_cursor_starts_on_first_selectable(self):
        """Test that leading separators and disabled rows are skipped."""
        _, state = make([Separator(), Choice("a", disabled=True), "b", "c"])
        assert state.active == 2
        assert state.active_item == 2
        assert state.status is PromptStatus.IDLE

    @pytest.mark.parametrize(
        "choices",
        [
            [],
            [Separator()],
            [Choice("a", disabled=True), Choice("b", disabled="(installed)")],
        ],
    )
    def test_no_selectable_choices(self, choices):
        """Test that a list without selectable rows is rejected."""
        with pytest.raises(NoSelectableChoicesError, match="No selectable choices"):
            make(choices)

    def test_page_size_must_be_positive(self):
        """Test config validation."""
        with pytest.raises(ValueError):
            CheckboxConfig(message="Pick", choices=["a"], page_size=0)


# =============================================================================
# Navigation
# =============================================================================


class TestNavigation:
    """Tests for cursor movement."""

    def test_down_skips_separators_and_disabled(self):
        """Test that movement lands only on selectable rows."""
        config, state = make(["a", Separator(), Choice("b", disabled=True), "c"])
        state = handle_key(state, DOWN, config)
        assert active_value(state) == "c"

    def test_loop_wraps(self):
        """Test wrap-around in both directions."""
        config, state = make(["a", "b", "c"])
        state = handle_key(state, UP, config)
        assert active_value(state) == "c"
        state = handle_key(state, DOWN, config)
        assert active_value(state) == "a"

    def test_no_loop_stops_at_bounds(self):
        """Test that navigation without loop stays at the ends."""
        config, state = make(["a", "b"], loop=False)
        assert handle_key(state, UP, config) == state
        state = press(state, config, DOWN, DOWN)
        assert active_value(state) == "b"

    def test_vim_keybindings(self):
        """Test j/k navigation when vim bindings are enabled."""
        config, state = make(["a", "b"], theme={"keybindings": ("vim",)})
        state = handle_key(state, key("j"), config)
        assert active_value(state) == "b"
        state = handle_key(state, key("k"), config)
        assert active_value(state) == "a"

    def test_emacs_keybindings(self):
        """Test C-n/C-p navigation when emacs bindings are enabled."""
        config, state = make(["a", "b"], theme={"keybindings": ("emacs",)})
        state = handle_key(state, key("n", ctrl=True), config)
        assert active_value(state) == "b"

    def test_unknown_key_is_ignored(self):
        """Test that unbound keys leave the state unchanged."""
        config, state = make(["a", "b"])
        assert handle_key(state, key("z"), config) == state


# =============================================================================
# Selection
# =============================================================================


class TestSelection:
    """Tests for toggling and bulk shortcuts."""

    @pytest.mark.asyncio
    async def test_toggle_every_row_returns_all_in_order(self):
        """Test that checking each row returns the full value set in order."""
        values = ["delta", "alpha", "charlie", "bravo"]
        config, state = make(values)
        for _ in values:
            state = press(state, config, SPACE, DOWN)

        state = await submit(state, config)
        assert state.status is PromptStatus.DONE
        assert selected_values(state) == values

    def test_space_bumps_version(self):
        """Test that item changes are versioned."""
        config, state = make(["a", "b"])
        toggled = handle_key(state, SPACE, config)
        assert toggled.version == state.version + 1
        assert toggled.items[0].checked is True
        assert state.items[0].checked is False

    def test_select_all_twice_unchecks_all(self):
        """Test that select-all on a fully checked list clears it."""
        config, state = make(["a", "b", "c"])
        state = handle_key(state, key("a"), config)
        assert selected_values(state) == ["a", "b", "c"]
        state = handle_key(state, key("a"), config)
        assert selected_values(state) == []

    def test_select_all_skips_disabled(self):
        """Test that disabled rows are untouched by select-all."""
        config, state = make(["a", Choice("b", disabled=True), "c"])
        state = handle_key(state, key("a"), config)
        assert selected_values(state) == ["a", "c"]
        assert state.items[1].checked is False

    def test_invert_twice_restores(self):
        """Test that inverting twice gives back the original checks."""
        config, state = make([Choice("a", checked=True), "b", Choice("c", checked=True), "d"])
        original = selected_values(state)
        once = handle_key(state, key("i"), config)
        assert selected_values(once) == ["b", "d"]
        twice = handle_key(once, key("i"), config)
        assert selected_values(twice) == original

    def test_disabled_shortcut(self):
        """Test that a None shortcut turns the key off."""
        config, state = make(["a", "b"], shortcuts={"all": None})
        assert handle_key(state, key("a"), config) == state

    def test_number_key_counts_selectable_rows(self):
        """Test that '2' targets the second selectable row, not the second row."""
        config, state = make([Choice("zero", disabled=True), "one", "two", "three"])
        state = handle_key(state, key("2"), config)
        assert active_value(state) == "two"
        assert selected_values(state) == ["two"]

    def test_number_key_out_of_range(self):
        """Test that numbers beyond the selectable rows do nothing."""
        config, state = make(["a", "b"])
        assert handle_key(state, key("5"), config) == state


# =============================================================================
# Search
# =============================================================================


class TestSearch:
    """Tests for search mode."""

    def test_filter_favours_matches(self):
        """Test that 'an' keeps only Banana."""
        config, state = make(["Apple", "Banana", "Cherry"])
        state = handle_key(state, key("f"), config)
        state = type_text(state, "an", config)
        assert [item.value for item in state.filtered_items] == ["Banana"]
        assert active_value(state) == "Banana"

    def test_search_matches_description(self):
        """Test that descriptions are searched too."""
        config, state = make([Choice("a", description="spreadsheet"), Choice("b", description="pdf")])
        state = type_text(handle_key(state, key("f"), config), "sheet", config)
        assert [item.value for item in state.filtered_items] == ["a"]

    def test_separators_hidden_while_filtering(self):
        """Test that separators are dropped from a filtered view."""
        config, state = make(["abc", Separator(), "abd"])
        state = type_text(handle_key(state, key("f"), config), "ab", config)
        assert all(isinstance(item, Choice) for item in state.filtered_items)

    def test_clear_restores_cursor(self):
        """Test that leaving search puts the cursor back on the pre-search item."""
        config, state = make(["a", "b", "c", "d"])
        state = press(state, config, DOWN, DOWN)
        assert active_value(state) == "c"

        state = handle_key(state, key("f"), config)
        state = type_text(state, "zzz", config)
        assert state.filtered_items == []

        state = handle_key(state, ESCAPE, config)
        assert not state.search_active
        assert state.search_query == ""
        assert active_value(state) == "c"

    def test_backspace_edits_query(self):
        """Test that backspace removes the last character and refilters."""
        config, state = make(["Apple", "Banana"])
        state = type_text(handle_key(state, key("f"), config), "bx", config)
        assert state.filtered_items == []
        state = handle_key(state, BACKSPACE, config)
        assert state.search_query == "b"
        assert [item.value for item in state.filtered_items] == ["Banana"]

    def test_shortcut_letters_are_typed_while_searching(self):
        """Test that 'a' and 'i' go to the query in search mode."""
        config, state = make(["Apple", "Kiwi"])
        state = handle_key(state, key("f"), config)
        state = type_text(state, "ai", config)
        assert state.search_query == "ai"
        assert selected_values(state) == []

    def test_space_toggles_while_searching(self):
        """Test that space checks the matched row instead of typing."""
        config, state = make(["Apple", "Banana", "Cherry"])
        state = type_text(handle_key(state, key("f"), config), "ch", config)
        state = handle_key(state, SPACE, config)
        assert state.search_query == "ch"
        assert selected_values(state) == ["Cherry"]

    def test_space_with_no_matches(self):
        """Test that space on an empty view changes nothing."""
        config, state = make(["a"])
        state = type_text(handle_key(state, key("f"), config), "zz", config)
        assert selected_values(handle_key(state, SPACE, config)) == []

    def test_custom_scorer(self):
        """Test that a pluggable scorer drives filtering."""

        def exact(query, text):
            return 1.0 if query == text.lower() else None

        config, state = make(["one", "two"], scorer=exact)
        state = type_text(handle_key(state, key("f"), config), "two", config)
        assert [item.value for item in state.filtered_items] == ["two"]


# =============================================================================
# Commit
# =============================================================================


class TestSubmit:
    """Tests for committing the selection."""

    @pytest.mark.asyncio
    async def test_prechecked_round_trip(self):
        """Test that committing right away returns the pre-checked values."""
        config, state = make(
            ["a", Choice("b", checked=True), "c", Choice("d", checked=True), "e"]
        )
        state = await submit(state, config)
        assert state.status is PromptStatus.DONE
        assert selected_values(state) == ["b", "d"]

    @pytest.mark.asyncio
    async def test_selection_order_ignores_filter_order(self):
        """Test that results follow list order even when committed mid-search."""
        config, state = make(["cabana", Choice("ban", checked=True)])
        state = handle_key(state, key("f"), config)
        state = type_text(state, "ban", config)
        assert [item.value for item in state.filtered_items] == ["ban", "cabana"]

        state = press(state, config, DOWN, SPACE)
        state = await dispatch(state, ENTER, config)
        assert state.status is PromptStatus.DONE
        assert selected_values(state) == ["cabana", "ban"]

    @pytest.mark.asyncio
    async def test_disabled_prechecked_is_not_returned(self):
        """Test that a disabled choice built with checked=True is excluded."""
        config, state = make([Choice("locked", disabled=True, checked=True), "free"])
        state = await submit(state, config)
        assert state.status is PromptStatus.DONE
        assert selected_values(state) == []

    @pytest.mark.asyncio
    async def test_required_blocks_empty_commit(self):
        """Test that required prompts stay idle with an error."""
        config, state = make(["a", "b"], required=True)
        state = await dispatch(state, ENTER, config)
        assert state.status is PromptStatus.IDLE
        assert state.error == REQUIRED_ERROR

    @pytest.mark.asyncio
    async def test_error_cleared_by_next_toggle(self):
        """Test that toggling clears a previous error."""
        config, state = make(["a"], required=True)
        state = await submit(state, config)
        state = handle_key(state, SPACE, config)
        assert state.error is None

    @pytest.mark.asyncio
    async def test_validate_message(self):
        """Test that a string from validate becomes the error."""
        config, state = make(
            ["a", "b"],
            validate=lambda selection: len(selection) == 2 or "Pick both",
        )
        state = await submit(handle_key(state, SPACE, config), config)
        assert state.status is PromptStatus.IDLE
        assert state.error == "Pick both"

        state = await submit(handle_key(state, key("a"), config), config)
        assert state.status is PromptStatus.DONE

    @pytest.mark.asyncio
    async def test_async_validate_false(self):
        """Test awaitable validate returning False."""

        async def reject(selection):
            return False

        config, state = make(["a"], validate=reject)
        state = await submit(state, config)
        assert state.error == INVALID_ERROR

    @pytest.mark.asyncio
    async def test_validate_receives_checked_choices(self):
        """Test the argument passed to validate."""
        seen = []

        def capture(selection):
            seen.extend(choice.value for choice in selection)
            return True

        config, state = make([Choice("a", checked=True), "b"], validate=capture)
        await submit(state, config)
        assert seen == ["a"]

    @pytest.mark.asyncio
    async def test_done_state_ignores_keys(self):
        """Test that a committed prompt no longer changes."""
        config, state = make(["a"])
        state = await submit(state, config)
        assert handle_key(state, SPACE, config) == state
        assert await dispatch(state, ENTER, config) == state
