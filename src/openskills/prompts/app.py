"""
Terminal driver for the searchable checkbox prompt.

Runs an inline (non full-screen) prompt_toolkit Application. Every key
press is converted into a ``KeyPress`` and fed to the state machine;
the layout re-renders the whole frame from the new state.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from prompt_toolkit import Application
from prompt_toolkit.input import Input
from prompt_toolkit.key_binding import KeyBindings, KeyPressEvent
from prompt_toolkit.key_binding.key_processor import KeyPress as ToolkitKeyPress
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import FormattedTextControl, Layout, Window
from prompt_toolkit.output import Output

from openskills.prompts.checkbox import (
    create_state,
    handle_key,
    is_enter_key,
    selected_values,
    submit,
)
from openskills.prompts.exceptions import PromptCancelledError
from openskills.prompts.models import (
    CheckboxConfig,
    CheckboxShortcuts,
    CheckboxTheme,
    Choice,
    KeyPress,
    PromptStatus,
    Scorer,
    Separator,
    ValidateFn,
)
from openskills.prompts.render import CHECKBOX_STYLE, render

logger = logging.getLogger(__name__)

KEY_NAMES: dict[str, str] = {
    Keys.Up: "up",
    Keys.Down: "down",
    Keys.Left: "left",
    Keys.Right: "right",
    Keys.Home: "home",
    Keys.End: "end",
    Keys.PageUp: "pageup",
    Keys.PageDown: "pagedown",
    Keys.Delete: "delete",
    Keys.Escape: "escape",
    Keys.ControlM: "enter",
    Keys.ControlJ: "enter",
    Keys.ControlH: "backspace",
    Keys.ControlI: "tab",
}


def to_key_press(key_press: ToolkitKeyPress) -> KeyPress:
    """Convert a prompt_toolkit key press into the prompt's KeyPress."""
    key = key_press.key
    data = key_press.data

    if key in KEY_NAMES:
        return KeyPress(name=KEY_NAMES[key], sequence=data)

    if key == " ":
        return KeyPress(name="space", sequence=" ")

    if isinstance(key, Keys):
        value = key.value
        if value.startswith("c-") and len(value) == 3:
            return KeyPress(name=value[2], sequence=data, ctrl=True)
        return KeyPress(name=value, sequence=data)

    if len(key) == 1:
        name = key.lower() if key.isalnum() else None
        return KeyPress(name=name, sequence=key, shift=key.isupper())

    return KeyPress(sequence=data)


class CheckboxPrompt:
    """One interactive checkbox session bound to a terminal.

    The state machine is created eagerly so that a choice list without
    selectable rows fails before anything is drawn.
    """

    def __init__(
        self,
        config: CheckboxConfig,
        input: Input | None = None,
        output: Output | None = None,
    ):
        self.config = config
        self.state = create_state(config)
        self._busy = False
        self._input = input
        self._output = output

    def _get_text(self):
        return render(self.state, self.config)

    def feed(self, event: KeyPressEvent) -> None:
        """Handle a key press delivered by prompt_toolkit."""
        if self._busy or self.state.status is PromptStatus.DONE:
            # Keys arriving while validate is pending are dropped.
            return

        key = to_key_press(event.key_sequence[-1])

        if is_enter_key(key):
            self._busy = True
            event.app.create_background_task(self._commit(event.app))
            return

        self.state = handle_key(self.state, key, self.config)

    async def _commit(self, app: Application) -> None:
        try:
            self.state = await submit(self.state, self.config)
        except Exception as e:
            logger.debug("Validation raised %r", e)
            app.exit(exception=e)
            return
        finally:
            self._busy = False

        if self.state.status is PromptStatus.DONE:
            app.exit(result=selected_values(self.state))
        else:
            app.invalidate()

    def _key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("c-c")
        def cancel(event: KeyPressEvent) -> None:
            event.app.exit(exception=PromptCancelledError, style="class:aborting")

        @kb.add(Keys.Any)
        def any_key(event: KeyPressEvent) -> None:
            self.feed(event)

        return kb

    def build_application(self) -> Application:
        layout = Layout(
            Window(
                FormattedTextControl(self._get_text, show_cursor=False),
                dont_extend_height=True,
                wrap_lines=True,
            )
        )
        return Application(
            layout=layout,
            key_bindings=self._key_bindings(),
            style=CHECKBOX_STYLE,
            full_screen=False,
            erase_when_done=False,
            input=self._input,
            output=self._output,
        )

    async def run_async(self) -> list[Any]:
        """Run the prompt and return the selected values in original order.

        Raises:
            PromptCancelledError: If the user pressed Ctrl-C.
        """
        return await self.build_application().run_async()


async def searchable_checkbox(
    message: str,
    choices: Sequence[str | Choice | Separator],
    *,
    page_size: int = 7,
    loop: bool = True,
    required: bool = False,
    validate: ValidateFn | None = None,
    theme: CheckboxTheme | dict | None = None,
    shortcuts: CheckboxShortcuts | dict | None = None,
    search_key: str = "f",
    clear_search_key: str = "escape",
    scorer: Scorer | None = None,
    input: Input | None = None,
    output: Output | None = None,
) -> list[Any]:
    """Ask the user to pick any number of choices, with fuzzy search.

    Args:
        message: Question shown on the first line.
        choices: Strings, Choice objects and Separators.
        page_size: Number of rows visible at once.
        loop: Whether navigation wraps around.
        required: Reject a commit with nothing checked.
        validate: Optional (async) predicate over the checked choices; may
            return an error string.
        theme: Glyph overrides.
        shortcuts: Keys for select-all / invert (``None`` disables one).
        search_key: Key that enters search mode.
        clear_search_key: Key that leaves search mode.
        scorer: Fuzzy scoring function.
        input: prompt_toolkit input (defaults to the terminal).
        output: prompt_toolkit output (defaults to the terminal).

    Returns:
        The values of the checked choices, in original list order.

    Raises:
        NoSelectableChoicesError: If no choice is selectable.
        PromptCancelledError: If the user pressed Ctrl-C.
    """
    config = CheckboxConfig(
        message=message,
        choices=choices,
        page_size=page_size,
        loop=loop,
        required=required,
        validate=validate,
        theme=theme or CheckboxTheme(),
        shortcuts=shortcuts or CheckboxShortcuts(),
        search_key=search_key,
        clear_search_key=clear_search_key,
        scorer=scorer,
    )
    prompt = CheckboxPrompt(config, input=input, output=output)
    return await prompt.run_async()


def checkbox(message: str, choices: Sequence[str | Choice | Separator], **kwargs: Any) -> list[Any]:
    """Synchronous wrapper around ``searchable_checkbox``."""
    return asyncio.run(searchable_checkbox(message, choices, **kwargs))
