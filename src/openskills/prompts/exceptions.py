"""
Prompt exceptions for openskills.

Defines the errors raised by the interactive selection prompts.
"""


class NoSelectableChoicesError(ValueError):
    """Raised at construction when no choice can be selected.

    This is a programmer error: the caller passed an empty list, only
    separators, or only disabled choices.
    """

    def __init__(self, message: str | None = None):
        super().__init__(
            message or "[searchable checkbox] No selectable choices. All choices are disabled."
        )


class PromptCancelledError(KeyboardInterrupt):
    """The user aborted the prompt (Ctrl-C).

    Subclasses KeyboardInterrupt so that callers which do not care still
    unwind as they would for a plain interrupt.
    """

    pass
