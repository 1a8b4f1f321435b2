"""Errors raised by PromptCraft."""


class NothingToDoError(ValueError):
    """A generate, save or copy was requested with no input or no output yet.

    Callers should show `message` to the user as a corrective hint.
    """

    def __init__(self, title: str, message: str):
        super().__init__(f"{title}: {message}")
        self.title = title
        self.message = message
