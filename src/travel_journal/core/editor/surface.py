"""Headless editing surface used by the command line."""

from loguru import logger

from travel_journal.core.editor.formatting import InlineFormat


class BufferSurface:
    """Holds the displayed content in memory.

    Formatting commands are recorded rather than rendered; there is no
    selection to apply them to outside an interactive editor.
    """

    def __init__(self, content: str = "") -> None:
        self.content = content
        self.placeholder: str | None = None
        self.applied: list[InlineFormat] = []

    def get_content(self) -> str:
        return self.content

    def set_content(self, formatted_text: str) -> None:
        self.content = formatted_text
        self.placeholder = None

    def show_placeholder(self, message: str) -> None:
        self.content = ""
        self.placeholder = message

    def exec_format(self, command: InlineFormat) -> None:
        logger.debug("Format command {} recorded", command)
        self.applied.append(command)
