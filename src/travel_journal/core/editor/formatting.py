"""Inline formatting commands understood by the editing surface."""

from enum import StrEnum

from travel_journal.errors import UnknownFormatCommandError


class InlineFormat(StrEnum):
    BOLD = "bold"
    ITALIC = "italic"
    HEADING2 = "heading2"
    BULLET_LIST = "bullet_list"


# Ctrl/Cmd + key
SHORTCUTS: dict[str, InlineFormat] = {
    "b": InlineFormat.BOLD,
    "i": InlineFormat.ITALIC,
}


def parse_format_command(value: str | InlineFormat) -> InlineFormat:
    """Return the InlineFormat named by value, raising for anything else."""
    try:
        return InlineFormat(value)
    except ValueError:
        msg = f"Unsupported format command {value!r}, expected one of {[f.value for f in InlineFormat]}"
        raise UnknownFormatCommandError(msg) from None


def command_for_shortcut(key: str, *, ctrl: bool = False, meta: bool = False) -> InlineFormat | None:
    """Map a key press to a formatting command, or None if it is not a shortcut."""
    if not (ctrl or meta):
        return None
    return SHORTCUTS.get(key.lower())
