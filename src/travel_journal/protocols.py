"""Protocols for the collaborators the journal core depends on."""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from travel_journal.core.editor.formatting import InlineFormat


@runtime_checkable
class StoreProtocol(Protocol):
    """Key-value store holding JSON-serializable values."""

    def get(self, key: str) -> Any | None:
        """Return the stored value, or None if absent."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Persist a value under key."""
        ...

    def delete(self, key: str) -> None:
        """Remove key if present."""
        ...

    def keys(self, prefix: str = "") -> list[str]:
        """Return stored keys starting with prefix."""
        ...


@runtime_checkable
class EditingSurfaceProtocol(Protocol):
    """The rich-text editing widget showing the active page."""

    def get_content(self) -> str:
        """Return the serialized content currently displayed."""
        ...

    def set_content(self, formatted_text: str) -> None:
        """Replace the displayed content."""
        ...

    def show_placeholder(self, message: str) -> None:
        """Show an empty, non-editable state with a hint."""
        ...

    def exec_format(self, command: InlineFormat) -> None:
        """Apply an inline formatting command at the current selection."""
        ...


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


@runtime_checkable
class SchedulerProtocol(Protocol):
    """Runs callbacks after a delay."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Schedule callback; the returned handle cancels it."""
        ...
