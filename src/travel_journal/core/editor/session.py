"""Page editor session: the open page, its unsaved text and the autosave timer."""

import threading

from loguru import logger

from travel_journal.config import AUTOSAVE_DELAY_MS, EDITOR_PLACEHOLDER
from travel_journal.core.editor.formatting import (
    InlineFormat,
    command_for_shortcut,
    parse_format_command,
)
from travel_journal.core.editor.scheduler import ThreadingScheduler
from travel_journal.core.repository import DocumentRepository
from travel_journal.errors import StorageFailure
from travel_journal.models.node import PageContent
from travel_journal.protocols import EditingSurfaceProtocol, SchedulerProtocol, TimerHandle


class PageEditorSession:
    """Edits one page at a time and autosaves it after a pause in typing.

    Every content change re-arms a single debounce timer; when it fires, the
    latest text is written to the page that was active when the timer was
    armed, and only if that page is still the active one. Switching pages or
    closing the session flushes pending text first and cancels the timer.
    """

    def __init__(
        self,
        repository: DocumentRepository,
        surface: EditingSurfaceProtocol,
        *,
        scheduler: SchedulerProtocol | None = None,
        delay_ms: int = AUTOSAVE_DELAY_MS,
    ) -> None:
        self._repository = repository
        self._surface = surface
        self._scheduler = scheduler or ThreadingScheduler()
        self.delay_ms = delay_ms

        self._lock = threading.RLock()
        self._destination_id: str | None = None
        self._page_id: str | None = None
        self._pending: str | None = None
        self._timer: TimerHandle | None = None
        # Bumped on every arm/cancel so a timer that already fired but is
        # waiting for the lock can tell it has been superseded.
        self._generation = 0

    @property
    def active_destination_id(self) -> str | None:
        return self._destination_id

    @property
    def active_page_id(self) -> str | None:
        return self._page_id

    @property
    def has_pending_changes(self) -> bool:
        return self._pending is not None

    def load(self, destination_id: str, page_id: str | None) -> PageContent | None:
        """Open a page for editing.

        Pending text of the page being left is saved first. If page_id is not
        a page (a section, an unknown id, or None) the session stays on the
        destination with no page open and the surface shows a placeholder.
        If saving the pending text fails, the error propagates and the session
        stays on the previous page with that text still pending.
        """
        with self._lock:
            self.flush_now()
            self._destination_id = destination_id
            content = self._repository.get_page(destination_id, page_id) if page_id else None
            if content is None:
                self._page_id = None
                self._surface.show_placeholder(EDITOR_PLACEHOLDER)
                return None
            self._page_id = content.id
            self._surface.set_content(content.formatted_text)
            logger.debug("Editing page {} of {}", content.id, destination_id)
            return content

    def on_content_changed(self, formatted_text: str | None = None) -> None:
        """Record the latest text and restart the autosave countdown.

        Args:
            formatted_text: New content; read from the surface when omitted.
        """
        with self._lock:
            if self._destination_id is None or self._page_id is None:
                return
            self._pending = self._surface.get_content() if formatted_text is None else formatted_text
            self._cancel_timer()
            generation = self._generation
            destination_id, page_id = self._destination_id, self._page_id
            self._timer = self._scheduler.call_later(
                self.delay_ms, lambda: self._on_timer(generation, destination_id, page_id)
            )

    def _on_timer(self, generation: int, destination_id: str, page_id: str) -> None:
        with self._lock:
            if generation != self._generation:
                return
            if (destination_id, page_id) != (self._destination_id, self._page_id):
                return
            self._timer = None
            try:
                self._write_pending()
            except StorageFailure as e:
                logger.opt(exception=e).warning(
                    "Autosave of page {} failed, keeping the text for the next flush", page_id
                )

    def apply_inline_format(self, command: str | InlineFormat) -> None:
        """Forward a formatting command to the surface and autosave the result."""
        command = parse_format_command(command)
        with self._lock:
            if self._page_id is None:
                logger.debug("No page open, ignoring format command {}", command)
                return
            self._surface.exec_format(command)
            self.on_content_changed()

    def handle_shortcut(self, key: str, *, ctrl: bool = False, meta: bool = False) -> bool:
        """Apply the format bound to a Ctrl/Cmd key press. Returns False for other keys."""
        command = command_for_shortcut(key, ctrl=ctrl, meta=meta)
        if command is None:
            return False
        self.apply_inline_format(command)
        return True

    def flush_now(self) -> None:
        """Save pending text immediately and cancel the autosave timer."""
        with self._lock:
            self._cancel_timer()
            self._write_pending()

    def close(self) -> None:
        """Flush, then leave the session with nothing open."""
        with self._lock:
            self.flush_now()
            self._destination_id = None
            self._page_id = None

    def _cancel_timer(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _write_pending(self) -> None:
        text = self._pending
        if text is None:
            return
        if self._destination_id is None or self._page_id is None:
            self._pending = None
            return
        # Pending text survives a failed save.
        saved = self._repository.save_page_content(self._destination_id, self._page_id, text)
        self._pending = None
        if saved:
            logger.debug("Saved page {} ({} chars)", self._page_id, len(text))
