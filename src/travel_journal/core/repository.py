"""Document repository: the single gate for reading and mutating journals.

Each destination's JournalDocument is stored whole under one key. Every
operation reads the latest stored document, changes it, and writes it back
while holding that destination's lock, so callers on different threads (UI
events, autosave timers) never lose each other's updates.
"""

import threading
import time
from collections.abc import Callable

from loguru import logger

from travel_journal.config import (
    DEFAULT_PAGE_TITLE,
    DEFAULT_SECTION_TITLE,
    DOCS_KEY_PREFIX,
    FIRST_PAGE_TITLE,
)
from travel_journal.core.storage.json_codec import dump_document_data, parse_document_data
from travel_journal.core.tree import engine
from travel_journal.errors import InvalidStructureError, NodeNotFoundError
from travel_journal.models.node import JournalDocument, Node, PageContent
from travel_journal.models.operations import (
    AddPage,
    AddSection,
    Delete,
    Indent,
    MoveDown,
    MoveUp,
    Outdent,
    Rename,
    TreeOp,
)
from travel_journal.protocols import StoreProtocol


def _now_ms() -> int:
    return int(time.time() * 1000)


def new_document(*, now: int) -> JournalDocument:
    """A fresh journal: one page titled "Page 1", selected."""
    page, content = engine.create_page(FIRST_PAGE_TITLE, now=now)
    return JournalDocument(tree=[page], pages={page.id: content}, selected_id=page.id)


class DocumentRepository:
    """Owns the journal documents of all destinations."""

    def __init__(
        self,
        store: StoreProtocol,
        *,
        clock: Callable[[], int] = _now_ms,
        key_prefix: str = DOCS_KEY_PREFIX,
    ) -> None:
        self._store = store
        self._clock = clock
        self._key_prefix = key_prefix
        self._locks: dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    def lock(self, destination_id: str) -> threading.RLock:
        """The lock serializing read-modify-write cycles for one destination."""
        with self._locks_guard:
            return self._locks.setdefault(destination_id, threading.RLock())

    def _key(self, destination_id: str) -> str:
        return f"{self._key_prefix}{destination_id}"

    def _load(self, destination_id: str) -> JournalDocument | None:
        raw = self._store.get(self._key(destination_id))
        if raw is None:
            return None
        try:
            doc, repairs = parse_document_data(raw, now=self._clock())
        except InvalidStructureError:
            logger.warning("Stored journal for {} is unreadable, starting over", destination_id)
            return None
        for note in repairs:
            logger.warning("Repaired journal {}: {}", destination_id, note)
        return doc

    def _save(self, destination_id: str, doc: JournalDocument) -> None:
        self._store.set(self._key(destination_id), dump_document_data(doc))

    def open(self, destination_id: str) -> JournalDocument:
        """Return the destination's journal, creating and persisting it on first access."""
        with self.lock(destination_id):
            doc = self._load(destination_id)
            if doc is None:
                doc = new_document(now=self._clock())
                self._save(destination_id, doc)
                logger.debug("Created journal for {}", destination_id)
            return doc

    def exists(self, destination_id: str) -> bool:
        return self._store.get(self._key(destination_id)) is not None

    def destinations(self) -> list[str]:
        """Ids of every destination that has a stored journal."""
        return [key.removeprefix(self._key_prefix) for key in self._store.keys(self._key_prefix)]

    def apply_tree_op(self, destination_id: str, op: TreeOp) -> JournalDocument:
        """Apply one structural operation, persist, and return the new state.

        Operations naming a node that is no longer in the tree change nothing.
        """
        with self.lock(destination_id):
            doc = self.open(destination_id)
            try:
                changed = self._apply(doc, op)
            except NodeNotFoundError as e:
                logger.debug("Ignoring {} on {}: {}", type(op).__name__, destination_id, e)
                return doc
            if changed:
                self._save(destination_id, doc)
            return doc

    def _apply(self, doc: JournalDocument, op: TreeOp) -> bool:
        if isinstance(op, (AddPage, AddSection)):
            self._insert_new(doc, op)
            return True

        path = engine.require_path(doc.tree, op.node_id)
        if isinstance(op, Rename):
            engine.rename(path, op.title, doc.pages)
            return True
        if isinstance(op, Delete):
            removed = engine.delete(path, doc.pages)
            logger.debug("Deleted {} with {} pages", op.node_id, len(removed))
            doc.selected_id = doc.tree[0].id if doc.tree else None
            return True
        if isinstance(op, MoveUp):
            return engine.move_up(path)
        if isinstance(op, MoveDown):
            return engine.move_down(path)
        if isinstance(op, Indent):
            return engine.indent(path)
        if isinstance(op, Outdent):
            return engine.outdent(path)
        msg = f"Unsupported tree operation: {op!r}"
        raise TypeError(msg)

    def _insert_new(self, doc: JournalDocument, op: AddPage | AddSection) -> None:
        node: Node
        if isinstance(op, AddPage):
            node, content = engine.create_page(op.title or DEFAULT_PAGE_TITLE, now=self._clock())
            doc.pages[node.id] = content
        else:
            node = engine.create_section(op.title or DEFAULT_SECTION_TITLE)

        anchor = engine.locate(doc.tree, doc.selected_id) if doc.selected_id else None
        if anchor is None:
            doc.tree.append(node)
        else:
            engine.insert_after(anchor[-1].siblings, anchor[-1].index, node)
        doc.selected_id = node.id

    def select(self, destination_id: str, node_id: str | None) -> JournalDocument:
        """Make node_id (or nothing, for None) the selection. Unknown ids are ignored."""
        with self.lock(destination_id):
            doc = self.open(destination_id)
            if node_id is not None and engine.locate(doc.tree, node_id) is None:
                logger.debug("Ignoring selection of unknown node {}", node_id)
                return doc
            if doc.selected_id != node_id:
                doc.selected_id = node_id
                self._save(destination_id, doc)
            return doc

    def get_page(self, destination_id: str, page_id: str) -> PageContent | None:
        """Return the content of a page, or None if page_id is not a page."""
        with self.lock(destination_id):
            return self.open(destination_id).pages.get(page_id)

    def save_page_content(self, destination_id: str, page_id: str, formatted_text: str) -> bool:
        """Store new text for a page and refresh its updated_at.

        Returns:
            False (and stores nothing) if the page no longer exists.
        """
        with self.lock(destination_id):
            doc = self._load(destination_id)
            content = doc.pages.get(page_id) if doc is not None else None
            if doc is None or content is None:
                logger.debug("Dropping save for missing page {} in {}", page_id, destination_id)
                return False
            content.formatted_text = formatted_text
            content.updated_at = self._clock()
            self._save(destination_id, doc)
            return True

    def delete_destination_journal(self, destination_id: str) -> None:
        with self.lock(destination_id):
            self._store.delete(self._key(destination_id))
        logger.info("Deleted journal for {}", destination_id)
