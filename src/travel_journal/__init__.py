"""Travel journal: per-destination notebooks of sections and pages."""

from travel_journal.core.editor.session import PageEditorSession
from travel_journal.core.repository import DocumentRepository
from travel_journal.core.storage.store import MemoryStore, SqliteStore
from travel_journal.core.tree.navigation import JournalNavigator
from travel_journal.protocols import EditingSurfaceProtocol, SchedulerProtocol, StoreProtocol

__all__ = [
    "DocumentRepository",
    "EditingSurfaceProtocol",
    "JournalNavigator",
    "MemoryStore",
    "PageEditorSession",
    "SchedulerProtocol",
    "SqliteStore",
    "StoreProtocol",
]
