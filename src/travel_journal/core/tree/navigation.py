"""Tree navigation: breadcrumbs and the selection shared by tree panel and editor."""

from loguru import logger

from travel_journal.config import BREADCRUMB_SEPARATOR
from travel_journal.core.editor.session import PageEditorSession
from travel_journal.core.repository import DocumentRepository
from travel_journal.core.tree.engine import locate
from travel_journal.models.node import Breadcrumb, JournalDocument, Node
from travel_journal.models.operations import TreeOp


def get_breadcrumbs(tree: list[Node], node_id: str | None) -> tuple[Breadcrumb, ...]:
    """Get breadcrumbs from the root-level ancestor down to the node itself.

    Returns an empty tuple for None or an id that is not in the tree.
    """
    path = locate(tree, node_id) if node_id else None
    if path is None:
        return ()
    return tuple(
        Breadcrumb(node_id=frame.node.id, title=frame.node.title, depth=depth)
        for depth, frame in enumerate(path)
    )


def format_breadcrumbs(
    breadcrumbs: tuple[Breadcrumb, ...], *, separator: str = BREADCRUMB_SEPARATOR
) -> str:
    return separator.join(b.title for b in breadcrumbs)


class JournalNavigator:
    """One open journal view.

    Routes tree-panel gestures to the repository and keeps the editor session
    showing whatever node ends up selected.
    """

    def __init__(
        self,
        repository: DocumentRepository,
        session: PageEditorSession,
        destination_id: str,
    ) -> None:
        self._repository = repository
        self._session = session
        self.destination_id = destination_id
        self.document: JournalDocument | None = None
        self.breadcrumbs: tuple[Breadcrumb, ...] = ()

    @property
    def breadcrumb_text(self) -> str:
        return format_breadcrumbs(self.breadcrumbs)

    def open(self) -> JournalDocument:
        return self._show(self._repository.open(self.destination_id))

    def click(self, node_id: str) -> JournalDocument:
        """Select a node in the tree panel and load it into the editor."""
        self._session.flush_now()
        return self._show(self._repository.select(self.destination_id, node_id))

    def perform(self, op: TreeOp) -> JournalDocument:
        """Apply a toolbar action, then reload the selection into the editor."""
        self._session.flush_now()
        logger.debug("{} on journal {}", op, self.destination_id)
        return self._show(self._repository.apply_tree_op(self.destination_id, op))

    def close(self) -> None:
        self._session.close()
        self.document = None
        self.breadcrumbs = ()

    def _show(self, doc: JournalDocument) -> JournalDocument:
        self.document = doc
        self.breadcrumbs = get_breadcrumbs(doc.tree, doc.selected_id)
        showing = (self._session.active_destination_id, self._session.active_page_id)
        if showing != (self.destination_id, doc.selected_id):
            self._session.load(self.destination_id, doc.selected_id)
        return doc
