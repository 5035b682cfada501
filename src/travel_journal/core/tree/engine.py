"""Tree engine: locate, insert, remove and re-parent nodes of a journal tree.

All functions work on the tree list passed in and keep no state of their own.
Mutating functions take a Path from locate(); a Path is only valid until the
next mutation of the tree it was taken from.

Not found and "nothing to do" are reported differently: locate() returns None
(require_path() raises NodeNotFoundError) while move/indent/outdent return
False when the node sits at a boundary.
"""

import uuid
from collections.abc import Iterator

from travel_journal.errors import NodeNotFoundError
from travel_journal.models.node import Node, Page, PageContent, Path, PathFrame, Section


def locate(tree: list[Node], node_id: str) -> Path | None:
    """Find node_id and return the frames from its root-level ancestor down to it."""
    return _locate(tree, node_id, ())


def _locate(siblings: list[Node], node_id: str, prefix: Path) -> Path | None:
    for index, node in enumerate(siblings):
        path = (*prefix, PathFrame(siblings=siblings, index=index, node=node))
        if node.id == node_id:
            return path
        if isinstance(node, Section):
            found = _locate(node.children, node_id, path)
            if found is not None:
                return found
    return None


def require_path(tree: list[Node], node_id: str) -> Path:
    """Like locate(), but raise NodeNotFoundError instead of returning None."""
    path = locate(tree, node_id)
    if path is None:
        raise NodeNotFoundError(node_id)
    return path


def iter_nodes(nodes: list[Node]) -> Iterator[Node]:
    """Yield every node of a forest, depth first, in display order."""
    for node in nodes:
        yield node
        if isinstance(node, Section):
            yield from iter_nodes(node.children)


def collect_page_ids(node: Node) -> list[str]:
    """Return the ids of every page in the subtree rooted at node."""
    return [n.id for n in iter_nodes([node]) if isinstance(n, Page)]


def insert_after(siblings: list[Node], index: int, node: Node) -> None:
    """Insert node right after position index; index -1 inserts at the head."""
    siblings.insert(index + 1, node)


def remove_at(siblings: list[Node], index: int) -> Node:
    return siblings.pop(index)


def new_node_id() -> str:
    return str(uuid.uuid4())


def create_page(title: str, *, now: int) -> tuple[Page, PageContent]:
    """Create a page node together with its empty content record."""
    node_id = new_node_id()
    content = PageContent(
        id=node_id, title=title, formatted_text="", created_at=now, updated_at=now
    )
    return Page(id=node_id, title=title), content


def create_section(title: str) -> Section:
    return Section(id=new_node_id(), title=title)


def move_up(path: Path) -> bool:
    """Swap the node with its previous sibling. False if it is already first."""
    frame = path[-1]
    if frame.index == 0:
        return False
    siblings = frame.siblings
    siblings[frame.index - 1], siblings[frame.index] = siblings[frame.index], siblings[frame.index - 1]
    return True


def move_down(path: Path) -> bool:
    """Swap the node with its next sibling. False if it is already last."""
    frame = path[-1]
    if frame.index >= len(frame.siblings) - 1:
        return False
    siblings = frame.siblings
    siblings[frame.index + 1], siblings[frame.index] = siblings[frame.index], siblings[frame.index + 1]
    return True


def indent(path: Path) -> bool:
    """Make the node the last child of its previous sibling.

    False if the node is first among its siblings, or if the previous sibling
    is a page (pages cannot hold children).
    """
    frame = path[-1]
    if frame.index == 0:
        return False
    previous = frame.siblings[frame.index - 1]
    if not isinstance(previous, Section):
        return False
    previous.children.append(remove_at(frame.siblings, frame.index))
    return True


def outdent(path: Path) -> bool:
    """Move the node out of its parent, right after the parent. False at root level."""
    if len(path) < 2:
        return False
    frame, parent = path[-1], path[-2]
    node = remove_at(frame.siblings, frame.index)
    insert_after(parent.siblings, parent.index, node)
    return True


def rename(path: Path, title: str, pages: dict[str, PageContent]) -> None:
    """Retitle the node, keeping the page content title in sync."""
    node = path[-1].node
    node.title = title
    content = pages.get(node.id)
    if isinstance(node, Page) and content is not None:
        content.title = title


def delete(path: Path, pages: dict[str, PageContent]) -> list[str]:
    """Detach the node and drop the content of every page below it.

    Returns:
        The ids of the page contents removed.
    """
    frame = path[-1]
    removed = remove_at(frame.siblings, frame.index)
    page_ids = collect_page_ids(removed)
    for page_id in page_ids:
        pages.pop(page_id, None)
    return page_ids
