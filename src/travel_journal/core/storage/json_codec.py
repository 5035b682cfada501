"""Convert journal documents to and from their stored JSON shape."""

from typing import Any

from travel_journal.core.tree.engine import iter_nodes, locate
from travel_journal.errors import InvalidStructureError
from travel_journal.models.node import JournalDocument, Node, Page, PageContent, Section


def dump_node(node: Node) -> dict[str, Any]:
    if isinstance(node, Section):
        return {
            "type": "section",
            "id": node.id,
            "title": node.title,
            "children": [dump_node(child) for child in node.children],
        }
    return {"type": "page", "id": node.id, "title": node.title}


def dump_document_data(doc: JournalDocument) -> dict[str, Any]:
    """Serialize a document into JSON-compatible data."""
    return {
        "tree": [dump_node(node) for node in doc.tree],
        "pages": {
            page_id: {
                "id": content.id,
                "title": content.title,
                "formatted_text": content.formatted_text,
                "created_at": content.created_at,
                "updated_at": content.updated_at,
            }
            for page_id, content in doc.pages.items()
        },
        "selected_id": doc.selected_id,
    }


def parse_document_data(data: Any, *, now: int) -> tuple[JournalDocument, list[str]]:
    """Parse stored data into a JournalDocument, repairing what can be repaired.

    Repairs: malformed or duplicate nodes are dropped, children of a page are
    lifted out to follow it, page nodes without content get empty content,
    contents without a page node are dropped, content titles follow node
    titles, and a selection pointing nowhere is cleared.

    Args:
        data: Value as read from the store.
        now: Timestamp (ms) used for content records created by repair.

    Returns:
        Tuple of (document, list of human-readable repair notes).

    Raises:
        InvalidStructureError: If data is not a document at all.
    """
    if not isinstance(data, dict) or not isinstance(data.get("tree"), list):
        msg = f"Not a journal document: {type(data).__name__}"
        raise InvalidStructureError(msg)

    repairs: list[str] = []
    tree = _parse_nodes(data["tree"], seen=set(), repairs=repairs)

    raw_pages = data.get("pages")
    if not isinstance(raw_pages, dict):
        repairs.append("pages is not a mapping")
        raw_pages = {}

    pages: dict[str, PageContent] = {}
    for node in iter_nodes(tree):
        if not isinstance(node, Page):
            continue
        raw = raw_pages.get(node.id)
        if not isinstance(raw, dict):
            repairs.append(f"page {node.id} had no content")
            pages[node.id] = PageContent(
                id=node.id, title=node.title, formatted_text="", created_at=now, updated_at=now
            )
            continue
        if raw.get("title") != node.title:
            repairs.append(f"page {node.id} content title resynced")
        pages[node.id] = PageContent(
            id=node.id,
            title=node.title,
            formatted_text=str(raw.get("formatted_text") or ""),
            created_at=_timestamp(raw.get("created_at"), now),
            updated_at=_timestamp(raw.get("updated_at"), now),
        )

    for orphan in sorted(set(raw_pages) - set(pages)):
        repairs.append(f"dropped content {orphan} without page node")

    selected_id = data.get("selected_id")
    if selected_id is not None and (not isinstance(selected_id, str) or locate(tree, selected_id) is None):
        repairs.append(f"cleared dangling selection {selected_id!r}")
        selected_id = None

    return JournalDocument(tree=tree, pages=pages, selected_id=selected_id), repairs


def _timestamp(value: Any, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return default
    return int(value)


def _parse_nodes(raw_nodes: list[Any], *, seen: set[str], repairs: list[str]) -> list[Node]:
    nodes: list[Node] = []
    for raw in raw_nodes:
        if not isinstance(raw, dict) or not isinstance(raw.get("id"), str):
            repairs.append(f"dropped malformed node {raw!r}")
            continue
        node_id = raw["id"]
        if node_id in seen:
            repairs.append(f"dropped duplicate node {node_id}")
            continue
        seen.add(node_id)

        title = str(raw.get("title") or "")
        raw_children = raw.get("children")
        children = (
            _parse_nodes(raw_children, seen=seen, repairs=repairs)
            if isinstance(raw_children, list)
            else []
        )
        if raw.get("type") == "section":
            nodes.append(Section(id=node_id, title=title, children=children))
            continue

        nodes.append(Page(id=node_id, title=title))
        if children:
            repairs.append(f"lifted {len(children)} children out of page {node_id}")
            nodes.extend(children)
    return nodes
