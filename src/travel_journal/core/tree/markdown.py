"""Render a journal tree as an indented markdown outline."""

import io

from travel_journal.models.node import JournalDocument, Node, Section


def render_tree_as_markdown(
    doc: JournalDocument,
    *,
    max_depth: int | None = None,
    show_ids: bool = False,
) -> str:
    """Render the journal tree as a markdown bullet list.

    Sections are bold, the selected node is marked with "<". Subtrees cut off
    by max_depth end with a "..." line saying how many nodes are hidden.

    Args:
        doc: The journal to render.
        max_depth: Max levels to include below the root level (None = unlimited).
        show_ids: Append the node id to each line.
    """
    out = io.StringIO()
    _render_nodes(out, doc.tree, doc.selected_id, depth=0, max_depth=max_depth, show_ids=show_ids)
    return out.getvalue()


def _render_nodes(
    out: io.StringIO,
    nodes: list[Node],
    selected_id: str | None,
    *,
    depth: int,
    max_depth: int | None,
    show_ids: bool,
) -> None:
    indent = "    " * depth
    for node in nodes:
        label = f"**{node.title}**" if isinstance(node, Section) else node.title
        line = f"{indent}- {label}"
        if show_ids:
            line += f"  [id={node.id}]"
        if node.id == selected_id:
            line += "  <"
        out.write(line + "\n")

        if not isinstance(node, Section) or not node.children:
            continue
        if max_depth is not None and depth >= max_depth:
            count = len(node.children)
            noun = "child" if count == 1 else "children"
            out.write(f"{indent}    - ... ({count} more {noun})\n")
            continue
        _render_nodes(
            out, node.children, selected_id,
            depth=depth + 1, max_depth=max_depth, show_ids=show_ids,
        )
