"""Domain models for the travel journal."""

from dataclasses import dataclass, field
from typing import Literal


@dataclass
class Page:
    """A leaf node; its text lives in JournalDocument.pages under the same id."""

    id: str
    title: str
    type: Literal["page"] = field(default="page", init=False)


@dataclass
class Section:
    """A container node. Children are displayed in list order."""

    id: str
    title: str
    children: list["Node"] = field(default_factory=list)
    type: Literal["section"] = field(default="section", init=False)


Node = Page | Section


@dataclass
class PageContent:
    """Rich text of one page. formatted_text is stored as-is, never parsed."""

    id: str
    title: str
    formatted_text: str
    created_at: int
    updated_at: int


@dataclass
class JournalDocument:
    """The journal of one destination: tree, page contents and selection."""

    tree: list[Node]
    pages: dict[str, PageContent]
    selected_id: str | None = None


@dataclass(frozen=True)
class PathFrame:
    """One step of a located path: the list holding node, and its index there."""

    siblings: list[Node]
    index: int
    node: Node


# Frames from a root-level node down to the located node.
Path = tuple[PathFrame, ...]


@dataclass(frozen=True)
class Breadcrumb:
    """A single ancestor in a breadcrumb trail."""

    node_id: str
    title: str
    depth: int
