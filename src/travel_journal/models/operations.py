"""Structural operations accepted by DocumentRepository.apply_tree_op."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AddPage:
    """Insert a new page after the selected node (or at the end of the root list)."""

    title: str | None = None


@dataclass(frozen=True)
class AddSection:
    """Insert a new, empty section after the selected node."""

    title: str | None = None


@dataclass(frozen=True)
class Rename:
    node_id: str
    title: str


@dataclass(frozen=True)
class Delete:
    node_id: str


@dataclass(frozen=True)
class MoveUp:
    node_id: str


@dataclass(frozen=True)
class MoveDown:
    node_id: str


@dataclass(frozen=True)
class Indent:
    node_id: str


@dataclass(frozen=True)
class Outdent:
    node_id: str


TreeOp = AddPage | AddSection | Rename | Delete | MoveUp | MoveDown | Indent | Outdent
