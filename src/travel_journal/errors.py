"""
Travel journal exception hierarchy.

Everything raised by the library derives from TravelJournalError so callers
can catch library errors in one place and still tell the failure modes apart.
"""


class TravelJournalError(Exception):
    """Base exception class for all travel journal errors."""


class NodeNotFoundError(TravelJournalError):
    """Raised when a node id is not present in a journal tree."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Node {node_id!r} not found")
        self.node_id = node_id


class InvalidStructureError(TravelJournalError):
    """Raised when a stored journal document cannot be decoded at all."""


class StorageFailure(TravelJournalError):
    """Raised by a strict store when a value could not be read or persisted."""


class UnknownFormatCommandError(TravelJournalError):
    """Raised for inline formatting commands outside the supported set."""
