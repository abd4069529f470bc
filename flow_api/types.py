"""
    Shared value types: command tags and the read-only node reference.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple


class CommandType(Enum):
    ADD_NODE = "add_node"
    DELETE_NODE = "delete_node"
    UPDATE_NODE = "update_node"
    CONNECT_NODES = "connect_nodes"
    DISCONNECT_NODES = "disconnect_nodes"
    EXPLAIN = "explain"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> Optional['CommandType']:
        """Return the matching tag, or None for an unrecognized string."""
        for member in cls:
            if member.value == value:
                return member
        return None


@dataclass(frozen=True)
class NodeRef:
    """
    Read-only view of one node as the interpreter sees it.

    Attributes:
        id:    Opaque, stable node identifier.
        label: Current label (not required to be unique).
        index: 0-based position in the caller's ordered node list.
               "node N" in user text refers to index N-1.
    """
    id: str
    label: str
    index: int

    @classmethod
    def from_sequence(cls, items: Iterable[Tuple[str, str]]) -> List['NodeRef']:
        """Build a fresh ordered list of refs from (id, label) pairs."""
        return [cls(str(node_id), str(label), i)
                for i, (node_id, label) in enumerate(items)]


@dataclass(frozen=True)
class NodeReference:
    """
    An unresolved mention of a node, as written by the user or the
    remote model.

    Attributes:
        text:       The phrase as it appeared ("node 2", "end call", an id).
        ordinal:    1-based position when the phrase was a node number.
        label_only: The user named a label explicitly (quoted, or after
                    "called" / "named"); never read as a number.
    """
    text: str
    ordinal: Optional[int] = None
    label_only: bool = False

    @classmethod
    def from_ordinal(cls, ordinal: int, text: Optional[str] = None) -> 'NodeReference':
        return cls(text or f"node {ordinal}", ordinal)

    @classmethod
    def from_label(cls, label: str) -> 'NodeReference':
        return cls(label, label_only=True)

    def __str__(self) -> str:
        return self.text
