"""
    Edge model - a directed connection between two flow nodes.
"""
from typing import Any, Dict

from .node import FlowNode


class FlowEdge:
    """
        Directed edge from a source node to a target node.
    """

    def __init__(self, edge_id: Any, source_node: FlowNode, target_node: FlowNode):
        """
        Initialize an edge.

        Args:
            edge_id: Unique identifier of the edge (will be converted to str)
            source_node: Source node
            target_node: Target node
        """
        self.edge_id = str(edge_id)
        self.source_node = source_node
        self.target_node = target_node

    @property
    def source_id(self) -> str:
        return self.source_node.node_id

    @property
    def target_id(self) -> str:
        return self.target_node.node_id

    def connects(self, source_id: str, target_id: str) -> bool:
        """Check if the edge goes from source_id to target_id (direction matters)."""
        return self.source_id == source_id and self.target_id == target_id

    def touches(self, node_id: str) -> bool:
        """Check if the node is either endpoint of this edge."""
        return node_id in (self.source_id, self.target_id)

    def __repr__(self) -> str:
        return f"FlowEdge({self.source_id} -> {self.target_id})"

    def __eq__(self, other) -> bool:
        """Two edges are equal if they have the same ID"""
        if not isinstance(other, FlowEdge):
            return False
        return self.edge_id == other.edge_id

    def __hash__(self) -> int:
        return hash(self.edge_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.edge_id,
            'source': self.source_id,
            'target': self.target_id,
        }
