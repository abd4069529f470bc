"""
    Node model - a labeled vertex of the flow diagram.
"""
from typing import Any, Dict, Tuple


class FlowNode:
    """
    A node in the flow.
    Each node has an ID, a label and a canvas position.
    """

    def __init__(self, node_id: Any, label: str, position: Tuple[float, float] = (0.0, 0.0)):
        """
        Initialize a node.

        Args:
            node_id: Unique identifier of the node (will be converted to str)
            label: Text shown on the node
            position: (x, y) canvas coordinates
        """
        # Ensure ID is always a string for consistency in comparisons
        self.node_id = str(node_id)
        self.label = str(label)
        self.position = (float(position[0]), float(position[1]))

    def relabel(self, label: str) -> None:
        self.label = str(label)

    def __repr__(self) -> str:
        return f"FlowNode({self.node_id}, {self.label!r})"

    def __eq__(self, other) -> bool:
        """Two nodes are equal if they have the same ID"""
        if not isinstance(other, FlowNode):
            return False
        return self.node_id == other.node_id

    def __hash__(self) -> int:
        return hash(self.node_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.node_id,
            'position': {'x': self.position[0], 'y': self.position[1]},
            'data': {'label': self.label},
        }
