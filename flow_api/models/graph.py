"""
    Graph model - the flow diagram and owner of its state.
    Nodes keep insertion order; that order defines "node N" numbering.
"""
import random
import time
import uuid
from typing import Dict, List, Optional, Tuple

from ..types import NodeRef
from .node import FlowNode
from .edge import FlowEdge

# Default placement area for nodes created without a position
CANVAS_SIZE = 400.0


def _generate_id(prefix: str) -> str:
    return f"{prefix}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"


def generate_node_id() -> str:
    return _generate_id("node")


def generate_edge_id() -> str:
    return _generate_id("edge")


class FlowGraph:
    """
        Class for the flow diagram.
        Directed edges, at most one edge per (source, target) pair when
        created through ``connect``.
    """

    def __init__(self, graph_id: str = "flow"):
        """
        Initialize a graph.
        Args:
            graph_id: Identifier of the flow
        """
        self.graph_id = graph_id
        self.nodes: Dict[str, FlowNode] = {}  # node_id -> FlowNode, insertion ordered
        self.edges: Dict[str, FlowEdge] = {}  # edge_id -> FlowEdge
        self._adjacency_list: Dict[str, List[FlowEdge]] = {}  # node_id -> [Edges]

    # ── Nodes ────────────────────────────────────────────────────

    def add_node(self, node: FlowNode) -> None:
        """Add a node to the graph"""
        if node.node_id in self.nodes:
            raise ValueError(f"Node with id {node.node_id} already exists")

        self.nodes[node.node_id] = node
        self._adjacency_list[node.node_id] = []

    def create_node(self, label: Optional[str] = None,
                    position: Optional[Tuple[float, float]] = None) -> FlowNode:
        """
        Create a node with a fresh id and add it.

        Without a label the node is called ``Node {count+1}``; without a
        position it is placed randomly on the canvas.
        """
        if not label:
            label = f"Node {len(self.nodes) + 1}"
        if position is None:
            position = (random.uniform(0, CANVAS_SIZE), random.uniform(0, CANVAS_SIZE))

        node = FlowNode(generate_node_id(), label, position)
        self.add_node(node)
        return node

    def get_node(self, node_id: str) -> Optional[FlowNode]:
        return self.nodes.get(node_id)

    def get_all_nodes(self) -> List[FlowNode]:
        return list(self.nodes.values())

    def update_label(self, node_id: str, label: str) -> None:
        node = self.nodes.get(node_id)
        if node is None:
            raise ValueError(f"Node {node_id} not in graph")
        node.relabel(label)

    def remove_node(self, node_id: str) -> None:
        """Remove a node and all connected edges."""
        if node_id not in self.nodes:
            raise ValueError(f"Node {node_id} not in graph")

        for edge in list(self._adjacency_list.get(node_id, [])):
            self.remove_edge(edge.edge_id)

        del self.nodes[node_id]
        self._adjacency_list.pop(node_id, None)

    # ── Edges ────────────────────────────────────────────────────

    def add_edge(self, edge: FlowEdge) -> None:
        """Add an edge to the graph"""
        if edge.source_id not in self.nodes:
            raise ValueError(f"Source node {edge.source_id} not in graph")
        if edge.target_id not in self.nodes:
            raise ValueError(f"Target node {edge.target_id} not in graph")

        if edge.edge_id in self.edges:
            raise ValueError(f"Edge with id {edge.edge_id} already exists")

        self.edges[edge.edge_id] = edge

        self._adjacency_list[edge.source_id].append(edge)
        if edge.source_id != edge.target_id:
            self._adjacency_list[edge.target_id].append(edge)

    def connect(self, source_id: str, target_id: str) -> Tuple[FlowEdge, bool]:
        """
        Connect two nodes, skipping the insert if the same directed edge
        already exists.

        Returns:
            (edge, created) - ``created`` is False when an existing edge
            was reused.
        """
        existing = self.find_edges(source_id, target_id)
        if existing:
            return existing[0], False

        source = self.nodes.get(source_id)
        target = self.nodes.get(target_id)
        if source is None:
            raise ValueError(f"Source node {source_id} not in graph")
        if target is None:
            raise ValueError(f"Target node {target_id} not in graph")

        edge = FlowEdge(generate_edge_id(), source, target)
        self.add_edge(edge)
        return edge, True

    def get_edge(self, edge_id: str) -> Optional[FlowEdge]:
        return self.edges.get(edge_id)

    def get_all_edges(self) -> List[FlowEdge]:
        return list(self.edges.values())

    def find_edges(self, source_id: str, target_id: str) -> List[FlowEdge]:
        """All edges going from source_id to target_id."""
        return [e for e in self._adjacency_list.get(source_id, [])
                if e.connects(source_id, target_id)]

    def remove_edge(self, edge_id: str) -> None:
        """Remove an edge from the graph"""
        if edge_id not in self.edges:
            return  # Safe delete is often better than raising ValueError

        edge = self.edges[edge_id]
        for node_id in (edge.source_id, edge.target_id):
            if node_id in self._adjacency_list:
                self._adjacency_list[node_id] = [
                    e for e in self._adjacency_list[node_id] if e.edge_id != edge_id
                ]

        del self.edges[edge_id]

    def disconnect(self, source_id: str, target_id: str) -> int:
        """Remove every edge from source_id to target_id. Returns how many were removed."""
        matching = self.find_edges(source_id, target_id)
        for edge in matching:
            self.remove_edge(edge.edge_id)
        return len(matching)

    # ── Whole graph ──────────────────────────────────────────────

    def clear(self) -> None:
        self.nodes.clear()
        self.edges.clear()
        self._adjacency_list.clear()

    def node_refs(self) -> List[NodeRef]:
        """Fresh ordered snapshot of (id, label, index) for the interpreter."""
        return NodeRef.from_sequence((n.node_id, n.label) for n in self.nodes.values())

    def get_number_of_nodes(self) -> int:
        return len(self.nodes)

    def get_number_of_edges(self) -> int:
        return len(self.edges)

    def __repr__(self) -> str:
        return f"FlowGraph({self.graph_id}, nodes={len(self.nodes)}, edges={len(self.edges)})"

    def to_dict(self) -> Dict:
        return {
            'id': self.graph_id,
            'nodes': [node.to_dict() for node in self.nodes.values()],
            'edges': [edge.to_dict() for edge in self.edges.values()]
        }
