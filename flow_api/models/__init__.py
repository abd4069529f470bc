from .node import FlowNode
from .edge import FlowEdge
from .graph import FlowGraph, generate_node_id, generate_edge_id

__all__ = [
    'FlowNode',
    'FlowEdge',
    'FlowGraph',
    'generate_node_id',
    'generate_edge_id',
]
