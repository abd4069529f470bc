"""
Flow API — graph models and shared value types.
"""
from .types import CommandType, NodeRef, NodeReference
from .models.node import FlowNode
from .models.edge import FlowEdge
from .models.graph import FlowGraph

__all__ = [
    'CommandType',
    'NodeRef',
    'NodeReference',
    'FlowNode',
    'FlowEdge',
    'FlowGraph',
]
