# tests/conftest.py
"""
Shared test fixtures.
Stub flow: a small call-handling flow with four nodes.

    Start --> Greeting --> Collect Input --> End Call
"""
from typing import List

import pytest

from flow_api.models.graph import FlowGraph
from flow_api.models.node import FlowNode
from flow_api.types import NodeRef


# ── Node definitions (order defines "node N") ────────────────────
_NODES = [
    ("n1", "Start"),
    ("n2", "Greeting"),
    ("n3", "Collect Input"),
    ("n4", "End Call"),
]

# ── Edge definitions (source -> target) ──────────────────────────
_EDGES = [
    ("n1", "n2"),
    ("n2", "n3"),
    ("n3", "n4"),
]


def _build_flow(graph_id: str = "stub_flow") -> FlowGraph:
    g = FlowGraph(graph_id)

    for i, (node_id, label) in enumerate(_NODES):
        g.add_node(FlowNode(node_id, label, (i * 100.0, 50.0)))

    for source_id, target_id in _EDGES:
        g.connect(source_id, target_id)

    return g


# ── Pytest fixtures ──────────────────────────────────────────────

@pytest.fixture
def two_nodes() -> List[NodeRef]:
    """The minimal two-node flow used throughout the examples."""
    return NodeRef.from_sequence([("n1", "Start"), ("n2", "End Call")])


@pytest.fixture
def stub_nodes() -> List[NodeRef]:
    """Node refs of the four-node stub flow."""
    return NodeRef.from_sequence(_NODES)


@pytest.fixture
def no_nodes() -> List[NodeRef]:
    return []


@pytest.fixture
def stub_flow() -> FlowGraph:
    """Freshly built each time; safe to mutate."""
    return _build_flow()


@pytest.fixture
def empty_flow() -> FlowGraph:
    return FlowGraph("empty")
