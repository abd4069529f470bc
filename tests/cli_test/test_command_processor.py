# tests/cli_test/test_command_processor.py
"""
Integration tests for FlowCommandProcessor
(flow_core/flow_platform/interpreter/command_processor.py).

Text in, graph mutated, CommandResult out.
"""
import json
import logging

import pytest

from flow_api.models.graph import FlowGraph
from flow_core.flow_platform.interpreter import (
    FlowCommandProcessor,
    DeleteNodeCommand,
    UpdateNodeCommand,
    ConnectNodesCommand,
    DisconnectNodesCommand,
    ExplainCommand,
    UnknownCommand,
)


@pytest.fixture
def processor() -> FlowCommandProcessor:
    return FlowCommandProcessor()


@pytest.fixture
def two_node_flow(processor) -> FlowGraph:
    g = FlowGraph("two")
    processor.process("add a node called Start", g)
    processor.process("add a node called End Call", g)
    return g


# ═════════════════════════════════════════════════════════════════
#  NODES
# ═════════════════════════════════════════════════════════════════

class TestNodeCommands:

    def test_add_with_label(self, processor, empty_flow):
        result = processor.process("Add a node called Hello", empty_flow)
        assert result.success
        assert result.message == "Node 'Hello' added."
        assert [n.label for n in empty_flow.get_all_nodes()] == ["Hello"]
        assert result.data["node_id"] == empty_flow.get_all_nodes()[0].node_id
        assert result.data["command"] == {"type": "add_node", "nodeLabel": "Hello"}

    def test_add_default_labels_count_up(self, processor, empty_flow):
        processor.process("add a node", empty_flow)
        processor.process("add another node", empty_flow)
        assert [n.label for n in empty_flow.get_all_nodes()] == ["Node 1", "Node 2"]

    def test_generated_ids_are_unique(self, processor, empty_flow):
        for _ in range(5):
            processor.process("add a node", empty_flow)
        assert len({n.node_id for n in empty_flow.get_all_nodes()}) == 5

    def test_update(self, processor, two_node_flow):
        result = processor.process("Update node 1 to say Welcome", two_node_flow)
        assert result.success
        assert result.message == "Node 'Start' renamed to 'Welcome'."
        assert two_node_flow.get_all_nodes()[0].label == "Welcome"

    def test_fuzzy_delete(self, processor, two_node_flow):
        result = processor.process("delete the end call node", two_node_flow)
        assert result.success
        assert [n.label for n in two_node_flow.get_all_nodes()] == ["Start"]

    def test_delete_cascades_edges(self, processor, stub_flow):
        result = processor.process("delete greeting", stub_flow)
        assert result.success
        assert result.message == "Node 'Greeting' deleted (2 connection(s) removed)."
        assert stub_flow.get_number_of_edges() == 1

    def test_ordinals_follow_current_order(self, processor, stub_flow):
        processor.process("delete node 1", stub_flow)
        result = processor.process("delete node 1", stub_flow)
        assert result.message.startswith("Node 'Greeting' deleted")

    def test_not_found_leaves_graph_untouched(self, processor, two_node_flow):
        result = processor.process("delete node 5", two_node_flow)
        assert not result.success
        assert result.message == 'Node "node 5" not found. Available nodes: "Start", "End Call"'
        assert two_node_flow.get_number_of_nodes() == 2
        assert result.data["command"]["type"] == "unknown"


# ═════════════════════════════════════════════════════════════════
#  EDGES
# ═════════════════════════════════════════════════════════════════

class TestEdgeCommands:

    def test_connect(self, processor, two_node_flow):
        result = processor.process("connect node 1 to node 2", two_node_flow)
        assert result.success
        edge = two_node_flow.get_all_edges()[0]
        assert result.data["edge_id"] == edge.edge_id
        assert edge.edge_id.startswith("edge-")

    def test_connect_twice_makes_one_edge(self, processor, two_node_flow):
        processor.process("connect node 1 to node 2", two_node_flow)
        result = processor.process("connect node 1 to node 2", two_node_flow)
        assert result.success
        assert "already connected" in result.message
        assert two_node_flow.get_number_of_edges() == 1

    def test_disconnect(self, processor, stub_flow):
        result = processor.process("disconnect start from greeting", stub_flow)
        assert result.success
        assert result.message.startswith("Removed 1 connection(s)")
        assert stub_flow.find_edges("n1", "n2") == []

    def test_remove_the_connection_between(self, processor, stub_flow):
        processor.process("remove the connection between node 3 and node 4", stub_flow)
        assert stub_flow.find_edges("n3", "n4") == []
        assert stub_flow.get_number_of_nodes() == 4


# ═════════════════════════════════════════════════════════════════
#  INFORMATIONAL / MISC
# ═════════════════════════════════════════════════════════════════

class TestInformational:

    def test_explain(self, processor, stub_flow):
        result = processor.process("what does this flow do?", stub_flow)
        assert result.success
        assert '3. "Collect Input"' in result.message
        assert stub_flow.get_number_of_nodes() == 4

    def test_explain_empty(self, processor, empty_flow):
        result = processor.process("explain", empty_flow)
        assert "empty" in result.message

    def test_unknown(self, processor, stub_flow):
        result = processor.process("make me a sandwich", stub_flow)
        assert not result.success
        assert result.graph is stub_flow

    def test_clear(self, processor, stub_flow):
        result = processor.clear(stub_flow)
        assert result.success
        assert stub_flow.get_number_of_nodes() == 0


class TestAutosave:

    def test_mutations_are_saved(self, empty_flow, tmp_path):
        path = tmp_path / "flow.json"
        processor = FlowCommandProcessor(autosave_path=path)
        processor.process("add a node called Hello", empty_flow)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert [n["data"]["label"] for n in data["nodes"]] == ["Hello"]
        assert "savedAt" in data

    def test_failed_and_read_only_commands_do_not_save(self, empty_flow, tmp_path):
        path = tmp_path / "flow.json"
        processor = FlowCommandProcessor(autosave_path=path)
        processor.process("delete node 1", empty_flow)
        processor.process("explain", empty_flow)
        assert not path.exists()

    def test_save_error_keeps_result(self, empty_flow, tmp_path, caplog):
        processor = FlowCommandProcessor(autosave_path=tmp_path)

        with caplog.at_level(logging.WARNING):
            result = processor.process("add a node called Hello", empty_flow)

        assert result.success
        assert [n.label for n in empty_flow.get_all_nodes()] == ["Hello"]
        assert "Auto-save" in caplog.text


class TestStaleCommands:
    """Commands built against an older snapshot report instead of raising."""

    def test_delete_missing_node(self, stub_flow):
        result = DeleteNodeCommand("ghost").execute(stub_flow)
        assert not result.success
        assert stub_flow.get_number_of_nodes() == 4

    def test_update_missing_node(self, stub_flow):
        assert not UpdateNodeCommand("ghost", "X").execute(stub_flow).success

    def test_connect_missing_target(self, stub_flow):
        result = ConnectNodesCommand("n1", "ghost").execute(stub_flow)
        assert result.message == "Target node 'ghost' not found."

    def test_disconnect_missing_source(self, stub_flow):
        result = DisconnectNodesCommand("ghost", "n1").execute(stub_flow)
        assert result.message == "Source node 'ghost' not found."

    def test_mutates_flag(self):
        assert DeleteNodeCommand("n1").mutates
        assert not ExplainCommand("x").mutates
        assert not UnknownCommand("x").mutates
