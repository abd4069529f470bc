# tests/core_test/test_builder.py
"""
Tests for CommandBuilder (flow_core/flow_platform/interpreter/builder.py).

Covers:
    • Draft → Command for every variant
    • Downgrade to unknown with available-node diagnostics
    • Remote-style references (ids, ordinal strings, labels)
"""
import logging

import pytest

from flow_api.types import CommandType, NodeReference
from flow_core.flow_platform.interpreter.builder import (
    CommandBuilder,
    EDGE_NOT_FOUND_MESSAGE,
    node_not_found_message,
)
from flow_core.flow_platform.interpreter.classifier import UPDATE_USAGE_MESSAGE, UNKNOWN_COMMAND_MESSAGE
from flow_core.flow_platform.interpreter.commands import (
    AddNodeCommand,
    DeleteNodeCommand,
    UpdateNodeCommand,
    ConnectNodesCommand,
    DisconnectNodesCommand,
    ExplainCommand,
    UnknownCommand,
)
from flow_core.flow_platform.interpreter.drafts import DraftCommand


@pytest.fixture
def builder() -> CommandBuilder:
    return CommandBuilder()


# ═════════════════════════════════════════════════════════════════
#  RESOLVED VARIANTS
# ═════════════════════════════════════════════════════════════════

class TestResolved:

    def test_add(self, builder, two_nodes):
        assert builder.build(DraftCommand.add_node("Hello"), two_nodes) == AddNodeCommand("Hello")

    def test_add_blank_label_defaults(self, builder, two_nodes):
        assert builder.build(DraftCommand.add_node("  "), two_nodes) == AddNodeCommand("Node 3")

    def test_delete_by_ordinal(self, builder, two_nodes):
        draft = DraftCommand.delete_node(NodeReference.from_ordinal(1))
        assert builder.build(draft, two_nodes) == DeleteNodeCommand("n1")

    def test_delete_by_fragment(self, builder, two_nodes):
        draft = DraftCommand.delete_node(NodeReference("end call"))
        assert builder.build(draft, two_nodes) == DeleteNodeCommand("n2")

    def test_update(self, builder, two_nodes):
        draft = DraftCommand.update_node(NodeReference.from_ordinal(2), " Bye ")
        assert builder.build(draft, two_nodes) == UpdateNodeCommand("n2", "Bye")

    def test_connect(self, builder, two_nodes):
        draft = DraftCommand.connect_nodes(NodeReference.from_ordinal(1), NodeReference("End Call"))
        assert builder.build(draft, two_nodes) == ConnectNodesCommand("n1", "n2")

    def test_disconnect(self, builder, two_nodes):
        draft = DraftCommand.disconnect_nodes(NodeReference("n2"), NodeReference("n1"))
        assert builder.build(draft, two_nodes) == DisconnectNodesCommand("n2", "n1")

    def test_explain_passes_through(self, builder, two_nodes):
        assert builder.build(DraftCommand.explain("A flow."), two_nodes) == ExplainCommand("A flow.")

    def test_unknown_passes_through(self, builder, two_nodes):
        assert builder.build(DraftCommand.unknown("nope"), two_nodes) == UnknownCommand("nope")

    def test_unknown_without_message(self, builder, two_nodes):
        draft = DraftCommand(CommandType.UNKNOWN)
        assert builder.build(draft, two_nodes) == UnknownCommand(UNKNOWN_COMMAND_MESSAGE)


# ═════════════════════════════════════════════════════════════════
#  DOWNGRADES
# ═════════════════════════════════════════════════════════════════

class TestDowngrade:

    def test_delete_not_found_lists_labels(self, builder, two_nodes):
        draft = DraftCommand.delete_node(NodeReference.from_ordinal(5))
        command = builder.build(draft, two_nodes)
        assert command == UnknownCommand(
            'Node "node 5" not found. Available nodes: "Start", "End Call"'
        )

    def test_not_found_on_empty_flow(self, builder, no_nodes):
        command = builder.build(DraftCommand.delete_node(NodeReference("start")), no_nodes)
        assert command.message == 'Node "start" not found. Available nodes: none'

    def test_update_not_found(self, builder, two_nodes):
        draft = DraftCommand.update_node(NodeReference("payment"), "X")
        assert builder.build(draft, two_nodes).message == node_not_found_message("payment", two_nodes)

    def test_update_without_label(self, builder, two_nodes):
        draft = DraftCommand(CommandType.UPDATE_NODE, node=NodeReference.from_ordinal(1))
        assert builder.build(draft, two_nodes) == UnknownCommand(UPDATE_USAGE_MESSAGE)

    def test_connect_one_side_missing(self, builder, two_nodes):
        draft = DraftCommand.connect_nodes(NodeReference.from_ordinal(1), NodeReference.from_ordinal(9))
        assert builder.build(draft, two_nodes) == UnknownCommand(EDGE_NOT_FOUND_MESSAGE)

    def test_disconnect_missing_reference(self, builder, two_nodes):
        draft = DraftCommand(CommandType.DISCONNECT_NODES, source=NodeReference("n1"))
        assert builder.build(draft, two_nodes) == UnknownCommand(EDGE_NOT_FOUND_MESSAGE)

    def test_resolved_ids_are_real(self, builder, stub_nodes):
        draft = DraftCommand.connect_nodes(NodeReference("greeting"), NodeReference("3"))
        command = builder.build(draft, stub_nodes)
        ids = {n.id for n in stub_nodes}
        assert command.source_id in ids and command.target_id in ids
        assert (command.source_id, command.target_id) == ("n2", "n3")

    def test_downgrade_is_logged_with_draft(self, builder, two_nodes, caplog):
        draft = DraftCommand.update_node(NodeReference.from_ordinal(5), "Bye")
        with caplog.at_level(logging.DEBUG, logger="flow_core.flow_platform.interpreter.builder"):
            builder.build(draft, two_nodes)
        assert "'nodeId': 'node 5'" in caplog.text
        assert "downgraded to unknown" in caplog.text


class TestDraftDict:

    def test_update(self):
        draft = DraftCommand.update_node(NodeReference.from_ordinal(2), "Bye")
        assert draft.to_dict() == {"type": "update_node", "nodeId": "node 2", "nodeLabel": "Bye"}

    def test_edge(self):
        draft = DraftCommand.connect_nodes(NodeReference("start"), NodeReference("n2"))
        assert draft.to_dict() == {
            "type": "connect_nodes", "sourceNodeId": "start", "targetNodeId": "n2",
        }
