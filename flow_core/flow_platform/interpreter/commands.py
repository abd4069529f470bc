"""
    Flow Commands — the fully-resolved output of the interpreter.

    Design Pattern: Command
    ───────────────────────
    Each command is an immutable value describing one requested change.
    The interpreter only builds commands; the owner of the graph applies
    them with ``execute(graph) → CommandResult``.

    Variants:
    ─────────
        add_node{label}
        delete_node{node_id}
        update_node{node_id, label}
        connect_nodes{source_id, target_id}
        disconnect_nodes{source_id, target_id}
        explain{message}
        unknown{message}

    Every variant except explain / unknown carries real node ids, never
    label text or ordinals.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional

from flow_api.models.graph import FlowGraph
from flow_api.types import CommandType


# ── Result wrapper ───────────────────────────────────────────────

@dataclass
class CommandResult:
    """
    Value object returned by every command execution.

    Attributes:
        success:  Whether the command completed without error.
        message:  Human-readable output.
        graph:    The (possibly modified) graph after the command.
        data:     Optional structured data for programmatic consumers.
    """
    success: bool
    message: str
    graph: Optional[FlowGraph] = None
    data: Optional[Dict[str, Any]] = field(default_factory=dict)


# ── Abstract base ────────────────────────────────────────────────

class Command(ABC):
    """
    Abstract base for all flow commands.

    Design Pattern: Command
    """

    type: ClassVar[CommandType]

    @abstractmethod
    def execute(self, graph: FlowGraph) -> CommandResult:
        """Apply the command to the given graph."""
        ...

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Wire representation (``type`` plus camelCase fields)."""
        ...

    @property
    def mutates(self) -> bool:
        """Whether applying this command can change the graph."""
        return True


# ═════════════════════════════════════════════════════════════════
#  NODE COMMANDS
# ═════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AddNodeCommand(Command):
    """Add a node; the graph generates its id and placement."""

    label: str
    type: ClassVar[CommandType] = CommandType.ADD_NODE

    def execute(self, graph: FlowGraph) -> CommandResult:
        node = graph.create_node(self.label)
        return CommandResult(
            True,
            f"Node '{node.label}' added.",
            graph,
            data={"node_id": node.node_id},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "nodeLabel": self.label}


@dataclass(frozen=True)
class DeleteNodeCommand(Command):
    """Delete a node together with every edge touching it."""

    node_id: str
    type: ClassVar[CommandType] = CommandType.DELETE_NODE

    def execute(self, graph: FlowGraph) -> CommandResult:
        node = graph.get_node(self.node_id)
        if node is None:
            return CommandResult(False, f"Node '{self.node_id}' not found.", graph)

        edge_count = sum(1 for e in graph.get_all_edges() if e.touches(self.node_id))
        graph.remove_node(self.node_id)
        return CommandResult(
            True,
            f"Node '{node.label}' deleted ({edge_count} connection(s) removed).",
            graph,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "nodeId": self.node_id}


@dataclass(frozen=True)
class UpdateNodeCommand(Command):
    """Change a node's label."""

    node_id: str
    label: str
    type: ClassVar[CommandType] = CommandType.UPDATE_NODE

    def execute(self, graph: FlowGraph) -> CommandResult:
        node = graph.get_node(self.node_id)
        if node is None:
            return CommandResult(False, f"Node '{self.node_id}' not found.", graph)

        old_label = node.label
        graph.update_label(self.node_id, self.label)
        return CommandResult(True, f"Node '{old_label}' renamed to '{self.label}'.", graph)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "nodeId": self.node_id, "nodeLabel": self.label}


# ═════════════════════════════════════════════════════════════════
#  EDGE COMMANDS
# ═════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class _EdgeCommand(Command):
    source_id: str
    target_id: str

    def _missing_endpoint(self, graph: FlowGraph) -> Optional[CommandResult]:
        if graph.get_node(self.source_id) is None:
            return CommandResult(False, f"Source node '{self.source_id}' not found.", graph)
        if graph.get_node(self.target_id) is None:
            return CommandResult(False, f"Target node '{self.target_id}' not found.", graph)
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "sourceNodeId": self.source_id,
            "targetNodeId": self.target_id,
        }


@dataclass(frozen=True)
class ConnectNodesCommand(_EdgeCommand):
    """Connect source → target.  Idempotent: an existing edge is kept."""

    type: ClassVar[CommandType] = CommandType.CONNECT_NODES

    def execute(self, graph: FlowGraph) -> CommandResult:
        failure = self._missing_endpoint(graph)
        if failure is not None:
            return failure

        edge, created = graph.connect(self.source_id, self.target_id)
        if not created:
            return CommandResult(
                True,
                f"Nodes '{self.source_id}' and '{self.target_id}' are already connected.",
                graph,
                data={"edge_id": edge.edge_id},
            )
        return CommandResult(
            True,
            f"Connected '{self.source_id}' -> '{self.target_id}'.",
            graph,
            data={"edge_id": edge.edge_id},
        )


@dataclass(frozen=True)
class DisconnectNodesCommand(_EdgeCommand):
    """Remove every edge going from source to target."""

    type: ClassVar[CommandType] = CommandType.DISCONNECT_NODES

    def execute(self, graph: FlowGraph) -> CommandResult:
        failure = self._missing_endpoint(graph)
        if failure is not None:
            return failure

        removed = graph.disconnect(self.source_id, self.target_id)
        return CommandResult(
            True,
            f"Removed {removed} connection(s) '{self.source_id}' -> '{self.target_id}'.",
            graph,
        )


# ═════════════════════════════════════════════════════════════════
#  INFORMATIONAL COMMANDS (no graph mutation)
# ═════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ExplainCommand(Command):
    """A description of the flow for the user."""

    message: str
    type: ClassVar[CommandType] = CommandType.EXPLAIN

    def execute(self, graph: FlowGraph) -> CommandResult:
        return CommandResult(True, self.message, graph)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "message": self.message}

    @property
    def mutates(self) -> bool:
        return False


@dataclass(frozen=True)
class UnknownCommand(Command):
    """The universal "could not do it" outcome, with a diagnostic."""

    message: str
    type: ClassVar[CommandType] = CommandType.UNKNOWN

    def execute(self, graph: FlowGraph) -> CommandResult:
        return CommandResult(False, self.message, graph)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "message": self.message}

    @property
    def mutates(self) -> bool:
        return False
