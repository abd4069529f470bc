"""
    CommandBuilder — turns a ``DraftCommand`` into a fully-resolved
    ``Command``.

    Shared by both intent sources (rule-based classifier and remote
    model), so one disambiguation policy applies whichever produced the
    draft.  Any reference that cannot be resolved downgrades the whole
    command to ``unknown`` with a diagnostic.
"""
import logging
from typing import Callable, Dict, Optional, Sequence

from flow_api.types import CommandType, NodeRef
from flow_core.services.resolver import NodeResolver

from .classifier import UNKNOWN_COMMAND_MESSAGE, UPDATE_USAGE_MESSAGE
from .commands import (
    Command,
    AddNodeCommand,
    DeleteNodeCommand,
    UpdateNodeCommand,
    ConnectNodesCommand,
    DisconnectNodesCommand,
    ExplainCommand,
    UnknownCommand,
)
from .drafts import DraftCommand

logger = logging.getLogger(__name__)

EDGE_NOT_FOUND_MESSAGE = "Could not find one or both nodes to connect/disconnect."


def node_not_found_message(reference: str, nodes: Sequence[NodeRef]) -> str:
    available = ", ".join(f'"{n.label}"' for n in nodes) or "none"
    return f'Node "{reference}" not found. Available nodes: {available}'


class CommandBuilder:
    """
    Usage:
        builder = CommandBuilder()
        command = builder.build(draft, nodes)
    """

    def __init__(self, resolver: Optional[NodeResolver] = None):
        self._resolver = resolver or NodeResolver()
        self._handlers: Dict[CommandType, Callable[[DraftCommand, Sequence[NodeRef]], Command]] = {
            CommandType.ADD_NODE: self._build_add,
            CommandType.DELETE_NODE: self._build_delete,
            CommandType.UPDATE_NODE: self._build_update,
            CommandType.CONNECT_NODES: self._build_edge,
            CommandType.DISCONNECT_NODES: self._build_edge,
            CommandType.EXPLAIN: self._build_explain,
            CommandType.UNKNOWN: self._build_unknown,
        }

    @property
    def resolver(self) -> NodeResolver:
        return self._resolver

    def build(self, draft: DraftCommand, nodes: Sequence[NodeRef]) -> Command:
        command = self._handlers[draft.type](draft, nodes)
        if command.type is not draft.type:
            logger.debug("Draft %s downgraded to %s", draft.to_dict(), command.type.value)
        return command

    # ── Per-variant builders ─────────────────────────────────────

    @staticmethod
    def _build_add(draft: DraftCommand, nodes: Sequence[NodeRef]) -> Command:
        label = (draft.label or "").strip()
        return AddNodeCommand(label or f"Node {len(nodes) + 1}")

    def _build_delete(self, draft: DraftCommand, nodes: Sequence[NodeRef]) -> Command:
        if draft.node is None:
            return UnknownCommand(node_not_found_message("", nodes))

        node = self._resolver.resolve(draft.node, nodes)
        if node is None:
            return UnknownCommand(node_not_found_message(draft.node.text, nodes))
        return DeleteNodeCommand(node.id)

    def _build_update(self, draft: DraftCommand, nodes: Sequence[NodeRef]) -> Command:
        label = (draft.label or "").strip()
        if draft.node is None or not label:
            return UnknownCommand(UPDATE_USAGE_MESSAGE)

        node = self._resolver.resolve(draft.node, nodes)
        if node is None:
            return UnknownCommand(node_not_found_message(draft.node.text, nodes))
        return UpdateNodeCommand(node.id, label)

    def _build_edge(self, draft: DraftCommand, nodes: Sequence[NodeRef]) -> Command:
        if draft.source is None or draft.target is None:
            return UnknownCommand(EDGE_NOT_FOUND_MESSAGE)

        source = self._resolver.resolve(draft.source, nodes)
        target = self._resolver.resolve(draft.target, nodes)
        if source is None or target is None:
            return UnknownCommand(EDGE_NOT_FOUND_MESSAGE)

        if draft.type is CommandType.CONNECT_NODES:
            return ConnectNodesCommand(source.id, target.id)
        return DisconnectNodesCommand(source.id, target.id)

    @staticmethod
    def _build_explain(draft: DraftCommand, nodes: Sequence[NodeRef]) -> Command:
        return ExplainCommand(draft.message or "")

    @staticmethod
    def _build_unknown(draft: DraftCommand, nodes: Sequence[NodeRef]) -> Command:
        return UnknownCommand(draft.message or UNKNOWN_COMMAND_MESSAGE)
