"""
    Draft commands — intent classified, node references not yet resolved.

    Both intent sources (rule-based classifier, remote model) produce a
    ``DraftCommand``; the ``CommandBuilder`` turns it into a final
    ``Command``.  Drafts are immutable.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from flow_api.types import CommandType, NodeReference

# Payload fields each command type must carry (remote wire format)
REQUIRED_PAYLOAD_FIELDS = {
    CommandType.ADD_NODE: ("nodeLabel",),
    CommandType.DELETE_NODE: ("nodeId",),
    CommandType.UPDATE_NODE: ("nodeId", "nodeLabel"),
    CommandType.CONNECT_NODES: ("sourceNodeId", "targetNodeId"),
    CommandType.DISCONNECT_NODES: ("sourceNodeId", "targetNodeId"),
    CommandType.EXPLAIN: ("message",),
    CommandType.UNKNOWN: (),
}

OPTIONAL_PAYLOAD_FIELDS = ("nodeId", "nodeLabel", "sourceNodeId", "targetNodeId", "message")


@dataclass(frozen=True)
class DraftCommand:
    type: CommandType
    label: Optional[str] = None
    node: Optional[NodeReference] = None
    source: Optional[NodeReference] = None
    target: Optional[NodeReference] = None
    message: Optional[str] = None

    # ── Factories ────────────────────────────────────────────────

    @classmethod
    def add_node(cls, label: str) -> 'DraftCommand':
        return cls(CommandType.ADD_NODE, label=label)

    @classmethod
    def delete_node(cls, node: NodeReference) -> 'DraftCommand':
        return cls(CommandType.DELETE_NODE, node=node)

    @classmethod
    def update_node(cls, node: NodeReference, label: str) -> 'DraftCommand':
        return cls(CommandType.UPDATE_NODE, node=node, label=label)

    @classmethod
    def connect_nodes(cls, source: NodeReference, target: NodeReference) -> 'DraftCommand':
        return cls(CommandType.CONNECT_NODES, source=source, target=target)

    @classmethod
    def disconnect_nodes(cls, source: NodeReference, target: NodeReference) -> 'DraftCommand':
        return cls(CommandType.DISCONNECT_NODES, source=source, target=target)

    @classmethod
    def explain(cls, message: str) -> 'DraftCommand':
        return cls(CommandType.EXPLAIN, message=message)

    @classmethod
    def unknown(cls, message: str) -> 'DraftCommand':
        return cls(CommandType.UNKNOWN, message=message)

    # ── Wire format ──────────────────────────────────────────────

    @classmethod
    def from_payload(cls, payload: Any) -> 'DraftCommand':
        """
        Build a draft from a remote JSON object.

        ``nodeId`` / ``sourceNodeId`` / ``targetNodeId`` may hold real ids,
        ordinal strings or label fragments; they are resolved later.

        Raises:
            ValueError: On any deviation from the expected shape.
        """
        if not isinstance(payload, dict):
            raise ValueError("Command payload must be a JSON object.")

        command_type = CommandType.parse(payload.get("type"))
        if command_type is None:
            raise ValueError(f"Unknown command type: {payload.get('type')!r}")

        for key in OPTIONAL_PAYLOAD_FIELDS:
            value = payload.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"Field '{key}' must be a string.")

        for key in REQUIRED_PAYLOAD_FIELDS[command_type]:
            value = payload.get(key)
            if value is None or not value.strip():
                raise ValueError(f"'{command_type.value}' requires '{key}'.")

        def ref(key: str) -> Optional[NodeReference]:
            value = payload.get(key)
            return NodeReference(value.strip()) if value else None

        label = payload.get("nodeLabel")
        return cls(
            command_type,
            label=label.strip() if label else None,
            node=ref("nodeId"),
            source=ref("sourceNodeId"),
            target=ref("targetNodeId"),
            message=payload.get("message"),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {'type': self.type.value}
        if self.node is not None:
            result['nodeId'] = self.node.text
        if self.label is not None:
            result['nodeLabel'] = self.label
        if self.source is not None:
            result['sourceNodeId'] = self.source.text
        if self.target is not None:
            result['targetNodeId'] = self.target.text
        if self.message is not None:
            result['message'] = self.message
        return result
