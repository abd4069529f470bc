"""
    Serialization and deserialization service for flows.

    Design Pattern: Strategy (serialization strategy is configurable)
    ─────────────────────────────────────────────────────────────────
    The ``SerializationConfig`` decides whether positions and the
    ``savedAt`` timestamp are written.

    Saved shape:
        {
          "nodes": [{"id", "position": {"x", "y"}, "data": {"label"}}],
          "edges": [{"id", "source", "target"}],
          "savedAt": "<iso timestamp>"
        }
"""
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from flow_api.models.graph import FlowGraph
from flow_api.models.node import FlowNode
from flow_api.models.edge import FlowEdge

from flow_core.flow_platform.config import SerializationConfig
from .exceptions import FlowFormatError

logger = logging.getLogger(__name__)


class FlowSerializer:
    """
    Serialize / deserialize ``FlowGraph`` instances.

    Usage:
        serializer = FlowSerializer()
        data = serializer.serialize(graph)       # → dict
        serializer.save(graph, "flow.json")
        graph = serializer.load("flow.json")     # → FlowGraph
    """

    def __init__(self, config: Optional[SerializationConfig] = None):
        self._config = config or SerializationConfig()

    @property
    def config(self) -> SerializationConfig:
        return self._config

    @config.setter
    def config(self, value: SerializationConfig) -> None:
        self._config = value

    # ── Serialization ────────────────────────────────────────────

    def serialize(self, graph: FlowGraph) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'nodes': [self._serialize_node(n) for n in graph.get_all_nodes()],
            'edges': [e.to_dict() for e in graph.get_all_edges()],
        }
        if self._config.include_timestamp:
            data['savedAt'] = datetime.now(timezone.utc).isoformat()
        return data

    def to_json(self, graph: FlowGraph) -> str:
        return json.dumps(self.serialize(graph), indent=self._config.indent)

    def save(self, graph: FlowGraph, path: Union[str, Path]) -> None:
        Path(path).write_text(self.to_json(graph), encoding="utf-8")
        logger.info("Saved flow (%d nodes, %d edges) to %s",
                    graph.get_number_of_nodes(), graph.get_number_of_edges(), path)

    def _serialize_node(self, node: FlowNode) -> Dict[str, Any]:
        result = node.to_dict()
        if not self._config.include_positions:
            del result['position']
        return result

    # ── Deserialization ──────────────────────────────────────────

    def deserialize(self, data: Any, graph_id: str = "flow") -> FlowGraph:
        """
        Rebuild a graph from a dict produced by ``serialize()``.

        Raises:
            FlowFormatError: If the data is not a flow or references
                             unknown nodes.
        """
        if not isinstance(data, dict):
            raise FlowFormatError("Flow data must be an object.")
        nodes = data.get('nodes')
        edges = data.get('edges')
        if not isinstance(nodes, list) or not isinstance(edges, list):
            raise FlowFormatError("Flow data needs 'nodes' and 'edges' lists.")

        graph = FlowGraph(graph_id)
        try:
            for item in nodes:
                position = item.get('position') or {}
                graph.add_node(FlowNode(
                    str(item['id']),
                    item['data']['label'],
                    (position.get('x', 0.0), position.get('y', 0.0)),
                ))
            for item in edges:
                source = graph.get_node(str(item['source']))
                target = graph.get_node(str(item['target']))
                if source is None or target is None:
                    raise FlowFormatError(
                        f"Edge {item.get('id')} references a missing node."
                    )
                graph.add_edge(FlowEdge(str(item['id']), source, target))
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise FlowFormatError(f"Malformed flow data: {e}") from e

        return graph

    def from_json(self, text: str, graph_id: str = "flow") -> FlowGraph:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise FlowFormatError(f"Invalid JSON: {e}") from e
        return self.deserialize(data, graph_id)

    def load(self, path: Union[str, Path]) -> FlowGraph:
        graph = self.from_json(Path(path).read_text(encoding="utf-8"), graph_id=Path(path).stem)
        logger.info("Loaded flow (%d nodes, %d edges) from %s",
                    graph.get_number_of_nodes(), graph.get_number_of_edges(), path)
        return graph
