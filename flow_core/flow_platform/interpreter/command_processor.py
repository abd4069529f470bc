"""
    FlowCommandProcessor — interprets free text and applies it to a flow.

    Design Patterns
    ───────────────
    • Interpreter   – free text becomes a structured ``Command`` object.
    • Facade        – single ``process(text, graph)`` entry-point hides
                      classification, resolution and execution.

    The processor owns no graph state: the caller passes the current
    ``FlowGraph`` on every call and receives it back in the result.
    When an ``autosave_path`` is given, the flow is written there after
    every successful mutating command.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from flow_api.models.graph import FlowGraph
from flow_core.services.serialization_service import FlowSerializer

from .commands import Command, CommandResult
from .interpreter import CommandInterpreter

logger = logging.getLogger(__name__)


class FlowCommandProcessor:
    """
    Interprets user input against the graph's current nodes, executes
    the resulting ``Command`` on the graph and reports the outcome.

    Usage from a web / chat layer:
        processor = FlowCommandProcessor(autosave_path="flow.json")
        result = processor.process("connect node 1 to node 2", graph)
    """

    def __init__(self, interpreter: Optional[CommandInterpreter] = None,
                 serializer: Optional[FlowSerializer] = None,
                 autosave_path: Optional[Union[str, Path]] = None):
        self._interpreter = interpreter or CommandInterpreter()
        self._serializer = serializer or FlowSerializer(self._interpreter.config.serialization)
        self._autosave_path = autosave_path

    @property
    def interpreter(self) -> CommandInterpreter:
        return self._interpreter

    @property
    def serializer(self) -> FlowSerializer:
        return self._serializer

    # ── Public API ───────────────────────────────────────────────

    def process(self, text: str, graph: FlowGraph) -> CommandResult:
        """
        Interpret and execute a single command on the given graph.

        Args:
            text:  Raw command string from the user.
            graph: The flow being edited.

        Returns:
            ``CommandResult`` with success status, message, the graph and
            the applied command under ``data['command']``.
        """
        command = self._interpreter.interpret(text, graph.node_refs())
        return self._execute(text, command, graph)

    async def process_async(self, text: str, graph: FlowGraph) -> CommandResult:
        """Same as ``process`` but consults the remote intent source first."""
        command = await self._interpreter.interpret_async(text, graph.node_refs())
        return self._execute(text, command, graph)

    def clear(self, graph: FlowGraph) -> CommandResult:
        """Remove every node and edge from the flow."""
        graph.clear()
        self._autosave(graph)
        return CommandResult(True, "Flow cleared.", graph)

    # ── Execution engine ─────────────────────────────────────────

    def _execute(self, text: str, command: Command, graph: FlowGraph) -> CommandResult:
        result = command.execute(graph)
        if result.data is None:
            result.data = {}
        result.data["command"] = command.to_dict()

        logger.info("Processed %r as %s (success=%s)", text, command.type.value, result.success)

        if result.success and command.mutates:
            self._autosave(graph)
        return result

    def _autosave(self, graph: FlowGraph) -> None:
        if self._autosave_path is None:
            return
        try:
            self._serializer.save(graph, self._autosave_path)
        except OSError as e:
            logger.warning("Auto-save to %s failed: %s", self._autosave_path, e)
