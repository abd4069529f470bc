"""
    CommandInterpreter — entry point from free text to a ``Command``.

        text + nodes ─► [remote draft?] ─► classifier draft ─► builder ─► Command

    ``interpret`` is synchronous, stateless and total: any string with any
    node list (including an empty one) yields exactly one ``Command``;
    ``unknown`` is the "could not do it" outcome.  ``interpret_async``
    first tries the optional remote intent source and falls back to the
    rule-based path on any failure.
"""
import logging
from typing import Any, Iterable, List, Mapping, Optional

from flow_api.types import NodeRef

from ..config import InterpreterConfig
from .builder import CommandBuilder
from .classifier import IntentClassifier
from .commands import Command
from .remote import RemoteInterpreter

logger = logging.getLogger(__name__)


def as_node_refs(nodes: Iterable[Any]) -> List[NodeRef]:
    """
    Normalize the caller's node list to ``NodeRef`` objects.

    Accepts ``NodeRef`` instances or mappings with ``id`` and ``label``.
    ``index`` is always the position in the given order.
    """
    refs: List[NodeRef] = []
    for i, node in enumerate(nodes or ()):
        if isinstance(node, NodeRef):
            node_id, label = node.id, node.label
        elif isinstance(node, Mapping):
            node_id, label = node.get("id", ""), node.get("label", "")
        else:
            node_id, label = getattr(node, "id", ""), getattr(node, "label", "")
        refs.append(NodeRef(str(node_id), str(label), i))
    return refs


class CommandInterpreter:
    """
    Usage:
        interpreter = CommandInterpreter()
        command = interpreter.interpret("delete node 2", graph.node_refs())

        remote = CommandInterpreter(InterpreterConfig(remote=RemoteConfig.from_env()))
        command = await remote.interpret_async("delete node 2", graph.node_refs())
    """

    def __init__(self, config: Optional[InterpreterConfig] = None,
                 remote: Optional[RemoteInterpreter] = None,
                 classifier: Optional[IntentClassifier] = None,
                 builder: Optional[CommandBuilder] = None):
        self._config = config or InterpreterConfig()
        if remote is None and self._config.remote_enabled:
            remote = RemoteInterpreter(self._config.remote)
        self._remote = remote
        self._classifier = classifier or IntentClassifier()
        self._builder = builder or CommandBuilder()

    @property
    def config(self) -> InterpreterConfig:
        return self._config

    @property
    def remote(self) -> Optional[RemoteInterpreter]:
        return self._remote

    def interpret(self, text: str, nodes: Iterable[Any]) -> Command:
        """Rule-based interpretation; never raises for a str and a node list."""
        refs = as_node_refs(nodes)
        draft = self._classifier.classify(text if isinstance(text, str) else "", refs)
        return self._builder.build(draft, refs)

    async def interpret_async(self, text: str, nodes: Iterable[Any]) -> Command:
        """One remote attempt (if configured), then the rule-based path."""
        refs = as_node_refs(nodes)

        if self._remote is not None:
            result = await self._remote.request_draft(text, refs)
            if result.ok:
                return self._builder.build(result.draft, refs)
            logger.warning("Remote interpreter failed, using rule-based parser: %s", result.reason)

        return self.interpret(text, refs)


_default_interpreter = CommandInterpreter()


def interpret(text: str, nodes: Iterable[Any]) -> Command:
    """Interpret ``text`` against the ordered node list (rule-based, synchronous)."""
    return _default_interpreter.interpret(text, nodes)
