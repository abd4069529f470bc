"""
Interpreter package — natural-language commands for a flow diagram.

Design Patterns
───────────────
• Command       – each outcome is an immutable ``Command`` object with
                  ``execute(graph)``.
• Chain of Responsibility – ``IntentClassifier`` tries its ordered
                            detectors until one claims the input.
• Builder       – ``CommandBuilder`` resolves a ``DraftCommand`` into a
                  final ``Command``.
• Facade        – ``FlowCommandProcessor.process(text, graph)``.
"""
from .builder import CommandBuilder
from .classifier import IntentClassifier, describe_flow
from .command_processor import FlowCommandProcessor
from .commands import (
    Command,
    CommandResult,
    AddNodeCommand,
    DeleteNodeCommand,
    UpdateNodeCommand,
    ConnectNodesCommand,
    DisconnectNodesCommand,
    ExplainCommand,
    UnknownCommand,
)
from .drafts import DraftCommand
from .interpreter import CommandInterpreter, interpret
from .remote import RemoteInterpreter, RemoteSuccess, RemoteFailure

__all__ = [
    'CommandBuilder',
    'IntentClassifier',
    'describe_flow',
    'FlowCommandProcessor',
    'Command',
    'CommandResult',
    'AddNodeCommand',
    'DeleteNodeCommand',
    'UpdateNodeCommand',
    'ConnectNodesCommand',
    'DisconnectNodesCommand',
    'ExplainCommand',
    'UnknownCommand',
    'DraftCommand',
    'CommandInterpreter',
    'interpret',
    'RemoteInterpreter',
    'RemoteSuccess',
    'RemoteFailure',
]
