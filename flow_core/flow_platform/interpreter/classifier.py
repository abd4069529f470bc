"""
    IntentClassifier — rule-based mapping of free text to a draft command.

    Design Pattern: Interpreter / dispatch table
    ────────────────────────────────────────────
    An ordered list of ``IntentDetector`` entries, each a pure
    (trigger, extractor) pair.  The first detector whose trigger matches
    builds the draft; if none matches the result is ``unknown`` with a
    usage message.

    Detectors are mutually exclusive by construction:
        • each trigger keys on the *first* command verb in the text and
          the verb vocabularies are disjoint;
        • edge words (connection / edge / link / arrow) move delete-verbs
          to disconnect and add-verbs to connect, so "remove the
          connection ..." never reaches delete;
        • quoted text and anything after "called" / "named" is ignored
          by triggers, so label words cannot select a detector.

    Order (documented, total): add, delete, update, connect, disconnect,
    explain.

    The classifier never resolves node ids.  It only extracts ordinals
    and label fragments; the ``CommandBuilder`` resolves them.
"""
from __future__ import annotations

import logging
import re
from typing import Callable, List, NamedTuple, Optional, Sequence

from flow_api.types import CommandType, NodeRef, NodeReference
from flow_core.services.resolver import parse_ordinal

from .drafts import DraftCommand

logger = logging.getLogger(__name__)


# ── Vocabulary ───────────────────────────────────────────────────

_ADD_VERBS = r"add|create|insert|new|make|append"
_DELETE_VERBS = r"delete|remove|drop|eliminate|erase|get\s+rid\s+of"
_UPDATE_VERBS = r"update|change|edit|modify|rename|relabel"
_CONNECT_VERBS = r"connect|link|join|attach|wire"
_DISCONNECT_VERBS = r"disconnect|unlink|detach|separate|break"
_EXPLAIN_VERBS = r"explain|describe|summari[sz]e|what|how|tell|show|list|overview"

_ALL_VERBS = "|".join((_ADD_VERBS, _DELETE_VERBS, _UPDATE_VERBS,
                       _CONNECT_VERBS, _DISCONNECT_VERBS, _EXPLAIN_VERBS))


def _leading_verb(verbs: str) -> re.Pattern:
    """Match when the first command verb in the text is one of ``verbs``."""
    return re.compile(rf"^(?:(?!\b(?:{_ALL_VERBS})\b).)*\b(?:{verbs})\b", re.IGNORECASE | re.DOTALL)


_LEADS_WITH_ADD = _leading_verb(_ADD_VERBS)
_LEADS_WITH_DELETE = _leading_verb(_DELETE_VERBS)
_LEADS_WITH_UPDATE = _leading_verb(_UPDATE_VERBS)
_LEADS_WITH_CONNECT = _leading_verb(_CONNECT_VERBS)
_LEADS_WITH_DISCONNECT = _leading_verb(_DISCONNECT_VERBS)
_LEADS_WITH_EXPLAIN = _leading_verb(_EXPLAIN_VERBS)

_EDGE_WORD = re.compile(r"\b(?:connections?|edges?|links?|arrows?|wires?)\b", re.IGNORECASE)
_NODE_WORD = re.compile(r"\b(?:nodes?|steps?|states?)\b", re.IGNORECASE)

# Start of label text: an opening quote or a naming word
_LABEL_MARKER = re.compile(
    r"\"|“|(?<!\w)['‘]|\b(?:called|named|labell?ed|titled|saying|says)\b",
    re.IGNORECASE,
)

_QUOTED = re.compile(r"\"([^\"]+)\"|“([^”]+)”|(?<!\w)'([^']+)'(?!\w)|‘([^’]+)’")


# ── Slot patterns ────────────────────────────────────────────────

_NAMED = re.compile(r"\b(?:called|named|labell?ed|titled)\s+(.+)$", re.IGNORECASE)

_ADD_LABEL_PATTERNS = [
    _NAMED,
    re.compile(r"\bwith\s+(?:the\s+|a\s+)?(?:label|text|name|title)\s+(?:of\s+)?(.+)$", re.IGNORECASE),
    re.compile(r"\b(?:that\s+says|saying|says)\s+(.+)$", re.IGNORECASE),
    re.compile(
        r"\b(?:add|create|insert|make|append|new)\s+(?:a\s+|an\s+|one\s+)?(?:new\s+)?(?:node|step|state)\s+"
        r"(?!(?:to|into|in|on|at|for|please|now|here|there|after|before|with)\b)(.+)$",
        re.IGNORECASE,
    ),
]

_NODE_NUMBER = re.compile(r"\b(?:node|step|state)\s*#?\s*(\d+)\b|#(\d+)\b", re.IGNORECASE)
_TWO_NUMBERS = re.compile(r"(\d+)\D+(\d+)")

_UPDATE_SPLIT = re.compile(
    r"^(?P<target>.+?)\s+"
    r"(?:to\s+say|to\s+read|to\s+be|to|as|into|with\s+(?:the\s+)?(?:label|text|name))\s+"
    r"(?P<label>.+)$",
    re.IGNORECASE,
)
_PAIR_SPLIT = re.compile(
    r"^(?P<source>.+?)\s+(?:to|and|from|with|into|->|→)\s+(?P<target>.+)$",
    re.IGNORECASE,
)

_LEADING_ARTICLE = re.compile(r"^(?:(?:the|a|an|this|that|my)\s+)+", re.IGNORECASE)
_TRAILING_NODE_WORD = re.compile(r"\s+(?:nodes?|steps?|states?)$", re.IGNORECASE)
_LABEL_OF = re.compile(r"^(?:the\s+)?(?:label|name|text|title)\s+(?:of|on|for)\s+", re.IGNORECASE)
_POSSESSIVE_LABEL = re.compile(r"(?:'s|’s)?\s+(?:label|name|text|title)$", re.IGNORECASE)
_LEADING_BETWEEN = re.compile(r"^(?:between|from)\s+", re.IGNORECASE)
_LEADING_EDGE_WORD = re.compile(
    r"^(?:(?:the|a|an)\s+)?(?:connections?|edges?|links?|arrows?|wires?)\s+", re.IGNORECASE
)
_TRAILING_FILLER = re.compile(r"\s+(?:together|please|now)$", re.IGNORECASE)
_TRAILING_PUNCTUATION = ".!?,;:"
_QUOTE_CHARS = "\"'“”‘’"


# ── Messages ─────────────────────────────────────────────────────

EMPTY_FLOW_MESSAGE = "The flow is currently empty. Add some nodes to get started!"

UNKNOWN_COMMAND_MESSAGE = (
    "I didn't understand that command. Try: \"Add a node called X\", "
    "\"Delete node 1\", \"Delete the end call node\", \"Connect node 1 to node 2\", "
    "\"Disconnect node 1 from node 2\", \"Update node 1 to say Y\", or \"Explain this flow\""
)
DELETE_USAGE_MESSAGE = 'Could not tell which node to delete. Format: "Delete node 1" or "Delete the end call node"'
UPDATE_USAGE_MESSAGE = 'Could not parse update command. Format: "Update node 1 to say Welcome"'
CONNECT_USAGE_MESSAGE = 'Could not find the nodes to connect. Format: "Connect node 1 to node 2"'
DISCONNECT_USAGE_MESSAGE = 'Could not find the nodes to disconnect. Format: "Disconnect node 1 from node 2"'


# ── Helpers ──────────────────────────────────────────────────────

def _trigger_text(text: str) -> str:
    """Lower-cased text up to the first quote or naming word."""
    marker = _LABEL_MARKER.search(text)
    head = text[:marker.start()] if marker else text
    return head.lower().strip()


def _quoted_strings(text: str) -> List[str]:
    return [next(g for g in m.groups() if g is not None).strip()
            for m in _QUOTED.finditer(text)]


def _clean_label(value: str) -> str:
    value = value.strip().rstrip(_TRAILING_PUNCTUATION).strip()
    return value.strip(_QUOTE_CHARS).strip()


def _clean_fragment(value: str, strip_label_words: bool = False) -> str:
    value = _clean_label(value)
    value = _TRAILING_FILLER.sub("", value)
    if strip_label_words:
        # "the label of node 2", "node 2's label"
        value = _LABEL_OF.sub("", value)
        value = _POSSESSIVE_LABEL.sub("", value)
    value = _LEADING_ARTICLE.sub("", value)
    value = _TRAILING_NODE_WORD.sub("", value)
    return _clean_label(value)


def _to_reference(fragment: str, strip_label_words: bool = False) -> Optional[NodeReference]:
    """Turn a phrase into an ordinal or label-fragment reference."""
    quoted = _quoted_strings(fragment)
    if quoted:
        return NodeReference.from_label(quoted[0]) if quoted[0] else None

    cleaned = _clean_fragment(fragment, strip_label_words)
    if not cleaned:
        return None

    ordinal = parse_ordinal(cleaned)
    if ordinal is not None:
        return NodeReference.from_ordinal(ordinal, cleaned)
    return NodeReference(cleaned)


def _text_after(pattern: str, text: str) -> str:
    """Everything after the first occurrence of one of the words in ``pattern``."""
    match = re.search(rf"\b(?:{pattern})\b\s*(.*)$", text, re.IGNORECASE | re.DOTALL)
    return match.group(1).strip() if match else ""


def describe_flow(nodes: Sequence[NodeRef]) -> str:
    """Plain-text summary of the current nodes."""
    if not nodes:
        return EMPTY_FLOW_MESSAGE

    node_list = "\n".join(f'{i + 1}. "{n.label}"' for i, n in enumerate(nodes))
    return f"Current flow structure:\n\nNodes:\n{node_list}\n\nTotal: {len(nodes)} node(s)"


# ── Dispatch table entry ─────────────────────────────────────────

class IntentDetector(NamedTuple):
    intent: CommandType
    trigger: Callable[[str], bool]
    extract: Callable[[str, Sequence[NodeRef]], DraftCommand]


class IntentClassifier:
    """
    Maps raw user text to a ``DraftCommand``.

    Usage:
        classifier = IntentClassifier()
        draft = classifier.classify("connect node 1 to node 2", nodes)
    """

    def __init__(self):
        self._detectors: List[IntentDetector] = [
            IntentDetector(CommandType.ADD_NODE, self._is_add, self._extract_add),
            IntentDetector(CommandType.DELETE_NODE, self._is_delete, self._extract_delete),
            IntentDetector(CommandType.UPDATE_NODE, self._is_update, self._extract_update),
            IntentDetector(CommandType.CONNECT_NODES, self._is_connect, self._extract_connect),
            IntentDetector(CommandType.DISCONNECT_NODES, self._is_disconnect, self._extract_disconnect),
            IntentDetector(CommandType.EXPLAIN, self._is_explain, self._extract_explain),
        ]

    @property
    def detectors(self) -> List[IntentDetector]:
        return list(self._detectors)

    def classify(self, text: str, nodes: Sequence[NodeRef]) -> DraftCommand:
        text = (text or "").strip()
        head = _trigger_text(text)

        for detector in self._detectors:
            if detector.trigger(head):
                logger.debug("Classified %r as %s", text, detector.intent.value)
                return detector.extract(text, nodes)

        logger.debug("No detector matched %r", text)
        return DraftCommand.unknown(UNKNOWN_COMMAND_MESSAGE)

    # ── Triggers ─────────────────────────────────────────────────

    @staticmethod
    def _is_add(head: str) -> bool:
        return (bool(_LEADS_WITH_ADD.search(head)) and not _EDGE_WORD.search(head)
                and bool(_NODE_WORD.search(head)))

    @staticmethod
    def _is_delete(head: str) -> bool:
        return bool(_LEADS_WITH_DELETE.search(head)) and not _EDGE_WORD.search(head)

    @staticmethod
    def _is_update(head: str) -> bool:
        return bool(_LEADS_WITH_UPDATE.search(head)) and not _EDGE_WORD.search(head)

    @staticmethod
    def _is_connect(head: str) -> bool:
        if _LEADS_WITH_CONNECT.search(head):
            return True
        return bool(_LEADS_WITH_ADD.search(head)) and bool(_EDGE_WORD.search(head))

    @staticmethod
    def _is_disconnect(head: str) -> bool:
        if _LEADS_WITH_DISCONNECT.search(head):
            return True
        return bool(_LEADS_WITH_DELETE.search(head)) and bool(_EDGE_WORD.search(head))

    @staticmethod
    def _is_explain(head: str) -> bool:
        return bool(_LEADS_WITH_EXPLAIN.search(head))

    # ── Extractors ───────────────────────────────────────────────

    @staticmethod
    def _extract_add(text: str, nodes: Sequence[NodeRef]) -> DraftCommand:
        quoted = _quoted_strings(text)
        label = quoted[0] if quoted else ""

        if not label:
            for pattern in _ADD_LABEL_PATTERNS:
                match = pattern.search(text)
                if match:
                    label = _clean_label(match.group(1))
                    if label:
                        break

        return DraftCommand.add_node(label or f"Node {len(nodes) + 1}")

    @staticmethod
    def _extract_delete(text: str, nodes: Sequence[NodeRef]) -> DraftCommand:
        quoted = _quoted_strings(text)
        if quoted and quoted[0]:
            return DraftCommand.delete_node(NodeReference.from_label(quoted[0]))

        named = _NAMED.search(text)
        if named and _clean_label(named.group(1)):
            return DraftCommand.delete_node(NodeReference.from_label(_clean_label(named.group(1))))

        number = _NODE_NUMBER.search(text)
        if number:
            ordinal = int(number.group(1) or number.group(2))
            return DraftCommand.delete_node(NodeReference.from_ordinal(ordinal, number.group(0)))

        reference = _to_reference(_text_after(_DELETE_VERBS, text))
        if reference is None:
            return DraftCommand.unknown(DELETE_USAGE_MESSAGE)
        return DraftCommand.delete_node(reference)

    @staticmethod
    def _extract_update(text: str, nodes: Sequence[NodeRef]) -> DraftCommand:
        body = _text_after(_UPDATE_VERBS, text)
        target: Optional[NodeReference] = None
        label = ""

        split = _UPDATE_SPLIT.match(body)
        if split:
            target = _to_reference(split.group("target"), strip_label_words=True)
            label = _clean_label(split.group("label"))
        else:
            quoted = _quoted_strings(body)
            if quoted:
                label = quoted[-1]
                target = _to_reference(_QUOTED.sub(" ", body), strip_label_words=True)

        if target is None or not label:
            return DraftCommand.unknown(UPDATE_USAGE_MESSAGE)
        return DraftCommand.update_node(target, label)

    @staticmethod
    def _edge_body(text: str, verbs: Optional[str]) -> str:
        """
        Text naming the two endpoints: after the verb ("connect ..."), or
        after the edge word when ``verbs`` is None ("remove the link ...").
        """
        if verbs is None:
            edge_word = _EDGE_WORD.search(_trigger_text(text))
            body = text[edge_word.end():].strip() if edge_word else ""
        else:
            body = _LEADING_EDGE_WORD.sub("", _text_after(verbs, text))
        return _LEADING_BETWEEN.sub("", body)

    @classmethod
    def _extract_pair(cls, text: str, verbs: Optional[str]):
        body = cls._edge_body(text, verbs)

        split = _PAIR_SPLIT.match(body)
        if split:
            return _to_reference(split.group("source")), _to_reference(split.group("target"))

        numbers = _TWO_NUMBERS.search(body)
        if numbers:
            return (NodeReference.from_ordinal(int(numbers.group(1))),
                    NodeReference.from_ordinal(int(numbers.group(2))))
        return None, None

    @classmethod
    def _extract_connect(cls, text: str, nodes: Sequence[NodeRef]) -> DraftCommand:
        verbs = _CONNECT_VERBS if _LEADS_WITH_CONNECT.search(_trigger_text(text)) else None
        source, target = cls._extract_pair(text, verbs)
        if source is None or target is None:
            return DraftCommand.unknown(CONNECT_USAGE_MESSAGE)
        return DraftCommand.connect_nodes(source, target)

    @classmethod
    def _extract_disconnect(cls, text: str, nodes: Sequence[NodeRef]) -> DraftCommand:
        verbs = _DISCONNECT_VERBS if _LEADS_WITH_DISCONNECT.search(_trigger_text(text)) else None
        source, target = cls._extract_pair(text, verbs)
        if source is None or target is None:
            return DraftCommand.unknown(DISCONNECT_USAGE_MESSAGE)
        return DraftCommand.disconnect_nodes(source, target)

    @staticmethod
    def _extract_explain(text: str, nodes: Sequence[NodeRef]) -> DraftCommand:
        return DraftCommand.explain(describe_flow(nodes))
