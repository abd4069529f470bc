# flow_core/services/lookup_service.py
"""
    Concrete node lookups — by id, ordinal, exact label and fuzzy label.

    Each extends ``NodeLookupService`` (Template Method + Genericity).
    Matching is always "first node in sequence order wins"; there is no
    scoring, so duplicate labels resolve to the earliest node.
"""
from typing import List, Optional, Sequence

from flow_api.types import NodeRef
from .base_service import NodeLookupService

# Words that describe the kind of thing rather than which one
STOP_WORDS = frozenset({"the", "a", "an", "node", "step", "state", "nodes", "steps", "states"})

# Stripped from both ends of each search token
_TOKEN_PUNCTUATION = "\"'`.,;:!?()[]{}“”‘’"

# Tier-2 tokens must be longer than this
_MIN_PARTIAL_TOKEN = 2


def search_tokens(text: str) -> List[str]:
    """
    Lower-case, split on whitespace, trim punctuation and drop stop words.

    Example:
        >>> search_tokens("the End Call node")
        ['end', 'call']
    """
    tokens = (t.strip(_TOKEN_PUNCTUATION) for t in text.lower().split())
    return [t for t in tokens if t and t not in STOP_WORDS]


class IdLookupService(NodeLookupService[str]):
    """Exact, case-sensitive match on the node id."""

    def _is_valid_query(self, query: str) -> bool:
        return isinstance(query, str) and bool(query)

    def _find_match(self, nodes: Sequence[NodeRef], query: str) -> Optional[NodeRef]:
        return next((n for n in nodes if n.id == query), None)


class OrdinalLookupService(NodeLookupService[int]):
    """1-based position: ``n`` maps to index ``n - 1``."""

    def _is_valid_query(self, query: int) -> bool:
        return isinstance(query, int) and not isinstance(query, bool) and query >= 1

    def _find_match(self, nodes: Sequence[NodeRef], query: int) -> Optional[NodeRef]:
        if query > len(nodes):
            return None
        return nodes[query - 1]


class ExactLabelLookupService(NodeLookupService[str]):
    """Case-insensitive equality against the label."""

    def _is_valid_query(self, query: str) -> bool:
        return isinstance(query, str) and bool(query.strip())

    def _find_match(self, nodes: Sequence[NodeRef], query: str) -> Optional[NodeRef]:
        wanted = query.strip().lower()
        return next((n for n in nodes if n.label.strip().lower() == wanted), None)


class FuzzyLabelLookupService(NodeLookupService[str]):
    """
    Two-tier token overlap:
    - Tier 1: label contains every search token as a substring.
    - Tier 2: label contains any search token longer than two characters.

    Tier 2 is only consulted when tier 1 finds nothing.
    """

    def _is_valid_query(self, query: str) -> bool:
        return isinstance(query, str) and bool(search_tokens(query))

    def _find_match(self, nodes: Sequence[NodeRef], query: str) -> Optional[NodeRef]:
        tokens = search_tokens(query)

        for node in nodes:
            label = node.label.lower()
            if all(token in label for token in tokens):
                return node

        significant = [t for t in tokens if len(t) > _MIN_PARTIAL_TOKEN]
        for node in nodes:
            label = node.label.lower()
            if any(token in label for token in significant):
                return node

        return None
