# flow_core/services/resolver.py
"""
    NodeResolver — turns a node mention into a concrete node.

    Resolution order for free text (``resolve_reference``):
        1. the text is a known node id
        2. case-insensitive exact label
        3. ordinal phrase ("2", "#2", "node 2"), skipped for label-only
           references
        4. fuzzy label (all tokens, then any significant token)

    Identity and exact label are checked first so fuzzy matching can
    never shadow them.
"""
import logging
import re
from typing import Optional, Sequence

from flow_api.types import NodeRef, NodeReference
from .lookup_service import (
    IdLookupService,
    OrdinalLookupService,
    ExactLabelLookupService,
    FuzzyLabelLookupService,
)

logger = logging.getLogger(__name__)

_ORDINAL_PHRASE = re.compile(r'^(?:(?:node|step|state)\s*)?#?\s*(\d+)$', re.IGNORECASE)


def parse_ordinal(text: str) -> Optional[int]:
    """Return N for "N", "#N" or "node N"; otherwise None."""
    match = _ORDINAL_PHRASE.match(text.strip()) if isinstance(text, str) else None
    return int(match.group(1)) if match else None


class NodeResolver:
    """
    Stateless facade over the lookup services.  Every method returns the
    matching ``NodeRef`` or ``None`` (NotFound).
    """

    def __init__(self):
        self._by_id = IdLookupService()
        self._by_ordinal = OrdinalLookupService()
        self._by_exact_label = ExactLabelLookupService()
        self._by_fuzzy_label = FuzzyLabelLookupService()

    def resolve_by_ordinal(self, n: int, nodes: Sequence[NodeRef]) -> Optional[NodeRef]:
        return self._by_ordinal.execute(nodes, n)

    def resolve_by_exact_label(self, text: str, nodes: Sequence[NodeRef]) -> Optional[NodeRef]:
        return self._by_exact_label.execute(nodes, text)

    def resolve_by_fuzzy_label(self, text: str, nodes: Sequence[NodeRef]) -> Optional[NodeRef]:
        return self._by_fuzzy_label.execute(nodes, text)

    def resolve_reference(self, raw: str, nodes: Sequence[NodeRef],
                          ordinals: bool = True) -> Optional[NodeRef]:
        """
        Resolve free text: id, exact label, ordinal phrase, fuzzy label.
        With ``ordinals=False`` the ordinal step is skipped.
        """
        if not isinstance(raw, str) or not raw.strip():
            return None
        raw = raw.strip()

        node = self._by_id.execute(nodes, raw)
        if node is not None:
            return node

        node = self._by_exact_label.execute(nodes, raw)
        if node is not None:
            return node

        ordinal = parse_ordinal(raw) if ordinals else None
        if ordinal is not None:
            return self._by_ordinal.execute(nodes, ordinal)

        return self._by_fuzzy_label.execute(nodes, raw)

    def resolve(self, reference: NodeReference, nodes: Sequence[NodeRef]) -> Optional[NodeRef]:
        """
        Resolve a draft's reference.  An explicit ordinal only ever
        resolves by position; a label-only reference never does.
        """
        if reference.ordinal is not None:
            node = self.resolve_by_ordinal(reference.ordinal, nodes)
        else:
            node = self.resolve_reference(reference.text, nodes, ordinals=not reference.label_only)

        logger.debug("Resolved %r -> %s", reference.text, node.id if node else None)
        return node
