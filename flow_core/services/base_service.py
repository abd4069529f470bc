"""
    Generic base service for node lookups.

    Design Pattern: Template Method
    ─────────────────────────────────
    Defines the skeleton of a lookup (validate → scan nodes → first match),
    letting concrete subclasses (ordinal, exact label, fuzzy label)
    override the matching step.

    Genericity:
    ─────────────────────────
    Uses Generic[TQuery] so each lookup declares its query type
    (``int`` for ordinals, ``str`` for label text).
"""
from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Optional, Sequence

from flow_api.types import NodeRef

# Generic type variable for the query parameter
TQuery = TypeVar('TQuery')


class NodeLookupService(ABC, Generic[TQuery]):
    """
    Abstract generic base for all services that pick one node
    out of the caller's ordered node list.

    Concrete subclasses must implement:
        - _is_valid_query(query)           → False short-circuits to NotFound
        - _find_match(nodes, query)        → matching node or None
    """

    def execute(self, nodes: Sequence[NodeRef], query: TQuery) -> Optional[NodeRef]:
        """
        Template Method: validate → find first match.

        Returns:
            The matching ``NodeRef`` or ``None`` (NotFound). An empty node
            list always yields ``None``.
        """
        if not nodes or not self._is_valid_query(query):
            return None
        return self._find_match(nodes, query)

    @abstractmethod
    def _is_valid_query(self, query: TQuery) -> bool:
        ...

    @abstractmethod
    def _find_match(self, nodes: Sequence[NodeRef], query: TQuery) -> Optional[NodeRef]:
        """
        Return the first node (in sequence order) satisfying the query.
        """
        ...
