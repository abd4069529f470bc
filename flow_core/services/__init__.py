"""
Core services — node lookups, reference resolution, flow serialization.
"""
from .base_service import NodeLookupService
from .lookup_service import (
    IdLookupService,
    OrdinalLookupService,
    ExactLabelLookupService,
    FuzzyLabelLookupService,
    search_tokens,
)
from .resolver import NodeResolver, parse_ordinal
from .serialization_service import FlowSerializer
from .exceptions import (
    RemoteInterpreterError,
    MissingCredentialError,
    RemoteResponseError,
    FlowFormatError,
)

__all__ = [
    'NodeLookupService',
    'IdLookupService',
    'OrdinalLookupService',
    'ExactLabelLookupService',
    'FuzzyLabelLookupService',
    'search_tokens',
    'NodeResolver',
    'parse_ordinal',
    'FlowSerializer',
    'RemoteInterpreterError',
    'MissingCredentialError',
    'RemoteResponseError',
    'FlowFormatError',
]
