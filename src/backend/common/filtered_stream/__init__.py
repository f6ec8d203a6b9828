"""Filtered stream SDK core.

This package intentionally contains only domain logic:
- Query parameter building, rule request/response models, response decoding.
- The HTTP transport is injected; no network calls live here.
"""

from .errors import DeserializationError, FilteredStreamError, SerializationError, TransportError
from .models import (
    CreateRulesRequest,
    DataRule,
    DeleteRulesRequest,
    ErrorRule,
    MetaRule,
    MetaSummary,
    RuleResponse,
    RuleValue,
)
from .query_params import StreamQueryParamsBuilder
from .rules import RulesClient, RulesRequestBuilder
from .stream import FilteredStream
from .transport import StreamResponse, StreamTransport
