from __future__ import annotations

import json
from contextlib import closing
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, ValidationError

from .errors import DeserializationError, SerializationError
from .models import CreateRulesRequest, DeleteRulesRequest, RuleResponse, RuleValue
from .transport import StreamResponse, StreamTransport


DRY_RUN_SUFFIX = "?dry_run=true"

RulesPayload = Union[BaseModel, Mapping[str, Any]]


class RulesClient:
    """
    Create, delete and list filtered stream rules.

    https://developer.twitter.com/en/docs/twitter-api/tweets/filtered-stream/integrate/build-a-rule
    """

    def __init__(self, transport: StreamTransport) -> None:
        self._transport = transport

    def create(self, request: Union[CreateRulesRequest, RulesPayload], dry_run: bool = False) -> RuleResponse:
        return self._mutate(request, dry_run)

    def delete(self, request: Union[DeleteRulesRequest, RulesPayload], dry_run: bool = False) -> RuleResponse:
        # Deletion is a differently shaped payload to the same endpoint as create.
        return self._mutate(request, dry_run)

    def get_rules(self) -> RuleResponse:
        return decode_rule_response(self._transport.get_rules())

    def _mutate(self, request: RulesPayload, dry_run: bool) -> RuleResponse:
        body = encode_rules_request(request)
        response = self._transport.add_rules(DRY_RUN_SUFFIX if dry_run else "", body)
        return decode_rule_response(response)


class RulesRequestBuilder:
    """Collects rules into a `CreateRulesRequest`, one `add_rule` call per rule."""

    def __init__(self) -> None:
        self._rules: List[RuleValue] = []

    def add_rule(self, value: str, tag: Optional[str] = None) -> "RulesRequestBuilder":
        self._rules.append(RuleValue(value=value, tag=tag))
        return self

    def build(self) -> CreateRulesRequest:
        return CreateRulesRequest(add=list(self._rules))


def encode_rules_request(request: RulesPayload) -> str:
    try:
        if isinstance(request, BaseModel):
            return request.model_dump_json(by_alias=True, exclude_none=True)
        return json.dumps(dict(request), allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Rules request could not be encoded as JSON: {exc}") from exc


def decode_rule_response(response: StreamResponse) -> RuleResponse:
    with closing(response):
        raw = response.read()
        try:
            return RuleResponse.model_validate_json(raw)
        except ValidationError as exc:
            raise DeserializationError(
                f"Rules response is not a valid rule response: {exc}",
                _body_text(raw),
            ) from exc


def _body_text(raw: Union[bytes, str]) -> str:
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw
