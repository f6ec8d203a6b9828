from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from common.filtered_stream import (
    CreateRulesRequest,
    DeleteRulesRequest,
    DeserializationError,
    RuleResponse,
    RulesClient,
    TransportError,
)
from connectors.twitter import TwitterHttpClient, get_twitter_config


router = APIRouter(prefix="/stream", tags=["stream"])


def get_rules_client() -> RulesClient:
    try:
        config = get_twitter_config()
    except ValueError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return RulesClient(TwitterHttpClient(config))


@router.get("/rules")
def list_rules(client: RulesClient = Depends(get_rules_client)):
    return _run(client.get_rules)


@router.post("/rules")
def create_rules(
    request: CreateRulesRequest,
    dry_run: bool = Query(False),
    client: RulesClient = Depends(get_rules_client),
):
    return _run(client.create, request, dry_run)


@router.post("/rules/delete")
def delete_rules(
    request: DeleteRulesRequest,
    dry_run: bool = Query(False),
    client: RulesClient = Depends(get_rules_client),
):
    return _run(client.delete, request, dry_run)


def _run(call, *args) -> dict[str, Any]:
    try:
        response: RuleResponse = call(*args)
    except TransportError as exc:
        status = exc.status if 400 <= exc.status < 600 else 502
        raise HTTPException(status_code=status, detail=str(exc)) from exc
    except DeserializationError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return response.model_dump(by_alias=True, mode="json")
