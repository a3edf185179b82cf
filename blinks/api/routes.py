"""
HTTP routes for the Blink Actions server.

Implements the Solana Actions endpoints (GET metadata, POST transaction),
the actions.json discovery document, blink creation and a health check.
"""
import logging
from datetime import datetime
from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..actions.builder import TransactionBuilder
from ..actions.encoder import encode_transaction
from ..actions.errors import BlinkError, BlinkNotFound, DatabaseError
from ..actions.resolver import action_url, resolve_metadata
from ..actions.schemas import (
    ActionMetadata,
    ActionPostRequest,
    ActionPostResponse,
    ActionRule,
    ActionsJson,
    Blink,
    CreateBlinkRequest,
    CreateBlinkResponse,
)
from ..config import Settings
from ..infra.chain import ChainClient, get_chain_client
from ..infra.db import Database, get_database


logger = logging.getLogger(__name__)

router = APIRouter()

ACTIONS_JSON = ActionsJson(
    rules=[ActionRule(pathPattern="/api/actions/**", apiPath="/api/actions/**")]
)


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return request.app.state.settings


def action_headers(settings: Settings) -> Dict[str, str]:
    """Headers every Solana Actions response carries."""
    return {
        "X-Action-Version": settings.action_version,
        "X-Blockchain-Ids": settings.blockchain_ids,
    }


async def blink_error_handler(request: Request, exc: BlinkError) -> JSONResponse:
    """Report a BlinkError as `{"message": ...}` with its status code."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc}")

    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc)},
        headers=action_headers(get_app_settings(request)),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies and parameters in the `{"message": ...}` shape."""
    message = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.warning(f"{request.method} {request.url.path} rejected: {message}")

    return JSONResponse(
        status_code=422,
        content={"message": message},
        headers=action_headers(get_app_settings(request)),
    )


async def get_transaction_builder(
    chain: ChainClient = Depends(get_chain_client),
) -> TransactionBuilder:
    return TransactionBuilder(chain)


async def fetch_blink(database: Database, blink_id: str) -> Blink:
    blink = await database.get_blink(blink_id)
    if blink is None:
        raise BlinkNotFound(blink_id)
    return blink


@router.get("/health")
async def health_check(database: Database = Depends(get_database)):
    """Simple health check for load balancers and container health checks."""
    try:
        healthy = await database.ping()
    except DatabaseError as e:
        raise HTTPException(status_code=503, detail=str(e))

    if not healthy:
        raise HTTPException(status_code=503, detail="Database query returned unexpected result")

    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@router.get("/actions.json", response_model=ActionsJson)
@router.get("/.well-known/actions.json", response_model=ActionsJson)
async def get_actions_json(response: Response, settings: Settings = Depends(get_app_settings)):
    """Map website paths to action API paths for blink clients."""
    response.headers.update(action_headers(settings))
    return ACTIONS_JSON


@router.post("/api/blinks", response_model=CreateBlinkResponse)
async def create_blink(
    payload: CreateBlinkRequest,
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
):
    """Store a blink and return the URL of its action endpoint."""
    blink = await database.insert_blink(payload)
    logger.info(f"Created {blink.type.value} blink {blink.id}: '{blink.title}'")

    return CreateBlinkResponse(id=blink.id, action_url=action_url(settings.backend_url, blink.id))


@router.get(
    "/api/actions/{blink_id}",
    response_model=ActionMetadata,
    response_model_exclude_none=True,
)
async def get_action_metadata(
    blink_id: str,
    response: Response,
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
):
    """Solana Actions GET: describe what the blink lets a user do."""
    blink = await fetch_blink(database, blink_id)
    metadata = resolve_metadata(blink, settings.backend_url)

    response.headers.update(action_headers(settings))
    return metadata


@router.post(
    "/api/actions/{blink_id}",
    response_model=ActionPostResponse,
    response_model_exclude_none=True,
)
async def post_action_transaction(
    blink_id: str,
    payload: ActionPostRequest,
    response: Response,
    amount: Optional[str] = Query(None),
    selection: Optional[str] = Query(None),
    database: Database = Depends(get_database),
    builder: TransactionBuilder = Depends(get_transaction_builder),
    settings: Settings = Depends(get_app_settings),
):
    """Solana Actions POST: build an unsigned transaction for the requester."""
    blink = await fetch_blink(database, blink_id)
    built = await builder.build(blink, payload.account, amount=amount, selection=selection)

    response.headers.update(action_headers(settings))
    return ActionPostResponse(
        transaction=encode_transaction(built.transaction),
        message=built.message,
    )
