from __future__ import annotations

import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from iwd.services.collection_service import (
    CollectionService,
    InvalidPayloadError,
    MissingFieldsError,
    StorageWriteError,
)

router = APIRouter(prefix="/api", tags=["collections"])
logger = logging.getLogger(__name__)


def _get_services(request: Request) -> Dict[str, CollectionService]:
    services = getattr(getattr(request.app, "state", None), "services", None)
    if not services:
        raise RuntimeError("Collection services not configured")
    return services


def get_service(request: Request, collection: str) -> CollectionService:
    svc = _get_services(request).get(collection)
    if svc is None:
        raise HTTPException(404, "Collection not found")
    return svc


def _reject_constant(token: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {token}")


async def read_payload(request: Request) -> Any:
    """Request body as JSON; empty bodies count as {} and malformed ones as None."""
    body = await request.body()
    if not body.strip():
        return {}
    try:
        return json.loads(body, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return None


def list_records(svc: CollectionService) -> list:
    return svc.list_records()


async def create_record(svc: CollectionService, request: Request) -> JSONResponse:
    payload = await read_payload(request)
    try:
        created = await run_in_threadpool(svc.create, payload)
    except InvalidPayloadError:
        raise HTTPException(400, "Request body must be a JSON object")
    except MissingFieldsError as exc:
        raise HTTPException(400, f"Missing required fields: {', '.join(exc.fields)}")
    except StorageWriteError as exc:
        logger.error("Could not persist %s: %s", svc.label, exc)
        raise HTTPException(500, f"Failed to save {svc.label}")
    return JSONResponse(created, status_code=201)


@router.get("/{collection}")
def collection_list(collection: str, request: Request):
    return list_records(get_service(request, collection))


@router.post("/{collection}", status_code=201)
async def collection_create(collection: str, request: Request):
    return await create_record(get_service(request, collection), request)
