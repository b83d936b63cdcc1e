"""
Serverless entry points: one small ASGI app per collection.

Each function answers GET/POST for its collection on whatever path the
platform routes to it (``/api/wishes`` on Vercel, ``/`` elsewhere), handles
the CORS preflight itself and stamps permissive CORS headers on every
response. Storage goes through the same CollectionStore and services as the
standing server.
"""

from __future__ import annotations

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from iwd.core.config import Settings, get_settings
from iwd.core.errors import register_error_handlers
from iwd.core.logging import setup_logging
from iwd.domain.records import COLLECTIONS, NOMINATIONS, PLEDGES, POSTCARDS, WISHES
from iwd.repositories.collection_store import CollectionStore
from iwd.routers.collections import create_record, list_records
from iwd.services.collection_service import SERVICE_TYPES

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Inject permissive CORS headers, errors included."""

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        for key, value in CORS_HEADERS.items():
            response.headers.setdefault(key, value)
        return response


def create_function_app(
    collection: str,
    settings: Settings | None = None,
    store: CollectionStore | None = None,
) -> FastAPI:
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection: {collection}")
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    store = store or CollectionStore(settings.store_config())
    service = SERVICE_TYPES[collection](store)

    app = FastAPI(title=f"IWD {collection} function", openapi_url=None, docs_url=None, redoc_url=None)
    app.state.store = store
    app.state.service = service
    app.add_middleware(CORSHeadersMiddleware)
    register_error_handlers(app, headers=CORS_HEADERS)

    @app.options("/{path:path}")
    def preflight(path: str):
        return Response(status_code=200, headers=CORS_HEADERS)

    @app.get("/{path:path}")
    def handle_get(path: str):
        return list_records(service)

    @app.post("/{path:path}", status_code=201)
    async def handle_post(request: Request, path: str):
        return await create_record(service, request)

    return app


wishes = create_function_app(WISHES)
pledges = create_function_app(PLEDGES)
nominations = create_function_app(NOMINATIONS)
postcards = create_function_app(POSTCARDS)
