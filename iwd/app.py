from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, Response
from fastapi.staticfiles import StaticFiles

from iwd.core.config import Settings, get_settings
from iwd.core.errors import register_error_handlers
from iwd.core.logging import setup_logging
from iwd.repositories.collection_store import CollectionStore
from iwd.routers import collections as collections_router
from iwd.services.collection_service import build_services

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, store: CollectionStore | None = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``uvicorn iwd.app:create_app --factory``)."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    store = store or CollectionStore(settings.store_config())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Serverless functions repair lazily on first access instead.
        if not settings.serverless:
            app.state.store.initialize()
        logger.info("Serving collections from %s", app.state.store.base_dir)
        yield

    app = FastAPI(title="IWD Tribute API", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.services = build_services(store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    register_error_handlers(app, headers={"Access-Control-Allow-Origin": "*"})
    app.include_router(collections_router.router)

    static_dir = settings.static_dir
    if static_dir.is_dir():
        favicon_path = static_dir / "favicon.ico"

        @app.get("/favicon.ico", include_in_schema=False)
        def favicon():
            if favicon_path.exists():
                return FileResponse(favicon_path, media_type="image/x-icon")
            return Response(status_code=204)

        app.mount("/", StaticFiles(directory=static_dir, html=True), name="site")
    else:
        logger.debug("Static site directory %s not found, serving the API only", static_dir)

    return app


app = create_app()
