"""
FastAPI application factory.

Creates the app with lifespan-managed singletons (settings, shared HTTP
client, catalog, Gemini client, chat service) so they are built once at
startup and shared across requests.
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from amoura import __version__
from amoura.adapters.catalog import CatalogStore, InMemoryCatalog
from amoura.adapters.llm import GeminiClient, GenerationClient
from amoura.api.middleware import LatencyMiddleware
from amoura.api.routes import router
from amoura.config import Settings, get_logger
from amoura.services.chat import ChatService

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",")]

logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    catalog: CatalogStore | None = None,
    client: GenerationClient | None = None,
) -> FastAPI:
    """
    Application factory.

    Args:
        settings: Settings to use; read from the environment when omitted.
        catalog: Catalog store; loaded from ``settings.catalog_path`` when omitted.
        client: Generation client; a GeminiClient on the shared HTTP client
            when omitted.
    """

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        """Initialize shared resources at startup, release at shutdown."""
        logger.info("Starting Amoura API...")
        app.state.settings = settings or Settings.from_env()

        # Validate credentials early; requests still answer (with apologies)
        if not app.state.settings.has_credentials:
            logger.error("GEMINI_API_KEY is not set -- add it to .env")

        # Catalog -- required for every request
        try:
            app.state.catalog = catalog or InMemoryCatalog.from_json(
                app.state.settings.catalog_path, app.state.settings
            )
        except Exception:
            logger.exception("Failed to load catalog -- cannot start")
            raise

        async with httpx.AsyncClient() as http:
            generation_client = client or GeminiClient(app.state.settings, http_client=http)
            app.state.chat_service = ChatService(
                app.state.catalog,
                client=generation_client,
                settings=app.state.settings,
            )
            logger.info("Chat service ready (%s)", app.state.chat_service.model)

            logger.info("Amoura API ready")
            yield
            logger.info("Amoura API shutting down")

    app = FastAPI(
        title="Amoura",
        description="Grounded shopping assistant for the de.amoura catalog",
        version=__version__,
        lifespan=_lifespan,
    )
    app.add_middleware(LatencyMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.include_router(router)
    return app
