"""
API route definitions.

Endpoints:
    POST /chat      Grounded answer plus the products it is based on
    GET  /health    Deployment health check
    GET  /metrics   Prometheus metrics
"""

from __future__ import annotations

from fastapi import APIRouter, Request, Response
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field

from amoura.api.metrics import metrics_response
from amoura.config import get_logger
from amoura.config.logging import preview
from amoura.core import fallback_response

logger = get_logger(__name__)

router = APIRouter()


@router.get("/", include_in_schema=False)
async def root():
    """Redirect root to Swagger UI."""
    return RedirectResponse(url="/docs")


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class ChatRequest(BaseModel):
    """Request body for /chat."""

    message: str = Field(
        ..., min_length=1, max_length=1000, description="Customer message"
    )


class ProductSummary(BaseModel):
    """A product as shown next to the answer."""

    id: int | str
    name: str
    slug: str | None = None
    category: str | None = None
    price: float | int | str | None = None
    stock: int | str | None = None
    image_url: str | None = None
    marketplace_url: str | None = None
    is_featured: bool = False
    colors: list = Field(default_factory=list)
    materials: list = Field(default_factory=list)
    variants: list = Field(default_factory=list)


class ChatResponseBody(BaseModel):
    """Response body for /chat. ``hasProducts`` mirrors ``len(products) > 0``."""

    text: str
    products: list[ProductSummary]
    hasProducts: bool


class HealthResponse(BaseModel):
    """Health check response with component status."""

    status: str
    catalog_ready: bool
    generation_configured: bool


# ---------------------------------------------------------------------------
# Chat
# ---------------------------------------------------------------------------


@router.post("/chat", response_model=ChatResponseBody)
async def chat(request: Request, body: ChatRequest):
    """Answer a customer message from catalog facts.

    Always answers 200 with a well-formed body; failures turn into an
    apology text in the brand voice.
    """
    service = request.app.state.chat_service
    try:
        response = await service.generate_response(body.message)
        # Validate here so bad catalog data cannot fail after the handler returns
        return ChatResponseBody.model_validate(response.to_dict())
    except Exception:
        logger.exception("Chat failed for message: %s", preview(body.message))
        return fallback_response().to_dict()


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get("/health", response_model=HealthResponse)
async def health(request: Request):
    """Deployment readiness probe.

    Checks:
    - Catalog answers and holds active products (required)
    - Generation API key configured (answers degrade to apologies without it)

    Does NOT call the generation endpoint (would cost a request per probe).
    """
    app = request.app

    try:
        catalog_ok = bool(await app.state.catalog.ping())
    except Exception:
        logger.exception("Health check: catalog unavailable")
        catalog_ok = False

    generation_ok = app.state.settings.has_credentials

    if catalog_ok and generation_ok:
        status = "healthy"
    elif catalog_ok:
        status = "degraded"  # Can list products but only apologize
    else:
        status = "unhealthy"

    return {
        "status": status,
        "catalog_ready": catalog_ok,
        "generation_configured": generation_ok,
    }


# ---------------------------------------------------------------------------
# Prometheus metrics
# ---------------------------------------------------------------------------


@router.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    body, content_type = metrics_response()
    return Response(content=body, media_type=content_type)
