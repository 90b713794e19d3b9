"""FastAPI application exposing the protected generation endpoint."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .. import __version__
from ..ai.gateway import GenerationGateway
from ..services.generation import GenerationService, Generator
from ..services.rate_limiter import UNKNOWN_IDENTITY, RateLimiter
from ..services.settings import Settings
from ..utils.logging import bind_identity
from .models import ErrorResponse, GenerateRequest, GenerateResponse, HealthResponse

LOGGER = logging.getLogger(__name__)

_FORWARDED_FOR = "x-forwarded-for"
_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status: {"model": ErrorResponse} for status in (400, 401, 429, 500, 504)
}

router = APIRouter(tags=["Generation"])


def client_identity(request: Request) -> str:
    """Rate-limit key: first hop of ``X-Forwarded-For`` or the shared sentinel."""

    forwarded_for = request.headers.get(_FORWARDED_FOR)
    if forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop
    return UNKNOWN_IDENTITY


async def _read_topic(request: Request) -> Any:
    try:
        payload = await request.json()
    except ValueError:
        return None
    try:
        return GenerateRequest.model_validate(payload).topic
    except ValidationError:
        return None


@router.post("/generate", response_model=GenerateResponse, responses=_ERROR_RESPONSES)
async def generate(request: Request) -> JSONResponse:
    service: GenerationService = request.app.state.generation_service
    identity = client_identity(request)
    with bind_identity(identity):
        topic = await _read_topic(request)
        result = await service.handle(topic, identity)
        LOGGER.info("POST /generate answered %s", result.status_code)
    return JSONResponse(status_code=result.status_code, content=result.body, headers=result.headers)


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()


def create_app(
    settings: Settings | None = None,
    *,
    gateway: Generator | None = None,
    limiter: RateLimiter | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> FastAPI:
    """Build the application; the rate-limit state lives as long as the app."""

    active_settings = settings or Settings()
    active_gateway = gateway or GenerationGateway(
        active_settings.client_settings(),
        temperature=active_settings.temperature,
        top_p=active_settings.top_p,
        max_tokens=active_settings.max_tokens,
    )
    active_limiter = limiter or RateLimiter(
        window=active_settings.rate_limit_window,
        max_requests=active_settings.rate_limit_max_requests,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        LOGGER.info(
            "Generation endpoint ready (model=%s, limit=%s per %ss)",
            active_settings.model,
            active_limiter.max_requests,
            active_limiter.window,
        )
        yield
        close = getattr(active_gateway, "aclose", None)
        if close is not None:
            await close()
        LOGGER.info("Generation endpoint shut down")

    app = FastAPI(title="Inkwell", version=__version__, lifespan=lifespan)
    app.state.settings = active_settings
    app.state.generation_service = GenerationService(active_limiter, active_gateway, clock=clock)
    app.include_router(router)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        LOGGER.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Failed to generate content"})

    return app


__all__ = ["client_identity", "create_app", "router"]
