"""Aplicación FastAPI.

Arranque:
    forkfinder serve
    uvicorn api.app:create_app --factory --port 3000
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Awaitable, Callable

from fastapi import FastAPI, Request, Response

from api.errors import ApiError, api_error_handler
from api.rate_limit import FixedWindowRateLimiter
from api.routers import ROUTERS
from core.config import AppSettings
from core.services.search_orchestrator import SearchOrchestrator, build_search_orchestrator

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


async def log_requests(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    # Solo el path: la query lleva el código de acceso.
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, Any]:
    """Lifespan event handler"""
    settings: AppSettings = app.state.settings
    logger.info("Server is running at http://localhost:%s%s (%s)", settings.port, API_PREFIX, settings.environment)
    yield
    logger.info("Shutting down the application.")


def create_app(
    settings: AppSettings | None = None,
    orchestrator: SearchOrchestrator | None = None,
) -> FastAPI:
    settings = settings or AppSettings()

    app = FastAPI(title="forkfinder", lifespan=lifespan)
    app.state.settings = settings
    app.state.orchestrator = orchestrator or build_search_orchestrator(settings)
    app.state.rate_limiter = FixedWindowRateLimiter(
        settings.rate_limit_max_requests,
        settings.rate_limit_window_seconds,
    )

    app.middleware("http")(log_requests)
    app.add_exception_handler(ApiError, api_error_handler)
    for router in ROUTERS:
        app.include_router(router, prefix=API_PREFIX)
    return app
