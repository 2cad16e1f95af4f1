"""Dependencias FastAPI.

Los componentes se construyen una vez en `create_app` y viven en `app.state`;
aquí solo se leen, sin singletons globales.
"""

from __future__ import annotations

import hmac

from fastapi import Depends, Request, Response

from api.errors import ApiError
from api.rate_limit import FixedWindowRateLimiter
from core.config import AppSettings
from core.services.search_orchestrator import SearchOrchestrator


def get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def get_orchestrator(request: Request) -> SearchOrchestrator:
    return request.app.state.orchestrator


def get_rate_limiter(request: Request) -> FixedWindowRateLimiter:
    return request.app.state.rate_limiter


def enforce_rate_limit(
    request: Request,
    response: Response,
    limiter: FixedWindowRateLimiter = Depends(get_rate_limiter),
) -> None:
    key = request.client.host if request.client else "unknown"
    decision = limiter.hit(key)
    headers = decision.headers()
    request.state.rate_limit_headers = headers
    if not decision.allowed:
        raise ApiError(429, "Too Many Requests", "Too many requests, please try again later.")
    response.headers.update(headers)


def codes_match(provided: str, expected: str) -> bool:
    """Comparación en tiempo constante."""

    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def require_access_code(request: Request, settings: AppSettings = Depends(get_settings)) -> None:
    code = request.query_params.get("code")
    expected = settings.endpoint_secret_code
    if not code or not expected or not codes_match(code, expected):
        raise ApiError(401, "Unauthorized", "Invalid or missing access code")
