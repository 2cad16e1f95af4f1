"""Errores HTTP con el sobre `{error, message}`."""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse


class ApiError(Exception):
    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.message = message
        self.headers = dict(headers or {})


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    headers = dict(getattr(request.state, "rate_limit_headers", {}) or {})
    headers.update(exc.headers)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "message": exc.message},
        headers=headers,
    )
