"""ASGI middleware: request correlation and body size guard."""

from __future__ import annotations

import time
import uuid

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from dzhehuti.core.config import settings
from dzhehuti.core.logging import request_id_ctx_var

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextLogMiddleware(BaseHTTPMiddleware):
    """Tags the request with an id (client supplied or generated) and logs its outcome."""

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        token = request_id_ctx_var.set(request_id)
        started = time.perf_counter()
        response: Response | None = None
        try:
            response = await call_next(request)
            response.headers.setdefault(REQUEST_ID_HEADER, request_id)
            return response
        finally:
            logger.bind(
                method=request.method,
                path=request.url.path,
                client=request.client.host if request.client else None,
                status=response.status_code if response is not None else 500,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            ).info("request_completed")
            request_id_ctx_var.reset(token)


def _declared_length(request: Request) -> int | None:
    raw = request.headers.get("content-length")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Answer 413 when the declared body exceeds ``MAX_BODY_BYTES``.

    Quote and search bodies are a handful of integers, so the limit is small.
    """

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        length = _declared_length(request)
        if length is not None and length > settings.MAX_BODY_BYTES:
            logger.bind(path=request.url.path, content_length=length).warning(
                "request_body_too_large"
            )
            return JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={"detail": "Request entity too large"},
            )
        return await call_next(request)
