"""Per-client throttling of the quote and count endpoints (SlowAPI)."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from dzhehuti.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


async def _rate_limit_exceeded(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.bind(path=request.url.path, client=get_remote_address(request), limit=str(exc.detail)).warning(
        "rate_limited"
    )
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"detail": "Too many requests"},
        headers={"Retry-After": "60"},
    )


def init_rate_limiter(app: FastAPI) -> None:
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded)
