"""Application entry point for the Dzhehuti survey-pricing API."""

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from dzhehuti.api.routes.categories import router as categories_router
from dzhehuti.api.routes.family_situations import router as family_situations_router
from dzhehuti.api.routes.income import router as income_router
from dzhehuti.api.routes.parameters import router as parameters_router
from dzhehuti.api.routes.places import router as places_router
from dzhehuti.api.routes.purchases import router as purchases_router
from dzhehuti.api.routes.respondents import router as respondents_router
from dzhehuti.api.routes.user_filter import router as user_filter_router
from dzhehuti.core.config import settings
from dzhehuti.core.db import dispose_engine, get_session
from dzhehuti.core.errors import init_error_handlers
from dzhehuti.core.logging import setup_logging
from dzhehuti.core.middleware import BodySizeLimitMiddleware, RequestContextLogMiddleware
from dzhehuti.core.rate_limit import init_rate_limiter

API_PREFIX = "/api/v1"

setup_logging()

app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)

init_rate_limiter(app)
init_error_handlers(app)

app.add_middleware(RequestContextLogMiddleware)


def _cors_origins() -> list[str]:
    if settings.ENV == "prod":
        if not settings.CORS_ALLOWED_ORIGINS:
            raise RuntimeError("CORS_ALLOWED_ORIGINS must be configured for prod")
        return settings.CORS_ALLOWED_ORIGINS
    return settings.CORS_ALLOWED_ORIGINS or ["http://localhost:5173"]


app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
)

app.add_middleware(BodySizeLimitMiddleware)


@app.on_event("shutdown")
async def shutdown_event():
    """Release pooled MySQL connections."""
    await dispose_engine()


@app.get("/api/healthz", tags=["system"], summary="Liveness probe")
def healthz() -> dict[str, str]:
    """Simple liveness probe that load balancers and monitors can call."""

    return {"status": "ok"}


@app.get("/api/readyz", tags=["system"], summary="Readiness probe")
async def readyz(session: AsyncSession = Depends(get_session)):
    try:
        await session.execute(text("SELECT 1"))
        return {"ready": True}
    except (DBAPIError, PoolTimeoutError) as exc:
        raise HTTPException(status_code=503, detail="Database not reachable") from exc


app.include_router(categories_router, prefix=API_PREFIX)
app.include_router(parameters_router, prefix=API_PREFIX)
app.include_router(respondents_router, prefix=API_PREFIX)
app.include_router(places_router, prefix=API_PREFIX)
app.include_router(user_filter_router, prefix=API_PREFIX)
app.include_router(purchases_router, prefix=API_PREFIX)
app.include_router(income_router, prefix=API_PREFIX)
app.include_router(family_situations_router, prefix=API_PREFIX)
