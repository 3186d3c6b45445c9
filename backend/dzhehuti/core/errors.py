"""Domain exceptions and their HTTP translation."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger


class DzhehutiError(Exception):
    """Base class for errors raised by the pricing and respondent-filter core."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InputValidationError(DzhehutiError):
    """Malformed or out-of-domain input; the computation is not attempted."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class ReferenceNotFoundError(DzhehutiError):
    """A referenced params/income/family row is missing and strict mode is on."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str, *, reference: str, key: object):
        super().__init__(detail)
        self.reference = reference
        self.key = key


class InfrastructureError(DzhehutiError):
    """The storage backend is unreachable or failed; the caller may retry."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


def init_error_handlers(app: FastAPI) -> None:
    """Attach the domain exception handlers to the FastAPI app."""

    async def domain_error_handler(request: Request, exc: DzhehutiError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    async def infrastructure_error_handler(request: Request, exc: InfrastructureError):
        logger.bind(path=str(request.url.path), error=exc.detail).error("storage_unavailable")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers={"Retry-After": "1"},
        )

    app.add_exception_handler(InputValidationError, domain_error_handler)
    app.add_exception_handler(ReferenceNotFoundError, domain_error_handler)
    app.add_exception_handler(InfrastructureError, infrastructure_error_handler)
