"""Shared helpers for database error handling."""

from __future__ import annotations

from typing import NoReturn

from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from dzhehuti.core.errors import InfrastructureError


def extract_error_code(
    exc: DBAPIError | OperationalError | PoolTimeoutError,
) -> tuple[int | None, str | None]:
    orig = getattr(exc, "orig", None)
    if not orig:
        return None, None
    code = None
    sqlstate = getattr(orig, "sqlstate", None)
    if hasattr(orig, "args") and orig.args:
        try:
            code = int(orig.args[0])
        except (TypeError, ValueError):
            code = None
    return code, sqlstate


def raise_infrastructure_error(exc: DBAPIError | OperationalError | PoolTimeoutError) -> NoReturn:
    """Translate driver failures and pool checkout timeouts into a retryable infrastructure error."""

    code, _ = extract_error_code(exc)
    detail = "Storage backend unavailable. Please retry shortly."
    if code is not None:
        detail = f"{detail} (code {code})"
    raise InfrastructureError(detail) from exc
