"""Retry wrapper for the read queries issued by ``SqlReferenceStore``."""

from __future__ import annotations

import asyncio
import random
from typing import Awaitable, Callable, TypeVar

from loguru import logger
from sqlalchemy.exc import DBAPIError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from dzhehuti.core.config import settings
from dzhehuti.core.db_errors import extract_error_code, raise_infrastructure_error

T = TypeVar("T")

# lock wait timeout, deadlock, server has gone away, lost connection
MYSQL_RETRIABLE_ERROR_CODES = {1205, 1213, 2006, 2013}
MYSQL_RETRIABLE_SQLSTATES = {"40001"}
_TRANSIENT_MESSAGES = ("deadlock", "lock wait timeout", "lost connection", "gone away")


def _is_retriable(exc: DBAPIError) -> bool:
    code, sqlstate = extract_error_code(exc)
    if code in MYSQL_RETRIABLE_ERROR_CODES or sqlstate in MYSQL_RETRIABLE_SQLSTATES:
        return True
    if exc.connection_invalidated:
        return True
    message = str(exc.orig if exc.orig is not None else exc).lower()
    return any(fragment in message for fragment in _TRANSIENT_MESSAGES)


def _backoff(attempt: int, base_delay: float, jitter: float) -> float:
    return base_delay * (2 ** (attempt - 1)) + random.uniform(0, jitter)


async def with_db_retry(
    session: AsyncSession,
    operation: Callable[[], Awaitable[T]],
    *,
    attempts: int | None = None,
    base_delay: float | None = None,
    jitter: float | None = None,
) -> T:
    """Await ``operation``, retrying transient driver failures with backoff.

    The session is rolled back between attempts. Permanent failures, and
    transient ones that outlast ``attempts``, are raised as
    :class:`~dzhehuti.core.errors.InfrastructureError`.
    """

    attempts = max(1, attempts or settings.DB_RETRY_ATTEMPTS)
    base_delay = settings.DB_RETRY_BASE_DELAY if base_delay is None else base_delay
    jitter = settings.DB_RETRY_JITTER if jitter is None else jitter

    attempt = 1
    while True:
        try:
            return await operation()
        except PoolTimeoutError as exc:
            # the pool already waited DB_POOL_TIMEOUT for a connection
            logger.bind(pool_timeout=settings.DB_POOL_TIMEOUT, error=str(exc)).error("db_pool_exhausted")
            raise_infrastructure_error(exc)
        except DBAPIError as exc:
            if not _is_retriable(exc):
                raise_infrastructure_error(exc)
            await session.rollback()
            if attempt >= attempts:
                logger.bind(attempts=attempts, error=str(exc)).error("db_retry_exhausted")
                raise_infrastructure_error(exc)
            delay = _backoff(attempt, base_delay, jitter)
            logger.bind(attempt=attempt, max_attempts=attempts, sleep=delay, error=str(exc)).warning(
                "db_retry_transient"
            )
            await asyncio.sleep(delay)
            attempt += 1
