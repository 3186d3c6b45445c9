"""Loguru setup: one structured sink, request id stamped on every record."""

from __future__ import annotations

import logging
from contextvars import ContextVar
from sys import stdout
from typing import Any

from loguru import logger

from dzhehuti.core.config import settings

request_id_ctx_var: ContextVar[str] = ContextVar("request_id", default="-")

# stdlib loggers that are too chatty at INFO
_QUIET_LOGGERS = ("aiomysql", "sqlalchemy.engine", "uvicorn.access")


def _patch_record(record: dict[str, Any]) -> None:
    extra = record["extra"]
    extra.setdefault("request_id", request_id_ctx_var.get())
    extra.setdefault("app", settings.APP_NAME)
    extra.setdefault("env", settings.ENV)


def setup_logging(level: str | None = None, serialize: bool | None = None) -> None:
    """Replace Loguru's default handler with the configured stdout sink."""

    level = (level or settings.LOG_LEVEL).upper()
    serialize = settings.LOG_JSON if serialize is None else serialize

    logging.basicConfig(level=level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.remove()
    logger.configure(patcher=_patch_record)
    logger.add(
        stdout,
        level=level,
        enqueue=True,
        backtrace=False,
        diagnose=False,
        serialize=serialize,
    )
