"""Engine and per-request ``AsyncSession`` for the ``calc`` database."""

from typing import AsyncIterator

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from dzhehuti.core.config import settings

engine = create_async_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_timeout=settings.DB_POOL_TIMEOUT,
    pool_recycle=settings.DB_POOL_RECYCLE,
    isolation_level=settings.DB_ISOLATION_LEVEL,
    echo=settings.DEBUG,
)

SessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False)


async def get_session() -> AsyncIterator[AsyncSession]:
    """One session per request; closed (and rolled back if open) afterwards."""

    async with SessionLocal() as session:
        yield session


async def dispose_engine() -> None:
    await engine.dispose()
    logger.bind(host=settings.DB_HOST, database=settings.DB_NAME).info("db_pool_disposed")
