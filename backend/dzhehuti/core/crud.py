"""Small helpers shared by the reference-data CRUD routers."""

from __future__ import annotations

from typing import Any, Type, TypeVar

from fastapi import HTTPException, status
from sqlalchemy import delete, select, update
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from dzhehuti.core.db_errors import raise_infrastructure_error
from dzhehuti.models.base import Base

M = TypeVar("M", bound=Base)


async def get_or_404(session: AsyncSession, model: Type[M], pk: int, detail: str) -> M:
    obj = await session.scalar(select(model).where(model.id == pk))
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return obj


async def commit_or_raise(session: AsyncSession) -> None:
    """Commit; constraint violations become 409, driver failures 503."""

    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Referenced record does not exist or value conflicts with an existing one.",
        ) from exc
    except (DBAPIError, PoolTimeoutError) as exc:
        await session.rollback()
        raise_infrastructure_error(exc)


async def create_row(session: AsyncSession, model: Type[M], data: dict[str, Any]) -> M:
    obj = model(**data)
    session.add(obj)
    await commit_or_raise(session)
    await session.refresh(obj)
    return obj


async def update_row(
    session: AsyncSession, model: Type[M], pk: int, data: dict[str, Any], detail: str
) -> M:
    result = await session.execute(update(model).where(model.id == pk).values(**data))
    if result.rowcount != 1:
        await session.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    await commit_or_raise(session)
    return await session.get(model, pk, populate_existing=True)


async def delete_row(session: AsyncSession, model: Type[M], pk: int, detail: str) -> None:
    result = await session.execute(delete(model).where(model.id == pk))
    if result.rowcount != 1:
        await session.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    await commit_or_raise(session)
