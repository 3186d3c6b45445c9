from typing import List

from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dzhehuti.core.crud import create_row, delete_row, get_or_404, update_row
from dzhehuti.core.db import get_session
from dzhehuti.models.family_situation import FamilySituation
from dzhehuti.schemas.reference import MessageOut, NamedIn, NamedOut

router = APIRouter(tags=["family situations"])

NOT_FOUND = "Family situation not found."


@router.post("/family-situation", response_model=NamedOut)
async def create_family_situation(payload: NamedIn, session: AsyncSession = Depends(get_session)):
    obj = await create_row(session, FamilySituation, payload.model_dump())
    logger.bind(family_situation_id=obj.id, name=obj.name).info("family_situation_created")
    return obj


@router.get("/family-situations", response_model=List[NamedOut])
async def list_family_situations(session: AsyncSession = Depends(get_session)):
    stmt = select(FamilySituation).order_by(FamilySituation.id)
    return (await session.execute(stmt)).scalars().all()


@router.get("/family-situation/{family_situation_id}", response_model=NamedOut)
async def get_family_situation(
    family_situation_id: int, session: AsyncSession = Depends(get_session)
):
    return await get_or_404(session, FamilySituation, family_situation_id, NOT_FOUND)


@router.put("/family-situations/{family_situation_id}", response_model=NamedOut)
async def update_family_situation(
    family_situation_id: int,
    payload: NamedIn,
    session: AsyncSession = Depends(get_session),
):
    return await update_row(
        session, FamilySituation, family_situation_id, payload.model_dump(), NOT_FOUND
    )


@router.delete("/family-situations/{family_situation_id}", response_model=MessageOut)
async def delete_family_situation(
    family_situation_id: int, session: AsyncSession = Depends(get_session)
):
    await delete_row(session, FamilySituation, family_situation_id, NOT_FOUND)
    return MessageOut(message="Family situation deleted successfully.")
