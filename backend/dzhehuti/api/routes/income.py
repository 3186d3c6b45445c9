from typing import List

from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dzhehuti.core.crud import create_row, delete_row, get_or_404, update_row
from dzhehuti.core.db import get_session
from dzhehuti.models.income import Income
from dzhehuti.schemas.reference import MessageOut, NamedIn, NamedOut

router = APIRouter(tags=["income"])


@router.post("/income", response_model=NamedOut)
async def create_income(payload: NamedIn, session: AsyncSession = Depends(get_session)):
    obj = await create_row(session, Income, payload.model_dump())
    logger.bind(income_id=obj.id, name=obj.name).info("income_created")
    return obj


@router.get("/income", response_model=List[NamedOut])
async def list_income(session: AsyncSession = Depends(get_session)):
    return (await session.execute(select(Income).order_by(Income.id))).scalars().all()


@router.get("/income/{income_id}", response_model=NamedOut)
async def get_income(income_id: int, session: AsyncSession = Depends(get_session)):
    return await get_or_404(session, Income, income_id, "Income not found.")


@router.put("/income/{income_id}", response_model=NamedOut)
async def update_income(
    income_id: int,
    payload: NamedIn,
    session: AsyncSession = Depends(get_session),
):
    return await update_row(session, Income, income_id, payload.model_dump(), "Income not found.")


@router.delete("/income/{income_id}", response_model=MessageOut)
async def delete_income(income_id: int, session: AsyncSession = Depends(get_session)):
    await delete_row(session, Income, income_id, "Income not found.")
    logger.bind(income_id=income_id).info("income_deleted")
    return MessageOut(message="Income deleted successfully.")
