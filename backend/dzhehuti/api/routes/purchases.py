"""Purchase categories and the purchase frequencies scoped to them."""

from typing import List

from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dzhehuti.core.crud import create_row, delete_row, get_or_404, update_row
from dzhehuti.core.db import get_session
from dzhehuti.models.purchase import PurchaseCategory, PurchaseFrequency
from dzhehuti.schemas.purchase import PurchaseFrequencyIn, PurchaseFrequencyOut
from dzhehuti.schemas.reference import MessageOut, NamedIn, NamedOut

router = APIRouter(tags=["purchase"])

CATEGORY_NOT_FOUND = "Purchase category not found."
FREQUENCY_NOT_FOUND = "Purchase frequency not found."


@router.post("/purchase-category", response_model=NamedOut)
async def create_purchase_category(payload: NamedIn, session: AsyncSession = Depends(get_session)):
    obj = await create_row(session, PurchaseCategory, payload.model_dump())
    logger.bind(purchase_category_id=obj.id).info("purchase_category_created")
    return obj


@router.get("/purchase-categories", response_model=List[NamedOut])
async def list_purchase_categories(session: AsyncSession = Depends(get_session)):
    stmt = select(PurchaseCategory).order_by(PurchaseCategory.id)
    return (await session.execute(stmt)).scalars().all()


@router.get("/purchase-category/{category_id}", response_model=NamedOut)
async def get_purchase_category(category_id: int, session: AsyncSession = Depends(get_session)):
    return await get_or_404(session, PurchaseCategory, category_id, CATEGORY_NOT_FOUND)


@router.put("/purchase-category/{category_id}", response_model=NamedOut)
async def update_purchase_category(
    category_id: int,
    payload: NamedIn,
    session: AsyncSession = Depends(get_session),
):
    return await update_row(
        session, PurchaseCategory, category_id, payload.model_dump(), CATEGORY_NOT_FOUND
    )


@router.delete("/purchase-category/{category_id}", response_model=MessageOut)
async def delete_purchase_category(category_id: int, session: AsyncSession = Depends(get_session)):
    await delete_row(session, PurchaseCategory, category_id, CATEGORY_NOT_FOUND)
    return MessageOut(message="Purchase category deleted successfully.")


@router.post("/purchase-frequency", response_model=PurchaseFrequencyOut)
async def create_purchase_frequency(
    payload: PurchaseFrequencyIn, session: AsyncSession = Depends(get_session)
):
    await get_or_404(session, PurchaseCategory, payload.purchase_category_id, CATEGORY_NOT_FOUND)
    obj = await create_row(session, PurchaseFrequency, payload.model_dump())
    logger.bind(purchase_frequency_id=obj.id).info("purchase_frequency_created")
    return obj


@router.get("/purchase-frequencies", response_model=List[PurchaseFrequencyOut])
async def list_purchase_frequencies(session: AsyncSession = Depends(get_session)):
    stmt = select(PurchaseFrequency).order_by(PurchaseFrequency.id)
    return (await session.execute(stmt)).scalars().all()


@router.get("/purchase-frequencies/{category_id}", response_model=List[PurchaseFrequencyOut])
async def list_purchase_frequencies_by_category(
    category_id: int, session: AsyncSession = Depends(get_session)
):
    stmt = (
        select(PurchaseFrequency)
        .where(PurchaseFrequency.purchase_category_id == category_id)
        .order_by(PurchaseFrequency.id)
    )
    return (await session.execute(stmt)).scalars().all()


@router.get("/purchase-frequency/{frequency_id}", response_model=PurchaseFrequencyOut)
async def get_purchase_frequency(frequency_id: int, session: AsyncSession = Depends(get_session)):
    return await get_or_404(session, PurchaseFrequency, frequency_id, FREQUENCY_NOT_FOUND)


@router.put("/purchase-frequency/{frequency_id}", response_model=PurchaseFrequencyOut)
async def update_purchase_frequency(
    frequency_id: int,
    payload: PurchaseFrequencyIn,
    session: AsyncSession = Depends(get_session),
):
    return await update_row(
        session, PurchaseFrequency, frequency_id, payload.model_dump(), FREQUENCY_NOT_FOUND
    )


@router.delete("/purchase-frequency/{frequency_id}", response_model=MessageOut)
async def delete_purchase_frequency(frequency_id: int, session: AsyncSession = Depends(get_session)):
    await delete_row(session, PurchaseFrequency, frequency_id, FREQUENCY_NOT_FOUND)
    return MessageOut(message="Purchase frequency deleted successfully.")
