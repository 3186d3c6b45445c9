from typing import List

from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dzhehuti.core.crud import create_row, delete_row, get_or_404, update_row
from dzhehuti.core.db import get_session
from dzhehuti.models.parameter import Category
from dzhehuti.schemas.reference import MessageOut, NamedIn, NamedOut

router = APIRouter(tags=["categories"])


@router.post("/category", response_model=NamedOut)
async def create_category(payload: NamedIn, session: AsyncSession = Depends(get_session)):
    obj = await create_row(session, Category, payload.model_dump())
    logger.bind(category_id=obj.id).info("category_created")
    return obj


@router.get("/categories", response_model=List[NamedOut])
async def list_categories(session: AsyncSession = Depends(get_session)):
    return (await session.execute(select(Category).order_by(Category.id))).scalars().all()


@router.get("/category/{category_id}", response_model=NamedOut)
async def get_category(category_id: int, session: AsyncSession = Depends(get_session)):
    return await get_or_404(session, Category, category_id, "Category not found.")


@router.put("/categories/{category_id}", response_model=NamedOut)
async def update_category(
    category_id: int,
    payload: NamedIn,
    session: AsyncSession = Depends(get_session),
):
    return await update_row(
        session, Category, category_id, payload.model_dump(), "Category not found."
    )


@router.delete("/categories/{category_id}", response_model=MessageOut)
async def delete_category(category_id: int, session: AsyncSession = Depends(get_session)):
    await delete_row(session, Category, category_id, "Category not found.")
    logger.bind(category_id=category_id).info("category_deleted")
    return MessageOut(message="Category deleted successfully.")
