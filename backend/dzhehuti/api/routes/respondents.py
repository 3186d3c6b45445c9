"""Survey respondent ("user") records."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from dzhehuti.core.crud import commit_or_raise
from dzhehuti.core.db import get_session
from dzhehuti.models.place import Place
from dzhehuti.models.respondent import Respondent
from dzhehuti.schemas.reference import MessageOut
from dzhehuti.schemas.respondent import RespondentCreatedOut, RespondentIn, RespondentOut

router = APIRouter(tags=["users"])

NOT_FOUND = "User not found."


async def _get_respondent(session: AsyncSession, user_id: int) -> Respondent:
    obj = await session.scalar(select(Respondent).where(Respondent.user_id == user_id))
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return obj


def _row_values(payload: RespondentIn) -> dict:
    data = payload.model_dump()
    if data["family_situation"] is not None:
        data["family_situation"] = data["family_situation"].value
    return data


@router.post("/user", response_model=RespondentCreatedOut)
async def create_respondent(payload: RespondentIn, session: AsyncSession = Depends(get_session)):
    obj = Respondent(**_row_values(payload))
    session.add(obj)
    await commit_or_raise(session)
    await session.refresh(obj)
    logger.bind(user_id=obj.user_id).info("respondent_created")
    return RespondentCreatedOut(user=RespondentOut.model_validate(obj))


@router.get("/users", response_model=List[RespondentOut])
async def list_respondents(session: AsyncSession = Depends(get_session)):
    stmt = select(Respondent).order_by(Respondent.user_id)
    return (await session.execute(stmt)).scalars().all()


@router.get("/user/{user_id}", response_model=RespondentOut)
async def get_respondent(user_id: int, session: AsyncSession = Depends(get_session)):
    return await _get_respondent(session, user_id)


@router.get("/users/byGender/{gender}", response_model=List[RespondentOut])
async def list_respondents_by_gender(gender: str, session: AsyncSession = Depends(get_session)):
    stmt = select(Respondent).where(Respondent.gender == gender).order_by(Respondent.user_id)
    rows = (await session.execute(stmt)).scalars().all()
    if not rows:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="No users found for the gender."
        )
    return rows


@router.put("/user/{user_id}", response_model=RespondentOut)
async def update_respondent(
    user_id: int,
    payload: RespondentIn,
    session: AsyncSession = Depends(get_session),
):
    await _get_respondent(session, user_id)
    await session.execute(
        update(Respondent).where(Respondent.user_id == user_id).values(**_row_values(payload))
    )
    await commit_or_raise(session)
    logger.bind(user_id=user_id).info("respondent_updated")
    return await session.get(Respondent, user_id, populate_existing=True)


@router.delete("/user/{user_id}", response_model=MessageOut)
async def delete_respondent(user_id: int, session: AsyncSession = Depends(get_session)):
    await _get_respondent(session, user_id)
    await session.execute(delete(Place).where(Place.user_id == user_id))
    await session.execute(delete(Respondent).where(Respondent.user_id == user_id))
    await commit_or_raise(session)
    logger.bind(user_id=user_id).info("respondent_deleted")
    return MessageOut(message="User deleted successfully.")
