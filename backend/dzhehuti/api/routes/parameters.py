from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dzhehuti.core.config import settings
from dzhehuti.core.crud import create_row, delete_row, get_or_404, update_row
from dzhehuti.core.db import get_session
from dzhehuti.core.deps import get_reference_store, resolve_strict
from dzhehuti.core.rate_limit import limiter
from dzhehuti.models.parameter import Param
from dzhehuti.schemas.cost import CalculateCostRequest, CalculateCostResponse
from dzhehuti.schemas.parameter import ParameterIn, ParameterOut
from dzhehuti.schemas.reference import MessageOut
from dzhehuti.services.pricing import PricingEngine
from dzhehuti.services.storage import ReferenceStore

router = APIRouter(tags=["parameters"])


@router.post("/parameter", response_model=ParameterOut)
async def create_parameter(
    payload: ParameterIn,
    session: AsyncSession = Depends(get_session),
):
    obj = await create_row(session, Param, payload.model_dump())
    logger.bind(param_id=obj.id, name=obj.name).info("parameter_created")
    return obj


@router.get("/parameters", response_model=List[ParameterOut])
async def list_parameters(session: AsyncSession = Depends(get_session)):
    return (await session.execute(select(Param).order_by(Param.id))).scalars().all()


@router.get("/parameters/{category_id}", response_model=List[ParameterOut])
async def list_parameters_by_category(
    category_id: int,
    session: AsyncSession = Depends(get_session),
):
    rows = (
        await session.execute(
            select(Param).where(Param.category_id == category_id).order_by(Param.id)
        )
    ).scalars().all()
    if not rows:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="parameter not found."
        )
    return rows


@router.get("/parameter/{param_id}", response_model=ParameterOut)
async def get_parameter(param_id: int, session: AsyncSession = Depends(get_session)):
    return await get_or_404(session, Param, param_id, "parameter not found.")


@router.put("/parameter/{param_id}", response_model=ParameterOut)
async def update_parameter(
    param_id: int,
    payload: ParameterIn,
    session: AsyncSession = Depends(get_session),
):
    obj = await update_row(session, Param, param_id, payload.model_dump(), "parameter not found.")
    logger.bind(param_id=param_id).info("parameter_updated")
    return obj


@router.delete("/parameter/{param_id}", response_model=MessageOut)
async def delete_parameter(param_id: int, session: AsyncSession = Depends(get_session)):
    await delete_row(session, Param, param_id, "Param not found.")
    logger.bind(param_id=param_id).info("parameter_deleted")
    return MessageOut(message="parameter deleted successfully.")


@router.post("/calculateCost", response_model=CalculateCostResponse, tags=["cost calculation"])
@limiter.limit(settings.QUOTE_RATE_LIMIT)
async def calculate_cost(
    request: Request,
    payload: CalculateCostRequest,
    store: ReferenceStore = Depends(get_reference_store),
) -> CalculateCostResponse:
    """Price a survey of ``userAmount`` respondents for the chosen weightings."""
    engine = PricingEngine(store, strict=resolve_strict(payload.strict))
    quote = await engine.compute_cost(
        payload.userAmount,
        time_param_id=payload.timeParamsId,
        target_param_id=payload.targetParamsId,
        min_age=payload.min_age,
        max_age=payload.max_age,
    )
    return CalculateCostResponse(result=quote.cost, warnings=list(quote.warnings))
