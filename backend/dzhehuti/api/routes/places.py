"""Country / region / district / city dimensions and respondent places."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from dzhehuti.core.crud import commit_or_raise, create_row, get_or_404, update_row
from dzhehuti.core.db import get_session
from dzhehuti.models.place import City, Country, District, Place, Region
from dzhehuti.models.respondent import Respondent
from dzhehuti.schemas.place import (
    AllPlacesOut,
    CityIn,
    CityOut,
    DistrictIn,
    DistrictOut,
    PlaceCreatedOut,
    PlaceIn,
    PlaceOut,
    PlaceUpdate,
    RegionIn,
    RegionOut,
)
from dzhehuti.schemas.reference import NamedIn, NamedOut

router = APIRouter(tags=["places"])


async def _ensure_respondent(session: AsyncSession, user_id: int) -> None:
    exists = await session.scalar(
        select(Respondent.user_id).where(Respondent.user_id == user_id)
    )
    if not exists:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")


@router.post("/country", response_model=NamedOut)
async def create_country(payload: NamedIn, session: AsyncSession = Depends(get_session)):
    return await create_row(session, Country, payload.model_dump())


@router.get("/country", response_model=List[NamedOut])
async def list_countries(session: AsyncSession = Depends(get_session)):
    return (await session.execute(select(Country).order_by(Country.id))).scalars().all()


@router.post("/region", response_model=RegionOut)
async def create_region(payload: RegionIn, session: AsyncSession = Depends(get_session)):
    await get_or_404(session, Country, payload.country_id, "Country not found.")
    return await create_row(session, Region, payload.model_dump())


@router.get("/region", response_model=List[RegionOut])
async def list_regions(session: AsyncSession = Depends(get_session)):
    return (await session.execute(select(Region).order_by(Region.id))).scalars().all()


@router.get("/region/byCountry/{country_id}", response_model=List[RegionOut])
async def list_regions_by_country(country_id: int, session: AsyncSession = Depends(get_session)):
    stmt = select(Region).where(Region.country_id == country_id).order_by(Region.id)
    return (await session.execute(stmt)).scalars().all()


@router.post("/district", response_model=DistrictOut)
async def create_district(payload: DistrictIn, session: AsyncSession = Depends(get_session)):
    await get_or_404(session, Region, payload.region_id, "Region not found.")
    return await create_row(session, District, payload.model_dump())


@router.get("/district", response_model=List[DistrictOut])
async def list_districts(session: AsyncSession = Depends(get_session)):
    return (await session.execute(select(District).order_by(District.id))).scalars().all()


@router.get("/district/byRegion/{region_id}", response_model=List[DistrictOut])
async def list_districts_by_region(region_id: int, session: AsyncSession = Depends(get_session)):
    stmt = select(District).where(District.region_id == region_id).order_by(District.id)
    return (await session.execute(stmt)).scalars().all()


@router.post("/city", response_model=CityOut)
async def create_city(payload: CityIn, session: AsyncSession = Depends(get_session)):
    await get_or_404(session, Region, payload.region_id, "Region not found.")
    return await create_row(session, City, payload.model_dump())


@router.get("/city", response_model=List[CityOut])
async def list_cities(session: AsyncSession = Depends(get_session)):
    return (await session.execute(select(City).order_by(City.id))).scalars().all()


@router.get("/city/byRegion/{region_id}", response_model=List[CityOut])
async def list_cities_by_region(region_id: int, session: AsyncSession = Depends(get_session)):
    stmt = select(City).where(City.region_id == region_id).order_by(City.id)
    return (await session.execute(stmt)).scalars().all()


@router.put("/city/{city_id}", response_model=CityOut)
async def update_city(
    city_id: int,
    payload: CityIn,
    session: AsyncSession = Depends(get_session),
):
    return await update_row(session, City, city_id, payload.model_dump(), "City not found.")


@router.post("/place", response_model=PlaceCreatedOut)
async def create_place(payload: PlaceIn, session: AsyncSession = Depends(get_session)):
    await _ensure_respondent(session, payload.user_id)
    obj = await create_row(session, Place, payload.model_dump())
    logger.bind(place_id=obj.id, user_id=obj.user_id).info("place_created")
    return PlaceCreatedOut(place=PlaceOut.model_validate(obj))


@router.put("/place/byUser/{user_id}", response_model=List[PlaceOut])
async def update_place_by_user(
    user_id: int,
    payload: PlaceUpdate,
    session: AsyncSession = Depends(get_session),
):
    await _ensure_respondent(session, user_id)
    result = await session.execute(
        update(Place).where(Place.user_id == user_id).values(**payload.model_dump())
    )
    if result.rowcount == 0:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Place not found for the user."
        )
    await commit_or_raise(session)
    stmt = (
        select(Place)
        .where(Place.user_id == user_id)
        .order_by(Place.id)
        .execution_options(populate_existing=True)
    )
    return (await session.execute(stmt)).scalars().all()


@router.get("/place/{user_id}", response_model=List[PlaceOut])
async def get_places_by_user(user_id: int, session: AsyncSession = Depends(get_session)):
    stmt = select(Place).where(Place.user_id == user_id).order_by(Place.id)
    rows = (await session.execute(stmt)).scalars().all()
    if not rows:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Place not found for the user."
        )
    return rows


@router.get("/places", response_model=List[PlaceOut])
async def list_places(session: AsyncSession = Depends(get_session)):
    return (await session.execute(select(Place).order_by(Place.id))).scalars().all()


@router.get("/getAllPlaces", response_model=AllPlacesOut)
async def get_all_places(session: AsyncSession = Depends(get_session)):
    countries = (await session.execute(select(Country).order_by(Country.id))).scalars().all()
    regions = (await session.execute(select(Region).order_by(Region.id))).scalars().all()
    districts = (await session.execute(select(District).order_by(District.id))).scalars().all()
    cities = (await session.execute(select(City).order_by(City.id))).scalars().all()
    return AllPlacesOut(
        countries=countries,
        regions=regions,
        districts=districts,
        cities=cities,
    )
