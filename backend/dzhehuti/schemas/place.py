"""Pydantic models for the location dimension and respondent places."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RegionIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    country_id: int


class RegionOut(RegionIn):
    model_config = ConfigDict(from_attributes=True)

    id: int


class DistrictIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    region_id: int


class DistrictOut(DistrictIn):
    model_config = ConfigDict(from_attributes=True)

    id: int


class CityIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    region_id: int


class CityOut(CityIn):
    model_config = ConfigDict(from_attributes=True)

    id: int


class PlaceUpdate(BaseModel):
    country_id: Optional[int] = None
    region_id: Optional[int] = None
    district_id: Optional[int] = None
    city_id: Optional[int] = None


class PlaceIn(PlaceUpdate):
    user_id: int


class PlaceOut(PlaceIn):
    model_config = ConfigDict(from_attributes=True)

    id: int


class PlaceCreatedOut(BaseModel):
    place: PlaceOut


class CountryOption(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class AllPlacesOut(BaseModel):
    """Every location dimension in one payload for the filter form."""

    countries: List[CountryOption] = Field(default_factory=list)
    regions: List[RegionOut] = Field(default_factory=list)
    districts: List[DistrictOut] = Field(default_factory=list)
    cities: List[CityOut] = Field(default_factory=list)
