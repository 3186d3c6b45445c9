"""Pydantic models for respondent search/count."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from dzhehuti.services.respondent_filter import (
    ANY_FINANCIAL_SITUATION,
    FilterCriteria,
    Gender,
)


class SearchUsersRequest(BaseModel):
    """Every field is optional; ids and ages of 0 mean "not selected"."""

    country_id: Optional[int] = None
    region_id: Optional[int] = None
    district_id: Optional[int] = None
    city_id: Optional[int] = None
    gender: Gender = Gender.BOTH
    age_min: Optional[int] = None
    age_max: Optional[int] = None
    purchase_category_id: Optional[int] = None
    purchase_frequency_id: Optional[int] = None
    income_id: Optional[int] = None
    financial_situation: Optional[str] = ANY_FINANCIAL_SITUATION
    family_situation_id: Optional[int] = None
    strict: Optional[bool] = Field(
        None, description="Fail on unknown income/family ids instead of ignoring them"
    )

    @field_validator("gender", mode="before")
    @classmethod
    def _gender_default(cls, value):
        return Gender.BOTH if value in (None, "") else value

    def to_criteria(self) -> FilterCriteria:
        data = self.model_dump(exclude={"strict"})
        if data["financial_situation"] == ANY_FINANCIAL_SITUATION:
            data["financial_situation"] = None
        return FilterCriteria(**data)


class SearchUsersResponse(BaseModel):
    totalUsers: int
    warnings: List[str] = Field(default_factory=list)
