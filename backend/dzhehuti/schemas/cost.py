"""Pydantic models for the cost calculation endpoint."""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_serializer


class CalculateCostRequest(BaseModel):
    """Request body for ``POST /calculateCost``; field names match the legacy API."""

    userAmount: int = Field(..., ge=0, description="Requested panel size")
    timeParamsId: Optional[int] = Field(None, description="Time weighting params.id")
    targetParamsId: Optional[int] = Field(None, description="Target weighting params.id")
    min_age: Optional[int] = Field(None, ge=0)
    max_age: Optional[int] = Field(None, ge=0)
    strict: Optional[bool] = Field(
        None, description="Fail on missing params rows instead of pricing them at zero"
    )


class CalculateCostResponse(BaseModel):
    result: Decimal
    warnings: List[str] = Field(default_factory=list)

    @field_serializer("result")
    def _result_as_number(self, value: Decimal) -> float:
        return float(value)
