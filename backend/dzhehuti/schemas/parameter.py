from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class ParameterIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    ratio: Optional[Decimal] = Field(default=None, ge=Decimal("0"))
    category_id: Optional[int] = None


class ParameterOut(BaseModel):
    """Weighting parameter as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    ratio: Optional[Decimal] = None
    category_id: Optional[int] = None

    @field_serializer("ratio")
    def _ratio_as_number(self, value: Optional[Decimal]) -> Optional[float]:
        return float(value) if value is not None else None
