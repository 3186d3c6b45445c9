from pydantic import BaseModel, ConfigDict, Field


class PurchaseFrequencyIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    purchase_category_id: int


class PurchaseFrequencyOut(PurchaseFrequencyIn):
    model_config = ConfigDict(from_attributes=True)

    id: int
