from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from dzhehuti.services.respondent_filter import FamilySituationName


class RespondentIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    age: Optional[int] = Field(default=None, ge=0, le=120)
    gender: Optional[str] = Field(default=None, max_length=16)
    purchase_category_id: Optional[int] = None
    purchase_frequency_id: Optional[int] = None
    income: Optional[int] = Field(default=None, ge=0)
    financial_situation: Optional[str] = Field(default=None, max_length=64)
    family_situation: Optional[FamilySituationName] = None


class RespondentOut(RespondentIn):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(validation_alias=AliasChoices("id", "user_id"))
    family_situation: Optional[str] = None


class RespondentCreatedOut(BaseModel):
    user: RespondentOut
