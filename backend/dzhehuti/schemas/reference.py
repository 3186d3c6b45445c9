"""Schemas shared by the simple name-only reference tables."""

from pydantic import BaseModel, ConfigDict, Field


class NamedIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class NamedOut(BaseModel):
    """Categories, income brackets, family situations, purchase categories, countries."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class MessageOut(BaseModel):
    message: str
