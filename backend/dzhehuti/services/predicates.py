"""Typed, storage-agnostic conditions over respondent records.

The respondent filter only produces these objects; the storage adapter
decides how to turn them into a query.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class RespondentField(str, Enum):
    COUNTRY_ID = "country_id"
    REGION_ID = "region_id"
    DISTRICT_ID = "district_id"
    CITY_ID = "city_id"
    GENDER = "gender"
    AGE = "age"
    PURCHASE_CATEGORY_ID = "purchase_category_id"
    PURCHASE_FREQUENCY_ID = "purchase_frequency_id"
    INCOME = "income"
    FINANCIAL_SITUATION = "financial_situation"
    FAMILY_SITUATION = "family_situation"

    @property
    def is_location(self) -> bool:
        """Location fields live on the ``place`` sub-record, not the respondent."""
        return self in LOCATION_FIELDS


LOCATION_FIELDS = frozenset(
    {
        RespondentField.COUNTRY_ID,
        RespondentField.REGION_ID,
        RespondentField.DISTRICT_ID,
        RespondentField.CITY_ID,
    }
)


@dataclass(frozen=True)
class Equals:
    field: RespondentField
    value: Any


@dataclass(frozen=True)
class Between:
    """Inclusive on both ends."""

    field: RespondentField
    low: Any
    high: Any


Condition = Union[Equals, Between]


@dataclass(frozen=True)
class RespondentPredicate:
    """Conjunction of conditions; empty means "every respondent"."""

    conditions: tuple[Condition, ...] = ()

    def and_(self, condition: Condition) -> RespondentPredicate:
        return RespondentPredicate(self.conditions + (condition,))

    @property
    def needs_place_join(self) -> bool:
        return any(c.field.is_location for c in self.conditions)

    @property
    def is_empty(self) -> bool:
        return not self.conditions

    def describe(self) -> list[dict[str, Any]]:
        """Plain representation used for structured log events."""
        described = []
        for c in self.conditions:
            if isinstance(c, Between):
                described.append({"field": c.field.value, "between": [c.low, c.high]})
            else:
                described.append({"field": c.field.value, "eq": c.value})
        return described
