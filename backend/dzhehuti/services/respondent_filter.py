"""Counting respondents that match a demographic profile."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from loguru import logger

from dzhehuti.core.errors import InputValidationError, ReferenceNotFoundError
from dzhehuti.services.predicates import Between, Equals, RespondentField, RespondentPredicate
from dzhehuti.services.storage import ReferenceStore


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    BOTH = "Both"  # unconstrained


class FamilySituationName(str, Enum):
    SINGLE = "Single"
    MARRIED = "Married"
    DIVORCED = "Divorced"
    WIDOW = "Widow"


ANY_FINANCIAL_SITUATION = "Any"

# income.name -> inclusive respondent income range
INCOME_RANGES: dict[str, tuple[int, int]] = {
    "1 000 000 - 2 000 000 сум": (1_000_000, 2_000_000),
    "2 100 000 - 4 000 000 сум": (2_100_000, 4_000_000),
    "4 100 000 - 6 000 000 сум": (4_100_000, 6_000_000),
}


@dataclass(frozen=True)
class FilterCriteria:
    """Partially filled profile; ``None`` (or 0 for ids and ages) means unconstrained."""

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
    financial_situation: Optional[str] = None
    family_situation_id: Optional[int] = None


@dataclass(frozen=True)
class RespondentCount:
    total: int
    predicate: RespondentPredicate
    warnings: tuple[str, ...] = ()


def income_range(name: str) -> Optional[tuple[int, int]]:
    return INCOME_RANGES.get(name.strip())


def family_situation_name(name: str) -> Optional[FamilySituationName]:
    try:
        return FamilySituationName(name.strip())
    except ValueError:
        return None


class RespondentFilter:
    """Turns :class:`FilterCriteria` into a predicate and counts matches."""

    def __init__(self, store: ReferenceStore, *, strict: bool = False):
        self.store = store
        self.strict = strict

    def _missing(self, warnings: list[str], detail: str, reference: str, key: object) -> None:
        if self.strict:
            raise ReferenceNotFoundError(detail, reference=reference, key=key)
        logger.bind(reference=reference, key=key).warning("reference_lookup_missing")
        warnings.append(detail)

    async def build_predicate(
        self, criteria: FilterCriteria
    ) -> tuple[RespondentPredicate, list[str]]:
        predicate = RespondentPredicate()
        warnings: list[str] = []

        for field, value in (
            (RespondentField.COUNTRY_ID, criteria.country_id),
            (RespondentField.REGION_ID, criteria.region_id),
            (RespondentField.DISTRICT_ID, criteria.district_id),
            (RespondentField.CITY_ID, criteria.city_id),
        ):
            if value:
                predicate = predicate.and_(Equals(field, value))

        if criteria.gender is not None and Gender(criteria.gender) is not Gender.BOTH:
            predicate = predicate.and_(Equals(RespondentField.GENDER, Gender(criteria.gender).value))

        if criteria.age_min and criteria.age_max:
            if criteria.age_min < 0 or criteria.age_max < 0:
                raise InputValidationError("age bounds must not be negative")
            if criteria.age_min > criteria.age_max:
                raise InputValidationError("age_min must not be greater than age_max")
            predicate = predicate.and_(
                Between(RespondentField.AGE, criteria.age_min, criteria.age_max)
            )

        # frequency is only meaningful within a purchase category
        if criteria.purchase_category_id:
            predicate = predicate.and_(
                Equals(RespondentField.PURCHASE_CATEGORY_ID, criteria.purchase_category_id)
            )
            if criteria.purchase_frequency_id:
                predicate = predicate.and_(
                    Equals(RespondentField.PURCHASE_FREQUENCY_ID, criteria.purchase_frequency_id)
                )

        if criteria.income_id:
            income = await self.store.income_by_id(criteria.income_id)
            if income is None:
                self._missing(warnings, "Income not found", "income.id", criteria.income_id)
            else:
                bounds = income_range(income.name)
                if bounds is None:
                    logger.bind(income_id=income.id, name=income.name).warning(
                        "income_bracket_unrecognised"
                    )
                else:
                    predicate = predicate.and_(Between(RespondentField.INCOME, *bounds))

        situation = criteria.financial_situation
        if situation and situation != ANY_FINANCIAL_SITUATION:
            predicate = predicate.and_(Equals(RespondentField.FINANCIAL_SITUATION, situation))

        if criteria.family_situation_id:
            family = await self.store.family_situation_by_id(criteria.family_situation_id)
            if family is None:
                self._missing(
                    warnings,
                    "Family situation not found",
                    "family_situation.id",
                    criteria.family_situation_id,
                )
            else:
                name = family_situation_name(family.name)
                if name is None:
                    logger.bind(family_situation_id=family.id, name=family.name).warning(
                        "family_situation_unrecognised"
                    )
                else:
                    predicate = predicate.and_(Equals(RespondentField.FAMILY_SITUATION, name.value))

        return predicate, warnings

    async def search(self, criteria: FilterCriteria) -> RespondentCount:
        predicate, warnings = await self.build_predicate(criteria)
        total = await self.store.count_respondents(predicate)
        logger.bind(conditions=predicate.describe(), total=total).info("respondents_counted")
        return RespondentCount(total=total, predicate=predicate, warnings=tuple(warnings))

    async def count_matching(self, criteria: FilterCriteria) -> int:
        return (await self.search(criteria)).total
