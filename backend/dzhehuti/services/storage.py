"""Read-only storage contract used by the pricing engine and respondent filter.

``SqlReferenceStore`` is the SQLAlchemy implementation; it is built per
request from the injected ``AsyncSession`` so neither core component ever
touches a global connection pool.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Protocol

from sqlalchemy import Select, and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from dzhehuti.core.db_retry import with_db_retry
from dzhehuti.models.family_situation import FamilySituation
from dzhehuti.models.income import Income
from dzhehuti.models.parameter import Param
from dzhehuti.models.place import Place
from dzhehuti.models.respondent import Respondent
from dzhehuti.services.predicates import Between, Condition, Equals, RespondentField, RespondentPredicate


@dataclass(frozen=True)
class ParameterRecord:
    id: int
    name: str
    ratio: Optional[Decimal]


@dataclass(frozen=True)
class NamedRecord:
    id: int
    name: str


class ReferenceStore(Protocol):
    async def parameter_by_name(self, name: str) -> Optional[ParameterRecord]: ...

    async def parameter_by_id(self, param_id: int) -> Optional[ParameterRecord]: ...

    async def income_by_id(self, income_id: int) -> Optional[NamedRecord]: ...

    async def family_situation_by_id(self, family_situation_id: int) -> Optional[NamedRecord]: ...

    async def count_respondents(self, predicate: RespondentPredicate) -> int: ...


_COLUMNS = {
    RespondentField.COUNTRY_ID: Place.country_id,
    RespondentField.REGION_ID: Place.region_id,
    RespondentField.DISTRICT_ID: Place.district_id,
    RespondentField.CITY_ID: Place.city_id,
    RespondentField.GENDER: Respondent.gender,
    RespondentField.AGE: Respondent.age,
    RespondentField.PURCHASE_CATEGORY_ID: Respondent.purchase_category_id,
    RespondentField.PURCHASE_FREQUENCY_ID: Respondent.purchase_frequency_id,
    RespondentField.INCOME: Respondent.income,
    RespondentField.FINANCIAL_SITUATION: Respondent.financial_situation,
    RespondentField.FAMILY_SITUATION: Respondent.family_situation,
}


def compile_condition(condition: Condition) -> ColumnElement[bool]:
    column = _COLUMNS[condition.field]
    if isinstance(condition, Between):
        return and_(column >= condition.low, column <= condition.high)
    if isinstance(condition, Equals):
        return column == condition.value
    raise TypeError(f"Unsupported condition: {condition!r}")


def build_count_statement(predicate: RespondentPredicate) -> Select:
    """COUNT over ``users``, joined to ``place`` only when a location field is used."""

    if predicate.needs_place_join:
        # a respondent with several place rows must still count once
        stmt = (
            select(func.count(Respondent.user_id.distinct()))
            .select_from(Respondent)
            .join(Place, Place.user_id == Respondent.user_id)
        )
    else:
        stmt = select(func.count()).select_from(Respondent)
    if not predicate.is_empty:
        stmt = stmt.where(and_(*(compile_condition(c) for c in predicate.conditions)))
    return stmt


class SqlReferenceStore:
    """``ReferenceStore`` over the relational tables via an ``AsyncSession``."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _scalar(self, stmt):
        async def run():
            return (await self.session.execute(stmt)).scalars().first()

        return await with_db_retry(self.session, run)

    @staticmethod
    def _param_record(row: Optional[Param]) -> Optional[ParameterRecord]:
        if row is None:
            return None
        return ParameterRecord(id=row.id, name=row.name, ratio=row.ratio)

    async def parameter_by_name(self, name: str) -> Optional[ParameterRecord]:
        row = await self._scalar(select(Param).where(Param.name == name).order_by(Param.id).limit(1))
        return self._param_record(row)

    async def parameter_by_id(self, param_id: int) -> Optional[ParameterRecord]:
        row = await self._scalar(select(Param).where(Param.id == param_id))
        return self._param_record(row)

    async def income_by_id(self, income_id: int) -> Optional[NamedRecord]:
        row = await self._scalar(select(Income).where(Income.id == income_id))
        return NamedRecord(id=row.id, name=row.name) if row else None

    async def family_situation_by_id(self, family_situation_id: int) -> Optional[NamedRecord]:
        row = await self._scalar(
            select(FamilySituation).where(FamilySituation.id == family_situation_id)
        )
        return NamedRecord(id=row.id, name=row.name) if row else None

    async def count_respondents(self, predicate: RespondentPredicate) -> int:
        stmt = build_count_statement(predicate)

        async def run():
            return (await self.session.execute(stmt)).scalar_one()

        total = await with_db_retry(self.session, run)
        return int(total or 0)
