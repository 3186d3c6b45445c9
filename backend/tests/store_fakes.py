"""In-memory ``ReferenceStore`` used by the pricing and filter unit tests."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, Optional

from dzhehuti.services.predicates import Between, Equals, RespondentPredicate
from dzhehuti.services.storage import NamedRecord, ParameterRecord


def param(id: int, name: str, ratio: Optional[str]) -> ParameterRecord:
    return ParameterRecord(id=id, name=name, ratio=Decimal(ratio) if ratio is not None else None)


def _matches(row: dict[str, Any], predicate: RespondentPredicate) -> bool:
    for condition in predicate.conditions:
        value = row.get(condition.field.value)
        if isinstance(condition, Equals):
            if value != condition.value:
                return False
        elif isinstance(condition, Between):
            if value is None or not condition.low <= value <= condition.high:
                return False
    return True


class InMemoryStore:
    def __init__(
        self,
        params: Iterable[ParameterRecord] = (),
        incomes: Iterable[NamedRecord] = (),
        family_situations: Iterable[NamedRecord] = (),
        respondents: Iterable[dict[str, Any]] = (),
    ):
        self.params = list(params)
        self.incomes = list(incomes)
        self.family_situations = list(family_situations)
        self.respondents = list(respondents)
        self.calls: list[tuple[str, Any]] = []
        self.predicates: list[RespondentPredicate] = []

    async def parameter_by_name(self, name):
        self.calls.append(("parameter_by_name", name))
        return next((p for p in self.params if p.name == name), None)

    async def parameter_by_id(self, param_id):
        self.calls.append(("parameter_by_id", param_id))
        return next((p for p in self.params if p.id == param_id), None)

    async def income_by_id(self, income_id):
        self.calls.append(("income_by_id", income_id))
        return next((i for i in self.incomes if i.id == income_id), None)

    async def family_situation_by_id(self, family_situation_id):
        self.calls.append(("family_situation_by_id", family_situation_id))
        return next((f for f in self.family_situations if f.id == family_situation_id), None)

    async def count_respondents(self, predicate):
        self.predicates.append(predicate)
        return sum(1 for row in self.respondents if _matches(row, predicate))
