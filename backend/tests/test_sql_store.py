from decimal import Decimal

import pytest
from sqlalchemy.dialects import mysql

from dzhehuti.core.config import settings
from dzhehuti.core.errors import InfrastructureError
from dzhehuti.models import FamilySituation, Income, Param, Place, Respondent
from dzhehuti.services.predicates import Between, Equals, RespondentField, RespondentPredicate
from dzhehuti.services.pricing import PricingEngine
from dzhehuti.services.respondent_filter import FilterCriteria, Gender, RespondentFilter
from dzhehuti.services.storage import SqlReferenceStore, build_count_statement
from storage_failures import FailingSession, lost_connection, pool_timeout


def _sql(predicate):
    return str(build_count_statement(predicate).compile(dialect=mysql.dialect()))


def test_count_without_location_does_not_join_place():
    sql = _sql(RespondentPredicate().and_(Equals(RespondentField.GENDER, "Male")))
    assert "JOIN place" not in sql
    assert "users.gender =" in sql


def test_location_condition_joins_place_and_counts_distinct_users():
    predicate = RespondentPredicate().and_(Equals(RespondentField.REGION_ID, 3))
    sql = _sql(predicate.and_(Between(RespondentField.AGE, 20, 30)))
    assert "JOIN place ON place.user_id = users.user_id" in sql
    assert "count(DISTINCT users.user_id)" in sql
    assert "users.age >=" in sql and "users.age <=" in sql


async def _seed(session):
    session.add_all(
        [
            Param(id=1, name="до 200", ratio=Decimal("0.5")),
            Param(id=2, name="от 1001 до 1300", ratio=Decimal("0.2")),
            Param(id=3, name="fast turnaround", ratio=Decimal("0.35")),
            Income(id=1, name="2 100 000 - 4 000 000 сум"),
            FamilySituation(id=1, name="Married"),
            Respondent(user_id=1, name="a", age=30, gender="Male", income=3_000_000, family_situation="Married"),
            Respondent(user_id=2, name="b", age=41, gender="Female", income=1_200_000, family_situation="Single"),
            Respondent(user_id=3, name="c", age=25, gender="Female", income=2_500_000, family_situation="Married"),
        ]
    )
    await session.flush()
    session.add_all(
        [
            Place(country_id=1, region_id=1, district_id=1, city_id=1, user_id=1),
            Place(country_id=1, region_id=2, district_id=2, city_id=2, user_id=2),
            # a respondent with two places still counts once
            Place(country_id=1, region_id=1, district_id=1, city_id=1, user_id=3),
            Place(country_id=1, region_id=1, district_id=3, city_id=3, user_id=3),
        ]
    )
    await session.commit()


@pytest.mark.anyio
async def test_lookups(session):
    await _seed(session)
    store = SqlReferenceStore(session)

    by_name = await store.parameter_by_name("до 200")
    by_id = await store.parameter_by_id(3)

    assert by_name.id == 1 and by_name.ratio == Decimal("0.5")
    assert by_id.name == "fast turnaround"
    assert await store.parameter_by_id(999) is None
    assert (await store.income_by_id(1)).name == "2 100 000 - 4 000 000 сум"
    assert (await store.family_situation_by_id(1)).name == "Married"
    assert await store.family_situation_by_id(2) is None


@pytest.mark.anyio
async def test_counts_against_the_database(session):
    await _seed(session)
    respondent_filter = RespondentFilter(SqlReferenceStore(session))

    assert await respondent_filter.count_matching(FilterCriteria()) == 3
    assert await respondent_filter.count_matching(FilterCriteria(gender=Gender.FEMALE)) == 2
    assert await respondent_filter.count_matching(FilterCriteria(region_id=1)) == 2
    assert await respondent_filter.count_matching(FilterCriteria(country_id=1)) == 3
    assert await respondent_filter.count_matching(FilterCriteria(income_id=1)) == 2
    assert (
        await respondent_filter.count_matching(
            FilterCriteria(family_situation_id=1, gender=Gender.BOTH, age_min=20, age_max=29)
        )
        == 1
    )


@pytest.mark.anyio
async def test_stored_ratio_is_the_one_used_for_pricing(session):
    await _seed(session)
    session.add(Param(id=10, name="weekend", ratio=Decimal("0.75")))
    await session.commit()
    engine = PricingEngine(SqlReferenceStore(session))

    quote = await engine.compute_cost(1250, time_param_id=10, target_param_id=3)

    assert quote.user_group_ratio == Decimal("0.2")
    assert quote.time_group_ratio == Decimal("0.75")
    assert quote.cost == (Decimal("3.2") + Decimal("0.2") + Decimal("0.75") + Decimal("0.35")) * 1250


@pytest.fixture
def fast_retries(monkeypatch):
    monkeypatch.setattr(settings, "DB_RETRY_ATTEMPTS", 2)
    monkeypatch.setattr(settings, "DB_RETRY_BASE_DELAY", 0.0)
    monkeypatch.setattr(settings, "DB_RETRY_JITTER", 0.0)


@pytest.mark.anyio
@pytest.mark.parametrize("error_factory", [lost_connection, pool_timeout])
async def test_store_failures_surface_as_infrastructure_error(fast_retries, error_factory):
    store = SqlReferenceStore(FailingSession(error_factory))

    with pytest.raises(InfrastructureError):
        await store.parameter_by_id(1)
    with pytest.raises(InfrastructureError):
        await store.count_respondents(RespondentPredicate())


@pytest.mark.anyio
async def test_pool_timeout_fails_without_retrying(fast_retries):
    session = FailingSession(pool_timeout)

    with pytest.raises(InfrastructureError):
        await SqlReferenceStore(session).parameter_by_name("до 200")

    assert session.executed == 1
    assert session.rollback_calls == 0
