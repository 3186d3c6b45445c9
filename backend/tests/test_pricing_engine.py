from decimal import Decimal

import pytest

from dzhehuti.core.errors import InputValidationError, ReferenceNotFoundError
from dzhehuti.services.pricing import AMOUNT_BRACKETS, BASE_RATIO, PricingEngine, classify_amount
from store_fakes import InMemoryStore, param

BRACKET_RATIO = Decimal("0.5")


def _bracket_params():
    return [param(i + 1, b.label, str(BRACKET_RATIO)) for i, b in enumerate(AMOUNT_BRACKETS)]


@pytest.mark.anyio
async def test_quote_for_small_panel_with_age_band():
    engine = PricingEngine(InMemoryStore(params=[param(1, "до 200", "0.5")]))

    quote = await engine.compute_cost(150, min_age=20, max_age=50)

    assert quote.age_group_ratio == Decimal("0.15")
    assert quote.cost == Decimal("577.5")
    assert quote.warnings == ()


@pytest.mark.anyio
@pytest.mark.parametrize("amount", [0, 1, 200, 950, 1250, 4000, 4001, 12000])
async def test_without_optional_params_only_the_bracket_counts(amount):
    engine = PricingEngine(InMemoryStore(params=_bracket_params()))

    quote = await engine.compute_cost(amount)

    assert quote.cost == (BASE_RATIO + BRACKET_RATIO) * amount
    assert quote.bracket == classify_amount(amount)


@pytest.mark.anyio
async def test_time_and_target_ratios_are_added():
    store = InMemoryStore(
        params=[param(1, "от 201 до 400", "0.4"), param(7, "2 weeks", "0.25"), param(9, "B2B", "1.1")]
    )
    engine = PricingEngine(store)

    quote = await engine.compute_cost(300, time_param_id=7, target_param_id=9)

    assert quote.time_group_ratio == Decimal("0.25")
    assert quote.target_group_ratio == Decimal("1.1")
    assert quote.cost == (Decimal("3.2") + Decimal("0.4") + Decimal("0.25") + Decimal("1.1")) * 300


@pytest.mark.anyio
async def test_unknown_time_param_prices_at_zero_with_warning():
    engine = PricingEngine(InMemoryStore(params=[param(1, "до 200", "0.5")]))

    quote = await engine.compute_cost(100, time_param_id=9999)

    assert quote.time_group_ratio == Decimal("0")
    assert quote.cost == Decimal("3.7") * 100
    assert quote.warnings == ("Time params not found",)


@pytest.mark.anyio
async def test_missing_bracket_row_prices_at_zero_with_warning():
    engine = PricingEngine(InMemoryStore())

    quote = await engine.compute_cost(500, target_param_id=3)

    assert quote.user_group_ratio == Decimal("0")
    assert quote.cost == BASE_RATIO * 500
    assert quote.warnings == ("Params not found", "Target params not found")


@pytest.mark.anyio
async def test_legacy_bracket_name_is_still_found():
    store = InMemoryStore(params=[param(4, "от 1001 до 1300", "0.2")])

    quote = await PricingEngine(store).compute_cost(1200)

    assert quote.user_group_ratio == Decimal("0.2")
    assert store.calls == [
        ("parameter_by_name", "от 1101 до 1300"),
        ("parameter_by_name", "от 1001 до 1300"),
    ]


@pytest.mark.anyio
async def test_null_ratio_counts_as_zero_without_warning():
    store = InMemoryStore(params=[param(1, "до 200", None), param(2, "urgent", None)])

    quote = await PricingEngine(store).compute_cost(10, time_param_id=2)

    assert quote.cost == BASE_RATIO * 10
    assert quote.warnings == ()


@pytest.mark.anyio
async def test_zero_ids_are_treated_as_not_selected():
    store = InMemoryStore(params=[param(1, "до 200", "0.5")])

    await PricingEngine(store).compute_cost(10, time_param_id=0, target_param_id=0)

    assert all(call[0] == "parameter_by_name" for call in store.calls)


@pytest.mark.anyio
@pytest.mark.parametrize(
    "kwargs,detail",
    [
        ({}, "Params not found"),
        ({"time_param_id": 5}, "Time params not found"),
        ({"target_param_id": 6}, "Target params not found"),
    ],
)
async def test_strict_mode_fails_on_missing_rows(kwargs, detail):
    params = [] if not kwargs else [param(1, "до 200", "0.5")]
    engine = PricingEngine(InMemoryStore(params=params), strict=True)

    with pytest.raises(ReferenceNotFoundError) as ctx:
        await engine.compute_cost(100, **kwargs)
    assert ctx.value.detail == detail


@pytest.mark.anyio
@pytest.mark.parametrize(
    "args,kwargs",
    [
        ((-1,), {}),
        ((True,), {}),
        (("100",), {}),
        ((100,), {"time_param_id": "abc"}),
        ((100,), {"min_age": 40, "max_age": 30}),
    ],
)
async def test_invalid_input_is_rejected_before_any_lookup(args, kwargs):
    store = InMemoryStore(params=_bracket_params())

    with pytest.raises(InputValidationError):
        await PricingEngine(store).compute_cost(*args, **kwargs)
    assert store.calls == []
