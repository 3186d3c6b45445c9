from decimal import Decimal

import pytest

from dzhehuti.core.errors import InputValidationError
from dzhehuti.services.pricing import age_group_ratio


@pytest.mark.parametrize(
    "min_age,max_age,expected",
    [
        # 18..55
        (18, 55, "0.00"),
        (20, 50, "0.15"),
        (20, 40, "0.30"),
        (25, 40, "0.45"),
        (30, 40, "0.75"),
        (30, 35, "0.90"),
        (18, 18, "0.90"),
        # 56..100, each band shifted by 0.30
        (56, 90, "0.30"),
        (60, 85, "0.45"),
        (60, 80, "0.60"),
        (60, 75, "0.75"),
        (60, 70, "1.05"),
        (60, 65, "1.20"),
        (56, 96, "0.00"),
        # up to 18, narrow bands only
        (1, 18, "0.60"),
        (2, 18, "0.60"),
        (3, 18, "0.75"),
        (10, 18, "1.05"),
        (14, 18, "1.20"),
        # straddling youth and elder cutoffs
        (10, 60, "0.60"),
        (17, 56, "0.60"),
        # anything else
        (17, 20, "0.30"),
        (40, 60, "0.30"),
        (50, 101, "0.30"),
        (56, 120, "0.30"),
    ],
)
def test_age_ratio_table(min_age, max_age, expected):
    assert age_group_ratio(min_age, max_age) == Decimal(expected)


@pytest.mark.parametrize(
    "min_age,max_age",
    [(None, None), (None, 30), (20, None), (0, 18), (0, 0)],
)
def test_missing_or_zero_bound_gives_zero(min_age, max_age):
    assert age_group_ratio(min_age, max_age) == Decimal("0")


@pytest.mark.parametrize("min_age,low,high", [(18, 18, 55), (56, 56, 100), (1, 1, 18)])
def test_narrower_band_never_costs_less(min_age, low, high):
    ratios = [age_group_ratio(min_age, max_age) for max_age in range(low, high + 1)]
    assert all(a >= b for a, b in zip(ratios, ratios[1:]))


@pytest.mark.parametrize("min_age,max_age", [(30, 20), (-1, 20), (20, -5)])
def test_inconsistent_bounds_are_rejected(min_age, max_age):
    with pytest.raises(InputValidationError):
        age_group_ratio(min_age, max_age)
