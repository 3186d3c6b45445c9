"""Survey price quotes.

A quote is ``(BASE_RATIO + user + time + target + age ratios) * userAmount``:

* the user ratio comes from the ``params`` row named after the amount
  bracket ``userAmount`` falls into,
* time and target ratios come from ``params`` rows referenced by id,
* the age ratio is derived from the requested age band, without storage.

Missing rows contribute zero and are reported as warnings, unless the
engine runs in strict mode, in which case they raise
:class:`ReferenceNotFoundError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from loguru import logger

from dzhehuti.core.errors import InputValidationError, ReferenceNotFoundError
from dzhehuti.services.storage import ParameterRecord, ReferenceStore

BASE_RATIO = Decimal("3.2")
ZERO = Decimal("0.00")


@dataclass(frozen=True)
class AmountBracket:
    """Inclusive respondent-count range; ``upper`` is None for the open last bracket."""

    lower: int
    upper: Optional[int]
    label: str
    aliases: tuple[str, ...] = ()

    def contains(self, amount: int) -> bool:
        return self.lower <= amount and (self.upper is None or amount <= self.upper)

    @property
    def names(self) -> tuple[str, ...]:
        return (self.label,) + self.aliases


# Cutoffs follow the historical comparisons (<=200, <=400, ... <=4000, else).
# The 1101-1300 row used to be stored as "от 1001 до 1300"; that name is
# still accepted so existing params tables keep pricing correctly.
AMOUNT_BRACKETS: tuple[AmountBracket, ...] = (
    AmountBracket(0, 200, "до 200"),
    AmountBracket(201, 400, "от 201 до 400"),
    AmountBracket(401, 600, "от 401 до 600"),
    AmountBracket(601, 900, "от 601 до 900"),
    AmountBracket(901, 1100, "от 901 до 1100"),
    AmountBracket(1101, 1300, "от 1101 до 1300", aliases=("от 1001 до 1300",)),
    AmountBracket(1301, 1600, "от 1301 до 1600"),
    AmountBracket(1601, 2000, "от 1601 до 2000"),
    AmountBracket(2001, 2500, "от 2001 до 2500"),
    AmountBracket(2501, 3000, "от 2501 до 3000"),
    AmountBracket(3001, 3500, "от 3001 до 3500"),
    AmountBracket(3501, 4000, "от 3501 до 4000"),
    AmountBracket(4001, None, "свыше 4001"),
)

# (min spread, max spread, ratio), widest band first
AGE_RANGE_BANDS: tuple[tuple[int, int, Decimal], ...] = (
    (31, 37, Decimal("0.00")),
    (21, 30, Decimal("0.15")),
    (16, 20, Decimal("0.30")),
    (11, 15, Decimal("0.45")),
    (6, 10, Decimal("0.75")),
    (0, 5, Decimal("0.90")),
)
# Under-18 audiences only price the narrower bands.
YOUTH_AGE_RANGE_BANDS = AGE_RANGE_BANDS[2:]

COHORT_OFFSET = Decimal("0.30")
STRADDLING_AGE_RATIO = Decimal("0.60")
DEFAULT_AGE_RATIO = Decimal("0.30")


def classify_amount(user_amount: int) -> AmountBracket:
    """Return the single bracket ``user_amount`` belongs to."""

    if user_amount < 0:
        raise InputValidationError("userAmount must be a non-negative integer")
    for bracket in AMOUNT_BRACKETS[:-1]:
        if user_amount <= bracket.upper:
            return bracket
    return AMOUNT_BRACKETS[-1]


def _band_ratio(spread: int, bands, offset: Decimal = ZERO) -> Decimal:
    for low, high, ratio in bands:
        if low <= spread <= high:
            return ratio + offset
    return ZERO


def validate_age_band(min_age: Optional[int], max_age: Optional[int]) -> None:
    for label, value in (("min_age", min_age), ("max_age", max_age)):
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int):
            raise InputValidationError(f"{label} must be an integer")
        if value < 0:
            raise InputValidationError(f"{label} must not be negative")
    if min_age is not None and max_age is not None and min_age > max_age:
        raise InputValidationError("min_age must not be greater than max_age")


def age_group_ratio(min_age: Optional[int], max_age: Optional[int]) -> Decimal:
    """Ratio for an age band; narrower bands cost more.

    Both bounds must be given and non-zero, otherwise the ratio is zero.
    """

    validate_age_band(min_age, max_age)
    if not min_age or not max_age:
        return ZERO

    spread = max_age - min_age
    if 18 <= min_age and max_age <= 55:
        return _band_ratio(spread, AGE_RANGE_BANDS)
    if 56 <= min_age and max_age <= 100:
        return _band_ratio(spread, AGE_RANGE_BANDS, COHORT_OFFSET)
    if 0 <= min_age and max_age <= 18:
        return _band_ratio(spread, YOUTH_AGE_RANGE_BANDS, COHORT_OFFSET)
    if min_age < 18 and max_age > 55:
        return STRADDLING_AGE_RATIO
    return DEFAULT_AGE_RATIO


def _as_ratio(record: Optional[ParameterRecord]) -> Decimal:
    if record is None or record.ratio is None:
        return ZERO
    if isinstance(record.ratio, Decimal):
        return record.ratio
    try:
        return Decimal(str(record.ratio))
    except ArithmeticError:
        return ZERO


def _validate_id(label: str, value: Optional[int]) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise InputValidationError(f"{label} must be an integer id")


@dataclass(frozen=True)
class CostQuote:
    cost: Decimal
    bracket: AmountBracket
    user_group_ratio: Decimal
    time_group_ratio: Decimal
    target_group_ratio: Decimal
    age_group_ratio: Decimal
    warnings: tuple[str, ...] = ()


class PricingEngine:
    """Computes survey quotes against an injected :class:`ReferenceStore`."""

    def __init__(self, store: ReferenceStore, *, strict: bool = False):
        self.store = store
        self.strict = strict

    def _missing(self, warnings: list[str], detail: str, reference: str, key: object) -> None:
        if self.strict:
            raise ReferenceNotFoundError(detail, reference=reference, key=key)
        logger.bind(reference=reference, key=key).warning("reference_lookup_missing")
        warnings.append(detail)

    async def _bracket_parameter(self, bracket: AmountBracket) -> Optional[ParameterRecord]:
        for name in bracket.names:
            record = await self.store.parameter_by_name(name)
            if record is not None:
                return record
        return None

    async def compute_cost(
        self,
        user_amount: int,
        time_param_id: Optional[int] = None,
        target_param_id: Optional[int] = None,
        min_age: Optional[int] = None,
        max_age: Optional[int] = None,
    ) -> CostQuote:
        if isinstance(user_amount, bool) or not isinstance(user_amount, int):
            raise InputValidationError("userAmount must be a non-negative integer")
        _validate_id("timeParamsId", time_param_id)
        _validate_id("targetParamsId", target_param_id)
        bracket = classify_amount(user_amount)
        age_ratio = age_group_ratio(min_age, max_age)
        warnings: list[str] = []

        user_param = await self._bracket_parameter(bracket)
        if user_param is None:
            self._missing(warnings, "Params not found", "params.name", bracket.label)
        user_ratio = _as_ratio(user_param)

        time_ratio = ZERO
        if time_param_id:
            time_param = await self.store.parameter_by_id(time_param_id)
            if time_param is None:
                self._missing(warnings, "Time params not found", "params.id", time_param_id)
            time_ratio = _as_ratio(time_param)

        target_ratio = ZERO
        if target_param_id:
            target_param = await self.store.parameter_by_id(target_param_id)
            if target_param is None:
                self._missing(warnings, "Target params not found", "params.id", target_param_id)
            target_ratio = _as_ratio(target_param)

        multiplier = BASE_RATIO + user_ratio + time_ratio + target_ratio + age_ratio
        cost = multiplier * user_amount
        logger.bind(
            user_amount=user_amount,
            bracket=bracket.label,
            multiplier=str(multiplier),
            cost=str(cost),
        ).info("cost_calculated")
        return CostQuote(
            cost=cost,
            bracket=bracket,
            user_group_ratio=user_ratio,
            time_group_ratio=time_ratio,
            target_group_ratio=target_ratio,
            age_group_ratio=age_ratio,
            warnings=tuple(warnings),
        )
