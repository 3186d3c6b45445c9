import pytest

from dzhehuti.core.errors import InputValidationError
from dzhehuti.services.pricing import AMOUNT_BRACKETS, classify_amount


@pytest.mark.parametrize(
    "amount,label",
    [
        (0, "до 200"),
        (200, "до 200"),
        (201, "от 201 до 400"),
        (400, "от 201 до 400"),
        (401, "от 401 до 600"),
        (900, "от 601 до 900"),
        (901, "от 901 до 1100"),
        (1000, "от 901 до 1100"),
        (1100, "от 901 до 1100"),
        (1101, "от 1101 до 1300"),
        (1300, "от 1101 до 1300"),
        (1301, "от 1301 до 1600"),
        (2000, "от 1601 до 2000"),
        (2500, "от 2001 до 2500"),
        (3000, "от 2501 до 3000"),
        (3500, "от 3001 до 3500"),
        (4000, "от 3501 до 4000"),
        (4001, "свыше 4001"),
        (1_000_000, "свыше 4001"),
    ],
)
def test_bracket_boundaries(amount, label):
    assert classify_amount(amount).label == label


def test_brackets_are_contiguous_and_open_ended():
    assert AMOUNT_BRACKETS[0].lower == 0
    for previous, current in zip(AMOUNT_BRACKETS, AMOUNT_BRACKETS[1:]):
        assert current.lower == previous.upper + 1
    assert AMOUNT_BRACKETS[-1].upper is None


def test_every_amount_falls_in_exactly_one_bracket():
    for amount in range(0, 4600):
        owners = [b for b in AMOUNT_BRACKETS if b.contains(amount)]
        assert len(owners) == 1
        assert classify_amount(amount) is owners[0]


def test_legacy_label_is_kept_as_alias():
    bracket = classify_amount(1200)
    assert bracket.names == ("от 1101 до 1300", "от 1001 до 1300")


def test_negative_amount_is_rejected():
    with pytest.raises(InputValidationError):
        classify_amount(-1)
