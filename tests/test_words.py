from decimal import Decimal

import pytest

from billpress.document.words import amount_in_words_line, amount_to_words, integer_to_words


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, "Zero"),
        (7, "Seven"),
        (15, "Fifteen"),
        (40, "Forty"),
        (115, "One Hundred And Fifteen"),
        (236, "Two Hundred And Thirty Six"),
        (1001, "One Thousand One"),
        (100000, "One Lakh"),
        (1250000, "Twelve Lakh Fifty Thousand"),
        (10000000, "One Crore"),
        (25_00_00_000, "Twenty Five Crore"),
    ],
)
def test_integer_to_words(value: int, expected: str) -> None:
    assert integer_to_words(value) == expected


def test_integer_to_words_rejects_negative() -> None:
    with pytest.raises(ValueError):
        integer_to_words(-1)


def test_paise_and_rounding() -> None:
    assert amount_to_words(Decimal("10.50")) == "Ten And Fifty Paise"
    assert amount_to_words(Decimal("0.005")) == "Zero And One Paise"
    assert amount_to_words(Decimal("99.999")) == "One Hundred"


def test_negative_amount() -> None:
    assert amount_to_words(Decimal("-100")) == "Minus One Hundred"


def test_line_framing() -> None:
    line = amount_in_words_line(Decimal("236.00"), prefix="Rupees", suffix="Only /-")
    assert line == "Rupees Two Hundred And Thirty Six Only /-"
    assert amount_in_words_line(5, prefix="", suffix="") == "Five"
