from datetime import date
from decimal import Decimal

from billpress.utils.datefmt import format_display_date
from billpress.utils.money import format_money, format_percentage, round_money


def test_round_half_up() -> None:
    assert round_money(Decimal("0.005")) == Decimal("0.01")
    assert round_money(Decimal("2.344")) == Decimal("2.34")


def test_format_money() -> None:
    assert format_money(Decimal("200"), "Rs") == "Rs 200.00"
    assert format_money(Decimal("5"), "Rs", sign="- ") == "- Rs 5.00"
    assert format_money(Decimal("36"), "Rs", sign="+ ") == "+ Rs 36.00"
    assert format_money(Decimal("-100"), "Rs") == "Rs -100.00"
    assert format_money(Decimal("1.5"), "") == "1.50"


def test_format_percentage() -> None:
    assert format_percentage(Decimal("18")) == "18"
    assert format_percentage(Decimal("12.50")) == "12.5"
    assert format_percentage(Decimal("100")) == "100"
    assert format_percentage(Decimal("0")) == "0"


def test_display_date() -> None:
    assert format_display_date(date(2024, 3, 5)) == "05-03-2024"
    assert format_display_date(None) == ""
