"""Display formatting for monetary amounts and percentages.

Amounts are accumulated unrounded elsewhere; rounding to two fractional
digits happens here and nowhere else.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

__all__ = ["CENT", "format_money", "format_percentage", "round_money"]

CENT = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Round ``value`` half-up to two fractional digits."""

    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(value: Decimal, symbol: str, *, sign: str = "") -> str:
    """Return ``value`` as ``"<sign><symbol> 1234.50"``.

    ``sign`` is a literal prefix such as ``"- "`` or ``"+ "`` used by the
    totals summary; negative values keep their own minus sign.
    """

    amount = f"{round_money(value):.2f}"
    body = f"{symbol} {amount}" if symbol else amount
    return f"{sign}{body}"


def format_percentage(value: Decimal) -> str:
    """Format a percentage without trailing zeros (``18``, ``12.5``)."""

    text = format(value.normalize(), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"
