"""Spell out amounts using the Indian numbering convention.

Groups are Crore (10^7), Lakh (10^5), Thousand and Hundred; every word is
title-cased and ``And`` joins a hundreds digit to the remainder of its group::

    >>> amount_to_words(236)
    'Two Hundred And Thirty Six'
    >>> amount_to_words(Decimal("1250000.50"))
    'Twelve Lakh Fifty Thousand And Fifty Paise'

The functions are pure; the caller frames the result with a currency prefix
and suffix (see :func:`amount_in_words_line`).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

__all__ = ["amount_in_words_line", "amount_to_words", "integer_to_words"]

_ONES = [
    "Zero",
    "One",
    "Two",
    "Three",
    "Four",
    "Five",
    "Six",
    "Seven",
    "Eight",
    "Nine",
    "Ten",
    "Eleven",
    "Twelve",
    "Thirteen",
    "Fourteen",
    "Fifteen",
    "Sixteen",
    "Seventeen",
    "Eighteen",
    "Nineteen",
]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

# Largest first; the crore group itself may exceed 99 and recurses.
_GROUPS = ((10_000_000, "Crore"), (100_000, "Lakh"), (1_000, "Thousand"))


def _below_hundred(n: int) -> str:
    if n < 20:
        return _ONES[n]
    tens, ones = divmod(n, 10)
    return _TENS[tens] if ones == 0 else f"{_TENS[tens]} {_ONES[ones]}"


def _below_thousand(n: int) -> str:
    hundreds, rest = divmod(n, 100)
    if hundreds == 0:
        return _below_hundred(rest)
    head = f"{_ONES[hundreds]} Hundred"
    return head if rest == 0 else f"{head} And {_below_hundred(rest)}"


def integer_to_words(n: int) -> str:
    """Return the words for the non-negative integer ``n``."""

    if n < 0:
        raise ValueError("integer_to_words expects a non-negative integer")
    if n == 0:
        return _ONES[0]
    parts: list[str] = []
    for size, name in _GROUPS:
        count, n = divmod(n, size)
        if count:
            lead = integer_to_words(count) if count >= 1000 else _below_thousand(count)
            parts.append(f"{lead} {name}")
    if n:
        parts.append(_below_thousand(n))
    return " ".join(parts)


def amount_to_words(amount: Decimal | int) -> str:
    """Spell out ``amount`` rounded to paise.

    Negative amounts are prefixed with ``Minus``; a non-zero fractional part
    is appended as ``And <n> Paise``.
    """

    value = Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    negative = value < 0
    rupees, paise = divmod(int(abs(value) * 100), 100)
    words = integer_to_words(rupees)
    if paise:
        words = f"{words} And {_below_hundred(paise)} Paise"
    return f"Minus {words}" if negative else words


def amount_in_words_line(amount: Decimal | int, *, prefix: str, suffix: str) -> str:
    """Frame :func:`amount_to_words` as ``"<prefix> <Words> <suffix>"``."""

    raw = amount_to_words(amount)
    words = raw[:1].upper() + raw[1:]
    return " ".join(part for part in (prefix, words, suffix) if part)
