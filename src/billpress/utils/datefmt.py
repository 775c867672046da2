"""Date display helper used on rendered documents."""

from __future__ import annotations

from datetime import date

__all__ = ["format_display_date"]


def format_display_date(value: date | None) -> str:
    """Format ``value`` as ``DD-MM-YYYY``; missing dates render empty."""

    if value is None:
        return ""
    return f"{value.day:02d}-{value.month:02d}-{value.year:04d}"
