"""Vertical layout cursor.

A :class:`LayoutCursor` tracks the current page index and the ``y`` position
(top-down, in points) on that page.  Renderers advance it as they draw and
ask :meth:`LayoutCursor.would_overflow` before placing a block; only the page
break controller calls :meth:`LayoutCursor.break_page`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from billpress.utils.errors import OverflowComputationError

__all__ = ["LayoutCursor", "checked_height"]


def checked_height(value: float | None, what: str = "height") -> float:
    """Return ``value`` when it is a usable height.

    Raises :class:`OverflowComputationError` for ``None``, NaN, infinities and
    negative values.
    """

    if value is None:
        raise OverflowComputationError(f"{what} is undefined")
    height = float(value)
    if math.isnan(height) or math.isinf(height) or height < 0:
        raise OverflowComputationError(f"{what} must be a finite non-negative number, got {value!r}")
    return height


@dataclass(slots=True)
class LayoutCursor:
    """Mutable ``(page_index, y)`` bound to fixed page geometry."""

    page_width: float
    page_height: float
    margin: float
    page_index: int = 0
    y: float = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.y is None:
            self.y = self.margin

    @property
    def bottom(self) -> float:
        """Lowest ``y`` content may reach."""

        return self.page_height - self.margin

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def remaining(self) -> float:
        return self.bottom - self.y

    def advance(self, by: float) -> float:
        self.y += checked_height(by, "advance")
        return self.y

    def move_to(self, y: float) -> float:
        self.y = checked_height(y, "cursor position")
        return self.y

    def would_overflow(self, needed: float) -> bool:
        return self.y + checked_height(needed, "estimated height") > self.bottom

    def break_page(self) -> None:
        self.page_index += 1
        self.y = self.margin
