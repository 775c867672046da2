"""Drawing capabilities the layout engine depends on.

The engine never talks to a PDF library directly.  It draws through the
:class:`Canvas` protocol and delegates tabular layout to a
:class:`TableRenderer`.  Both use *top-down* coordinates in points: ``y = 0``
is the top edge of the page and ``y`` grows downward, matching the layout
cursor.  Text ``y`` positions are baselines.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Literal, Protocol, runtime_checkable

Align = Literal["left", "center", "right"]

#: Page-break callback handed to a :class:`TableRenderer`.  It starts a new
#: page, draws the continuation header and returns the ``y`` at which rows
#: resume.
PageBreakCallback = Callable[[], float]


@runtime_checkable
class Canvas(Protocol):
    """Protocol for a multi-page drawing surface."""

    @property
    def page_width(self) -> float: ...

    @property
    def page_height(self) -> float: ...

    @property
    def page_count(self) -> int:
        """Number of pages started so far (the current page included)."""

        ...

    def set_font(self, name: str, size: float) -> None: ...

    def set_text_color(self, color: str) -> None: ...

    def set_draw_color(self, color: str) -> None: ...

    def draw_text(
        self,
        x: float,
        y: float,
        text: str | Sequence[str],
        *,
        align: Align = "left",
        leading: float | None = None,
    ) -> None:
        """Draw one line, or several lines ``leading`` points apart."""

        ...

    def draw_line(
        self, x1: float, y1: float, x2: float, y2: float, *, dashed: bool = False
    ) -> None: ...

    def draw_image(self, data: bytes, x: float, y: float, width: float, height: float) -> None:
        """Draw an encoded image with its top-left corner at ``(x, y)``.

        Raises :class:`~billpress.utils.errors.AssetError` when ``data`` is
        not a decodable image.
        """

        ...

    def wrap_text(self, text: str, max_width: float) -> list[str]:
        """Greedy-wrap ``text`` in the current font to ``max_width`` points."""

        ...

    def new_page(self) -> None: ...

    def finish(self) -> bytes:
        """Close the document and return its encoded bytes."""

        ...


@runtime_checkable
class TableRenderer(Protocol):
    """Protocol for the table layout primitive.

    Implementations lay rows out from ``start_y`` downward, never splitting a
    row, and call ``on_new_page`` whenever the remaining rows need a fresh
    page.  The header row is repeated at the top of every page.
    """

    def draw_table(
        self,
        canvas: Canvas,
        head: Sequence[str],
        rows: Sequence[Sequence[str]],
        column_widths: Sequence[float | None],
        start_y: float,
        on_new_page: PageBreakCallback,
    ) -> float:
        """Draw the table and return the ``y`` just below its last row."""

        ...


__all__ = ["Align", "Canvas", "PageBreakCallback", "TableRenderer"]
