"""Recording backend.

:class:`RecordingCanvas` and :class:`RecordingTableRenderer` implement the
drawing protocols without producing a PDF.  Every operation is appended to
``RecordingCanvas.ops`` tagged with its page index, which makes layouts easy
to inspect in tests and in ``billpress plan`` dry runs.

Text is measured with the same reportlab font metrics as the PDF backend, so
wrapping and page breaks match a real render.  Table rows are sized from
their wrapped description the way the platypus table sizes them, and are
never split across pages.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import asdict, dataclass, field

from billpress.config import ConfigModel, load_config
from billpress.layout.base import Align, Canvas, PageBreakCallback
from billpress.utils.errors import AssetError

from .reportlab_backend import PAGE_SIZES, resolve_widths, split_lines

__all__ = ["DrawOp", "RecordingCanvas", "RecordingTableRenderer", "RowPlacement"]


@dataclass(frozen=True, slots=True)
class DrawOp:
    """A single recorded drawing operation."""

    page: int
    kind: str
    x: float
    y: float
    text: str = ""
    attrs: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RowPlacement:
    """Where the table renderer placed one body row."""

    row: int
    page: int
    top: float
    bottom: float


class RecordingCanvas:
    """In-memory canvas that records operations per page."""

    def __init__(self, cfg: ConfigModel | None = None) -> None:
        cfg = cfg or load_config()
        self._width, self._height = PAGE_SIZES[cfg.page.size]
        self._font = (cfg.fonts.regular, float(cfg.spacing.body_size))
        self._text_color = cfg.colors.text
        self._draw_color = cfg.colors.text
        self._page = 0
        self.ops: list[DrawOp] = []
        self.finished = False

    @property
    def page_width(self) -> float:
        return self._width

    @property
    def page_height(self) -> float:
        return self._height

    @property
    def page_count(self) -> int:
        return self._page + 1

    @property
    def font(self) -> tuple[str, float]:
        return self._font

    def set_font(self, name: str, size: float) -> None:
        self._font = (name, float(size))

    def set_text_color(self, color: str) -> None:
        self._text_color = color

    def set_draw_color(self, color: str) -> None:
        self._draw_color = color

    def draw_text(
        self,
        x: float,
        y: float,
        text: str | Sequence[str],
        *,
        align: Align = "left",
        leading: float | None = None,
    ) -> None:
        lines = [text] if isinstance(text, str) else list(text)
        step = leading if leading is not None else self._font[1] * 1.2
        for idx, line in enumerate(lines):
            self.ops.append(
                DrawOp(
                    self._page,
                    "text",
                    x,
                    y + idx * step,
                    line,
                    {
                        "font": self._font[0],
                        "size": self._font[1],
                        "align": align,
                        "color": self._text_color,
                    },
                )
            )

    def draw_line(
        self, x1: float, y1: float, x2: float, y2: float, *, dashed: bool = False
    ) -> None:
        self.ops.append(
            DrawOp(
                self._page,
                "line",
                x1,
                y1,
                attrs={"x2": x2, "y2": y2, "dashed": dashed, "color": self._draw_color},
            )
        )

    def draw_image(self, data: bytes, x: float, y: float, width: float, height: float) -> None:
        if not data:
            raise AssetError("image data is empty")
        self.ops.append(
            DrawOp(self._page, "image", x, y, attrs={"width": width, "height": height, "bytes": len(data)})
        )

    def wrap_text(self, text: str, max_width: float) -> list[str]:
        return split_lines(text, self._font[0], self._font[1], max_width)

    def new_page(self) -> None:
        self._page += 1
        self.ops.append(DrawOp(self._page, "page", 0.0, 0.0))

    def finish(self) -> bytes:
        """Return the recorded operations as JSON lines."""

        self.finished = True
        return "\n".join(json.dumps(asdict(op), sort_keys=True) for op in self.ops).encode("utf-8")

    # -- inspection helpers --------------------------------------------------

    def ops_on_page(self, page: int, kind: str | None = None) -> list[DrawOp]:
        return [op for op in self.ops if op.page == page and (kind is None or op.kind == kind)]

    def texts_on_page(self, page: int) -> list[str]:
        return [op.text for op in self.ops_on_page(page, "text")]

    def pages_with_text(self, text: str) -> list[int]:
        """Pages on which a text op equal to ``text`` was drawn, in order."""

        return sorted({op.page for op in self.ops if op.kind == "text" and op.text == text})


class RecordingTableRenderer:
    """Table primitive for :class:`RecordingCanvas`.

    Row height is the wrapped description height plus padding, at least
    ``table.min_row_height``.  ``placements`` lists where each body row went.
    """

    def __init__(self, cfg: ConfigModel | None = None) -> None:
        self._cfg = cfg or load_config()
        self.placements: list[RowPlacement] = []

    def _row_height(self, canvas: Canvas, row: Sequence[str], widths: list[float]) -> float:
        tbl = self._cfg.table
        inner = max(widths[1] - 2 * tbl.cell_padding, 1.0)
        lines = max(len(canvas.wrap_text(str(row[1]), inner)), 1) if len(row) > 1 else 1
        return max(tbl.min_row_height, lines * tbl.font_size * 1.2 + 2 * tbl.cell_padding)

    def _draw_row(
        self, canvas: Canvas, row: Sequence[str], widths: list[float], y: float, height: float
    ) -> None:
        x = self._cfg.page.margin
        baseline = y + height / 2 + self._cfg.table.font_size / 3
        for cell, width in zip(row, widths):
            canvas.draw_text(x + self._cfg.table.cell_padding, baseline, str(cell))
            x += width
        canvas.draw_line(self._cfg.page.margin, y + height, x, y + height)

    def draw_table(
        self,
        canvas: Canvas,
        head: Sequence[str],
        rows: Sequence[Sequence[str]],
        column_widths: Sequence[float | None],
        start_y: float,
        on_new_page: PageBreakCallback,
    ) -> float:
        cfg = self._cfg
        margin = cfg.page.margin
        widths = resolve_widths(column_widths, canvas.page_width - 2 * margin)
        bottom = canvas.page_height - margin
        canvas.set_font(cfg.fonts.regular, cfg.table.font_size)
        heights = [self._row_height(canvas, row, widths) for row in rows]
        head_height = self._row_height(canvas, head, widths)

        y = start_y
        fresh_page = False
        head_drawn = False
        for idx, (row, height) in enumerate(zip(rows, heights), start=1):
            needed = height if head_drawn else head_height + height
            # A row taller than an empty page is placed anyway.
            if y + needed > bottom and not fresh_page:
                y = on_new_page()
                canvas.set_font(cfg.fonts.regular, cfg.table.font_size)
                fresh_page = True
                head_drawn = False
            if not head_drawn:
                canvas.set_font(cfg.fonts.bold, cfg.table.font_size)
                self._draw_row(canvas, head, widths, y, head_height)
                canvas.set_font(cfg.fonts.regular, cfg.table.font_size)
                y += head_height
                head_drawn = True
            self._draw_row(canvas, row, widths, y, height)
            page = canvas.page_count - 1
            self.placements.append(RowPlacement(idx, page, y, y + height))
            y += height
            fresh_page = False
        return y
