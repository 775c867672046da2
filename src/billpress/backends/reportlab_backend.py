"""reportlab implementation of the drawing protocols.

:class:`ReportLabCanvas` adapts :class:`reportlab.pdfgen.canvas.Canvas` to the
top-down coordinates used by the layout engine.  The canvas is created with
``invariant=1`` so that timestamps and document IDs do not vary between runs.

:class:`ReportLabTableRenderer` measures every row with a platypus
:class:`~reportlab.platypus.Table`, packs whole rows onto each page and draws
one table per page with the header row repeated.  A row taller than an empty
page gets a page of its own.
"""

from __future__ import annotations

from collections.abc import Sequence
from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas as rl_canvas
from reportlab.platypus import Paragraph, Table, TableStyle

from billpress.config import ConfigModel
from billpress.layout.base import Align, Canvas, PageBreakCallback
from billpress.utils.errors import AssetError

__all__ = ["PAGE_SIZES", "ReportLabCanvas", "ReportLabTableRenderer", "resolve_widths", "split_lines"]

PAGE_SIZES: dict[str, tuple[float, float]] = {"A4": A4}

# Available height passed to platypus when measuring rows.
_UNBOUNDED = 1e9


def split_lines(text: str, font_name: str, font_size: float, max_width: float) -> list[str]:
    """Greedy-wrap ``text`` using reportlab font metrics.

    Explicit newlines start new lines.  Blank text yields no lines.
    """

    if not text or not text.strip():
        return []
    return simpleSplit(text, font_name, font_size, max_width)


def resolve_widths(widths: Sequence[float | None], total: float) -> list[float]:
    """Replace the single ``None`` (auto) width with the space left over."""

    fixed = sum(w for w in widths if w is not None)
    auto = max(total - fixed, 1.0)
    return [auto if w is None else float(w) for w in widths]


class ReportLabCanvas:
    """Multi-page PDF canvas using top-down coordinates."""

    def __init__(self, cfg: ConfigModel, *, title: str = "") -> None:
        self._buffer = BytesIO()
        self._width, self._height = PAGE_SIZES[cfg.page.size]
        self._canvas = rl_canvas.Canvas(
            self._buffer,
            pagesize=(self._width, self._height),
            pageCompression=1 if cfg.output.compress else 0,
            invariant=1,
        )
        self._canvas.setAuthor(cfg.output.author)
        if title:
            self._canvas.setTitle(title)
        self._font = (cfg.fonts.regular, float(cfg.spacing.body_size))
        self._text_color = cfg.colors.text
        self._draw_color = cfg.colors.text
        self._data: bytes | None = None
        self._apply_state()

    # -- protocol properties -------------------------------------------------

    @property
    def page_width(self) -> float:
        return self._width

    @property
    def page_height(self) -> float:
        return self._height

    @property
    def page_count(self) -> int:
        return self._canvas.getPageNumber()

    @property
    def native(self) -> rl_canvas.Canvas:
        """The wrapped reportlab canvas (used by the table renderer)."""

        return self._canvas

    # -- state ---------------------------------------------------------------

    def _apply_state(self) -> None:
        self._canvas.setFont(*self._font)
        self._canvas.setFillColor(HexColor(self._text_color))
        self._canvas.setStrokeColor(HexColor(self._draw_color))

    def set_font(self, name: str, size: float) -> None:
        self._font = (name, float(size))
        self._canvas.setFont(name, float(size))

    def set_text_color(self, color: str) -> None:
        self._text_color = color
        self._canvas.setFillColor(HexColor(color))

    def set_draw_color(self, color: str) -> None:
        self._draw_color = color
        self._canvas.setStrokeColor(HexColor(color))

    # -- drawing -------------------------------------------------------------

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
            baseline = self._height - (y + idx * step)
            if align == "right":
                self._canvas.drawRightString(x, baseline, line)
            elif align == "center":
                self._canvas.drawCentredString(x, baseline, line)
            else:
                self._canvas.drawString(x, baseline, line)

    def draw_line(
        self, x1: float, y1: float, x2: float, y2: float, *, dashed: bool = False
    ) -> None:
        if dashed:
            self._canvas.setDash(1, 2)
        self._canvas.line(x1, self._height - y1, x2, self._height - y2)
        if dashed:
            self._canvas.setDash()

    def draw_image(self, data: bytes, x: float, y: float, width: float, height: float) -> None:
        try:
            reader = ImageReader(BytesIO(data))
            reader.getSize()
            self._canvas.drawImage(
                reader,
                x,
                self._height - y - height,
                width=width,
                height=height,
                preserveAspectRatio=True,
                mask="auto",
            )
        except Exception as exc:  # decoder errors differ per image format
            raise AssetError(f"cannot decode image: {exc}") from exc

    def wrap_text(self, text: str, max_width: float) -> list[str]:
        return split_lines(text, self._font[0], self._font[1], max_width)

    def new_page(self) -> None:
        self._canvas.showPage()
        self._apply_state()

    def finish(self) -> bytes:
        if self._data is None:
            self._canvas.save()
            self._data = self._buffer.getvalue()
        return self._data


class ReportLabTableRenderer:
    """Item table drawn with platypus, paginated row by row."""

    def __init__(self, cfg: ConfigModel) -> None:
        self._cfg = cfg

    def _style(self) -> TableStyle:
        cfg = self._cfg
        pad = cfg.table.cell_padding
        return TableStyle(
            [
                ("FONTNAME", (0, 0), (-1, -1), cfg.fonts.regular),
                ("FONTNAME", (0, 0), (-1, 0), cfg.fonts.bold),
                ("FONTSIZE", (0, 0), (-1, -1), cfg.table.font_size),
                ("TEXTCOLOR", (0, 0), (-1, -1), HexColor(cfg.colors.text)),
                ("BACKGROUND", (0, 0), (-1, 0), HexColor(cfg.colors.table_head_fill)),
                ("GRID", (0, 0), (-1, -1), 0.5, HexColor(cfg.colors.table_grid)),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("ALIGN", (0, 0), (0, -1), "CENTER"),
                ("ALIGN", (2, 0), (2, -1), "CENTER"),
                ("ALIGN", (3, 0), (4, -1), "RIGHT"),
                ("LEFTPADDING", (0, 0), (-1, -1), pad),
                ("RIGHTPADDING", (0, 0), (-1, -1), pad),
                ("TOPPADDING", (0, 0), (-1, -1), pad),
                ("BOTTOMPADDING", (0, 0), (-1, -1), pad),
            ]
        )

    def _build(self, head: Sequence[str], rows: Sequence[Sequence[str]], widths: list[float]) -> Table:
        cfg = self._cfg
        cell = ParagraphStyle(
            "billpress-cell",
            fontName=cfg.fonts.regular,
            fontSize=cfg.table.font_size,
            leading=cfg.table.font_size * 1.2,
            textColor=HexColor(cfg.colors.text),
        )
        # Descriptions wrap inside their column and keep explicit line breaks.
        data: list[list[object]] = [list(head)]
        for row in rows:
            cells: list[object] = list(row)
            cells[1] = Paragraph(escape(str(row[1])).replace("\n", "<br/>"), cell)
            data.append(cells)
        return Table(data, colWidths=widths, repeatRows=1, style=self._style())

    def row_heights(
        self, head: Sequence[str], rows: Sequence[Sequence[str]], widths: list[float]
    ) -> tuple[float, list[float]]:
        """Return the header height and the height of each body row."""

        total = sum(widths)
        head_height = self._build(head, [], widths).wrap(total, _UNBOUNDED)[1]
        heights = [
            self._build(head, [row], widths).wrap(total, _UNBOUNDED)[1] - head_height
            for row in rows
        ]
        return head_height, heights

    def _draw_chunk(
        self,
        canvas: ReportLabCanvas,
        head: Sequence[str],
        rows: Sequence[Sequence[str]],
        widths: list[float],
        y: float,
    ) -> float:
        table = self._build(head, rows, widths)
        _, height = table.wrapOn(canvas.native, sum(widths), _UNBOUNDED)
        table.drawOn(canvas.native, self._cfg.page.margin, canvas.page_height - y - height)
        return y + height

    def draw_table(
        self,
        canvas: Canvas,
        head: Sequence[str],
        rows: Sequence[Sequence[str]],
        column_widths: Sequence[float | None],
        start_y: float,
        on_new_page: PageBreakCallback,
    ) -> float:
        if not isinstance(canvas, ReportLabCanvas):
            raise TypeError("ReportLabTableRenderer requires a ReportLabCanvas")
        margin = self._cfg.page.margin
        widths = resolve_widths(column_widths, canvas.page_width - 2 * margin)
        bottom = canvas.page_height - margin
        head_height, heights = self.row_heights(head, rows, widths)

        y = start_y
        fresh_page = False
        chunk: list[Sequence[str]] = []
        chunk_height = head_height
        for row, height in zip(rows, heights):
            # A row taller than an empty page is placed anyway.
            if y + chunk_height + height > bottom and (chunk or not fresh_page):
                if chunk:
                    self._draw_chunk(canvas, head, chunk, widths, y)
                y = on_new_page()
                fresh_page = True
                chunk, chunk_height = [], head_height
            chunk.append(row)
            chunk_height += height
        if chunk:
            y = self._draw_chunk(canvas, head, chunk, widths, y)
        return y
