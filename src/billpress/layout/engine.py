"""Render pipeline: normalize, lay out section by section, emit.

:func:`render` is the public entry point.  A call is self-contained: the
cursor, totals and canvas are created per call and discarded afterwards, so
rendering the same inputs twice yields the same bytes.  Any
:class:`~billpress.utils.errors.DocumentValidationError` or
:class:`~billpress.utils.errors.OverflowComputationError` aborts the call
before anything is returned.
"""

from __future__ import annotations

from billpress.config import ConfigModel, load_config
from billpress.document.models import CompanyProfile, Estimate, Transaction
from billpress.document.normalizer import NormalizedView, normalize
from billpress.utils.logging import get_logger

from . import sections
from .base import Canvas, TableRenderer
from .cursor import LayoutCursor
from .emitter import RenderedDocument, emit
from .paginator import PageBreakController

__all__ = ["lay_out", "render", "render_document", "render_view"]

logger = get_logger(__name__)


def lay_out(
    canvas: Canvas,
    table: TableRenderer,
    view: NormalizedView,
    cfg: ConfigModel,
) -> PageBreakController:
    """Draw every section of ``view`` onto ``canvas`` in order."""

    cursor = LayoutCursor(canvas.page_width, canvas.page_height, cfg.page.margin)
    controller = PageBreakController(canvas, cursor, view, cfg)

    sections.draw_header(canvas, cursor, view, cfg)
    sections.draw_parties(canvas, cursor, view, cfg)

    description_h = sections.description_height(canvas, view, cfg)
    if description_h:
        controller.ensure_room(description_h, "description")
        sections.draw_description(canvas, cursor, view, cfg)

    controller.ensure_room(cfg.spacing.table_heading_reserve, "table heading")
    sections.draw_item_table(canvas, cursor, view, cfg, table, controller.start_table_page)
    logger.debug("Item table ends on page %d at y=%.1f", cursor.page_index + 1, cursor.y)
    cursor.advance(cfg.spacing.block_gap)

    controller.ensure_room(sections.totals_height(canvas, view, cfg), "totals")
    sections.draw_totals(canvas, cursor, view, cfg)

    doc = view.document
    if isinstance(doc, Estimate):
        controller.ensure_room(sections.estimate_footer_height(canvas, view, cfg), "footer")
        sections.draw_estimate_footer(canvas, cursor, view, cfg)
    elif isinstance(doc, Transaction):
        controller.ensure_room(sections.transaction_footer_height(canvas, view, cfg), "footer")
        sections.draw_transaction_footer(canvas, cursor, view, cfg)
    else:
        raise TypeError(f"unsupported document type: {type(doc).__name__}")
    return controller


def render_document(
    document: Estimate | Transaction,
    company: CompanyProfile,
    cfg: ConfigModel | None = None,
    *,
    canvas: Canvas | None = None,
    table: TableRenderer | None = None,
) -> RenderedDocument:
    """Render ``document`` and return the named PDF bytes.

    ``canvas`` and ``table`` default to the reportlab backend; pass the
    recording backend (or any other implementation of the protocols) to lay
    out without producing a PDF.
    """

    cfg = cfg or load_config()
    return render_view(normalize(document, company, cfg), cfg, canvas=canvas, table=table)


def render_view(
    view: NormalizedView,
    cfg: ConfigModel,
    *,
    canvas: Canvas | None = None,
    table: TableRenderer | None = None,
) -> RenderedDocument:
    """Lay out an already normalized ``view`` and emit it."""

    if canvas is None or table is None:
        from billpress.backends.reportlab_backend import ReportLabCanvas, ReportLabTableRenderer

        canvas = canvas or ReportLabCanvas(cfg, title=view.filename)
        table = table or ReportLabTableRenderer(cfg)

    lay_out(canvas, table, view, cfg)
    rendered = emit(canvas, view)
    logger.debug("Rendered %s (%d pages)", rendered.filename, rendered.page_count)
    return rendered


def render(
    document: Estimate | Transaction,
    company: CompanyProfile,
    cfg: ConfigModel | None = None,
    *,
    canvas: Canvas | None = None,
    table: TableRenderer | None = None,
) -> bytes:
    """Render ``document`` for ``company`` and return the PDF bytes."""

    return render_document(document, company, cfg, canvas=canvas, table=table).data
