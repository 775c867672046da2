"""Page breaks, continuation headers and row placement."""

from __future__ import annotations

from decimal import Decimal

import pytest

from billpress.backends.recording import RecordingCanvas, RecordingTableRenderer
from billpress.config import ConfigModel
from billpress.document.models import CompanyProfile, Estimate, LineItem, Transaction
from billpress.document.normalizer import NormalizedView, normalize
from billpress.layout.cursor import LayoutCursor
from billpress.layout.engine import lay_out
from billpress.layout.paginator import PageBreakController
from billpress.layout.sections import estimate_footer_height
from billpress.utils.errors import OverflowComputationError


Layout = tuple[RecordingCanvas, RecordingTableRenderer, PageBreakController]


@pytest.fixture
def long_layout(long_estimate: Estimate, company: CompanyProfile, cfg: ConfigModel) -> Layout:
    canvas = RecordingCanvas(cfg)
    table = RecordingTableRenderer(cfg)
    controller = lay_out(canvas, table, normalize(long_estimate, company, cfg), cfg)
    return canvas, table, controller


def _controller(view: NormalizedView, cfg: ConfigModel) -> tuple[RecordingCanvas, PageBreakController]:
    canvas = RecordingCanvas(cfg)
    cursor = LayoutCursor(canvas.page_width, canvas.page_height, cfg.page.margin)
    return canvas, PageBreakController(canvas, cursor, view, cfg)


def test_long_table_spans_three_pages(long_layout: Layout) -> None:
    canvas, _, controller = long_layout
    assert canvas.page_count >= 3
    assert [brk.page_index for brk in controller.breaks] == list(range(1, canvas.page_count))


def test_continuation_header_on_every_later_page(long_layout: Layout) -> None:
    canvas, _, _ = long_layout
    banner = "QUOTATION - Q-LONG (Cont.)"
    assert canvas.pages_with_text(banner) == list(range(1, canvas.page_count))
    assert "QUOTATION" in canvas.texts_on_page(0)
    assert "QUOTATION" not in canvas.texts_on_page(1)


def test_rows_placed_once_in_order_within_page(
    long_layout: Layout, cfg: ConfigModel
) -> None:
    canvas, table, _ = long_layout
    rows = [p.row for p in table.placements]
    assert rows == list(range(1, 81))
    bottom = canvas.page_height - cfg.page.margin
    for placement in table.placements:
        assert placement.bottom <= bottom
    pages = [p.page for p in table.placements]
    assert pages == sorted(pages)


def test_table_header_repeats_on_each_table_page(long_layout: Layout) -> None:
    canvas, table, _ = long_layout
    for page in sorted({p.page for p in table.placements}):
        assert "Sl.No" in canvas.texts_on_page(page)


def test_footer_kept_together(long_layout: Layout) -> None:
    canvas, _, _ = long_layout
    assert canvas.pages_with_text("Terms & Conditions") == canvas.pages_with_text("(R. Rao)")
    assert canvas.pages_with_text("Total Payable") != []


def test_ensure_room_breaks_near_bottom(
    estimate: Estimate, company: CompanyProfile, cfg: ConfigModel
) -> None:
    view = normalize(estimate, company, cfg)
    canvas, controller = _controller(view, cfg)
    height = estimate_footer_height(canvas, view, cfg)
    controller.cursor.move_to(controller.cursor.bottom - height + 1)
    assert controller.ensure_room(height, "footer") is True
    assert canvas.page_count == 2
    assert controller.cursor.page_index == 1
    assert controller.cursor.y == cfg.page.margin + cfg.spacing.continuation_offset
    assert "QUOTATION - Q-100 (Cont.)" in canvas.texts_on_page(1)
    assert controller.breaks[-1].reason == "footer"


def test_ensure_room_keeps_fitting_block(
    estimate: Estimate, company: CompanyProfile, cfg: ConfigModel
) -> None:
    canvas, controller = _controller(normalize(estimate, company, cfg), cfg)
    controller.cursor.move_to(controller.cursor.bottom - 50)
    assert controller.ensure_room(50) is False
    assert canvas.page_count == 1


def test_oversized_block_at_page_top_does_not_loop(
    bill: Transaction, company: CompanyProfile, cfg: ConfigModel
) -> None:
    canvas, controller = _controller(normalize(bill, company, cfg), cfg)
    controller.break_page()
    assert controller.ensure_room(10_000, "huge") is False
    assert canvas.page_count == 2


@pytest.mark.parametrize("bad", [-1.0, None, float("nan")])
def test_invalid_height_is_fatal(
    bad: float | None, bill: Transaction, company: CompanyProfile, cfg: ConfigModel
) -> None:
    _, controller = _controller(normalize(bill, company, cfg), cfg)
    with pytest.raises(OverflowComputationError):
        controller.ensure_room(bad)


def test_row_taller_than_page_is_placed(company: CompanyProfile, cfg: ConfigModel) -> None:
    tall = "\n".join(f"line {i}" for i in range(120))
    doc = Transaction(
        number="INV-9",
        variant="Invoice",
        items=[LineItem(description=tall, quantity=1, unit_price=Decimal("1"))],
    )
    canvas = RecordingCanvas(cfg)
    table = RecordingTableRenderer(cfg)
    lay_out(canvas, table, normalize(doc, company, cfg), cfg)
    assert len(table.placements) == 1
    assert table.placements[0].page == 1


def test_whole_footer_moves_to_next_page(company: CompanyProfile, cfg: ConfigModel) -> None:
    top = cfg.page.margin + cfg.spacing.continuation_offset
    for count in range(1, 60):
        doc = Estimate(
            number="Q-FOOT",
            items=[
                LineItem(description=f"Row {i}", quantity=1, unit_price=Decimal("10"))
                for i in range(1, count + 1)
            ],
            tax_percentage=Decimal("18"),
            terms_and_conditions="Delivery within two weeks.\nPrices include installation.",
            closing_note="We look forward to working with you.",
        )
        canvas = RecordingCanvas(cfg)
        lay_out(canvas, RecordingTableRenderer(cfg), normalize(doc, company, cfg), cfg)
        totals_page = canvas.pages_with_text("Total Payable")[0]
        footer_pages = canvas.pages_with_text("Terms & Conditions")
        if footer_pages[0] > totals_page:
            break
    else:
        pytest.fail("no item count pushed the footer past the totals page")

    page = footer_pages[0]
    assert canvas.pages_with_text("We look forward to working with you.") == [page]
    assert canvas.pages_with_text("(R. Rao)") == [page]
    closing = next(
        op for op in canvas.ops_on_page(page, "text") if op.text == "We look forward to working with you."
    )
    assert closing.y == top
