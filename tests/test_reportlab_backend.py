"""Byte-level checks of the reportlab backend."""

from __future__ import annotations

import base64

import pytest

from billpress import render, render_document
from billpress.backends.reportlab_backend import (
    ReportLabCanvas,
    ReportLabTableRenderer,
    resolve_widths,
    split_lines,
)
from billpress.config import ConfigModel
from billpress.document.models import CompanyProfile, Estimate, Transaction
from billpress.layout.sections import TABLE_HEAD
from billpress.utils.errors import AssetError


def test_render_produces_pdf(estimate: Estimate, company: CompanyProfile, cfg: ConfigModel) -> None:
    data = render(estimate, company, cfg)
    assert data.startswith(b"%PDF")
    assert data.rstrip().endswith(b"%%EOF")


def test_render_is_deterministic(bill: Transaction, company: CompanyProfile, cfg: ConfigModel) -> None:
    assert render(bill, company, cfg) == render(bill, company, cfg)


def test_long_document_page_count(
    long_estimate: Estimate, company: CompanyProfile, cfg: ConfigModel
) -> None:
    rendered = render_document(long_estimate, company, cfg)
    assert rendered.page_count >= 3
    assert rendered.filename == "QUOTATION-Q-LONG.pdf"


def test_images_embedded(
    bill: Transaction, company: CompanyProfile, cfg: ConfigModel, png_data_url: str
) -> None:
    branded = company.model_copy(update={"logo": png_data_url, "signature": png_data_url})
    plain = render(bill, company, cfg)
    with_images = render(bill, branded, cfg)
    assert with_images.startswith(b"%PDF")
    assert with_images != plain


def test_undecodable_images_do_not_abort(
    estimate: Estimate, company: CompanyProfile, cfg: ConfigModel
) -> None:
    not_an_image = "data:image/png;base64," + base64.b64encode(b"hello world").decode()
    broken = company.model_copy(update={"logo": not_an_image, "signature": not_an_image})
    assert render(estimate, broken, cfg).startswith(b"%PDF")


def test_canvas_draw_image_raises_asset_error(cfg: ConfigModel) -> None:
    canvas = ReportLabCanvas(cfg)
    with pytest.raises(AssetError):
        canvas.draw_image(b"garbage", 10, 10, 20, 20)
    canvas.draw_text(40, 40, "still usable")
    assert canvas.finish().startswith(b"%PDF")


def test_split_lines_and_widths() -> None:
    assert split_lines("   ", "Helvetica", 10, 100) == []
    lines = split_lines("alpha beta gamma delta epsilon", "Helvetica", 10, 60)
    assert len(lines) > 1
    assert " ".join(lines) == "alpha beta gamma delta epsilon"
    assert resolve_widths([40, None, 40, 80, 80], 515) == [40.0, 275.0, 40.0, 80.0, 80.0]


def _row(idx: int, description: str) -> list[str]:
    return [str(idx), description, "1", "Rs 1.00", "Rs 1.00"]


def test_rows_after_an_oversized_row_stay_on_the_page(cfg: ConfigModel) -> None:
    canvas = ReportLabCanvas(cfg)
    table = ReportLabTableRenderer(cfg)
    tall = " ".join(["word"] * 1200)
    rows = [_row(1, "first"), _row(2, tall)] + [_row(i, f"after {i}") for i in range(3, 8)]
    breaks: list[int] = []

    def new_page() -> float:
        canvas.new_page()
        breaks.append(canvas.page_count)
        return 60.0

    end = table.draw_table(canvas, TABLE_HEAD, rows, cfg.table.column_widths, 100.0, new_page)
    bottom = canvas.page_height - cfg.page.margin
    assert breaks == [2, 3]
    assert end <= bottom
    head_height, heights = table.row_heights(
        TABLE_HEAD, rows[2:], resolve_widths(cfg.table.column_widths, canvas.page_width - 80)
    )
    assert end == pytest.approx(60.0 + head_height + sum(heights))
    assert canvas.finish().startswith(b"%PDF")


def test_description_line_breaks_are_kept(cfg: ConfigModel) -> None:
    table = ReportLabTableRenderer(cfg)
    widths = resolve_widths(cfg.table.column_widths, 515)
    rows = [_row(1, "one\ntwo\nthree"), _row(2, "one two three")]
    _, heights = table.row_heights(TABLE_HEAD, rows, widths)
    line = cfg.table.font_size * 1.2
    padding = 2 * cfg.table.cell_padding
    assert heights[0] == pytest.approx(3 * line + padding)
    assert heights[1] == pytest.approx(max(line + padding, cfg.table.min_row_height))


def test_description_markup_is_escaped(cfg: ConfigModel) -> None:
    table = ReportLabTableRenderer(cfg)
    widths = resolve_widths(cfg.table.column_widths, 515)
    _, heights = table.row_heights(TABLE_HEAD, [_row(1, "Pipes <1/2 inch> & fittings")], widths)
    assert heights[0] > 0
