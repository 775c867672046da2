"""Section renderers.

Each renderer draws one logical section of a document onto a
:class:`~billpress.layout.base.Canvas` starting at the cursor's current
position, advances the :class:`~billpress.layout.cursor.LayoutCursor` past
what it drew and returns the new ``y``.  Renderers never start pages; the
page break controller does that before calling them, using the ``*_height``
estimators defined alongside each renderer.

Draw order is fixed: header, parties, description (quotations only), item
table, totals summary, then the combined payment/terms and signature footer.

Every renderer that reads variant-specific fields branches on
:class:`~billpress.document.models.Estimate` versus
:class:`~billpress.document.models.Transaction` and raises ``TypeError`` on
anything else.
"""

from __future__ import annotations

from collections.abc import Sequence

from billpress.config import ConfigModel
from billpress.document.models import Estimate, PaymentMode, Transaction
from billpress.document.normalizer import NormalizedView
from billpress.utils.datefmt import format_display_date
from billpress.utils.errors import AssetError
from billpress.utils.logging import get_logger
from billpress.utils.money import format_money, format_percentage

from .assets import decode_image_data
from .base import Canvas, PageBreakCallback, TableRenderer
from .cursor import LayoutCursor

__all__ = [
    "TABLE_HEAD",
    "build_table_rows",
    "description_height",
    "draw_continuation_header",
    "draw_description",
    "draw_estimate_footer",
    "draw_header",
    "draw_item_table",
    "draw_parties",
    "draw_section_heading",
    "draw_signature",
    "draw_totals",
    "draw_transaction_footer",
    "estimate_footer_height",
    "totals_height",
    "totals_rows",
    "transaction_footer_height",
]

logger = get_logger(__name__)

TABLE_HEAD = ("Sl.No", "Description", "Qty", "Unit Price", "Total")


def _unknown(document: object) -> TypeError:
    return TypeError(f"unsupported document type: {type(document).__name__}")


def _body(canvas: Canvas, cfg: ConfigModel, *, bold: bool = False, size: float | None = None) -> None:
    canvas.set_font(cfg.fonts.bold if bold else cfg.fonts.regular, size or cfg.spacing.body_size)
    canvas.set_text_color(cfg.colors.text)


def _draw_lines(canvas: Canvas, x: float, y: float, lines: Sequence[str], step: float) -> float:
    """Draw ``lines`` one ``step`` apart; return the baseline of the last one."""

    for idx, line in enumerate(lines):
        canvas.draw_text(x, y + idx * step, line)
    return y + (len(lines) - 1) * step if lines else y


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------


def _draw_logo(canvas: Canvas, view: NormalizedView, cfg: ConfigModel, top: float) -> float:
    """Place the logo top-right; return its bottom edge.

    An undecodable logo leaves its area blank.
    """

    hdr = cfg.header
    logo_y = top - hdr.logo_offset
    x = canvas.page_width - cfg.page.margin - hdr.logo_width
    try:
        raw = decode_image_data(view.company.logo or "")
        canvas.draw_image(raw, x, logo_y, hdr.logo_width, hdr.logo_height)
    except AssetError as exc:
        logger.warning("Company logo left blank: %s", exc)
    return logo_y + hdr.logo_height


def _detail_lines(view: NormalizedView) -> list[str]:
    doc = view.document
    lines = [
        f"{view.doc_label} No: {view.number}",
        f"Date: {format_display_date(doc.issue_date)}",
    ]
    if isinstance(doc, Estimate):
        lines.append(f"Valid Until: {format_display_date(doc.valid_until)}")
    elif not isinstance(doc, Transaction):
        raise _unknown(doc)
    return lines


def draw_header(canvas: Canvas, cursor: LayoutCursor, view: NormalizedView, cfg: ConfigModel) -> float:
    """Draw the first-page header: type label, optional logo and details."""

    margin = cfg.page.margin
    top = cursor.y
    canvas.set_font(cfg.fonts.bold, cfg.header.title_size)
    canvas.set_text_color(cfg.colors.primary)
    canvas.draw_text(margin, top, view.doc_type)

    bottom = top
    if view.company.logo:
        bottom = max(bottom, _draw_logo(canvas, view, cfg, top))

    if bottom > top:
        cursor.move_to(bottom + cfg.header.logo_gap)
    else:
        cursor.move_to(top + cfg.header.details_gap)

    _body(canvas, cfg)
    last = _draw_lines(canvas, margin, cursor.y, _detail_lines(view), cfg.spacing.detail_row)
    return cursor.move_to(last + cfg.spacing.section_gap)


def draw_continuation_header(
    canvas: Canvas, cursor: LayoutCursor, view: NormalizedView, cfg: ConfigModel
) -> float:
    """Draw the condensed ``TYPE - NUMBER (Cont.)`` banner of later pages."""

    margin = cfg.page.margin
    canvas.set_font(cfg.fonts.regular, cfg.header.continuation_size)
    canvas.set_text_color(cfg.colors.muted)
    canvas.draw_text(margin, margin / 2, f"{view.doc_type} - {view.number} (Cont.)")
    return cursor.move_to(margin + cfg.spacing.continuation_offset)


def draw_section_heading(
    canvas: Canvas,
    cursor: LayoutCursor,
    text: str,
    cfg: ConfigModel,
    size: float | None = None,
) -> float:
    """Draw a coloured heading with a full-width rule under it."""

    margin = cfg.page.margin
    canvas.set_font(cfg.fonts.bold, size or cfg.spacing.heading_size)
    canvas.set_text_color(cfg.colors.primary)
    canvas.draw_text(margin, cursor.y, text)
    canvas.set_draw_color(cfg.colors.primary)
    canvas.draw_line(margin, cursor.y + 2, canvas.page_width - margin, cursor.y + 2)
    return cursor.advance(cfg.spacing.heading_gap)


# ---------------------------------------------------------------------------
# Parties
# ---------------------------------------------------------------------------


def _draw_column(
    canvas: Canvas,
    cfg: ConfigModel,
    x: float,
    y: float,
    title: str,
    entries: Sequence[tuple[str, bool]],
    wrap_width: float,
) -> float:
    """Draw a titled column of ``(text, wraps)`` entries.

    Single-line entries sit ``detail_row`` apart; wrapped entries take
    ``line_height`` per line.  Returns the baseline of the last line drawn.
    """

    sp = cfg.spacing
    _body(canvas, cfg, bold=True)
    canvas.draw_text(x, y, title)
    _body(canvas, cfg)
    last = y
    y += sp.detail_row
    for text, wraps in entries:
        lines = canvas.wrap_text(text, wrap_width) if wraps else [text]
        if not lines:
            continue
        canvas.draw_text(x, y, lines, leading=sp.line_height)
        last = y + (len(lines) - 1) * sp.line_height
        y = last + (sp.line_height if wraps else sp.detail_row)
    return last


def _from_entries(view: NormalizedView, cfg: ConfigModel) -> list[tuple[str, bool]]:
    company = view.company
    entries: list[tuple[str, bool]] = [(company.name or "Your Company", False)]
    if company.address:
        entries.append((company.address, True))
    if company.tax_id:
        entries.append((f"{cfg.labels.tax_id}: {company.tax_id}", False))
    entries.append((f"Phone: {company.phone}", False))
    entries.append((f"Email: {company.email}", False))
    if company.website:
        entries.append((f"Website: {company.website}", False))
    return entries


def _to_entries(view: NormalizedView) -> list[tuple[str, bool]]:
    doc = view.document
    if isinstance(doc, Estimate):
        client = doc.client
        entries: list[tuple[str, bool]] = [(client.name or "Client Name", False)]
        if client.contact_person:
            entries.append((f"Attn: {client.contact_person}", False))
        if client.address:
            entries.append((client.address, True))
        entries.append((f"Phone: {client.phone}", False))
        entries.append((f"Email: {client.email}", False))
        return entries
    if isinstance(doc, Transaction):
        return [
            (doc.customer.name or "Customer Name", False),
            (f"Contact: {doc.customer.phone}", False),
        ]
    raise _unknown(doc)


def draw_parties(canvas: Canvas, cursor: LayoutCursor, view: NormalizedView, cfg: ConfigModel) -> float:
    """Draw the two-column From/To block.

    The columns may end at different heights; the cursor moves past the
    taller one.
    """

    margin = cfg.page.margin
    half = canvas.page_width / 2
    top = cursor.y
    left_end = _draw_column(
        canvas, cfg, margin, top, "From:", _from_entries(view, cfg), half - margin
    )
    right_end = _draw_column(
        canvas, cfg, half + 20, top, "To:", _to_entries(view), half - margin * 1.5
    )
    return cursor.move_to(max(left_end, right_end) + cfg.spacing.section_gap)


# ---------------------------------------------------------------------------
# Description
# ---------------------------------------------------------------------------


def _description_lines(canvas: Canvas, view: NormalizedView, cfg: ConfigModel) -> list[str]:
    doc = view.document
    if isinstance(doc, Transaction):
        return []
    if not isinstance(doc, Estimate):
        raise _unknown(doc)
    if not doc.project_description.strip():
        return []
    _body(canvas, cfg)
    return canvas.wrap_text(doc.project_description, canvas.page_width - 2 * cfg.page.margin)


def description_height(canvas: Canvas, view: NormalizedView, cfg: ConfigModel) -> float:
    """Height of the description section, ``0`` when it is not drawn."""

    lines = _description_lines(canvas, view, cfg)
    if not lines:
        return 0.0
    return cfg.spacing.heading_gap + len(lines) * cfg.spacing.line_height + cfg.spacing.block_gap


def draw_description(canvas: Canvas, cursor: LayoutCursor, view: NormalizedView, cfg: ConfigModel) -> float:
    """Draw the quotation's project description paragraph, if any."""

    lines = _description_lines(canvas, view, cfg)
    if not lines:
        return cursor.y
    draw_section_heading(canvas, cursor, "Project Description / Purpose", cfg)
    _body(canvas, cfg)
    canvas.draw_text(cfg.page.margin, cursor.y, lines, leading=cfg.spacing.line_height)
    return cursor.advance(len(lines) * cfg.spacing.line_height + cfg.spacing.block_gap)


# ---------------------------------------------------------------------------
# Item table
# ---------------------------------------------------------------------------


def build_table_rows(view: NormalizedView, cfg: ConfigModel) -> list[list[str]]:
    """Return the display rows of the item table."""

    symbol = cfg.currency.symbol
    return [
        [
            str(idx),
            item.description or "-",
            str(item.quantity),
            format_money(item.unit_price, symbol),
            format_money(item.line_total, symbol),
        ]
        for idx, item in enumerate(view.document.items, start=1)
    ]


def draw_item_table(
    canvas: Canvas,
    cursor: LayoutCursor,
    view: NormalizedView,
    cfg: ConfigModel,
    table: TableRenderer,
    on_new_page: PageBreakCallback,
) -> float:
    """Draw the table heading and hand the rows to the table primitive."""

    doc = view.document
    if isinstance(doc, Estimate):
        heading = "Cost Estimate"
    elif isinstance(doc, Transaction):
        heading = "Details"
    else:
        raise _unknown(doc)
    draw_section_heading(canvas, cursor, heading, cfg)
    end = table.draw_table(
        canvas,
        TABLE_HEAD,
        build_table_rows(view, cfg),
        cfg.table.column_widths,
        cursor.y,
        on_new_page,
    )
    return cursor.move_to(end)


# ---------------------------------------------------------------------------
# Totals summary
# ---------------------------------------------------------------------------


def totals_rows(view: NormalizedView, cfg: ConfigModel) -> tuple[list[tuple[str, str]], tuple[str, str]]:
    """Return ``(rows, grand_total_row)`` as display strings.

    The discount row is omitted when the discount is zero.  Transactions have
    no discounted subtotal or tax rows.
    """

    totals = view.totals
    symbol = cfg.currency.symbol
    rows = [("Subtotal", format_money(totals.subtotal, symbol))]
    if totals.discount > 0:
        rows.append(("Discount", format_money(totals.discount, symbol, sign="- ")))

    doc = view.document
    if isinstance(doc, Estimate):
        assert totals.tax_percentage is not None and totals.tax_amount is not None
        rows.append(("Discounted Subtotal", format_money(totals.discounted_subtotal, symbol)))
        rows.append(
            (
                f"{cfg.labels.tax} ({format_percentage(totals.tax_percentage)}%)",
                format_money(totals.tax_amount, symbol, sign="+ "),
            )
        )
        grand = ("Total Payable", format_money(totals.grand_total, symbol))
    elif isinstance(doc, Transaction):
        grand = ("Total", format_money(totals.grand_total, symbol))
    else:
        raise _unknown(doc)
    return rows, grand


def _words_lines(canvas: Canvas, view: NormalizedView, cfg: ConfigModel) -> list[str]:
    canvas.set_font(cfg.fonts.regular, cfg.totals.words_size)
    width = canvas.page_width / 2 - cfg.page.margin
    return canvas.wrap_text(view.amount_in_words, width)


def totals_height(canvas: Canvas, view: NormalizedView, cfg: ConfigModel) -> float:
    """Height of the totals summary including the amount in words."""

    rows, _ = totals_rows(view, cfg)
    sp = cfg.spacing
    words = _words_lines(canvas, view, cfg)
    return (
        (len(rows) + 1) * sp.summary_row
        + cfg.totals.rule_gap_above
        + cfg.totals.rule_gap_below
        + len(words) * sp.line_height
        + sp.block_gap
    )


def draw_totals(canvas: Canvas, cursor: LayoutCursor, view: NormalizedView, cfg: ConfigModel) -> float:
    """Draw right-aligned summary rows, the rule, the grand total and words."""

    rows, grand = totals_rows(view, cfg)
    sx = canvas.page_width / 2
    right = canvas.page_width - cfg.page.margin
    sp = cfg.spacing

    _body(canvas, cfg)
    for label, value in rows:
        canvas.draw_text(sx, cursor.y, label)
        canvas.draw_text(right, cursor.y, value, align="right")
        cursor.advance(sp.summary_row)

    cursor.advance(cfg.totals.rule_gap_above)
    canvas.set_draw_color(cfg.colors.muted)
    canvas.draw_line(sx, cursor.y, right, cursor.y)
    cursor.advance(cfg.totals.rule_gap_below)

    _body(canvas, cfg, bold=True, size=cfg.totals.grand_total_size)
    canvas.draw_text(sx, cursor.y, grand[0])
    canvas.draw_text(right, cursor.y, grand[1], align="right")
    cursor.advance(sp.summary_row)

    words = _words_lines(canvas, view, cfg)
    canvas.set_text_color(cfg.colors.text)
    canvas.draw_text(sx, cursor.y, words, leading=sp.line_height)
    return cursor.advance(len(words) * sp.line_height + sp.block_gap)


# ---------------------------------------------------------------------------
# Signature and footers
# ---------------------------------------------------------------------------


def draw_signature(canvas: Canvas, x: float, y: float, view: NormalizedView, cfg: ConfigModel) -> float:
    """Draw the signature block with its top-left at ``(x, y)``.

    Uses the signature image when it decodes, otherwise a dotted baseline.
    The block height is always ``signature.block_height``.
    """

    sig = cfg.signature
    company = view.company
    drawn = False
    if company.signature:
        try:
            canvas.draw_image(decode_image_data(company.signature), x, y, sig.width, sig.image_height)
            drawn = True
        except AssetError as exc:
            logger.warning("Signature image replaced by a rule: %s", exc)
    if not drawn:
        canvas.set_draw_color(cfg.colors.text)
        baseline = y + sig.image_height
        canvas.draw_line(x, baseline, x + sig.width, baseline, dashed=True)

    centre = x + sig.width / 2
    name_y = y + sig.image_height + 15
    _body(canvas, cfg, bold=True)
    canvas.draw_text(centre, name_y, f"({company.signatory.name or 'Authorized Signatory'})", align="center")
    _body(canvas, cfg, size=cfg.signature.caption_size)
    canvas.draw_text(centre, name_y + 10, company.signatory.title, align="center")
    return y + sig.block_height


def _signature_x(canvas: Canvas, cfg: ConfigModel) -> float:
    return canvas.page_width - cfg.page.margin - cfg.signature.width


def _closing_lines(canvas: Canvas, doc: Estimate, cfg: ConfigModel) -> list[str]:
    if not doc.closing_note.strip():
        return []
    _body(canvas, cfg, bold=True)
    return canvas.wrap_text(doc.closing_note, canvas.page_width * cfg.footer.closing_note_width_ratio)


def _terms_lines(canvas: Canvas, doc: Estimate, cfg: ConfigModel) -> list[str]:
    if not doc.terms_and_conditions.strip():
        return []
    canvas.set_font(cfg.fonts.regular, cfg.footer.terms_size)
    return canvas.wrap_text(doc.terms_and_conditions, canvas.page_width / 2 - cfg.page.margin)


def _estimate_parts(
    canvas: Canvas, doc: Estimate, cfg: ConfigModel
) -> tuple[list[str], float, list[str], float]:
    sp = cfg.spacing
    closing = _closing_lines(canvas, doc, cfg)
    terms = _terms_lines(canvas, doc, cfg)
    closing_h = len(closing) * sp.line_height + sp.block_gap
    terms_h = len(terms) * sp.terms_line + cfg.footer.block_padding
    return closing, closing_h, terms, terms_h


def estimate_footer_height(canvas: Canvas, view: NormalizedView, cfg: ConfigModel) -> float:
    """Combined height of closing note, terms and signature."""

    doc = view.document
    if not isinstance(doc, Estimate):
        raise _unknown(doc)
    _, closing_h, _, terms_h = _estimate_parts(canvas, doc, cfg)
    return closing_h + max(terms_h, cfg.signature.block_height) + cfg.footer.block_padding


def draw_estimate_footer(
    canvas: Canvas, cursor: LayoutCursor, view: NormalizedView, cfg: ConfigModel
) -> float:
    """Draw closing note (full width) above terms (left) and signature (right)."""

    doc = view.document
    if not isinstance(doc, Estimate):
        raise _unknown(doc)
    sp = cfg.spacing
    margin = cfg.page.margin
    closing, closing_h, terms, terms_h = _estimate_parts(canvas, doc, cfg)

    y = cursor.y
    if closing:
        _body(canvas, cfg, bold=True)
        canvas.draw_text(canvas.page_width / 2, y, closing, align="center", leading=sp.line_height)
        y += closing_h

    terms_end = y
    if terms:
        _body(canvas, cfg, bold=True)
        canvas.draw_text(margin, y, "Terms & Conditions")
        canvas.set_font(cfg.fonts.regular, cfg.footer.terms_size)
        canvas.set_text_color(cfg.colors.muted)
        canvas.draw_text(margin, y + sp.heading_gap, terms, leading=sp.terms_line)
        terms_end = y + terms_h

    sig_end = draw_signature(canvas, _signature_x(canvas, cfg), y, view, cfg)
    return cursor.move_to(max(terms_end, sig_end))


def _bottom_message_lines(canvas: Canvas, doc: Transaction, cfg: ConfigModel) -> list[str]:
    if not doc.bottom_message.strip():
        return []
    _body(canvas, cfg, bold=True)
    return canvas.wrap_text(doc.bottom_message, _signature_x(canvas, cfg) - cfg.page.margin - 10)


def transaction_footer_height(canvas: Canvas, view: NormalizedView, cfg: ConfigModel) -> float:
    """Combined height of payment details, signature and bottom message."""

    doc = view.document
    if not isinstance(doc, Transaction):
        raise _unknown(doc)
    message_h = len(_bottom_message_lines(canvas, doc, cfg)) * cfg.spacing.line_height
    return cfg.footer.transaction_offset + max(cfg.footer.transaction_block_height, message_h)


def _payment_lines(doc: Transaction) -> list[str]:
    lines = [f"Payment Mode: {doc.payment_mode.value}"]
    reference = doc.payment_reference.strip()
    if reference and doc.payment_mode is PaymentMode.UPI:
        lines.append(f"Transaction ID: {reference}")
    elif reference and doc.payment_mode is PaymentMode.BANK_TRANSFER:
        lines.append(f"Reference No: {reference}")
    return lines


def draw_transaction_footer(
    canvas: Canvas, cursor: LayoutCursor, view: NormalizedView, cfg: ConfigModel
) -> float:
    """Draw payment details, then signature (right) beside the bottom message."""

    doc = view.document
    if not isinstance(doc, Transaction):
        raise _unknown(doc)
    margin = cfg.page.margin
    top = cursor.y
    footer_y = top + cfg.footer.transaction_offset

    draw_section_heading(canvas, cursor, "Payment Details", cfg, size=cfg.footer.payment_heading_size)
    _body(canvas, cfg)
    _draw_lines(canvas, margin, cursor.y, _payment_lines(doc), cfg.spacing.detail_row)

    sig_end = draw_signature(canvas, _signature_x(canvas, cfg), footer_y, view, cfg)
    message = _bottom_message_lines(canvas, doc, cfg)
    if message:
        _body(canvas, cfg, bold=True)
        canvas.draw_text(margin, footer_y, message, leading=cfg.spacing.line_height)
    message_end = footer_y + len(message) * cfg.spacing.line_height
    return cursor.move_to(max(sig_end, message_end))
