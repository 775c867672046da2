"""Document normalization: variant dispatch, totals and display metadata.

:func:`normalize` is the first stage of the render pipeline.  It checks the
document discriminant, recomputes totals from the line items (stored totals
are never trusted) and prepares the strings every later stage needs: the
document type label, the output file name and the amount in words.

Totals are accumulated as unrounded :class:`~decimal.Decimal` values.
Rounding happens only when an amount is displayed.

A discount larger than the subtotal yields a negative grand total.  It is
neither clamped nor rejected; ``NormalizedView.negative_total`` is set and a
warning is logged so the caller can decide.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from billpress.config import ConfigModel, load_config
from billpress.utils.errors import DocumentValidationError
from billpress.utils.logging import get_logger

from .models import CompanyProfile, Estimate, LineItem, Transaction
from .words import amount_in_words_line

__all__ = ["NormalizedView", "Totals", "compute_totals", "normalize", "output_filename"]

logger = get_logger(__name__)

_HUNDRED = Decimal(100)


@dataclass(frozen=True, slots=True)
class Totals:
    """Derived amounts for one document.

    ``tax_percentage`` and ``tax_amount`` are ``None`` for transactions, which
    carry no tax line at all.
    """

    subtotal: Decimal
    discount: Decimal
    discounted_subtotal: Decimal
    tax_percentage: Decimal | None
    tax_amount: Decimal | None
    grand_total: Decimal


@dataclass(frozen=True, slots=True)
class NormalizedView:
    """Everything the layout stages read about a document."""

    document: Estimate | Transaction
    company: CompanyProfile
    doc_type: str
    doc_label: str
    number: str
    totals: Totals
    amount_in_words: str
    negative_total: bool

    @property
    def filename(self) -> str:
        return output_filename(self.doc_type, self.number)

    @property
    def is_estimate(self) -> bool:
        return isinstance(self.document, Estimate)


def _subtotal(items: list[LineItem]) -> Decimal:
    return sum((item.line_total for item in items), Decimal(0))


def compute_totals(document: Estimate | Transaction) -> Totals:
    """Compute :class:`Totals` for ``document``.

    Discount and tax are applied once, to the subtotal only.
    """

    subtotal = _subtotal(document.items)
    discount = document.discount
    discounted = subtotal - discount
    if isinstance(document, Estimate):
        pct = document.tax_percentage
        tax = discounted * (pct / _HUNDRED)
        return Totals(subtotal, discount, discounted, pct, tax, discounted + tax)
    if isinstance(document, Transaction):
        return Totals(subtotal, discount, discounted, None, None, discounted)
    raise DocumentValidationError(f"unsupported document type: {type(document).__name__}")


def output_filename(doc_type: str, number: str) -> str:
    """Return ``"<DOCTYPE>-<number>.pdf"`` with the type upper-cased."""

    return f"{doc_type.upper()}-{number}.pdf"


def _doc_label(document: Estimate | Transaction) -> str:
    if isinstance(document, Estimate):
        return "Quotation"
    return document.variant.value


def normalize(
    document: Estimate | Transaction,
    company: CompanyProfile,
    cfg: ConfigModel | None = None,
) -> NormalizedView:
    """Validate ``document`` and derive the view used by the layout stages.

    Raises
    ------
    DocumentValidationError
        If ``document`` is neither an :class:`Estimate` nor a
        :class:`Transaction`, or has no line items.
    """

    if not isinstance(document, (Estimate, Transaction)):
        raise DocumentValidationError(f"unsupported document type: {type(document).__name__}")
    if not isinstance(company, CompanyProfile):
        raise DocumentValidationError("company profile is required")
    if not document.items:
        raise DocumentValidationError(f"document {document.number!r} has no line items")

    cfg = cfg or load_config()
    label = _doc_label(document)
    totals = compute_totals(document)
    negative = totals.grand_total < 0
    if negative:
        logger.warning(
            "Grand total of %s %s is negative (%s); discount exceeds subtotal",
            label,
            document.number,
            totals.grand_total,
        )

    words = amount_in_words_line(
        totals.grand_total,
        prefix=cfg.currency.words_prefix,
        suffix=cfg.currency.words_suffix,
    )
    return NormalizedView(
        document=document,
        company=company,
        doc_type=label.upper(),
        doc_label=label,
        number=document.number,
        totals=totals,
        amount_in_words=words,
        negative_total=negative,
    )
