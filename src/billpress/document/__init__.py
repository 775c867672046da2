"""Document data model, normalization and amount-in-words helpers."""

from .models import (
    ClientContact,
    CompanyProfile,
    CustomerContact,
    Document,
    Estimate,
    LineItem,
    PaymentMode,
    Signatory,
    Transaction,
    TransactionVariant,
)
from .normalizer import NormalizedView, Totals, compute_totals, normalize

__all__ = [
    "ClientContact",
    "CompanyProfile",
    "CustomerContact",
    "Document",
    "Estimate",
    "LineItem",
    "NormalizedView",
    "PaymentMode",
    "Signatory",
    "Totals",
    "Transaction",
    "TransactionVariant",
    "compute_totals",
    "normalize",
]
